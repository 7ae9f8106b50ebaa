from django import forms

from .models import SiteSettings


class SiteSettingsForm(forms.ModelForm):
    class Meta:
        model = SiteSettings
        fields = [
            'site_name',
            'site_logo_url',
            'hero_banner_url',
            'whatsapp_number',
            'qris_image_url',
            'payment_instructions',
            'webhook_url',
        ]
        widgets = {
            'payment_instructions': forms.Textarea(attrs={'rows': 4}),
        }
        help_texts = {
            'whatsapp_number': 'International format without +, e.g. 6281234567890',
            'hero_banner_url': 'Main banner shown on the landing page',
        }
