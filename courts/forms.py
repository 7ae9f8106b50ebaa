from django import forms

from .models import Field


class FieldForm(forms.ModelForm):
    class Meta:
        model = Field
        fields = ['name', 'description', 'price_per_hour', 'image_url', 'is_active']
        widgets = {
            'description': forms.Textarea(attrs={'rows': 3}),
        }
        labels = {
            'price_per_hour': 'Price per hour (Rp)',
            'image_url': 'Image URL',
        }
