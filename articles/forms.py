from django import forms

from .models import Article


class ArticleForm(forms.ModelForm):
    class Meta:
        model = Article
        fields = ['title', 'excerpt', 'content', 'image_url', 'is_published']
        widgets = {
            'content': forms.Textarea(attrs={'rows': 10}),
        }
        labels = {
            'image_url': 'Image URL',
            'is_published': 'Published',
        }
