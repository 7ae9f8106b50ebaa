from django.core.validators import MinValueValidator
from django.db import models


class Field(models.Model):
    """A bookable padel court."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price_per_hour = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    # hosted image URL, not an upload
    image_url = models.URLField(max_length=500, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name
