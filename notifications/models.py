from django.db import models


class ChangeEvent(models.Model):
    """A row-level change, kept for dashboards that poll for updates."""

    ACTION_CHOICES = (
        ('insert', 'Insert'),
        ('update', 'Update'),
        ('delete', 'Delete'),
    )

    table = models.CharField(max_length=50, db_index=True)
    action = models.CharField(max_length=10, choices=ACTION_CHOICES)
    object_id = models.CharField(max_length=64)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.table} {self.action} {self.object_id}"

    def as_dict(self):
        return {
            'id': self.id,
            'table': self.table,
            'action': self.action,
            'object_id': self.object_id,
            'timestamp': self.created_at.isoformat(),
        }
