from django.db.models.signals import post_delete, post_save

from .feed import ALL_TABLES, Change, feed
from .models import ChangeEvent


def tracked_models():
    from articles.models import Article
    from bookings.models import Booking
    from courts.models import Field
    from siteconfig.models import SiteSettings

    return {
        Booking: 'bookings',
        Field: 'fields',
        Article: 'articles',
        SiteSettings: 'settings',
    }


def record_change(change):
    ChangeEvent.objects.create(
        table=change.table,
        action=change.action,
        object_id=change.object_id,
    )


_recorder = None


def connect_signals():
    global _recorder

    for model, table in tracked_models().items():
        def on_save(sender, instance, created, _table=table, **kwargs):
            feed.publish(Change(_table, 'insert' if created else 'update', str(instance.pk)))

        def on_delete(sender, instance, _table=table, **kwargs):
            feed.publish(Change(_table, 'delete', str(instance.pk)))

        post_save.connect(on_save, sender=model, weak=False, dispatch_uid=f'changefeed_save_{table}')
        post_delete.connect(on_delete, sender=model, weak=False, dispatch_uid=f'changefeed_delete_{table}')

    if _recorder is None:
        _recorder = feed.subscribe(ALL_TABLES, record_change)
