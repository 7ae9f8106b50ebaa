"""Outbound links and hooks: the WhatsApp confirmation link and the webhook."""

import logging
import re
from urllib.parse import quote

import requests
from django.conf import settings

from .models import SiteSettings
from .templatetags.site_extras import rupiah

logger = logging.getLogger(__name__)

DEFAULT_PAYMENT_INSTRUCTIONS = (
    'Scan the QRIS code above and confirm your payment to the admin through WhatsApp.'
)


def whatsapp_confirmation_url(booking, site_settings):
    """``wa.me`` link with the payment confirmation message filled in.

    Returns ``None`` when no admin WhatsApp number is configured.
    """
    number = re.sub(r'\D', '', site_settings.whatsapp_number or '')
    if not number:
        return None

    message = (
        'Hello Admin, I have paid for this booking:\n\n'
        f'Name: {booking.customer_name}\n'
        f'Field: {booking.field.name}\n'
        f'Date: {booking.booking_date.strftime("%d %B %Y")}\n'
        f'Time: {booking.start_time.strftime("%H:%M")} - {booking.end_time.strftime("%H:%M")}\n'
        f'Total: {rupiah(booking.total_amount)}\n\n'
        'Please confirm my payment. Thank you!'
    )
    return f'https://wa.me/{number}?text={quote(message)}'


def notify_webhook(event, payload):
    """POST ``{"event", "data"}`` to the configured webhook URL.

    Fire-and-forget: delivery problems are logged, never raised. Returns
    whether the webhook accepted the call.
    """
    site_settings = SiteSettings.objects.filter(pk=SiteSettings.SINGLETON_ID).first()
    url = site_settings.webhook_url if site_settings else ''
    if not url:
        return False

    timeout = getattr(settings, 'PADELBOOK_WEBHOOK_TIMEOUT', 5)
    try:
        response = requests.post(url, json={'event': event, 'data': payload}, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.warning('Webhook %s to %s failed: %s', event, url, exc)
        return False

    logger.info('Webhook %s delivered to %s', event, url)
    return True
