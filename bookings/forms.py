from datetime import datetime

from django import forms
from django.conf import settings
from django.utils import timezone

from courts.models import Field

from .availability import time_slots
from .models import Booking


def _parse_slot(value):
    return datetime.strptime(value, '%H:%M').time()


class BookingForm(forms.Form):
    field = forms.ModelChoiceField(
        queryset=Field.objects.filter(is_active=True),
        empty_label=None,
        widget=forms.RadioSelect,
    )
    booking_date = forms.DateField(widget=forms.DateInput(attrs={'type': 'date'}))
    start_time = forms.TypedChoiceField(coerce=_parse_slot)
    duration_hours = forms.TypedChoiceField(
        coerce=int,
        choices=Booking.DURATION_CHOICES,
        initial=1,
        label='Duration',
    )
    customer_name = forms.CharField(max_length=100, label='Full name')
    customer_phone = forms.CharField(max_length=20, label='WhatsApp number')
    customer_email = forms.EmailField(required=False, label='Email (optional)')
    notes = forms.CharField(required=False, widget=forms.Textarea(attrs={'rows': 3}), label='Notes (optional)')

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['start_time'].choices = [
            (slot.strftime('%H:%M'), slot.strftime('%H:%M')) for slot in time_slots()
        ]

    def clean_booking_date(self):
        booking_date = self.cleaned_data['booking_date']
        if booking_date < timezone.localdate():
            raise forms.ValidationError('Bookings cannot be made for a past date.')
        return booking_date

    def clean(self):
        cleaned_data = super().clean()
        start_time = cleaned_data.get('start_time')
        duration = cleaned_data.get('duration_hours')

        closing_hour = getattr(settings, 'PADELBOOK_CLOSING_HOUR', 23)
        if start_time and duration and start_time.hour + duration > closing_hour:
            raise forms.ValidationError(
                f'A {duration} hour booking from {start_time.strftime("%H:%M")} '
                f'runs past closing time ({closing_hour:02d}:00).'
            )

        return cleaned_data
