"""
Core models: hotel-wide settings.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


def _default_tax_percent():
    return Decimal(str(getattr(settings, 'BOOKINGS_DEFAULT_TAX_PERCENT', '10.00')))


def _default_currency_symbol():
    return getattr(settings, 'BOOKINGS_CURRENCY_SYMBOL', '$')


class HotelSettings(models.Model):
    """
    Hotel-wide configuration (single row).

    Holds the invoice tax percentage. Room charges are always calculated
    tax-free; tax is only added when an invoice is created.
    """
    hotel_name = models.CharField(
        max_length=200,
        default="Grand Hotel",
        help_text="Hotel name"
    )
    address = models.CharField(max_length=255, blank=True, default='')
    phone = models.CharField(max_length=50, blank=True, default='')
    email = models.EmailField(blank=True, default='')

    currency = models.CharField(
        max_length=3,
        default='USD',
        help_text="Currency code (e.g., USD, EUR)"
    )
    currency_symbol = models.CharField(
        max_length=5,
        default=_default_currency_symbol,
        help_text="Currency symbol for display"
    )

    tax_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=_default_tax_percent,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Tax percentage added to invoices (e.g., 10.00 for 10%)"
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Hotel Settings"
        verbose_name_plural = "Hotel Settings"

    def __str__(self):
        return self.hotel_name

    @classmethod
    def load(cls):
        """Return the settings row, creating it with defaults if missing."""
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj
