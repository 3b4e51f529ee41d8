"""
Booking and invoice models.

A booking stores the charge calculation it was priced with (rate_breakdown)
so later rate or deal edits never change what the guest was quoted.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from .rooms import Room, Deal


class Booking(models.Model):
    """
    A guest's stay in a room, check_out exclusive.
    """
    STATUSES = [
        ('Pending', 'Pending'),
        ('Confirmed', 'Confirmed'),
        ('CheckedIn', 'Checked In'),
        ('CheckedOut', 'Checked Out'),
        ('Cancelled', 'Cancelled'),
    ]
    SOURCES = [
        ('Local', 'Local'),
        ('Online', 'Online'),
        ('Booking.com', 'Booking.com'),
        ('TripAdvisor', 'TripAdvisor'),
        ('Expedia', 'Expedia'),
    ]
    RATE_SOURCES = [
        ('room', 'Room Rate'),
        ('deal', 'Deal'),
    ]

    room = models.ForeignKey(
        Room,
        on_delete=models.PROTECT,
        related_name='bookings'
    )
    guest_name = models.CharField(max_length=200)
    guest_email = models.EmailField(blank=True, default='')
    adults = models.PositiveIntegerField(default=1)
    children = models.PositiveIntegerField(default=0)

    check_in = models.DateField()
    check_out = models.DateField(help_text="Departure date (not charged)")

    status = models.CharField(max_length=20, choices=STATUSES, default='Pending')
    source = models.CharField(max_length=20, choices=SOURCES, default='Local', db_index=True)
    source_booking_id = models.CharField(max_length=100, blank=True, default='')

    # Applied pricing
    applied_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text="Average nightly rate actually charged"
    )
    applied_rate_source = models.CharField(max_length=10, choices=RATE_SOURCES, default='room')
    applied_deal = models.ForeignKey(
        Deal,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='bookings'
    )
    applied_discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00')
    )
    room_nights = models.PositiveIntegerField(default=0)
    room_total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00')
    )
    pricing_snapshot = models.JSONField(
        default=dict,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="{base_rate, total_amount, currency} at booking time"
    )
    rate_breakdown = models.JSONField(
        null=True,
        blank=True,
        encoder=DjangoJSONEncoder,
        help_text="Full charge calculation at booking time"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Booking"
        verbose_name_plural = "Bookings"

    def __str__(self):
        return f"{self.guest_name} - {self.room} ({self.check_in} to {self.check_out})"

    def clean(self):
        """Validate that check-out is after check-in."""
        if self.check_in and self.check_out and self.check_out <= self.check_in:
            raise ValidationError({
                'check_out': 'Check-out must be after check-in.'
            })

    def get_calculation(self):
        """Rebuild the stored BookingCalculation, or None for legacy bookings."""
        from bookings.services.charge_service import BookingCalculation

        if not self.rate_breakdown:
            return None
        return BookingCalculation.from_snapshot(self.rate_breakdown)


class Invoice(models.Model):
    STATUSES = [
        ('pending', 'Pending'),
        ('paid', 'Paid'),
        ('cancelled', 'Cancelled'),
    ]

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name='invoices'
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    tax_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        help_text="Tax percentage applied to the subtotal"
    )
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=20, choices=STATUSES, default='pending', db_index=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Invoice"
        verbose_name_plural = "Invoices"

    def __str__(self):
        return f"Invoice #{self.pk} - {self.booking.guest_name} (${self.total})"


class InvoiceLineItem(models.Model):
    CATEGORIES = [
        ('room', 'Room'),
        ('meal', 'Meal'),
        ('service', 'Service'),
        ('other', 'Other'),
        ('discount', 'Discount'),
    ]
    SOURCES = [
        ('booking', 'Booking'),
        ('order', 'Order'),
        ('trip', 'Trip'),
        ('custom', 'Custom'),
        ('discount', 'Discount'),
    ]

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name='line_items'
    )
    description = models.CharField(max_length=255)
    qty = models.PositiveIntegerField(default=1)
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text="Total amount for this line"
    )
    category = models.CharField(max_length=20, choices=CATEGORIES, default='other')
    source = models.CharField(max_length=20, choices=SOURCES, default='custom')
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['sort_order', 'id']
        verbose_name = "Invoice Line Item"
        verbose_name_plural = "Invoice Line Items"

    def __str__(self):
        return f"{self.description}: ${self.amount}"
