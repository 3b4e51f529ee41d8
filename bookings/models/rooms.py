"""
Room and deal models: monthly rate tables and promotional windows.
"""

from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


MONTHS_IN_YEAR = 12


class Room(models.Model):
    """
    A bookable room with a flat rate and a 12-slot monthly rate table.

    monthly_rates[0] is January, monthly_rates[11] is December. A slot that
    is missing or zero falls back to the flat rate when charges are
    calculated.
    """
    ROOM_TYPES = [
        ('single', 'Single'),
        ('double', 'Double'),
        ('suite', 'Suite'),
        ('family', 'Family'),
    ]
    TIERS = [
        ('Deluxe', 'Deluxe'),
        ('Normal', 'Normal'),
    ]
    STATUSES = [
        ('Available', 'Available'),
        ('Occupied', 'Occupied'),
        ('Reserved', 'Reserved'),
        ('Cleaning', 'Cleaning'),
        ('Maintenance', 'Maintenance'),
    ]

    room_number = models.CharField(
        max_length=20,
        unique=True,
        help_text="Room number (e.g., 101, 101A)"
    )
    name = models.CharField(max_length=100, blank=True, default='')
    room_type = models.CharField(max_length=20, choices=ROOM_TYPES)
    tier = models.CharField(max_length=20, choices=TIERS, default='Normal', db_index=True)

    rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text="Flat nightly rate, used when a month has no rate of its own"
    )
    monthly_rates = models.JSONField(
        default=list,
        blank=True,
        help_text="12 nightly rates, January to December"
    )

    status = models.CharField(max_length=20, choices=STATUSES, default='Available')
    floor = models.IntegerField(default=0)
    max_occupancy = models.PositiveIntegerField(default=2)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['room_number']
        verbose_name = "Room"
        verbose_name_plural = "Rooms"

    def __str__(self):
        if self.name:
            return f"Room {self.room_number} ({self.name})"
        return f"Room {self.room_number}"

    def clean(self):
        """Validate the monthly rate table."""
        rates = self.monthly_rates or []
        if rates and len(rates) != MONTHS_IN_YEAR:
            raise ValidationError({
                'monthly_rates': f'Monthly rates must have {MONTHS_IN_YEAR} entries, got {len(rates)}.'
            })
        for index, value in enumerate(rates):
            try:
                amount = Decimal(str(value))
            except (InvalidOperation, ValueError, TypeError):
                raise ValidationError({
                    'monthly_rates': f'Rate for month {index + 1} is not a number: {value!r}.'
                })
            if amount < 0:
                raise ValidationError({
                    'monthly_rates': f'Rate for month {index + 1} cannot be negative.'
                })

    def get_monthly_rates(self):
        """Monthly rate table as Decimals (may be shorter than 12)."""
        return [Decimal(str(value)) for value in (self.monthly_rates or [])]


class Deal(models.Model):
    """
    Promotional discount window for rooms or room types.

    Example:
        Spring Sale: Mar 01 - Mar 31, 30% off double rooms

    Nights from start_date up to, but not including, end_date are
    discounted.
    """
    STATUSES = [
        ('Ongoing', 'Ongoing'),
        ('Full', 'Full'),
        ('Inactive', 'Inactive'),
        ('New', 'New'),
        ('Finished', 'Finished'),
    ]
    # Statuses a booking can still pick a deal from
    BOOKABLE_STATUSES = ['Ongoing', 'New', 'Inactive', 'Full']

    reference_number = models.CharField(max_length=50, unique=True)
    deal_name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')

    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Discount percentage (e.g., 20.00 for 20% off)"
    )
    start_date = models.DateField(help_text="First discounted night")
    end_date = models.DateField(help_text="Last date of the deal window; the night starting on it is not discounted")

    room_types = models.JSONField(
        default=list,
        blank=True,
        help_text="Room types the deal applies to (e.g., ['double', 'suite'])"
    )
    rooms = models.ManyToManyField(
        Room,
        blank=True,
        related_name='deals',
        help_text="Specific rooms the deal applies to"
    )

    status = models.CharField(max_length=20, choices=STATUSES, default='New')
    reservations_left = models.PositiveIntegerField(default=20)
    tags = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['start_date', 'deal_name']
        verbose_name = "Deal"
        verbose_name_plural = "Deals"

    def __str__(self):
        return f"{self.deal_name} ({self.discount}% off, {self.start_date.strftime('%b %d')} - {self.end_date.strftime('%b %d, %Y')})"

    def clean(self):
        """Validate that end_date is not before start_date."""
        if self.end_date and self.start_date and self.end_date < self.start_date:
            raise ValidationError({
                'end_date': 'End date cannot be before start date.'
            })

    def overlaps(self, check_in, check_out):
        """
        Check if the deal discounts at least one night of a stay.

        The night starting on end_date is not discounted by the charge
        calculator, so a deal ending on the check-in date gives nothing.
        """
        return self.start_date < check_out and self.end_date > check_in

    def applies_to_room(self, room):
        """Check if the deal is linked to the room or to its room type."""
        if room.pk and self.pk and any(r.pk == room.pk for r in self.rooms.all()):
            return True
        room_type = (room.room_type or '').lower()
        return any(str(t).lower() == room_type for t in (self.room_types or []))

    def to_deal_period(self):
        """Reduce to the DealPeriod the charge calculator expects."""
        from bookings.services.charge_service import DealPeriod

        return DealPeriod(
            deal_id=str(self.pk),
            deal_name=self.deal_name,
            discount_percent=self.discount or Decimal('0'),
            start_date=self.start_date,
            end_date=self.end_date,
        )
