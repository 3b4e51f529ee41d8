"""
Booking Pricing Service
=======================

Connects rooms, deals and bookings to the charge calculator.

Flow:
1. Validate the stay dates
2. Find bookable deals for the room that discount at least one night
3. Keep the single deal with the highest discount
4. Calculate charges and store them on the booking as a pricing snapshot
"""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from django.core.exceptions import ValidationError
from django.db import transaction

from .charge_service import calculate_booking_charges

logger = logging.getLogger(__name__)


class BookingPricingService:
    """
    Prices stays for a single room.

    Usage:
        from bookings.services import BookingPricingService

        service = BookingPricingService(room)

        # Charge preview
        calculation, deal = service.quote(date(2026, 3, 10), date(2026, 3, 15))
        print(calculation.total)

        # Price and persist a booking
        service.price_booking(booking)
    """

    def __init__(self, room):
        """
        Initialize service with a room.

        Args:
            room: Room instance
        """
        self.room = room

    def find_applicable_deals(self, check_in, check_out):
        """
        Deals that could discount a stay in this room.

        A deal qualifies when it has a bookable status, is linked to the room
        (directly or through its room type) and discounts at least one night
        of the stay (see Deal.overlaps).

        Returns:
            list: Deal objects
        """
        from bookings.models import Deal

        candidates = Deal.objects.filter(
            status__in=Deal.BOOKABLE_STATUSES,
            start_date__lt=_as_date(check_out),
            end_date__gt=_as_date(check_in),
        ).prefetch_related('rooms')

        applicable = [deal for deal in candidates if deal.applies_to_room(self.room)]

        logger.info(
            "Found %d applicable deals for room %s (%s to %s)",
            len(applicable), self.room.room_number, check_in, check_out
        )
        return applicable

    def select_best_deal(self, deals):
        """Highest discount wins; on a tie the first deal is kept."""
        best = None
        for deal in deals:
            if best is None or deal.discount > best.discount:
                best = deal
        return best

    def quote(self, check_in, check_out):
        """
        Charge preview for a stay, before any booking exists.

        Returns:
            tuple: (BookingCalculation, Deal or None)
        """
        validate_stay(check_in, check_out)

        deal = self.select_best_deal(self.find_applicable_deals(check_in, check_out))
        if deal:
            logger.info("Selected deal %r: %s%% discount", deal.deal_name, deal.discount)

        calculation = calculate_booking_charges(
            check_in,
            check_out,
            self.room.get_monthly_rates(),
            self.room.rate or Decimal('0'),
            deal.to_deal_period() if deal else None,
        )
        return calculation, deal

    def price_booking(self, booking, save=True):
        """
        Price a new booking with the best current deal and store the snapshot.

        Args:
            booking: Booking instance for self.room
            save: Persist the booking after pricing

        Returns:
            BookingCalculation
        """
        calculation, deal = self.quote(booking.check_in, booking.check_out)
        self._apply_calculation(booking, calculation, deal)

        if save:
            booking.save()
        return calculation

    def reprice_booking(self, booking, check_in=None, check_out=None):
        """
        Recalculate a booking after its dates change.

        Only the booking's original deal is considered, and only while it
        still discounts a night of the new dates. Unpaid invoices get their
        room lines rebuilt from the new breakdown.

        Returns:
            BookingCalculation
        """
        from .invoice_service import InvoiceService

        new_check_in = check_in or booking.check_in
        new_check_out = check_out or booking.check_out
        validate_stay(new_check_in, new_check_out)

        deal = booking.applied_deal
        if deal and not deal.overlaps(_as_date(new_check_in), _as_date(new_check_out)):
            logger.info(
                "Deal %r no longer overlaps booking %s, dropping it",
                deal.deal_name, booking.pk
            )
            deal = None

        calculation = calculate_booking_charges(
            new_check_in,
            new_check_out,
            self.room.get_monthly_rates(),
            self.room.rate or Decimal('0'),
            deal.to_deal_period() if deal else None,
        )

        with transaction.atomic():
            booking.check_in = new_check_in
            booking.check_out = new_check_out
            self._apply_calculation(booking, calculation, deal)
            booking.save()

            invoice_service = InvoiceService(booking)
            for invoice in booking.invoices.exclude(status__in=['paid', 'cancelled']):
                invoice_service.rebuild_room_items(invoice)

        return calculation

    def _apply_calculation(self, booking, calculation, deal):
        """Copy a calculation onto the booking's pricing fields."""
        from bookings.models import HotelSettings

        if not calculation.deal_applied:
            deal = None

        nights = calculation.total_nights
        room_total = calculation.total.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
        applied_rate = (calculation.total / nights).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)

        booking.room = self.room
        booking.room_nights = nights
        booking.room_total = room_total
        booking.applied_rate = applied_rate
        booking.applied_rate_source = 'deal' if deal else 'room'
        booking.applied_deal = deal
        booking.applied_discount = deal.discount if deal else Decimal('0.00')
        booking.pricing_snapshot = {
            'base_rate': str(applied_rate),
            'total_amount': str(room_total),
            'currency': HotelSettings.load().currency,
        }
        booking.rate_breakdown = calculation.to_snapshot()

        logger.info(
            "Priced booking for room %s: %d nights, subtotal %s, deal discount %s, total %s",
            self.room.room_number, nights, calculation.subtotal,
            calculation.total_deal_discount, calculation.total
        )


def validate_stay(check_in, check_out):
    """Raise ValidationError unless both dates are set and check-out is later."""
    if not check_in or not check_out:
        raise ValidationError('Check-in and check-out dates are required.')
    if check_out <= check_in:
        raise ValidationError('Check-out must be after check-in.')


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value
