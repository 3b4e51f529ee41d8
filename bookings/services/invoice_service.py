"""
Invoice Service
===============

Builds invoice room lines from a booking's stored rate breakdown instead of
recalculating charges, so invoices always match what the booking quoted.
Tax is added here and nowhere else.
"""

import logging
import calendar
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from dateutil.relativedelta import relativedelta
from django.core.exceptions import ValidationError
from django.db import transaction

from .summary_service import format_money, pluralize_nights

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


class InvoiceService:
    """
    Invoicing for a single booking.

    Usage:
        service = InvoiceService(booking)
        invoice = service.create_invoice()            # hotel default tax
        invoice = service.create_invoice(Decimal('0'))  # tax-free
    """

    def __init__(self, booking):
        self.booking = booking

    def build_room_line_items(self):
        """
        Room line items for the booking.

        Each month of the stored breakdown becomes one line, or two when a
        deal covered part of it (full-rate nights and discounted nights).
        Bookings priced before breakdowns were stored get a single line.

        Returns:
            list of dicts with description, qty, amount, category, source
        """
        calculation = self.booking.get_calculation()
        if calculation is None:
            return self._legacy_room_line_items()

        room_number = self.booking.room.room_number
        breakdowns = calculation.monthly_breakdowns
        items = []
        segment_start = self.booking.check_in

        for index, month in enumerate(breakdowns):
            if index == len(breakdowns) - 1:
                segment_end = self.booking.check_out
            else:
                segment_end = date(month.year, month.month + 1, 1) + relativedelta(months=1)

            date_range = format_date_range(segment_start, segment_end)

            if month.deal_days > 0:
                non_deal_days = month.non_deal_days
                if non_deal_days > 0:
                    items.append(_room_item(
                        f"Room {room_number} - {date_range} "
                        f"({pluralize_nights(non_deal_days)} @ {format_money(month.rate)})",
                        non_deal_days,
                        non_deal_days * month.rate,
                    ))

                deal_rate = month.deal_rate
                items.append(_room_item(
                    f"Room {room_number} - {date_range} "
                    f"({pluralize_nights(month.deal_days)} @ {format_money(deal_rate)}, {month.deal_name})",
                    month.deal_days,
                    month.deal_days * deal_rate,
                ))
            else:
                items.append(_room_item(
                    f"Room {room_number} - {date_range} "
                    f"({pluralize_nights(month.days)} @ {format_money(month.rate)})",
                    month.days,
                    month.subtotal,
                ))

            segment_start = segment_end

        # Lines must add up to the total quoted on the booking.
        if items:
            quoted = calculation.total.quantize(CENT, rounding=ROUND_HALF_UP)
            items[-1]['amount'] += quoted - sum(item['amount'] for item in items)

        return items

    def create_invoice(self, tax_percent=None):
        """
        Create a pending invoice with the booking's room lines.

        Args:
            tax_percent: Decimal, defaults to HotelSettings.tax_percent

        Returns:
            Invoice
        """
        from bookings.models import HotelSettings, Invoice

        if self.booking.status == 'Cancelled':
            raise ValidationError('Cannot invoice a cancelled booking.')

        if tax_percent is None:
            tax_percent = HotelSettings.load().tax_percent

        with transaction.atomic():
            invoice = Invoice.objects.create(
                booking=self.booking,
                tax_percent=Decimal(str(tax_percent)),
            )
            self._create_line_items(invoice, self.build_room_line_items())
            recalculate_totals(invoice)

        logger.info(
            "Created invoice %s for booking %s: subtotal %s, tax %s, total %s",
            invoice.pk, self.booking.pk, invoice.subtotal, invoice.tax, invoice.total
        )
        return invoice

    def rebuild_room_items(self, invoice):
        """
        Replace the booking's room lines on an unpaid invoice.

        Lines added by hand (any source other than 'booking') are kept.
        """
        if invoice.status == 'paid':
            raise ValidationError('Cannot change a paid invoice.')

        with transaction.atomic():
            invoice.line_items.filter(source='booking').delete()
            offset = invoice.line_items.count()
            self._create_line_items(invoice, self.build_room_line_items(), offset=offset)
            recalculate_totals(invoice)

        logger.info("Rebuilt room lines on invoice %s for booking %s", invoice.pk, self.booking.pk)
        return invoice

    def _create_line_items(self, invoice, items, offset=0):
        from bookings.models import InvoiceLineItem

        InvoiceLineItem.objects.bulk_create([
            InvoiceLineItem(invoice=invoice, sort_order=offset + position, **item)
            for position, item in enumerate(items)
        ])

    def _legacy_room_line_items(self):
        booking = self.booking
        nights = max(1, (booking.check_out - booking.check_in).days)
        rate = booking.applied_rate or booking.room.rate
        room_total = booking.room_total or rate * nights
        return [_room_item(
            f"Room {booking.room.room_number} ({pluralize_nights(nights)})",
            1,
            room_total,
        )]


def recalculate_totals(invoice):
    """Sum the invoice lines, add tax, and save."""
    subtotal = sum((item.amount for item in invoice.line_items.all()), Decimal('0.00'))
    tax = (subtotal * invoice.tax_percent / Decimal('100.00')).quantize(CENT, rounding=ROUND_HALF_UP)

    invoice.subtotal = subtotal
    invoice.tax = tax
    invoice.total = subtotal + tax
    invoice.save(update_fields=['subtotal', 'tax', 'total', 'updated_at'])
    return invoice


def format_date_range(start, end):
    """
    Example:
        March 10-15, 2026
        January 28, 2026 - February 1, 2026
    """
    if start.month == end.month and start.year == end.year:
        return f"{calendar.month_name[start.month]} {start.day}-{end.day}, {start.year}"
    return (
        f"{calendar.month_name[start.month]} {start.day}, {start.year} - "
        f"{calendar.month_name[end.month]} {end.day}, {end.year}"
    )


def _room_item(description, qty, amount):
    return {
        'description': description,
        'qty': qty,
        'amount': Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP),
        'category': 'room',
        'source': 'booking',
    }
