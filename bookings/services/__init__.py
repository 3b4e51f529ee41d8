"""
Services package.

Re-exports the public service API:
    from bookings.services import calculate_booking_charges, BookingPricingService
"""

from .charge_service import (
    DealPeriod,
    MonthlyRateBreakdown,
    BookingCalculation,
    calculate_booking_charges,
)
from .summary_service import describe_line_items, generate_bill_summary
from .booking_service import BookingPricingService, validate_stay
from .invoice_service import InvoiceService

__all__ = [
    'DealPeriod',
    'MonthlyRateBreakdown',
    'BookingCalculation',
    'calculate_booking_charges',
    'describe_line_items',
    'generate_bill_summary',
    'BookingPricingService',
    'validate_stay',
    'InvoiceService',
]
