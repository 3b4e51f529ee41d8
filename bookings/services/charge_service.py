"""
Booking Charge Calculation
==========================

Prices a stay against a room's month-indexed rate table with an optional
pro-rated promotional deal.

Calculation Flow:
1. Total nights = ceil(check-out - check-in), never less than 1
2. Lay the nights out as whole days from the check-in date and split them
   into calendar-month segments
3. Segment rate = monthly rate for that month, falling back to the base rate
4. Overlap of segment and deal window = deal nights
5. Segment subtotal = non-deal nights × rate + deal nights × discounted rate
6. Total = sum of segment subtotals (tax is applied by invoicing, not here)
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal
import calendar

from dateutil.relativedelta import relativedelta

from .summary_service import describe_line_items


ONE_DAY = timedelta(days=1)
HUNDRED = Decimal('100')


@dataclass(frozen=True)
class DealPeriod:
    """
    A single promotional window already chosen by the caller.

    Nights from start_date up to, but not including, end_date are
    discounted.
    """
    deal_id: str
    deal_name: str
    discount_percent: Decimal
    start_date: date
    end_date: date


@dataclass
class MonthlyRateBreakdown:
    month: int  # 0 = January
    month_name: str
    year: int
    days: int
    rate: Decimal
    subtotal: Decimal
    deal_days: int = 0
    deal_name: str = None
    deal_discount_percent: Decimal = None
    deal_amount: Decimal = None

    @property
    def non_deal_days(self):
        return self.days - self.deal_days

    @property
    def deal_rate(self):
        """Nightly rate after the deal discount."""
        percent = self.deal_discount_percent or Decimal('0')
        return self.rate * (Decimal('1') - percent / HUNDRED)

    def to_snapshot(self):
        return {
            'month': self.month,
            'month_name': self.month_name,
            'year': self.year,
            'days': self.days,
            'rate': str(self.rate),
            'subtotal': str(self.subtotal),
            'deal_days': self.deal_days,
            'deal_name': self.deal_name,
            'deal_discount_percent': _optional_str(self.deal_discount_percent),
            'deal_amount': _optional_str(self.deal_amount),
        }

    @classmethod
    def from_snapshot(cls, data):
        return cls(
            month=data['month'],
            month_name=data['month_name'],
            year=data['year'],
            days=data['days'],
            rate=Decimal(data['rate']),
            subtotal=Decimal(data['subtotal']),
            deal_days=data.get('deal_days') or 0,
            deal_name=data.get('deal_name'),
            deal_discount_percent=_optional_decimal(data.get('deal_discount_percent')),
            deal_amount=_optional_decimal(data.get('deal_amount')),
        )


@dataclass
class BookingCalculation:
    total_nights: int
    monthly_breakdowns: list = field(default_factory=list)
    subtotal: Decimal = Decimal('0')
    total_deal_discount: Decimal = Decimal('0')
    total: Decimal = Decimal('0')
    deal_applied: bool = False
    deal_name: str = None
    line_item_descriptions: list = field(default_factory=list)

    def to_snapshot(self):
        """
        JSON-safe copy stored on a booking as its pricing snapshot.

        Decimals are kept as strings so the snapshot reloads exactly.
        """
        return {
            'total_nights': self.total_nights,
            'monthly_breakdowns': [b.to_snapshot() for b in self.monthly_breakdowns],
            'subtotal': str(self.subtotal),
            'total_deal_discount': str(self.total_deal_discount),
            'total': str(self.total),
            'deal_applied': self.deal_applied,
            'deal_name': self.deal_name,
            'line_item_descriptions': list(self.line_item_descriptions),
        }

    @classmethod
    def from_snapshot(cls, data):
        return cls(
            total_nights=data['total_nights'],
            monthly_breakdowns=[
                MonthlyRateBreakdown.from_snapshot(b) for b in data.get('monthly_breakdowns', [])
            ],
            subtotal=Decimal(data['subtotal']),
            total_deal_discount=Decimal(data['total_deal_discount']),
            total=Decimal(data['total']),
            deal_applied=data.get('deal_applied', False),
            deal_name=data.get('deal_name'),
            line_item_descriptions=list(data.get('line_item_descriptions', [])),
        )


def calculate_booking_charges(check_in, check_out, monthly_rates, base_rate, deal=None):
    """
    Calculate booking charges with multi-month rates and a pro-rated deal.

    Args:
        check_in: date or datetime, first night of the stay
        check_out: date or datetime, departure (exclusive)
        monthly_rates: sequence of 12 nightly rates, index 0 = January
        base_rate: rate used for any month whose slot is missing or zero
        deal: optional DealPeriod

    Returns:
        BookingCalculation
    """
    start = _to_datetime(check_in)
    end = _to_datetime(check_out)

    total_nights = max(1, _day_count(start, end))
    result = BookingCalculation(total_nights=total_nights)

    stay_start = _midnight(start)
    stay_end = stay_start + total_nights * ONE_DAY

    if deal is not None:
        deal_start = _to_datetime(deal.start_date)
        deal_end = _to_datetime(deal.end_date)
        discount_percent = _to_decimal(deal.discount_percent)

    for segment_start, segment_end in _month_segments(stay_start, stay_end):
        month = segment_start.month - 1
        days = _day_count(segment_start, segment_end)
        rate = _rate_for_month(monthly_rates, month, base_rate)

        deal_days = 0
        if deal is not None:
            overlap_start = max(segment_start, deal_start)
            overlap_end = min(segment_end, deal_end)
            if overlap_start < overlap_end:
                deal_days = _day_count(overlap_start, overlap_end)

        non_deal_charge = (days - deal_days) * rate
        breakdown = MonthlyRateBreakdown(
            month=month,
            month_name=calendar.month_name[segment_start.month],
            year=segment_start.year,
            days=days,
            rate=rate,
            subtotal=non_deal_charge,
        )

        if deal_days > 0:
            deal_charge = deal_days * rate * (Decimal('1') - discount_percent / HUNDRED)
            deal_amount = deal_days * rate * (discount_percent / HUNDRED)

            breakdown.subtotal = non_deal_charge + deal_charge
            breakdown.deal_days = deal_days
            breakdown.deal_name = deal.deal_name
            breakdown.deal_discount_percent = discount_percent
            breakdown.deal_amount = deal_amount

            result.deal_applied = True
            result.deal_name = deal.deal_name
            result.total_deal_discount += deal_amount

        result.monthly_breakdowns.append(breakdown)
        result.subtotal += breakdown.subtotal

    result.total = result.subtotal
    result.line_item_descriptions = describe_line_items(result)

    return result


# =============================================================================
# HELPERS
# =============================================================================

def _month_segments(start, end):
    """Yield (segment_start, segment_end) pairs, one per calendar month touched."""
    cursor = start
    while cursor < end:
        next_month = _midnight(cursor).replace(day=1) + relativedelta(months=1)
        segment_end = min(next_month, end)
        yield cursor, segment_end
        cursor = segment_end


def _day_count(start, end):
    """Whole days between two instants, rounded up."""
    delta = end - start
    if delta.seconds or delta.microseconds:
        return delta.days + 1
    return delta.days


def _rate_for_month(monthly_rates, month, base_rate):
    rate = None
    if monthly_rates and month < len(monthly_rates):
        rate = monthly_rates[month]
    if rate is not None:
        rate = _to_decimal(rate)
    # Zero counts as unset.
    if not rate:
        rate = _to_decimal(base_rate)
    return rate


def _midnight(value):
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def _to_datetime(value):
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _to_decimal(value):
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _optional_str(value):
    return None if value is None else str(value)


def _optional_decimal(value):
    return None if value is None else Decimal(value)
