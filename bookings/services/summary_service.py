"""
Text rendering for booking charge calculations.

Both functions take a BookingCalculation (see charge_service) and only
format what the calculator already decided.
"""

from decimal import Decimal, ROUND_HALF_UP


def describe_line_items(calc, currency='$'):
    """
    Human-readable line items for a calculation, one or two per month.

    Example:
        March 2026: 2 nights @ $100.00/night = $200.00
        March 2026: 3 nights @ $70.00/night (Spring Sale, 30% off) = $210.00
        Total Spring Sale discount: -$90.00
    """
    descriptions = []

    for breakdown in calc.monthly_breakdowns:
        label = f"{breakdown.month_name} {breakdown.year}"
        for line in _month_lines(breakdown, currency):
            descriptions.append(f"{label}: {line}")

    if calc.deal_applied and calc.total_deal_discount > 0:
        descriptions.append(
            f"Total {calc.deal_name} discount: -{format_money(calc.total_deal_discount, currency)}"
        )

    return descriptions


def generate_bill_summary(calc, currency='$'):
    """
    Format a calculation as a multi-paragraph bill summary.

    Args:
        calc: BookingCalculation
        currency: Currency symbol

    Returns:
        str: Formatted summary
    """
    lines = [
        f"Booking Summary ({pluralize_nights(calc.total_nights)} total):",
        "",
    ]

    for breakdown in calc.monthly_breakdowns:
        lines.append(f"{breakdown.month_name} {breakdown.year}:")
        for line in _month_lines(breakdown, currency):
            lines.append(f"  • {line}")
        if breakdown.deal_days > 0 and breakdown.deal_amount:
            lines.append(f"    Discount: -{format_money(breakdown.deal_amount, currency)}")
        lines.append(f"  Subtotal: {format_money(breakdown.subtotal, currency)}")
        lines.append("")

    if calc.deal_applied and calc.total_deal_discount > 0:
        lines.extend([
            f"Total Before Discount: {format_money(calc.subtotal + calc.total_deal_discount, currency)}",
            f"Total {calc.deal_name} Discount: -{format_money(calc.total_deal_discount, currency)}",
        ])

    lines.append("")
    lines.append(f"Total: {format_money(calc.total, currency)}")

    return "\n".join(lines)


def _month_lines(breakdown, currency):
    """Itemized lines for one month, without the month label."""
    if breakdown.deal_days > 0:
        lines = []
        non_deal_days = breakdown.non_deal_days
        if non_deal_days > 0:
            lines.append(
                f"{pluralize_nights(non_deal_days)} @ {format_money(breakdown.rate, currency)}/night"
                f" = {format_money(non_deal_days * breakdown.rate, currency)}"
            )

        deal_rate = breakdown.deal_rate
        lines.append(
            f"{pluralize_nights(breakdown.deal_days)} @ {format_money(deal_rate, currency)}/night"
            f" ({breakdown.deal_name}, {format_percent(breakdown.deal_discount_percent)}% off)"
            f" = {format_money(breakdown.deal_days * deal_rate, currency)}"
        )
        return lines

    return [
        f"{pluralize_nights(breakdown.days)} @ {format_money(breakdown.rate, currency)}/night"
        f" = {format_money(breakdown.subtotal, currency)}"
    ]


# =============================================================================
# FORMATTING HELPERS
# =============================================================================

def format_money(value, currency='$'):
    """Two decimal places, rounded half up."""
    amount = Decimal(value).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    return f"{currency}{amount:.2f}"


def format_percent(value):
    """Percent without trailing zeros: 20, 12.5."""
    if value is None:
        return '0'
    return format(Decimal(value).normalize(), 'f')


def pluralize_nights(count):
    return f"{count} night" if count == 1 else f"{count} nights"
