"""Pytest configuration and shared fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from bookings.services import DealPeriod


FLAT_RATES = [100] * 12


@pytest.fixture
def flat_rates() -> list:
    """All twelve months at $100/night."""
    return list(FLAT_RATES)


@pytest.fixture
def seasonal_rates() -> list:
    """Low season in winter, high season in summer."""
    return [
        100, 100, 120, 120, 150, 150,  # Jan-Jun
        150, 150, 120, 120, 100, 100,  # Jul-Dec
    ]


@pytest.fixture
def spring_sale() -> DealPeriod:
    return DealPeriod(
        deal_id='deal-2',
        deal_name='Spring Sale',
        discount_percent=Decimal('30'),
        start_date=date(2026, 3, 1),
        end_date=date(2026, 3, 31),
    )


@pytest.fixture
def valentine_special() -> DealPeriod:
    return DealPeriod(
        deal_id='deal-1',
        deal_name='Valentine Special',
        discount_percent=Decimal('20'),
        start_date=date(2026, 2, 12),
        end_date=date(2026, 2, 14),
    )


@pytest.fixture
def room(db):
    from bookings.models import Room

    return Room.objects.create(
        room_number='101',
        name='Garden View',
        room_type='double',
        rate=Decimal('100.00'),
    )


@pytest.fixture
def make_deal(db):
    """Factory for persisted deals."""
    from bookings.models import Deal

    counter = {'n': 0}

    def _make_deal(**overrides):
        counter['n'] += 1
        fields = {
            'reference_number': f"DEAL-{counter['n']:03d}",
            'deal_name': 'Spring Sale',
            'discount': Decimal('30.00'),
            'start_date': date(2026, 3, 1),
            'end_date': date(2026, 3, 31),
            'room_types': ['double'],
            'status': 'Ongoing',
        }
        rooms = overrides.pop('rooms', [])
        fields.update(overrides)
        deal = Deal.objects.create(**fields)
        if rooms:
            deal.rooms.set(rooms)
        return deal

    return _make_deal


@pytest.fixture
def make_booking(db, room):
    """Factory for unsaved bookings in the default room."""
    from bookings.models import Booking

    def _make_booking(check_in, check_out, **overrides):
        fields = {
            'room': room,
            'guest_name': 'Ada Lovelace',
            'guest_email': 'ada@example.com',
            'check_in': check_in,
            'check_out': check_out,
            'status': 'Confirmed',
        }
        fields.update(overrides)
        return Booking(**fields)

    return _make_booking
