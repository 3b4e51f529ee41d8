"""Tests for model validation, signals and maintenance commands."""

from datetime import date
from decimal import Decimal
from io import StringIO

import pytest
from django.core.exceptions import ValidationError
from django.core.management import call_command

from bookings.models import Deal, HotelSettings, Room


pytestmark = pytest.mark.django_db


class TestRoom:

    def test_empty_monthly_rates_filled_from_rate(self, room):
        room.refresh_from_db()

        assert room.monthly_rates == ['100.00'] * 12
        assert room.get_monthly_rates() == [Decimal('100.00')] * 12

    def test_explicit_monthly_rates_are_kept(self):
        rates = [120] * 6 + [180] * 6
        room = Room.objects.create(room_number='301', room_type='family', rate=Decimal('150.00'), monthly_rates=rates)

        room.refresh_from_db()
        assert room.monthly_rates == rates

    def test_clean_rejects_wrong_length(self):
        room = Room(room_number='303', room_type='single', rate=Decimal('80.00'), monthly_rates=[80] * 11)

        with pytest.raises(ValidationError) as excinfo:
            room.clean()
        assert 'monthly_rates' in excinfo.value.message_dict

    def test_clean_rejects_negative_rate(self):
        room = Room(room_number='304', room_type='single', rate=Decimal('80.00'), monthly_rates=[80] * 11 + [-1])

        with pytest.raises(ValidationError):
            room.clean()

    def test_clean_rejects_non_numeric_rate(self):
        room = Room(room_number='305', room_type='single', rate=Decimal('80.00'), monthly_rates=['abc'] + [80] * 11)

        with pytest.raises(ValidationError):
            room.clean()


class TestDeal:

    def test_clean_rejects_end_before_start(self):
        deal = Deal(
            reference_number='BAD-1',
            deal_name='Backwards',
            start_date=date(2026, 3, 10),
            end_date=date(2026, 3, 1),
        )

        with pytest.raises(ValidationError):
            deal.clean()

    @pytest.mark.parametrize(
        "check_in,check_out,expected",
        [
            (date(2026, 3, 30), date(2026, 4, 5), True),
            (date(2026, 2, 20), date(2026, 3, 2), True),
            (date(2026, 3, 31), date(2026, 4, 5), False),
            (date(2026, 2, 20), date(2026, 3, 1), False),
            (date(2026, 4, 1), date(2026, 4, 5), False),
        ],
    )
    def test_overlaps_needs_a_discounted_night(self, make_deal, check_in, check_out, expected):
        deal = make_deal(start_date=date(2026, 3, 1), end_date=date(2026, 3, 31))

        assert deal.overlaps(check_in, check_out) is expected

    def test_to_deal_period(self, make_deal):
        deal = make_deal(deal_name='Spring Sale', discount=Decimal('30.00'))

        period = deal.to_deal_period()

        assert period.deal_id == str(deal.pk)
        assert period.deal_name == 'Spring Sale'
        assert period.discount_percent == Decimal('30.00')
        assert (period.start_date, period.end_date) == (deal.start_date, deal.end_date)


class TestBooking:

    def test_clean_rejects_check_out_on_check_in(self, make_booking):
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 10))

        with pytest.raises(ValidationError):
            booking.clean()

    def test_legacy_booking_has_no_calculation(self, make_booking):
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 12))

        assert booking.get_calculation() is None


class TestHotelSettings:

    def test_load_creates_single_row(self):
        first = HotelSettings.load()
        second = HotelSettings.load()

        assert first.pk == second.pk == 1
        assert HotelSettings.objects.count() == 1
        assert first.tax_percent == Decimal('10.00')
        assert first.currency_symbol == '$'


class TestPopulateMonthlyRates:

    def test_pads_short_tables(self):
        room = Room.objects.create(room_number='401', room_type='double', rate=Decimal('90.00'), monthly_rates=[120, 130])

        out = StringIO()
        call_command('populate_monthly_rates', stdout=out)
        room.refresh_from_db()

        assert room.monthly_rates == [120, 130] + ['90.00'] * 10
        assert 'Updated: 1 rooms' in out.getvalue()

    def test_full_tables_unchanged(self, room):
        out = StringIO()
        call_command('populate_monthly_rates', stdout=out)

        assert 'Unchanged: 1 rooms' in out.getvalue()

    def test_overwrite_resets_all_months(self):
        room = Room.objects.create(room_number='402', room_type='double', rate=Decimal('90.00'), monthly_rates=[120] * 12)

        call_command('populate_monthly_rates', '--overwrite', stdout=StringIO())
        room.refresh_from_db()

        assert room.monthly_rates == ['90.00'] * 12
