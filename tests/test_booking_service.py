"""Tests for deal selection and booking pricing."""

from datetime import date
from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from bookings.models import Booking, Room
from bookings.services import BookingPricingService


pytestmark = pytest.mark.django_db


class TestFindApplicableDeals:

    def test_matches_room_type_case_insensitively(self, room, make_deal):
        deal = make_deal(room_types=['Double'])

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 3, 10), date(2026, 3, 15))

        assert deals == [deal]

    def test_matches_linked_room(self, room, make_deal):
        deal = make_deal(room_types=[], rooms=[room])

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 3, 10), date(2026, 3, 15))

        assert deals == [deal]

    def test_skips_other_room_types(self, room, make_deal):
        make_deal(room_types=['suite'])

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 3, 10), date(2026, 3, 15))

        assert deals == []

    def test_skips_finished_deals(self, room, make_deal):
        make_deal(status='Finished')

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 3, 10), date(2026, 3, 15))

        assert deals == []

    def test_skips_deals_outside_stay(self, room, make_deal):
        make_deal(start_date=date(2026, 4, 20), end_date=date(2026, 4, 30))

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 4, 10), date(2026, 4, 15))

        assert deals == []

    def test_skips_deal_starting_on_check_out(self, room, make_deal):
        make_deal(start_date=date(2026, 4, 15), end_date=date(2026, 4, 30))

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 4, 10), date(2026, 4, 15))

        assert deals == []

    def test_skips_deal_ending_on_check_in(self, room, make_deal):
        make_deal(start_date=date(2026, 4, 1), end_date=date(2026, 4, 10))

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 4, 10), date(2026, 4, 15))

        assert deals == []

    def test_keeps_deal_with_one_discounted_night(self, room, make_deal):
        deal = make_deal(start_date=date(2026, 4, 14), end_date=date(2026, 4, 20))

        deals = BookingPricingService(room).find_applicable_deals(date(2026, 4, 10), date(2026, 4, 15))

        assert deals == [deal]


class TestSelectBestDeal:

    def test_highest_discount_wins(self, room, make_deal):
        small = make_deal(deal_name='Small', discount=Decimal('10.00'))
        big = make_deal(deal_name='Big', discount=Decimal('25.00'))

        assert BookingPricingService(room).select_best_deal([small, big]) == big

    def test_tie_keeps_first(self, room, make_deal):
        first = make_deal(deal_name='First', discount=Decimal('20.00'))
        second = make_deal(deal_name='Second', discount=Decimal('20.00'))

        assert BookingPricingService(room).select_best_deal([first, second]) == first

    def test_no_deals(self, room):
        assert BookingPricingService(room).select_best_deal([]) is None


class TestQuote:

    def test_quote_uses_best_deal(self, room, make_deal):
        make_deal(deal_name='Spring Sale', discount=Decimal('30.00'))
        make_deal(deal_name='Weekday', discount=Decimal('10.00'))

        calculation, deal = BookingPricingService(room).quote(date(2026, 3, 10), date(2026, 3, 15))

        assert deal.deal_name == 'Spring Sale'
        assert calculation.total == 350
        assert calculation.total_deal_discount == 150

    def test_bigger_deal_starting_on_check_out_does_not_win(self, room, make_deal, make_booking):
        month_long = make_deal(
            deal_name='March Saver',
            discount=Decimal('10.00'),
            start_date=date(2026, 3, 1),
            end_date=date(2026, 3, 31),
        )
        make_deal(
            deal_name='Mid-March Flash',
            discount=Decimal('50.00'),
            start_date=date(2026, 3, 15),
            end_date=date(2026, 3, 20),
        )
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 15))

        calculation = BookingPricingService(room).price_booking(booking)

        assert calculation.deal_applied is True
        assert calculation.total == 450
        assert booking.applied_deal == month_long
        assert booking.applied_rate_source == 'deal'
        assert booking.applied_discount == Decimal('10.00')

    def test_quote_without_deals(self, room):
        calculation, deal = BookingPricingService(room).quote(date(2026, 1, 15), date(2026, 1, 20))

        assert deal is None
        assert calculation.total == 500

    def test_quote_uses_room_monthly_rates(self, db):
        room = Room.objects.create(
            room_number='201',
            room_type='suite',
            rate=Decimal('200.00'),
            monthly_rates=[200, 200, 200, 200, 200, 300, 300, 300, 200, 200, 0, 200],
        )
        service = BookingPricingService(room)

        summer, _ = service.quote(date(2026, 6, 29), date(2026, 7, 2))
        november, _ = service.quote(date(2026, 11, 3), date(2026, 11, 4))

        assert summer.total == 900
        assert november.total == 200

    @pytest.mark.parametrize(
        "check_in,check_out",
        [
            (date(2026, 3, 10), date(2026, 3, 10)),
            (date(2026, 3, 10), date(2026, 3, 9)),
            (None, date(2026, 3, 9)),
        ],
    )
    def test_quote_rejects_invalid_dates(self, room, check_in, check_out):
        with pytest.raises(ValidationError):
            BookingPricingService(room).quote(check_in, check_out)


class TestPriceBooking:

    def test_stores_pricing_snapshot(self, room, make_deal, make_booking):
        deal = make_deal()
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 15))

        BookingPricingService(room).price_booking(booking)
        booking.refresh_from_db()

        assert booking.room_nights == 5
        assert booking.room_total == Decimal('350.00')
        assert booking.applied_rate == Decimal('70.00')
        assert booking.applied_rate_source == 'deal'
        assert booking.applied_deal == deal
        assert booking.applied_discount == Decimal('30.00')
        assert booking.pricing_snapshot == {
            'base_rate': '70.00',
            'total_amount': '350.00',
            'currency': 'USD',
        }
        assert booking.rate_breakdown['total_nights'] == 5
        assert booking.get_calculation().total == 350

    def test_room_rate_when_no_deal(self, room, make_booking):
        booking = make_booking(date(2026, 1, 15), date(2026, 1, 20))

        BookingPricingService(room).price_booking(booking)

        assert booking.pk is not None
        assert booking.applied_rate_source == 'room'
        assert booking.applied_deal is None
        assert booking.applied_discount == 0
        assert booking.room_total == Decimal('500.00')

    def test_average_rate_is_rounded(self, room, make_booking, make_deal):
        make_deal(discount=Decimal('10.00'), start_date=date(2026, 3, 1), end_date=date(2026, 3, 2))
        booking = make_booking(date(2026, 3, 1), date(2026, 3, 4))

        BookingPricingService(room).price_booking(booking, save=False)

        # 90 + 100 + 100 over 3 nights
        assert booking.room_total == Decimal('290.00')
        assert booking.applied_rate == Decimal('96.67')
        assert booking.pk is None

    def test_snapshot_survives_rate_and_deal_changes(self, room, make_deal, make_booking):
        deal = make_deal()
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 15))
        BookingPricingService(room).price_booking(booking)

        room.rate = Decimal('250.00')
        room.monthly_rates = [250] * 12
        room.save()
        deal.discount = Decimal('50.00')
        deal.save()

        stored = Booking.objects.get(pk=booking.pk)
        assert stored.room_total == Decimal('350.00')
        assert stored.get_calculation().total == 350
        assert stored.get_calculation().monthly_breakdowns[0].rate == 100


class TestRepriceBooking:

    def test_keeps_original_deal_while_it_overlaps(self, room, make_deal, make_booking):
        deal = make_deal()
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 15))
        service = BookingPricingService(room)
        service.price_booking(booking)

        calculation = service.reprice_booking(booking, check_out=date(2026, 4, 3))
        booking.refresh_from_db()

        # 21 discounted March nights, Mar 31 and two April nights at full rate
        assert calculation.total == 21 * 70 + 3 * 100
        assert booking.check_out == date(2026, 4, 3)
        assert booking.room_nights == 24
        assert booking.applied_deal == deal
        assert booking.room_total == Decimal('1770.00')

    def test_drops_deal_that_no_longer_overlaps(self, room, make_deal, make_booking):
        make_deal()
        booking = make_booking(date(2026, 3, 10), date(2026, 3, 15))
        service = BookingPricingService(room)
        service.price_booking(booking)

        service.reprice_booking(booking, check_in=date(2026, 5, 10), check_out=date(2026, 5, 12))
        booking.refresh_from_db()

        assert booking.applied_deal is None
        assert booking.applied_rate_source == 'room'
        assert booking.room_total == Decimal('200.00')

    def test_does_not_pick_up_new_deals(self, room, make_deal, make_booking):
        booking = make_booking(date(2026, 5, 10), date(2026, 5, 12))
        service = BookingPricingService(room)
        service.price_booking(booking)
        make_deal(start_date=date(2026, 5, 1), end_date=date(2026, 5, 31))

        service.reprice_booking(booking, check_out=date(2026, 5, 14))

        assert booking.applied_deal is None
        assert booking.room_total == Decimal('400.00')

    def test_rejects_check_out_before_check_in(self, room, make_booking):
        booking = make_booking(date(2026, 5, 10), date(2026, 5, 12))
        service = BookingPricingService(room)
        service.price_booking(booking)

        with pytest.raises(ValidationError):
            service.reprice_booking(booking, check_out=date(2026, 5, 9))
