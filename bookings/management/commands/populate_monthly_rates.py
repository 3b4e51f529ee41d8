"""
Management command to fill monthly rate tables for existing rooms.
"""

import logging

from django.core.management.base import BaseCommand
from bookings.models import Room
from bookings.models.rooms import MONTHS_IN_YEAR

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Fill empty or short monthly rate tables from each room\'s flat rate'

    def add_arguments(self, parser):
        parser.add_argument(
            '--overwrite',
            action='store_true',
            help='Reset all twelve months to the flat rate, even if already set',
        )

    def handle(self, *args, **options):
        overwrite = options['overwrite']
        rooms = Room.objects.all()

        self.stdout.write(f"Found {rooms.count()} rooms")

        updated_count = 0
        unchanged_count = 0

        for room in rooms:
            rates = list(room.monthly_rates or [])

            if overwrite:
                new_rates = [str(room.rate)] * MONTHS_IN_YEAR
            elif len(rates) < MONTHS_IN_YEAR:
                new_rates = rates + [str(room.rate)] * (MONTHS_IN_YEAR - len(rates))
            else:
                new_rates = rates

            if new_rates == rates:
                unchanged_count += 1
                continue

            room.monthly_rates = new_rates
            room.save(update_fields=['monthly_rates', 'updated_at'])
            updated_count += 1
            self.stdout.write(f"  Updated: Room {room.room_number}")

        logger.info("Monthly rates populated: %d updated, %d unchanged", updated_count, unchanged_count)

        self.stdout.write(self.style.SUCCESS(
            f"\n✓ Complete!"
            f"\n  Updated: {updated_count} rooms"
            f"\n  Unchanged: {unchanged_count} rooms"
        ))
