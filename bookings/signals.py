"""
Signal handlers for auto-populating room monthly rate tables.
"""

from django.db.models.signals import pre_save
from django.dispatch import receiver
from .models import Room
from .models.rooms import MONTHS_IN_YEAR


@receiver(pre_save, sender=Room)
def fill_monthly_rates(sender, instance, **kwargs):
    """
    When a room is saved without a monthly rate table, use its flat rate
    for all twelve months.
    """
    if not instance.monthly_rates and instance.rate is not None:
        instance.monthly_rates = [str(instance.rate)] * MONTHS_IN_YEAR
