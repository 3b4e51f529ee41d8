"""
Bookings models package.

Re-exports all models so Django migrations and existing imports
continue to work unchanged:
    from bookings.models import Room, Deal, Booking, etc.
"""

# Core: hotel-wide settings
from .core import HotelSettings

# Rooms: rate tables and deals
from .rooms import (
    Room,
    Deal,
)

# Bookings: stays and invoices
from .bookings import (
    Booking,
    Invoice,
    InvoiceLineItem,
)

__all__ = [
    # Core
    'HotelSettings',
    # Rooms
    'Room', 'Deal',
    # Bookings
    'Booking', 'Invoice', 'InvoiceLineItem',
]
