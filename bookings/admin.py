"""
Bookings admin configuration.

Supports:
- Hotel settings (tax, currency)
- Rooms with monthly rate tables
- Deals
- Bookings with their stored bill summary
- Invoices with line items
"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html

from .models import HotelSettings, Room, Deal, Booking, Invoice, InvoiceLineItem
from .services import generate_bill_summary


# =============================================================================
# SETTINGS
# =============================================================================

@admin.register(HotelSettings)
class HotelSettingsAdmin(admin.ModelAdmin):
    list_display = ['hotel_name', 'currency', 'currency_symbol', 'tax_percent', 'updated_at']

    fieldsets = (
        (None, {
            'fields': ('hotel_name', 'address', 'phone', 'email')
        }),
        ('Billing', {
            'fields': ('currency', 'currency_symbol', 'tax_percent'),
            'description': 'Tax is added when invoices are created, never to booking charges'
        }),
    )

    def has_add_permission(self, request):
        return not HotelSettings.objects.exists()


# =============================================================================
# ROOMS & DEALS
# =============================================================================

@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    """Admin for rooms and their monthly rate tables."""
    list_display = ['room_number', 'name', 'room_type', 'tier', 'rate', 'status', 'bookings_display']
    list_filter = ['room_type', 'tier', 'status']
    search_fields = ['room_number', 'name']
    ordering = ['room_number']

    fieldsets = (
        (None, {
            'fields': ('room_number', 'name', 'room_type', 'tier', 'status')
        }),
        ('Capacity', {
            'fields': ('floor', 'max_occupancy'),
        }),
        ('Rates', {
            'fields': ('rate', 'monthly_rates'),
            'description': '12 nightly rates, January to December. Empty or zero months use the flat rate.'
        }),
    )

    def bookings_display(self, obj):
        """Link to this room's bookings."""
        count = obj.bookings.count()
        if count > 0:
            url = reverse('admin:bookings_booking_changelist') + f'?room__id__exact={obj.id}'
            return format_html('<a href="{}">{} bookings</a>', url, count)
        return '0'
    bookings_display.short_description = 'Bookings'


@admin.register(Deal)
class DealAdmin(admin.ModelAdmin):
    list_display = ['deal_name', 'reference_number', 'discount_display', 'start_date', 'end_date', 'status', 'reservations_left']
    list_filter = ['status']
    search_fields = ['deal_name', 'reference_number']
    filter_horizontal = ['rooms']
    ordering = ['-start_date']

    fieldsets = (
        (None, {
            'fields': ('reference_number', 'deal_name', 'description', 'status', 'tags')
        }),
        ('Discount', {
            'fields': ('discount', 'start_date', 'end_date'),
            'description': 'Nights from the start date up to (not including) the end date are discounted'
        }),
        ('Applies To', {
            'fields': ('room_types', 'rooms', 'reservations_left'),
        }),
    )

    def discount_display(self, obj):
        return format_html('<span style="color:green;">-{}%</span>', obj.discount)
    discount_display.short_description = 'Discount'


# =============================================================================
# BOOKINGS & INVOICES
# =============================================================================

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ['guest_name', 'room', 'check_in', 'check_out', 'room_nights', 'room_total', 'deal_display', 'status']
    list_filter = ['status', 'source', 'applied_rate_source']
    search_fields = ['guest_name', 'guest_email', 'room__room_number']
    date_hierarchy = 'check_in'
    raw_id_fields = ['room', 'applied_deal']
    readonly_fields = [
        'applied_rate', 'applied_rate_source', 'applied_deal', 'applied_discount',
        'room_nights', 'room_total', 'pricing_snapshot', 'bill_summary_display',
    ]

    fieldsets = (
        (None, {
            'fields': ('room', 'guest_name', 'guest_email', 'adults', 'children')
        }),
        ('Stay', {
            'fields': ('check_in', 'check_out', 'status', 'source', 'source_booking_id'),
        }),
        ('Pricing Snapshot', {
            'fields': (
                'room_nights', 'applied_rate', 'applied_rate_source', 'applied_deal',
                'applied_discount', 'room_total', 'pricing_snapshot', 'bill_summary_display',
            ),
            'description': 'Charges as quoted at booking time'
        }),
    )

    def deal_display(self, obj):
        if obj.applied_deal_id:
            return format_html('{} (-{}%)', obj.applied_deal.deal_name, obj.applied_discount)
        return '-'
    deal_display.short_description = 'Deal'

    def bill_summary_display(self, obj):
        """Stored breakdown rendered as a bill summary."""
        calculation = obj.get_calculation()
        if calculation is None:
            return 'No breakdown stored'
        symbol = HotelSettings.load().currency_symbol
        return format_html('<pre>{}</pre>', generate_bill_summary(calculation, currency=symbol))
    bill_summary_display.short_description = 'Bill Summary'


class InvoiceLineItemInline(admin.TabularInline):
    """Inline for line items within an invoice."""
    model = InvoiceLineItem
    extra = 0
    fields = ['description', 'qty', 'amount', 'category', 'source', 'sort_order']
    ordering = ['sort_order', 'id']


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ['id', 'booking', 'subtotal', 'tax', 'total', 'status', 'paid_at']
    list_filter = ['status']
    search_fields = ['booking__guest_name', 'booking__room__room_number']
    raw_id_fields = ['booking']
    readonly_fields = ['subtotal', 'tax', 'total']

    inlines = [InvoiceLineItemInline]
