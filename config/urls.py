"""
URL configuration for the hotel bookings project.
"""

from django.contrib import admin
from django.urls import path

admin.site.site_header = "Hotel Bookings Admin"
admin.site.site_title = "Admin Portal"
admin.site.index_title = "Rooms, Deals & Billing"

urlpatterns = [
    path('admin/', admin.site.urls),
]
