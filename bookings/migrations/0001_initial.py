import bookings.models.core
import django.core.serializers.json
import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='HotelSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('hotel_name', models.CharField(default='Grand Hotel', help_text='Hotel name', max_length=200)),
                ('address', models.CharField(blank=True, default='', max_length=255)),
                ('phone', models.CharField(blank=True, default='', max_length=50)),
                ('email', models.EmailField(blank=True, default='', max_length=254)),
                ('currency', models.CharField(default='USD', help_text='Currency code (e.g., USD, EUR)', max_length=3)),
                ('currency_symbol', models.CharField(default=bookings.models.core._default_currency_symbol, help_text='Currency symbol for display', max_length=5)),
                ('tax_percent', models.DecimalField(decimal_places=2, default=bookings.models.core._default_tax_percent, help_text='Tax percentage added to invoices (e.g., 10.00 for 10%)', max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Hotel Settings',
                'verbose_name_plural': 'Hotel Settings',
            },
        ),
        migrations.CreateModel(
            name='Room',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('room_number', models.CharField(help_text='Room number (e.g., 101, 101A)', max_length=20, unique=True)),
                ('name', models.CharField(blank=True, default='', max_length=100)),
                ('room_type', models.CharField(choices=[('single', 'Single'), ('double', 'Double'), ('suite', 'Suite'), ('family', 'Family')], max_length=20)),
                ('tier', models.CharField(choices=[('Deluxe', 'Deluxe'), ('Normal', 'Normal')], db_index=True, default='Normal', max_length=20)),
                ('rate', models.DecimalField(decimal_places=2, help_text='Flat nightly rate, used when a month has no rate of its own', max_digits=10, validators=[django.core.validators.MinValueValidator(0)])),
                ('monthly_rates', models.JSONField(blank=True, default=list, help_text='12 nightly rates, January to December')),
                ('status', models.CharField(choices=[('Available', 'Available'), ('Occupied', 'Occupied'), ('Reserved', 'Reserved'), ('Cleaning', 'Cleaning'), ('Maintenance', 'Maintenance')], default='Available', max_length=20)),
                ('floor', models.IntegerField(default=0)),
                ('max_occupancy', models.PositiveIntegerField(default=2)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Room',
                'verbose_name_plural': 'Rooms',
                'ordering': ['room_number'],
            },
        ),
        migrations.CreateModel(
            name='Deal',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reference_number', models.CharField(max_length=50, unique=True)),
                ('deal_name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Discount percentage (e.g., 20.00 for 20% off)', max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('start_date', models.DateField(help_text='First discounted night')),
                ('end_date', models.DateField(help_text='Last date of the deal window; the night starting on it is not discounted')),
                ('room_types', models.JSONField(blank=True, default=list, help_text="Room types the deal applies to (e.g., ['double', 'suite'])")),
                ('status', models.CharField(choices=[('Ongoing', 'Ongoing'), ('Full', 'Full'), ('Inactive', 'Inactive'), ('New', 'New'), ('Finished', 'Finished')], default='New', max_length=20)),
                ('reservations_left', models.PositiveIntegerField(default=20)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('rooms', models.ManyToManyField(blank=True, help_text='Specific rooms the deal applies to', related_name='deals', to='bookings.room')),
            ],
            options={
                'verbose_name': 'Deal',
                'verbose_name_plural': 'Deals',
                'ordering': ['start_date', 'deal_name'],
            },
        ),
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('guest_name', models.CharField(max_length=200)),
                ('guest_email', models.EmailField(blank=True, default='', max_length=254)),
                ('adults', models.PositiveIntegerField(default=1)),
                ('children', models.PositiveIntegerField(default=0)),
                ('check_in', models.DateField()),
                ('check_out', models.DateField(help_text='Departure date (not charged)')),
                ('status', models.CharField(choices=[('Pending', 'Pending'), ('Confirmed', 'Confirmed'), ('CheckedIn', 'Checked In'), ('CheckedOut', 'Checked Out'), ('Cancelled', 'Cancelled')], default='Pending', max_length=20)),
                ('source', models.CharField(choices=[('Local', 'Local'), ('Online', 'Online'), ('Booking.com', 'Booking.com'), ('TripAdvisor', 'TripAdvisor'), ('Expedia', 'Expedia')], db_index=True, default='Local', max_length=20)),
                ('source_booking_id', models.CharField(blank=True, default='', max_length=100)),
                ('applied_rate', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Average nightly rate actually charged', max_digits=10)),
                ('applied_rate_source', models.CharField(choices=[('room', 'Room Rate'), ('deal', 'Deal')], default='room', max_length=10)),
                ('applied_discount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=5)),
                ('room_nights', models.PositiveIntegerField(default=0)),
                ('room_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('pricing_snapshot', models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='{base_rate, total_amount, currency} at booking time')),
                ('rate_breakdown', models.JSONField(blank=True, encoder=django.core.serializers.json.DjangoJSONEncoder, help_text='Full charge calculation at booking time', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('applied_deal', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='bookings', to='bookings.deal')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bookings', to='bookings.room')),
            ],
            options={
                'verbose_name': 'Booking',
                'verbose_name_plural': 'Bookings',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Invoice',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('subtotal', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('tax_percent', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Tax percentage applied to the subtotal', max_digits=5)),
                ('tax', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=12)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('paid', 'Paid'), ('cancelled', 'Cancelled')], db_index=True, default='pending', max_length=20)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('booking', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='invoices', to='bookings.booking')),
            ],
            options={
                'verbose_name': 'Invoice',
                'verbose_name_plural': 'Invoices',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='InvoiceLineItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('description', models.CharField(max_length=255)),
                ('qty', models.PositiveIntegerField(default=1)),
                ('amount', models.DecimalField(decimal_places=2, help_text='Total amount for this line', max_digits=12)),
                ('category', models.CharField(choices=[('room', 'Room'), ('meal', 'Meal'), ('service', 'Service'), ('other', 'Other'), ('discount', 'Discount')], default='other', max_length=20)),
                ('source', models.CharField(choices=[('booking', 'Booking'), ('order', 'Order'), ('trip', 'Trip'), ('custom', 'Custom'), ('discount', 'Discount')], default='custom', max_length=20)),
                ('sort_order', models.PositiveIntegerField(default=0)),
                ('invoice', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='line_items', to='bookings.invoice')),
            ],
            options={
                'verbose_name': 'Invoice Line Item',
                'verbose_name_plural': 'Invoice Line Items',
                'ordering': ['sort_order', 'id'],
            },
        ),
    ]
