from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fiscal_years', '0001_initial'),
        ('procurement', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='SpendingItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('vendor', models.CharField(blank=True, max_length=200)),
                ('reference_number', models.CharField(blank=True, max_length=100)),
                ('amount', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('eco_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('COMMITTED', 'Committed'), ('PAID', 'Paid'), ('CANCELLED', 'Cancelled')], default='DRAFT', max_length=20)),
                ('currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('active', models.BooleanField(default=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='spending_items', to='fiscal_years.category')),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='spending_items', to='fiscal_years.fiscalyear')),
                ('procurement_item', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='spending_items', to='procurement.procurementitem')),
            ],
            options={
                'db_table': 'spending_items',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='SpendingMoneyAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('cap_amount', models.DecimalField(decimal_places=2, default=0, max_digits=15, validators=[django.core.validators.MinValueValidator(0)])),
                ('om_amount', models.DecimalField(decimal_places=2, default=0, max_digits=15, validators=[django.core.validators.MinValueValidator(0)])),
                ('money', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='spending_allocations', to='fiscal_years.money')),
                ('spending_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='spending.spendingitem')),
            ],
            options={
                'db_table': 'spending_money_allocations',
                'unique_together': {('spending_item', 'money')},
            },
        ),
        migrations.CreateModel(
            name='SpendingEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event_type', models.CharField(choices=[('PENDING', 'Pending'), ('ECO_REQUESTED', 'ECO Requested'), ('ECO_RECEIVED', 'ECO Received'), ('EXTERNAL_APPROVAL_REQUESTED', 'External Approval Requested'), ('EXTERNAL_APPROVAL_RECEIVED', 'External Approval Received'), ('SECTION_32_PROVIDED', 'Section 32 Provided'), ('RECEIVED_GOODS_SERVICES', 'Received Goods/Services'), ('SECTION_34_PROVIDED', 'Section 34 Provided'), ('CREDIT_CARD_CLEARED', 'Credit Card Cleared'), ('CANCELLED', 'Cancelled'), ('ON_HOLD', 'On Hold')], default='PENDING', max_length=40)),
                ('event_date', models.DateField(default=django.utils.timezone.localdate)),
                ('comment', models.TextField(blank=True)),
                ('active', models.BooleanField(default=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('spending_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='spending.spendingitem')),
            ],
            options={
                'db_table': 'spending_events',
                'ordering': ['-event_date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='SpendingInvoice',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('invoice_number', models.CharField(blank=True, max_length=100)),
                ('date_received', models.DateField(blank=True, null=True)),
                ('date_processed', models.DateField(blank=True, null=True)),
                ('comment', models.TextField(blank=True)),
                ('amount', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('amount_cad', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('active', models.BooleanField(default=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('spending_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='invoices', to='spending.spendingitem')),
            ],
            options={
                'db_table': 'spending_invoices',
                'ordering': ['-date_received', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='SpendingInvoiceFile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('file_name', models.CharField(max_length=255)),
                ('content_type', models.CharField(max_length=100)),
                ('file_size', models.BigIntegerField()),
                ('content', models.BinaryField()),
                ('description', models.CharField(blank=True, max_length=500)),
                ('active', models.BooleanField(default=True)),
                ('invoice', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='spending.spendinginvoice')),
            ],
            options={
                'db_table': 'spending_invoice_files',
                'ordering': ['-created_at'],
            },
        ),
    ]
