from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fiscal_years', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ProcurementItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('purchase_requisition', models.CharField(blank=True, max_length=100)),
                ('purchase_order', models.CharField(blank=True, max_length=100)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('vendor', models.CharField(blank=True, max_length=200)),
                ('contract_number', models.CharField(blank=True, max_length=100)),
                ('contract_start_date', models.DateField(blank=True, null=True)),
                ('contract_end_date', models.DateField(blank=True, null=True)),
                ('procurement_completed', models.BooleanField(default=False)),
                ('procurement_completed_date', models.DateField(blank=True, null=True)),
                ('final_price', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('final_price_currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('final_price_exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('final_price_cad', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('quoted_price', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('quoted_price_currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('quoted_price_exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('quoted_price_cad', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('tracking_status', models.CharField(choices=[('PLANNING', 'Planning'), ('ON_TRACK', 'On Track'), ('AT_RISK', 'At Risk'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], default='ON_TRACK', max_length=20)),
                ('procurement_type', models.CharField(choices=[('RC_INITIATED', 'RC Initiated'), ('CENTRALLY_MANAGED', 'Centrally Managed')], default='RC_INITIATED', max_length=20)),
                ('active', models.BooleanField(default=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='procurement_items', to='fiscal_years.category')),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='procurement_items', to='fiscal_years.fiscalyear')),
            ],
            options={
                'db_table': 'procurement_items',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['fiscal_year', 'purchase_requisition'], name='proc_item_fy_pr_idx')],
            },
        ),
        migrations.CreateModel(
            name='ProcurementQuote',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('vendor_name', models.CharField(max_length=200)),
                ('vendor_contact', models.CharField(blank=True, max_length=200)),
                ('quote_reference', models.CharField(blank=True, max_length=100)),
                ('amount', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('amount_cap', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('amount_om', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('amount_cap_cad', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('amount_om_cad', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('received_date', models.DateField(blank=True, null=True)),
                ('expiry_date', models.DateField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('UNDER_REVIEW', 'Under Review'), ('SELECTED', 'Selected'), ('REJECTED', 'Rejected')], default='PENDING', max_length=20)),
                ('selected', models.BooleanField(default=False)),
                ('active', models.BooleanField(default=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('modified_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('procurement_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='quotes', to='procurement.procurementitem')),
            ],
            options={
                'db_table': 'procurement_quotes',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ProcurementQuoteFile',
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
                ('quote', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='procurement.procurementquote')),
            ],
            options={
                'db_table': 'procurement_quote_files',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ProcurementEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event_type', models.CharField(choices=[('NOT_STARTED', 'Not Started'), ('QUOTE', 'Quote'), ('SAM_ACKNOWLEDGEMENT_REQUESTED', 'SAM Acknowledgement Requested'), ('SAM_ACKNOWLEDGEMENT_RECEIVED', 'SAM Acknowledgement Received'), ('PACKAGE_SENT_TO_PROCUREMENT', 'Package Sent to Procurement'), ('ACKNOWLEDGED_BY_PROCUREMENT', 'Acknowledged by Procurement'), ('PAUSED', 'Paused'), ('CANCELLED', 'Cancelled'), ('CONTRACT_AWARDED', 'Contract Awarded'), ('GOODS_RECEIVED', 'Goods Received'), ('FULL_INVOICE_RECEIVED', 'Full Invoice Received'), ('PARTIAL_INVOICE_RECEIVED', 'Partial Invoice Received'), ('MONTHLY_INVOICE_RECEIVED', 'Monthly Invoice Received'), ('FULL_INVOICE_SIGNED', 'Full Invoice Signed'), ('PARTIAL_INVOICE_SIGNED', 'Partial Invoice Signed'), ('MONTHLY_INVOICE_SIGNED', 'Monthly Invoice Signed'), ('CONTRACT_AMENDED', 'Contract Amended')], default='NOT_STARTED', max_length=40)),
                ('event_date', models.DateField(default=django.utils.timezone.localdate)),
                ('comment', models.TextField(blank=True)),
                ('old_status', models.CharField(blank=True, choices=[('DRAFT', 'Draft'), ('PENDING_QUOTES', 'Pending Quotes'), ('QUOTES_RECEIVED', 'Quotes Received'), ('UNDER_REVIEW', 'Under Review'), ('APPROVED', 'Approved'), ('PO_ISSUED', 'PO Issued'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], max_length=20)),
                ('new_status', models.CharField(blank=True, choices=[('DRAFT', 'Draft'), ('PENDING_QUOTES', 'Pending Quotes'), ('QUOTES_RECEIVED', 'Quotes Received'), ('UNDER_REVIEW', 'Under Review'), ('APPROVED', 'Approved'), ('PO_ISSUED', 'PO Issued'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], max_length=20)),
                ('active', models.BooleanField(default=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('procurement_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='events', to='procurement.procurementitem')),
            ],
            options={
                'db_table': 'procurement_events',
                'ordering': ['-event_date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ProcurementEventFile',
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
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='procurement.procurementevent')),
            ],
            options={
                'db_table': 'procurement_event_files',
                'ordering': ['-created_at'],
            },
        ),
    ]
