import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fiscal_years', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TravelItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('emap', models.CharField(blank=True, max_length=100)),
                ('destination', models.CharField(blank=True, max_length=500)),
                ('purpose', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('PLANNED', 'Planned'), ('APPROVED', 'Approved'), ('IN_PROGRESS', 'In Progress'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], default='PLANNED', max_length=20)),
                ('travel_type', models.CharField(choices=[('DOMESTIC', 'Domestic'), ('NORTH_AMERICA', 'North America'), ('INTERNATIONAL', 'International'), ('LOCAL', 'Local')], default='DOMESTIC', max_length=20)),
                ('departure_date', models.DateField(blank=True, null=True)),
                ('return_date', models.DateField(blank=True, null=True)),
                ('active', models.BooleanField(default=True)),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='travel_items', to='fiscal_years.fiscalyear')),
            ],
            options={
                'db_table': 'travel_items',
                'ordering': ['name'],
                'unique_together': {('fiscal_year', 'name')},
            },
        ),
        migrations.CreateModel(
            name='TravelTraveller',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=500)),
                ('taac', models.CharField(blank=True, max_length=100)),
                ('estimated_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('final_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('approval_status', models.CharField(choices=[('PLANNED', 'Planned'), ('TAAC_ESTIMATE_SUBMITTED', 'TAAC Estimate Submitted'), ('TAAC_ESTIMATE_APPROVED', 'TAAC Estimate Approved'), ('TAAC_FINAL_SUBMITTED', 'TAAC Final Submitted'), ('TAAC_FINAL_APPROVED', 'TAAC Final Approved'), ('CANCELLED', 'Cancelled')], default='PLANNED', max_length=30)),
                ('travel_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='travellers', to='travel.travelitem')),
            ],
            options={
                'db_table': 'travel_travellers',
                'ordering': ['name', 'id'],
            },
        ),
        migrations.CreateModel(
            name='TravelMoneyAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('om_amount', models.DecimalField(decimal_places=2, default=0, max_digits=15, validators=[django.core.validators.MinValueValidator(0)])),
                ('money', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='travel_allocations', to='fiscal_years.money')),
                ('travel_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='travel.travelitem')),
            ],
            options={
                'db_table': 'travel_money_allocations',
                'unique_together': {('travel_item', 'money')},
            },
        ),
    ]
