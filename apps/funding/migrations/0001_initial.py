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
            name='FundingItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('source', models.CharField(choices=[('BUSINESS_PLAN', 'Business Plan'), ('ON_RAMP', 'On-Ramp'), ('APPROVED_DEFICIT', 'Approved Deficit')], default='BUSINESS_PLAN', max_length=20)),
                ('comments', models.TextField(blank=True)),
                ('currency', models.CharField(choices=[('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')], default='CAD', max_length=3)),
                ('exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('active', models.BooleanField(default=True)),
                ('category', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='funding_items', to='fiscal_years.category')),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='funding_items', to='fiscal_years.fiscalyear')),
            ],
            options={
                'db_table': 'funding_items',
                'ordering': ['name'],
                'unique_together': {('fiscal_year', 'name')},
            },
        ),
        migrations.CreateModel(
            name='MoneyAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('cap_amount', models.DecimalField(decimal_places=2, default=0, max_digits=15, validators=[django.core.validators.MinValueValidator(0)])),
                ('om_amount', models.DecimalField(decimal_places=2, default=0, max_digits=15, validators=[django.core.validators.MinValueValidator(0)])),
                ('funding_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='funding.fundingitem')),
                ('money', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='funding_allocations', to='fiscal_years.money')),
            ],
            options={
                'db_table': 'funding_money_allocations',
                'unique_together': {('funding_item', 'money')},
            },
        ),
    ]
