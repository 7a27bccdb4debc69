import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


CURRENCY_CHOICES = [('CAD', 'Canadian Dollar'), ('USD', 'US Dollar'), ('EUR', 'Euro'), ('GBP', 'Pound Sterling'), ('AUD', 'Australian Dollar'), ('NZD', 'New Zealand Dollar')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('fiscal_years', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TrainingItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('provider', models.CharField(blank=True, max_length=200)),
                ('reference_number', models.CharField(blank=True, max_length=100)),
                ('status', models.CharField(choices=[('PLANNED', 'Planned'), ('APPROVED', 'Approved'), ('IN_PROGRESS', 'In Progress'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], default='PLANNED', max_length=20)),
                ('training_type', models.CharField(choices=[('COURSE_TRAINING', 'Course / Training'), ('CONFERENCE_REGISTRATION', 'Conference Registration'), ('OTHER', 'Other')], default='OTHER', max_length=30)),
                ('format', models.CharField(choices=[('IN_PERSON', 'In Person'), ('ONLINE', 'Online')], default='IN_PERSON', max_length=20)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('location', models.CharField(blank=True, max_length=500)),
                ('active', models.BooleanField(default=True)),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='training_items', to='fiscal_years.fiscalyear')),
            ],
            options={
                'db_table': 'training_items',
                'ordering': ['name'],
                'unique_together': {('fiscal_year', 'name')},
            },
        ),
        migrations.CreateModel(
            name='TrainingParticipant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=500)),
                ('eco', models.CharField(blank=True, max_length=100)),
                ('status', models.CharField(choices=[('PLANNED', 'Planned'), ('ECO_CREATED', 'ECO Created'), ('REGISTERED', 'Registered'), ('COMPLETED', 'Completed'), ('CANCELLED', 'Cancelled')], default='PLANNED', max_length=20)),
                ('estimated_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('estimated_currency', models.CharField(choices=CURRENCY_CHOICES, default='CAD', max_length=3)),
                ('estimated_exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('final_cost', models.DecimalField(blank=True, decimal_places=2, max_digits=15, null=True)),
                ('final_currency', models.CharField(choices=CURRENCY_CHOICES, default='CAD', max_length=3)),
                ('final_exchange_rate', models.DecimalField(blank=True, decimal_places=6, max_digits=12, null=True)),
                ('training_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='training.trainingitem')),
            ],
            options={
                'db_table': 'training_participants',
                'ordering': ['name', 'id'],
            },
        ),
        migrations.CreateModel(
            name='TrainingMoneyAllocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('om_amount', models.DecimalField(decimal_places=2, default=0, max_digits=15, validators=[django.core.validators.MinValueValidator(0)])),
                ('money', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='training_allocations', to='fiscal_years.money')),
                ('training_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='training.trainingitem')),
            ],
            options={
                'db_table': 'training_money_allocations',
                'unique_together': {('training_item', 'money')},
            },
        ),
    ]
