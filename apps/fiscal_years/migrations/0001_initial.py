import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('rcs', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='FiscalYear',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=50)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('active', models.BooleanField(default=True)),
                ('show_search_box', models.BooleanField(default=True)),
                ('show_category_filter', models.BooleanField(default=True)),
                ('group_by_category', models.BooleanField(default=False)),
                ('on_target_min', models.IntegerField(default=-2, validators=[django.core.validators.MinValueValidator(-100), django.core.validators.MaxValueValidator(100)])),
                ('on_target_max', models.IntegerField(default=2, validators=[django.core.validators.MinValueValidator(-100), django.core.validators.MaxValueValidator(100)])),
                ('responsibility_centre', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fiscal_years', to='rcs.responsibilitycentre')),
            ],
            options={
                'db_table': 'fiscal_years',
                'ordering': ['name'],
                'unique_together': {('responsibility_centre', 'name')},
            },
        ),
        migrations.CreateModel(
            name='Money',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('code', models.CharField(max_length=10)),
                ('name', models.CharField(max_length=100)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('is_default', models.BooleanField(default=False)),
                ('display_order', models.IntegerField(default=0)),
                ('active', models.BooleanField(default=True)),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='monies', to='fiscal_years.fiscalyear')),
            ],
            options={
                'db_table': 'monies',
                'ordering': ['display_order', 'code'],
                'unique_together': {('fiscal_year', 'code')},
            },
        ),
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=100)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('is_default', models.BooleanField(default=False)),
                ('display_order', models.IntegerField(default=0)),
                ('funding_type', models.CharField(choices=[('CAP_ONLY', 'Capital only'), ('OM_ONLY', 'O&M only'), ('BOTH', 'Capital and O&M')], default='BOTH', max_length=10)),
                ('translation_key', models.CharField(blank=True, max_length=100)),
                ('active', models.BooleanField(default=True)),
                ('fiscal_year', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='categories', to='fiscal_years.fiscalyear')),
            ],
            options={
                'db_table': 'categories',
                'ordering': ['display_order', 'name'],
                'verbose_name_plural': 'categories',
                'unique_together': {('fiscal_year', 'name')},
            },
        ),
    ]
