from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ResponsibilityCentre',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('description', models.CharField(blank=True, max_length=500)),
                ('active', models.BooleanField(default=True)),
                ('training_include_in_summary', models.BooleanField(default=True)),
                ('travel_include_in_summary', models.BooleanField(default=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='owned_rcs', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'responsibility_centres',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['owner', 'name'], name='responsibil_owner_i_5c1f0e_idx')],
            },
        ),
        migrations.CreateModel(
            name='RCAccess',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=0)),
                ('principal_identifier', models.CharField(max_length=255)),
                ('principal_display_name', models.CharField(blank=True, max_length=255)),
                ('principal_type', models.CharField(choices=[('USER', 'User'), ('GROUP', 'Group'), ('DISTRIBUTION_LIST', 'Distribution list')], default='USER', max_length=20)),
                ('access_level', models.CharField(choices=[('OWNER', 'Owner'), ('READ_WRITE', 'Read / Write'), ('READ_ONLY', 'Read only')], max_length=20)),
                ('granted_at', models.DateTimeField(auto_now_add=True)),
                ('granted_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('responsibility_centre', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='access_grants', to='rcs.responsibilitycentre')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='rc_access_grants', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'rc_access',
                'ordering': ['granted_at'],
                'unique_together': {('responsibility_centre', 'principal_identifier', 'principal_type')},
                'indexes': [models.Index(fields=['principal_identifier'], name='rc_access_princip_8e2d4a_idx'), models.Index(fields=['user'], name='rc_access_user_id_3b7c91_idx')],
            },
        ),
    ]
