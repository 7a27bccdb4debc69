from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('username', models.CharField(max_length=150)),
                ('action', models.CharField(max_length=50)),
                ('entity_type', models.CharField(max_length=50)),
                ('entity_id', models.BigIntegerField(blank=True, null=True)),
                ('entity_name', models.CharField(blank=True, max_length=255)),
                ('rc_id', models.BigIntegerField(blank=True, null=True)),
                ('rc_name', models.CharField(blank=True, max_length=100)),
                ('fiscal_year_id', models.BigIntegerField(blank=True, null=True)),
                ('fiscal_year_name', models.CharField(blank=True, max_length=50)),
                ('parameters', models.TextField(blank=True)),
                ('http_method', models.CharField(blank=True, max_length=10)),
                ('endpoint', models.CharField(blank=True, max_length=500)),
                ('user_agent', models.CharField(blank=True, max_length=500)),
                ('ip_address', models.CharField(blank=True, max_length=45)),
                ('outcome', models.CharField(choices=[('PENDING', 'Pending'), ('SUCCESS', 'Success'), ('FAILURE', 'Failure')], default='PENDING', max_length=10)),
                ('error_message', models.TextField(blank=True)),
                ('cloned_from_audit_id', models.BigIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'audit_events',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['rc_id', 'created_at'], name='audit_event_rc_id_4f1a2b_idx'),
                    models.Index(fields=['rc_id', 'fiscal_year_id', 'created_at'], name='audit_event_rc_id_9c3d5e_idx'),
                    models.Index(fields=['username'], name='audit_event_usernam_7e6f80_idx'),
                ],
            },
        ),
    ]
