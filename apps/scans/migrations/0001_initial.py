# Generated manually for the scans app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('calculations', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ScanRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('value', models.PositiveIntegerField(choices=[(1000, 'Rp 1.000'), (2000, 'Rp 2.000'), (5000, 'Rp 5.000'), (10000, 'Rp 10.000'), (20000, 'Rp 20.000'), (50000, 'Rp 50.000'), (100000, 'Rp 100.000')])),
                ('currency', models.CharField(default='IDR', max_length=3)),
                ('confidence', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('text', models.CharField(blank=True, max_length=255)),
                ('operation', models.CharField(choices=[('single', 'Single scan'), ('calculation', 'Calculation')], default='single', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('session', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='scan_records', to='calculations.calculationsession')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='scan_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'scan_records',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'operation', 'created_at'], name='scan_user_op_created_idx'),
                    models.Index(fields=['session'], name='scan_session_idx'),
                ],
            },
        ),
    ]
