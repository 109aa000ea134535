# Generated manually for the subscriptions app

import uuid
import apps.subscriptions.models
import django.utils.timezone
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
            name='Subscription',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('plan', models.CharField(choices=[('free', 'Gratis'), ('monthly', 'Bulanan'), ('yearly', 'Tahunan')], default='free', max_length=20)),
                ('price', models.PositiveIntegerField(default=0)),
                ('started_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('expires_at', models.DateTimeField(blank=True, null=True)),
                ('is_active', models.BooleanField(default=True)),
                ('daily_scan_limit', models.PositiveIntegerField(blank=True, default=apps.subscriptions.models.default_daily_scan_limit, null=True)),
                ('scans_today', models.PositiveIntegerField(default=0)),
                ('scan_counter_date', models.DateField(default=django.utils.timezone.localdate)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='subscription', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'subscriptions',
                'indexes': [models.Index(fields=['plan', 'expires_at'], name='subscr_plan_expires_idx')],
            },
        ),
    ]
