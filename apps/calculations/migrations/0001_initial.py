# Generated manually for the calculations app

import uuid
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
            name='CalculationSession',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('total_amount', models.BigIntegerField(default=0)),
                ('banknote_count', models.PositiveIntegerField(default=0)),
                ('currency', models.CharField(default='IDR', max_length=3)),
                ('tallies', models.JSONField(blank=True, default=list)),
                ('is_completed', models.BooleanField(default=False)),
                ('note', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='calculation_sessions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'calculation_sessions',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['owner', 'is_completed', 'completed_at'], name='calc_owner_completed_idx')],
            },
        ),
    ]
