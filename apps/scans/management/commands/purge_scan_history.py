"""
Management command to delete scan records past the retention window.

Meant to run daily from cron.

Usage:
    python manage.py purge_scan_history [--dry-run]
"""

from django.conf import settings
from django.core.management.base import BaseCommand
from apps.scans.services import purge_expired_scans


class Command(BaseCommand):
    help = 'Delete scan history older than SCAN_TUNAI_HISTORY_RETENTION_DAYS'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show how many records would be deleted without deleting them',
        )

    def handle(self, *args, **options):
        days = settings.SCAN_TUNAI_HISTORY_RETENTION_DAYS
        if not days:
            self.stdout.write(self.style.WARNING('Retention is disabled. Nothing to purge.'))
            return

        if options['dry_run']:
            count = purge_expired_scans(dry_run=True)
            self.stdout.write(
                self.style.WARNING(f'--dry-run mode: {count} scan record(s) older than {days} days would be deleted.')
            )
            return

        deleted = purge_expired_scans()
        self.stdout.write(
            self.style.SUCCESS(f'Deleted {deleted} scan record(s) older than {days} days.')
        )
