"""
Management command to seed the example sellers.

Usage:
    python manage.py seed_sellers

Creates "Seller A" and "Seller B" with two items each, but only when no
seller exists yet. Failures are logged and never abort the command.
"""

from django.core.management.base import BaseCommand

from apps.sellers.services import seed_example_sellers


class Command(BaseCommand):
    help = 'Create example sellers when the sellers collection is empty'

    def handle(self, *args, **options):
        if seed_example_sellers():
            self.stdout.write(self.style.SUCCESS('Example sellers created.'))
        else:
            self.stdout.write('Sellers already exist or seeding failed; nothing created.')
