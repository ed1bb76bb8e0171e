import logging
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from apps.catalog.models import Service
from apps.jobs.models import Job

User = get_user_model()
logger = logging.getLogger(__name__)

DEMO_PASSWORD = 'password123'

SERVICES = [
    {
        'name': 'Electrical Work',
        'description': 'Professional electrical installation and repair services',
        'category': 'electrical',
        'average_rate_min': 500,
        'average_rate_max': 1200,
    },
    {
        'name': 'Plumbing Services',
        'description': 'Expert plumbing installation, repair, and maintenance',
        'category': 'plumbing',
        'average_rate_min': 400,
        'average_rate_max': 1000,
    },
    {
        'name': 'House Cleaning',
        'description': 'Professional house cleaning and maintenance services',
        'category': 'cleaning',
        'average_rate_min': 300,
        'average_rate_max': 800,
    },
    {
        'name': 'Construction Work',
        'description': 'General construction and building services',
        'category': 'construction',
        'average_rate_min': 600,
        'average_rate_max': 1500,
    },
    {
        'name': 'AC Repair',
        'description': 'Air conditioning installation and repair services',
        'category': 'repair',
        'average_rate_min': 800,
        'average_rate_max': 2000,
    },
    {
        'name': 'Painting Services',
        'description': 'Professional painting and decoration services',
        'category': 'maintenance',
        'average_rate_min': 400,
        'average_rate_max': 1200,
    },
]

WORKERS = [
    {
        'name': 'Ahmed Hassan',
        'email': 'ahmed@example.com',
        'phone': '+92-300-1234567',
        'service': 'Electrical Work',
        'skills': ['Wiring', 'Circuit Installation', 'Electrical Repair'],
        'experience': 8,
        'hourly_rate': 800,
        'bio': 'Experienced electrician with 8 years in residential and commercial electrical work.',
        'city': 'Karachi',
        'address': 'Block 15, Gulshan-e-Iqbal',
        'rating_average': 4.9,
        'rating_count': 127,
    },
    {
        'name': 'Fatima Ali',
        'email': 'fatima@example.com',
        'phone': '+92-301-2345678',
        'service': 'House Cleaning',
        'skills': ['House Cleaning', 'Deep Cleaning', 'Office Cleaning'],
        'experience': 5,
        'hourly_rate': 500,
        'bio': 'Professional house cleaner providing reliable and thorough cleaning services.',
        'city': 'Lahore',
        'address': 'Model Town',
        'rating_average': 4.8,
        'rating_count': 89,
    },
    {
        'name': 'Muhammad Khan',
        'email': 'muhammad@example.com',
        'phone': '+92-302-3456789',
        'service': 'Plumbing Services',
        'skills': ['Pipe Installation', 'Leak Repair', 'Bathroom Fitting'],
        'experience': 10,
        'hourly_rate': 700,
        'bio': 'Expert plumber with a decade of experience in all types of plumbing work.',
        'city': 'Islamabad',
        'address': 'F-10 Markaz',
        'rating_average': 4.7,
        'rating_count': 156,
    },
]

CUSTOMERS = [
    {'name': 'Sarah Ahmed', 'email': 'sarah@example.com', 'phone': '+92-303-4567890',
     'city': 'Karachi', 'address': 'DHA Phase 5'},
    {'name': 'Ali Raza', 'email': 'ali@example.com', 'phone': '+92-304-5678901',
     'city': 'Lahore', 'address': 'Johar Town'},
]

JOBS = [
    {
        'title': 'Electrical Wiring for New House',
        'description': 'Need complete electrical wiring for a 3-bedroom house. All materials will be provided.',
        'customer': 'sarah@example.com',
        'service': 'Electrical Work',
        'address': 'House No. 123, DHA Phase 5',
        'city': 'Karachi',
        'budget_min': 15000,
        'budget_max': 25000,
        'budget_type': 'fixed',
        'urgency': 'medium',
    },
    {
        'title': 'Weekly House Cleaning',
        'description': 'Looking for a reliable person for weekly house cleaning. 2-bedroom apartment.',
        'customer': 'ali@example.com',
        'service': 'House Cleaning',
        'address': 'Block C, Johar Town',
        'city': 'Lahore',
        'budget_min': 2000,
        'budget_max': 3000,
        'budget_type': 'fixed',
        'urgency': 'low',
    },
]


class Command(BaseCommand):
    help = "Replace services, non-admin users and jobs with the demo data set."

    @transaction.atomic
    def handle(self, *args, **options):
        Job.objects.all().delete()
        User.objects.filter(is_superuser=False).delete()
        Service.objects.all().delete()
        self.stdout.write("Cleared existing data")

        services = {data['name']: Service.objects.create(**data) for data in SERVICES}
        self.stdout.write(f"Created {len(services)} services")

        users = {}
        for data in WORKERS:
            data = dict(data)
            service = services[data.pop('service')]
            user = User.objects.create_user(
                password=DEMO_PASSWORD, user_type='worker', is_verified=True, **data
            )
            user.services.add(service)
            users[user.email] = user
        for data in CUSTOMERS:
            user = User.objects.create_user(password=DEMO_PASSWORD, user_type='customer', **data)
            users[user.email] = user
        self.stdout.write(f"Created {len(users)} users (password: {DEMO_PASSWORD})")

        for data in JOBS:
            data = dict(data)
            Job.objects.create(
                customer=users[data.pop('customer')],
                service=services[data.pop('service')],
                **data
            )
        self.stdout.write(f"Created {len(JOBS)} jobs")

        logger.info("Database seeded with demo data")
        self.stdout.write(self.style.SUCCESS("Database seeded successfully!"))
