import itertools

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from apps.catalog.models import Service
from apps.jobs.models import Job

User = get_user_model()


@pytest.fixture(autouse=True)
def isolated_settings(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
    settings.TWILIO_ACCOUNT_SID = ''
    # Throttle counters live in the cache.
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(user_type='customer', **fields):
        n = next(counter)
        fields.setdefault('email', f'{user_type}{n}@example.com')
        fields.setdefault('name', f'{user_type.title()} {n}')
        fields.setdefault('phone', f'+92300{n:07d}')
        fields.setdefault('city', 'Karachi')
        return User.objects.create_user(password='password123', user_type=user_type, **fields)

    return _make


@pytest.fixture
def customer(make_user):
    return make_user('customer', name='Sarah Ahmed')


@pytest.fixture
def worker(make_user):
    return make_user('worker', name='Ahmed Hassan', hourly_rate=800, experience=8)


@pytest.fixture
def other_worker(make_user):
    return make_user('worker', name='Muhammad Khan', hourly_rate=700, experience=10)


@pytest.fixture
def client_for(db):
    def _client(user):
        token, _ = Token.objects.get_or_create(user=user)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Token {token.key}')
        return client

    return _client


@pytest.fixture
def service(db):
    return Service.objects.create(
        name='Electrical Work',
        description='Professional electrical installation and repair services',
        category='electrical',
        average_rate_min=500,
        average_rate_max=1200,
    )


@pytest.fixture
def make_job(customer, service):
    def _make(**fields):
        fields.setdefault('customer', customer)
        fields.setdefault('service', service)
        fields.setdefault('title', 'Electrical Wiring for New House')
        fields.setdefault('description', 'Need complete electrical wiring for a 3-bedroom house.')
        fields.setdefault('address', 'House No. 123, DHA Phase 5')
        fields.setdefault('city', 'Karachi')
        fields.setdefault('budget_min', 15000)
        fields.setdefault('budget_max', 25000)
        fields.setdefault('budget_type', 'fixed')
        return Job.objects.create(**fields)

    return _make


@pytest.fixture
def job(make_job):
    return make_job()


@pytest.fixture
def completed_job(make_job, worker):
    return make_job(status='completed', assigned_worker=worker)
