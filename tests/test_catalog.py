import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.catalog.models import Service
from apps.jobs.models import Job

pytestmark = pytest.mark.django_db

User = get_user_model()


def test_services_are_active_and_sorted_by_name(api_client):
    Service.objects.create(name='Plumbing Services', description='Pipes', category='plumbing')
    Service.objects.create(name='AC Repair', description='Cooling', category='repair',
                           average_rate_min=800, average_rate_max=2000)
    Service.objects.create(name='Retired Service', description='Gone', category='other', is_active=False)

    response = api_client.get('/api/services/')

    assert response.status_code == 200
    body = response.json()
    assert [s['name'] for s in body] == ['AC Repair', 'Plumbing Services']
    assert body[0]['average_rate'] == {'min': 800, 'max': 2000}


def test_services_by_category(api_client, service):
    Service.objects.create(name='House Cleaning', description='Cleaning', category='cleaning')

    response = api_client.get('/api/services/category/electrical/')

    assert response.status_code == 200
    assert [s['id'] for s in response.json()] == [service.id]


def test_unknown_category(api_client, db):
    response = api_client.get('/api/services/category/astrology/')

    assert response.status_code == 400


def test_seed_database_replaces_demo_data(make_user):
    stale = make_user('customer', email='stale@example.com')

    call_command('seed_database')
    call_command('seed_database')

    assert Service.objects.count() == 6
    assert not User.objects.filter(pk=stale.pk).exists()
    assert User.objects.filter(user_type='worker').count() == 3
    assert User.objects.filter(user_type='customer').count() == 2
    assert Job.objects.filter(status='open').count() == 2

    electrician = User.objects.get(email='ahmed@example.com')
    assert electrician.check_password('password123')
    assert electrician.rating_average == 4.9
    assert list(electrician.services.values_list('name', flat=True)) == ['Electrical Work']

    wiring = Job.objects.get(title='Electrical Wiring for New House')
    assert wiring.customer.email == 'sarah@example.com'
    assert (wiring.budget_min, wiring.budget_max, wiring.budget_type) == (15000, 25000, 'fixed')
