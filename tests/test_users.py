import io

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.authtoken.models import Token

from apps.users.models import PortfolioItem

pytestmark = pytest.mark.django_db


def png_upload(name='avatar.png', size=(16, 16)):
    buffer = io.BytesIO()
    Image.new('RGB', size, color=(200, 80, 40)).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')


def test_register_and_login(api_client):
    response = api_client.post('/api/auth/register/', {
        'name': 'Ali Raza',
        'email': 'Ali@Example.com',
        'password': 'password123',
        'phone': '+92-304-5678901',
        'user_type': 'customer',
        'city': 'Lahore',
    }, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['user']['email'] == 'ali@example.com'
    assert body['user']['user_type'] == 'customer'
    assert body['token']

    login = api_client.post('/api/auth/login/', {'email': 'ali@example.com', 'password': 'password123'}, format='json')
    assert login.status_code == 200
    assert login.json()['token'] == body['token']


def test_register_rejects_duplicates_and_short_passwords(api_client, customer):
    duplicate = api_client.post('/api/auth/register/', {
        'name': 'Someone', 'email': customer.email, 'password': 'password123',
        'phone': '+923001234567', 'user_type': 'customer',
    }, format='json')
    short = api_client.post('/api/auth/register/', {
        'name': 'Someone', 'email': 'new@example.com', 'password': '123',
        'phone': '+923001234567', 'user_type': 'worker',
    }, format='json')

    assert duplicate.status_code == 400
    assert 'email' in duplicate.json()['errors']
    assert short.status_code == 400
    assert 'password' in short.json()['errors']


def test_login_with_wrong_password(api_client, customer):
    response = api_client.post('/api/auth/login/', {'email': customer.email, 'password': 'nope'}, format='json')

    assert response.status_code == 400


def test_me_accepts_token_and_bearer_headers(api_client, worker):
    token = Token.objects.create(user=worker)

    for keyword in ('Token', 'Bearer'):
        api_client.credentials(HTTP_AUTHORIZATION=f'{keyword} {token.key}')
        response = api_client.get('/api/auth/me/')
        assert response.status_code == 200
        assert response.json()['user']['id'] == worker.id


def test_me_rejects_bad_token(api_client, db):
    api_client.credentials(HTTP_AUTHORIZATION='Bearer not-a-real-token')

    response = api_client.get('/api/auth/me/')

    assert response.status_code == 401


def test_worker_list_filters_and_sorting(api_client, make_user, service):
    top = make_user('worker', city='Karachi', rating_average=4.9, hourly_rate=800, experience=8)
    cheap = make_user('worker', city='Lahore', rating_average=4.2, hourly_rate=300, experience=2)
    busy = make_user('worker', city='Karachi', rating_average=3.0, hourly_rate=500,
                     experience=12, availability='busy')
    make_user('worker', is_active=False, rating_average=5.0)
    make_user('customer', rating_average=5.0)
    top.services.add(service)

    default = api_client.get('/api/users/workers/').json()
    assert [w['id'] for w in default['workers']] == [top.id, cheap.id, busy.id]
    assert default['total'] == 3

    def ids(**params):
        return [w['id'] for w in api_client.get('/api/users/workers/', params).json()['workers']]

    assert ids(service=service.id) == [top.id]
    assert ids(city='kar') == [top.id, busy.id]
    assert ids(min_rating=4) == [top.id, cheap.id]
    assert ids(max_rate=500) == [cheap.id, busy.id]
    assert ids(availability='busy') == [busy.id]
    assert ids(sort_by='experience') == [busy.id, top.id, cheap.id]
    assert ids(sort_by='hourly_rate') == [top.id, busy.id, cheap.id]


def test_worker_detail_not_found_for_customer(api_client, customer):
    response = api_client.get(f'/api/users/worker/{customer.id}/')

    assert response.status_code == 404
    assert response.json()['message'] == 'Worker not found'


def test_update_profile(client_for, worker, service):
    response = client_for(worker).put('/api/users/profile/', {
        'name': 'Ahmed H.',
        'bio': 'Licensed electrician.',
        'hourly_rate': 950,
        'skills': ['Wiring', 'Solar'],
        'service_ids': [service.id],
        'city': 'Islamabad',
    }, format='json')

    assert response.status_code == 200
    user = response.json()['user']
    assert user['name'] == 'Ahmed H.'
    assert user['hourly_rate'] == 950
    assert user['skills'] == ['Wiring', 'Solar']
    assert [s['id'] for s in user['services']] == [service.id]
    assert user['location']['city'] == 'Islamabad'
    worker.refresh_from_db()
    assert worker.experience == 8


@pytest.mark.parametrize('payload', [
    {'name': 'A'},
    {'bio': 'x' * 501},
    {'hourly_rate': 'expensive'},
    {'experience': 'lots'},
    {'phone': 'call me'},
])
def test_update_profile_validation(client_for, worker, payload):
    response = client_for(worker).put('/api/users/profile/', payload, format='json')

    assert response.status_code == 400


def test_profile_picture_upload(client_for, customer):
    response = client_for(customer).put(
        '/api/users/profile/', {'profile_picture': png_upload()}, format='multipart'
    )

    assert response.status_code == 200
    customer.refresh_from_db()
    assert customer.profile_picture.name.startswith('profile_pictures/')
    assert response.json()['user']['profile_picture'].endswith('.png')


def test_profile_picture_size_limit(client_for, customer, settings):
    settings.MAX_UPLOAD_SIZE = 10

    response = client_for(customer).put(
        '/api/users/profile/', {'profile_picture': png_upload()}, format='multipart'
    )

    assert response.status_code == 400
    assert 'profile_picture' in response.json()['errors']


def test_profile_picture_must_be_an_image(client_for, customer):
    fake = SimpleUploadedFile('notes.png', b'plain text, not an image', content_type='image/png')

    response = client_for(customer).put('/api/users/profile/', {'profile_picture': fake}, format='multipart')

    assert response.status_code == 400


def test_add_portfolio_item(client_for, worker):
    response = client_for(worker).post('/api/users/portfolio/', {
        'title': 'Villa rewiring',
        'description': 'Rewired a two-storey villa including the main panel.',
        'image': png_upload('villa.png'),
    }, format='multipart')

    assert response.status_code == 201
    body = response.json()
    assert body['item']['title'] == 'Villa rewiring'
    assert [item['title'] for item in body['user']['portfolio']] == ['Villa rewiring']
    assert PortfolioItem.objects.get().worker == worker


def test_portfolio_is_for_workers_only(client_for, customer):
    response = client_for(customer).post('/api/users/portfolio/', {
        'title': 'My kitchen',
        'description': 'Not a worker so this should be refused.',
    }, format='json')

    assert response.status_code == 403


def test_portfolio_validation(client_for, worker):
    response = client_for(worker).post('/api/users/portfolio/', {'title': 'X', 'description': 'short'}, format='json')

    assert response.status_code == 400
    assert set(response.json()['errors']) == {'title', 'description'}


def test_update_availability(client_for, worker, customer):
    response = client_for(worker).patch('/api/users/availability/', {'availability': 'busy'}, format='json')
    invalid = client_for(worker).patch('/api/users/availability/', {'availability': 'asleep'}, format='json')
    forbidden = client_for(customer).patch('/api/users/availability/', {'availability': 'busy'}, format='json')

    assert response.status_code == 200
    assert response.json()['user']['availability'] == 'busy'
    assert invalid.status_code == 400
    assert forbidden.status_code == 403
