import pytest

from apps.messaging.models import Message
from apps.messaging.utils import group_conversations

pytestmark = pytest.mark.django_db


def test_send_message(client_for, customer, worker, job):
    response = client_for(customer).post(
        '/api/messages/',
        {'receiver_id': worker.id, 'content': '  Are you free on Saturday?  ', 'job_id': job.id},
        format='json'
    )

    assert response.status_code == 201
    body = response.json()
    assert body['message'] == 'Message sent successfully'
    assert body['data']['content'] == 'Are you free on Saturday?'
    assert body['data']['sender']['id'] == customer.id
    assert body['data']['receiver']['id'] == worker.id
    assert body['data']['job_id'] == job.id
    assert body['data']['is_read'] is False


@pytest.mark.parametrize('payload_fn', [
    lambda worker: {'receiver_id': worker.id, 'content': '   '},
    lambda worker: {'receiver_id': 999, 'content': 'Hello there'},
    lambda worker: {'receiver_id': worker.id, 'content': 'Hello there', 'job_id': 999},
])
def test_send_message_validation(client_for, customer, worker, payload_fn):
    response = client_for(customer).post('/api/messages/', payload_fn(worker), format='json')

    assert response.status_code == 400
    assert not Message.objects.exists()


def test_cannot_message_self(client_for, customer):
    response = client_for(customer).post(
        '/api/messages/', {'receiver_id': customer.id, 'content': 'Note to self'}, format='json'
    )

    assert response.status_code == 400


def test_send_requires_authentication(api_client, worker):
    response = api_client.post('/api/messages/', {'receiver_id': worker.id, 'content': 'Hi'}, format='json')

    assert response.status_code == 401


def test_fetching_conversation_marks_incoming_read(client_for, customer, worker):
    for text in ['Hello', 'I can come tomorrow', 'Please confirm']:
        Message.objects.create(sender=worker, receiver=customer, content=text)
    outgoing = Message.objects.create(sender=customer, receiver=worker, content='Thanks')
    client = client_for(customer)

    response = client.get(f'/api/messages/conversation/{worker.id}/')

    assert response.status_code == 200
    body = response.json()
    assert [message['content'] for message in body['messages']] == [
        'Hello', 'I can come tomorrow', 'Please confirm', 'Thanks'
    ]
    assert Message.objects.filter(sender=worker, receiver=customer, is_read=False).count() == 0
    assert Message.objects.filter(sender=worker, read_at__isnull=True).count() == 0
    outgoing.refresh_from_db()
    assert outgoing.is_read is False

    conversations = client.get('/api/messages/conversations/').json()
    assert len(conversations) == 1
    assert conversations[0]['other_user']['id'] == worker.id
    assert conversations[0]['unread_count'] == 0
    assert conversations[0]['last_message']['content'] == 'Thanks'


def test_conversation_pages_newest_first_in_ascending_order(client_for, customer, worker):
    for i in range(5):
        Message.objects.create(sender=worker, receiver=customer, content=f'message {i}')
    client = client_for(customer)

    first = client.get(f'/api/messages/conversation/{worker.id}/', {'limit': 2}).json()
    last = client.get(f'/api/messages/conversation/{worker.id}/', {'limit': 2, 'page': 3}).json()

    assert [m['content'] for m in first['messages']] == ['message 3', 'message 4']
    assert first['total_pages'] == 3
    assert [m['content'] for m in last['messages']] == ['message 0']


def test_conversation_with_unknown_user(client_for, customer):
    response = client_for(customer).get('/api/messages/conversation/999/')

    assert response.status_code == 404


def test_conversation_list_groups_by_other_party(client_for, customer, worker, other_worker):
    Message.objects.create(sender=worker, receiver=customer, content='first from worker')
    Message.objects.create(sender=customer, receiver=other_worker, content='to other worker')
    Message.objects.create(sender=worker, receiver=customer, content='second from worker')
    Message.objects.create(sender=other_worker, receiver=worker, content='not involving customer')

    conversations = client_for(customer).get('/api/messages/conversations/').json()

    assert [entry['other_user']['id'] for entry in conversations] == [worker.id, other_worker.id]
    assert conversations[0]['unread_count'] == 2
    assert conversations[0]['last_message']['content'] == 'second from worker'
    assert conversations[1]['unread_count'] == 0
    assert conversations[1]['last_message']['content'] == 'to other worker'


def test_group_conversations_counts_only_incoming_unread(customer, worker):
    Message.objects.create(sender=customer, receiver=worker, content='outgoing')
    Message.objects.create(sender=worker, receiver=customer, content='read', is_read=True)
    Message.objects.create(sender=worker, receiver=customer, content='unread')
    messages = Message.objects.involving(customer).select_related('sender', 'receiver').order_by('-created_at', '-id')

    [entry] = group_conversations(customer, messages)

    assert entry['other_user'] == worker
    assert entry['unread_count'] == 1
    assert entry['last_message'].content == 'unread'


def test_group_conversations_reads_a_fixed_number_of_queries(customer, worker, other_worker,
                                                            django_assert_num_queries):
    for i in range(10):
        Message.objects.create(sender=worker, receiver=customer, content=f'update {i}')
    Message.objects.create(sender=customer, receiver=other_worker, content='Are you free?')
    messages = Message.objects.involving(customer).order_by('-created_at', '-id')

    with django_assert_num_queries(2):
        conversations = group_conversations(customer, messages)
        summary = [(c['other_user'].name, c['last_message'].content, c['unread_count']) for c in conversations]

    assert summary == [(other_worker.name, 'Are you free?', 0), (worker.name, 'update 9', 10)]
