import pytest

from apps.jobs.models import JobApplication
from apps.jobs.workflow import accept_application, apply_to_job, update_status
from core.constants import JOB_STATUS_CHOICES, JOB_TRANSITIONS
from core.exceptions import (
    AuthorizationError, ConflictError, NotFoundError, StateError, ValidationError
)

pytestmark = pytest.mark.django_db

PROPOSAL = 'Fully insured, references available on request.'
ACTIONS = ('accept', 'start', 'complete', 'cancel')


@pytest.mark.parametrize('current, action', sorted(JOB_TRANSITIONS))
def test_listed_transitions_move_to_next_status(make_job, current, action):
    allowed_roles, next_status = JOB_TRANSITIONS[(current, action)]
    job = make_job(status=current)

    assert job.transition(action, sorted(allowed_roles)[0]) == next_status
    assert job.status == next_status


@pytest.mark.parametrize('current', [status for status, _ in JOB_STATUS_CHOICES])
@pytest.mark.parametrize('action', ACTIONS)
def test_unlisted_transitions_are_state_errors(make_job, current, action):
    if (current, action) in JOB_TRANSITIONS:
        pytest.skip('listed transition')
    job = make_job(status=current)

    with pytest.raises(StateError):
        job.transition(action, 'customer')
    assert job.status == current


@pytest.mark.parametrize('terminal', ['completed', 'cancelled'])
def test_terminal_states_have_no_exits(terminal):
    assert not [key for key in JOB_TRANSITIONS if key[0] == terminal]


def test_worker_cannot_accept_or_cancel_open_job(make_job):
    job = make_job()

    with pytest.raises(AuthorizationError):
        job.transition('accept', 'worker')
    with pytest.raises(AuthorizationError):
        job.transition('cancel', 'worker')
    assert job.status == 'open'


def test_complete_stamps_completed_at(make_job, worker):
    job = make_job(status='in_progress', assigned_worker=worker)

    job.transition('complete', 'worker')

    assert job.completed_at is not None


def test_role_of(make_job, customer, worker, other_worker):
    job = make_job(assigned_worker=worker)

    assert job.role_of(customer) == 'customer'
    assert job.role_of(worker) == 'worker'
    assert job.role_of(other_worker) is None


def test_apply_to_job_keeps_job_open(job, worker):
    job, application = apply_to_job(job.id, worker, PROPOSAL, 20000, '3 days')

    assert job.status == 'open'
    assert application.status == 'pending'
    assert application.proposed_rate == 20000


def test_apply_to_missing_job(worker):
    with pytest.raises(NotFoundError):
        apply_to_job(12345, worker, PROPOSAL, 100, '1 day')


@pytest.mark.parametrize('status', ['assigned', 'in_progress', 'completed', 'cancelled'])
def test_apply_requires_open_job(make_job, worker, status):
    job = make_job(status=status)

    with pytest.raises(StateError):
        apply_to_job(job.id, worker, PROPOSAL, 100, '1 day')


def test_duplicate_application_conflicts(job, worker):
    apply_to_job(job.id, worker, PROPOSAL, 100, '1 day')

    with pytest.raises(ConflictError):
        apply_to_job(job.id, worker, PROPOSAL, 120, '2 days')
    assert JobApplication.objects.count() == 1


def test_accept_application_rejects_siblings(job, customer, worker, other_worker, make_user):
    third = make_user('worker')
    _, chosen = apply_to_job(job.id, worker, PROPOSAL, 100, '1 day')
    apply_to_job(job.id, other_worker, PROPOSAL, 90, '2 days')
    apply_to_job(job.id, third, PROPOSAL, 80, '3 days')

    job = accept_application(job.id, chosen.id, customer)

    assert job.status == 'assigned'
    assert job.assigned_worker == worker
    assert list(job.applications.filter(status='accepted')) == [chosen]
    assert job.applications.filter(status='rejected').count() == 2
    assert not job.applications.filter(status='pending').exists()


def test_accept_application_checks(job, customer, worker, other_worker, make_job):
    _, application = apply_to_job(job.id, worker, PROPOSAL, 100, '1 day')
    other_job = make_job()

    with pytest.raises(NotFoundError):
        accept_application(999, application.id, customer)
    with pytest.raises(AuthorizationError):
        accept_application(job.id, application.id, other_worker)
    with pytest.raises(NotFoundError):
        accept_application(other_job.id, application.id, customer)


def test_update_status_rejects_invalid_target(job, customer):
    with pytest.raises(ValidationError):
        update_status(job.id, 'open', customer)


def test_update_status_full_path(make_job, customer, worker):
    job = make_job(status='assigned', assigned_worker=worker)

    assert update_status(job.id, 'in_progress', worker).status == 'in_progress'
    job = update_status(job.id, 'completed', worker)

    assert job.status == 'completed'
    assert job.completed_at is not None
    with pytest.raises(StateError):
        update_status(job.id, 'cancelled', customer)
