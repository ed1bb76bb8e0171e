"""
Job lifecycle operations.

Every status change goes through ``Job.transition`` so the transition table
in ``core.constants`` is the single authority on what may happen next.
Operations that touch several rows run in one transaction holding a row
lock on the job; notifications go out only after the commit.
"""
import logging
from django.db import IntegrityError, transaction
from .models import Job, JobApplication
from .utils import send_notification
from core.constants import STATUS_UPDATE_ACTIONS
from core.exceptions import (
    AuthorizationError, ConflictError, NotFoundError, StateError, ValidationError
)

logger = logging.getLogger(__name__)


def _locked_job(job_id):
    try:
        return Job.objects.select_for_update().get(pk=job_id)
    except Job.DoesNotExist:
        raise NotFoundError('Job not found')


def apply_to_job(job_id, worker, proposal, proposed_rate, estimated_duration):
    """Append a pending application from ``worker``; the job stays open."""
    with transaction.atomic():
        job = _locked_job(job_id)
        if job.status != 'open':
            raise StateError('Job is not accepting applications')
        if job.applications.filter(worker=worker).exists():
            raise ConflictError('You have already applied to this job')
        try:
            with transaction.atomic():
                application = JobApplication.objects.create(
                    job=job,
                    worker=worker,
                    proposal=proposal,
                    proposed_rate=proposed_rate,
                    estimated_duration=estimated_duration,
                )
        except IntegrityError:
            raise ConflictError('You have already applied to this job')

    logger.info(f"Worker {worker.id} applied to job {job.id} (application {application.id})")
    send_notification(
        job.customer,
        f"New Application for Job: {job.title}",
        (
            f"Dear {job.customer.name},\n\n"
            f"{worker.name} has applied for your job '{job.title}' "
            f"proposing {proposed_rate} ({estimated_duration}).\n"
            f"Please review the application on Rozzgari.\n\n"
            f"Best regards,\nRozzgari Team"
        ),
        f"New application for '{job.title}' from {worker.name}. Review it on Rozzgari.",
    )
    return job, application


def accept_application(job_id, application_id, user):
    """
    Assign the job to the application's worker.

    The chosen application becomes accepted and every sibling rejected, all
    inside one transaction with the job row locked.
    """
    with transaction.atomic():
        job = _locked_job(job_id)
        if job.customer_id != user.pk:
            raise AuthorizationError('Not authorized')
        try:
            application = job.applications.select_related('worker').get(pk=application_id)
        except JobApplication.DoesNotExist:
            raise NotFoundError('Application not found')

        job.transition('accept', 'customer')
        job.assigned_worker = application.worker
        job.save()

        application.status = 'accepted'
        application.save(update_fields=['status'])
        rejected = job.applications.exclude(pk=application.pk).update(status='rejected')

    logger.info(
        f"Job {job.id} assigned to worker {application.worker_id}; "
        f"accepted application {application.id}, rejected {rejected}"
    )
    worker = application.worker
    send_notification(
        worker,
        f"Application Accepted for {job.title}",
        (
            f"Dear {worker.name},\n\n"
            f"Your application for job '{job.title}' has been accepted.\n"
            f"Contact the customer at:\n"
            f"- Email: {job.customer.email}\n"
            f"- Phone: {job.customer.phone or 'Not provided'}\n\n"
            f"Best regards,\nRozzgari Team"
        ),
        f"Your application for '{job.title}' was accepted. Contact the customer for details.",
    )
    return job


def update_status(job_id, new_status, user):
    """Apply a participant-requested status change (in_progress, completed, cancelled)."""
    action = STATUS_UPDATE_ACTIONS.get(new_status)
    if action is None:
        raise ValidationError({'status': [f"'{new_status}' is not a valid status update."]})

    with transaction.atomic():
        job = _locked_job(job_id)
        role = job.role_of(user)
        if role is None:
            raise AuthorizationError('Not authorized')
        previous_status = job.status
        job.transition(action, role)
        job.save()

    logger.info(f"Job {job.id} moved from {previous_status} to {job.status} by {role} {user.pk}")
    other_party = job.assigned_worker if role == 'customer' else job.customer
    if other_party is not None:
        status_label = job.get_status_display().lower()
        send_notification(
            other_party,
            f"Job {job.get_status_display()}: {job.title}",
            (
                f"Dear {other_party.name},\n\n"
                f"{user.name} has marked job '{job.title}' as {status_label}.\n\n"
                f"Best regards,\nRozzgari Team"
            ),
            f"Job '{job.title}' is now {status_label}.",
        )
    return job
