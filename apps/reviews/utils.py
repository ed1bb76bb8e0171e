import logging
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Avg
from .models import Review
from apps.jobs.models import Job
from core.constants import REVIEW_ASPECTS
from core.exceptions import (
    AuthorizationError, ConflictError, NotFoundError, StateError, ValidationError
)

User = get_user_model()
logger = logging.getLogger(__name__)


def submit_review(job_id, reviewer, reviewee_id, rating, comment, **aspects):
    """
    Record a review of the other party of a completed job and fold its
    rating into the reviewee's running average, in one transaction.
    """
    with transaction.atomic():
        try:
            job = Job.objects.get(pk=job_id)
        except Job.DoesNotExist:
            raise NotFoundError('Job not found')
        if job.status != 'completed':
            raise StateError('Can only review completed jobs')

        role = job.role_of(reviewer)
        if role is None:
            raise AuthorizationError('Not authorized to review this job')
        other_party_id = job.assigned_worker_id if role == 'customer' else job.customer_id
        if reviewee_id != other_party_id:
            raise ValidationError({'reviewee_id': ['You can only review the other party of the job.']})

        if Review.objects.filter(job=job, reviewer=reviewer).exists():
            raise ConflictError('You have already reviewed this job')
        try:
            with transaction.atomic():
                review = Review.objects.create(
                    job=job,
                    reviewer=reviewer,
                    reviewee_id=reviewee_id,
                    rating=rating,
                    comment=comment,
                    **{aspect: aspects.get(aspect) for aspect in REVIEW_ASPECTS},
                )
        except IntegrityError:
            raise ConflictError('You have already reviewed this job')

        reviewee = User.apply_rating(reviewee_id, rating)

    logger.info(
        f"Review {review.id} on job {job.id}: {reviewer.id} rated {reviewee_id} {rating}/5; "
        f"average now {reviewee.rating_average:.2f} over {reviewee.rating_count}"
    )
    return review


def rating_averages(reviews):
    """Mean rating and aspect scores over ``reviews``; missing aspects are ignored."""
    if not reviews.exists():
        return {}
    averages = reviews.aggregate(
        avg_rating=Avg('rating'),
        **{f'avg_{aspect}': Avg(aspect) for aspect in REVIEW_ASPECTS}
    )
    return averages
