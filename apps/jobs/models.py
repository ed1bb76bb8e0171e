from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator
from django.utils import timezone
from core.constants import (
    JOB_STATUS_CHOICES, JOB_APPLICATION_STATUS_CHOICES, BUDGET_TYPE_CHOICES,
    URGENCY_CHOICES, JOB_TRANSITIONS
)
from core.exceptions import AuthorizationError, StateError


class Job(models.Model):
    customer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='posted_jobs')
    service = models.ForeignKey('catalog.Service', on_delete=models.PROTECT, related_name='jobs')
    title = models.CharField(max_length=200)
    description = models.TextField()

    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)

    budget_min = models.FloatField(validators=[MinValueValidator(0)])
    budget_max = models.FloatField(validators=[MinValueValidator(0)])
    budget_type = models.CharField(max_length=10, choices=BUDGET_TYPE_CHOICES, default='hourly')

    urgency = models.CharField(max_length=10, choices=URGENCY_CHOICES, default='medium')
    preferred_date = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=JOB_STATUS_CHOICES, default='open')
    assigned_worker = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_jobs'
    )
    completed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status', 'created_at']),
            models.Index(fields=['city']),
        ]

    def __str__(self):
        return f"{self.title} - {self.customer.name}"

    def role_of(self, user):
        """Return "customer" for the owner, "worker" for the assigned worker, else None."""
        if user.pk == self.customer_id:
            return 'customer'
        if self.assigned_worker_id is not None and user.pk == self.assigned_worker_id:
            return 'worker'
        return None

    def transition(self, action, role):
        """
        Move the job along the transition table. Does not save.

        Raises StateError when the table has no entry for the current status
        and action, AuthorizationError when the role may not perform it.
        """
        rule = JOB_TRANSITIONS.get((self.status, action))
        if rule is None:
            raise StateError(f"Cannot {action} a job that is {self.get_status_display().lower()}.")
        allowed_roles, next_status = rule
        if role not in allowed_roles:
            raise AuthorizationError(f"Not authorized to {action} this job.")
        self.status = next_status
        if next_status == 'completed':
            self.completed_at = timezone.now()
        return next_status


class JobImage(models.Model):
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='images')
    image = models.ImageField(upload_to='job_images/')

    def __str__(self):
        return f"Image for {self.job.title}"


class JobApplication(models.Model):
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='applications')
    worker = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='job_applications')
    proposal = models.TextField()
    proposed_rate = models.FloatField(validators=[MinValueValidator(0)])
    estimated_duration = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=JOB_APPLICATION_STATUS_CHOICES, default='pending')
    applied_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('job', 'worker')
        ordering = ['applied_at', 'id']

    def __str__(self):
        return f"{self.worker.name} applied to {self.job.title}"
