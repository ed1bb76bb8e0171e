from django.db import models
from django.conf import settings
from django.core.validators import MaxLengthValidator, MaxValueValidator, MinValueValidator

SCORE_VALIDATORS = [MinValueValidator(1), MaxValueValidator(5)]


class Review(models.Model):
    job = models.ForeignKey('jobs.Job', on_delete=models.CASCADE, related_name='reviews')
    reviewer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews_given')
    reviewee = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews_received')
    rating = models.PositiveSmallIntegerField(validators=SCORE_VALIDATORS)
    comment = models.TextField(validators=[MaxLengthValidator(500)])

    # Optional aspect scores, 1 to 5 each
    quality = models.PositiveSmallIntegerField(null=True, blank=True, validators=SCORE_VALIDATORS)
    punctuality = models.PositiveSmallIntegerField(null=True, blank=True, validators=SCORE_VALIDATORS)
    communication = models.PositiveSmallIntegerField(null=True, blank=True, validators=SCORE_VALIDATORS)
    professionalism = models.PositiveSmallIntegerField(null=True, blank=True, validators=SCORE_VALIDATORS)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('job', 'reviewer')
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Review by {self.reviewer.name} for {self.reviewee.name} on {self.job.title} ({self.rating}/5)"
