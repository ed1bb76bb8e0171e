from django.db import models
from core.constants import SERVICE_CATEGORY_CHOICES


class Service(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField()
    category = models.CharField(max_length=20, choices=SERVICE_CATEGORY_CHOICES)
    icon = models.CharField(max_length=100, blank=True)
    average_rate_min = models.FloatField(null=True, blank=True)
    average_rate_max = models.FloatField(null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return self.name
