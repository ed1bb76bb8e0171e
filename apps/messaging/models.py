from django.db import models
from django.conf import settings
from django.db.models import Q
from django.utils import timezone


class MessageQuerySet(models.QuerySet):
    def between(self, user, other):
        return self.filter(
            Q(sender=user, receiver=other) | Q(sender=other, receiver=user)
        )

    def involving(self, user):
        return self.filter(Q(sender=user) | Q(receiver=user))

    def mark_read(self, sender, receiver):
        """Mark everything ``sender`` sent ``receiver`` as read; returns the count."""
        return self.filter(sender=sender, receiver=receiver, is_read=False).update(
            is_read=True, read_at=timezone.now()
        )


class Message(models.Model):
    sender = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_messages')
    receiver = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_messages')
    job = models.ForeignKey('jobs.Job', on_delete=models.SET_NULL, null=True, blank=True, related_name='messages')
    content = models.TextField()
    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = MessageQuerySet.as_manager()

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['sender', 'receiver', 'created_at']),
            models.Index(fields=['receiver', 'is_read']),
        ]

    def __str__(self):
        return f"{self.sender.name} -> {self.receiver.name}: {self.content[:30]}"
