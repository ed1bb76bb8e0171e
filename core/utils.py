from django.conf import settings
from rest_framework import permissions, serializers


class IsCustomer(permissions.BasePermission):
    message = "Access denied. Customers only."

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.is_customer


class IsWorker(permissions.BasePermission):
    message = "Access denied. Workers only."

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.is_worker


def validate_image_size(image):
    if image and image.size > settings.MAX_UPLOAD_SIZE:
        limit_mb = settings.MAX_UPLOAD_SIZE // (1024 * 1024)
        raise serializers.ValidationError(f"Image must be {limit_mb}MB or smaller.")
    return image


def parse_float(value):
    """Parse an optional numeric query parameter, ignoring junk."""
    if value in (None, ''):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
