from rest_framework.views import APIView
from rest_framework.response import Response
from drf_yasg.utils import swagger_auto_schema
from .models import Service
from .serializers import ServiceSerializer
from core.constants import SERVICE_CATEGORY_CHOICES
from core.exceptions import ValidationError


class ServiceListView(APIView):

    @swagger_auto_schema(
        operation_description="List active services sorted by name.",
        responses={200: ServiceSerializer(many=True)}
    )
    def get(self, request):
        services = Service.objects.filter(is_active=True).order_by('name')
        serializer = ServiceSerializer(services, many=True)
        return Response(serializer.data)


class ServiceCategoryView(APIView):

    @swagger_auto_schema(
        operation_description="List active services of one category, sorted by name.",
        responses={200: ServiceSerializer(many=True), 400: 'Unknown category'}
    )
    def get(self, request, category):
        if category not in dict(SERVICE_CATEGORY_CHOICES):
            raise ValidationError({'category': [f"Unknown category '{category}'."]})
        services = Service.objects.filter(category=category, is_active=True).order_by('name')
        serializer = ServiceSerializer(services, many=True)
        return Response(serializer.data)
