from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_yasg.utils import swagger_auto_schema


class HealthCheckView(APIView):
    authentication_classes = []

    @swagger_auto_schema(operation_description="Liveness probe.", responses={200: 'OK'})
    def get(self, request):
        return Response({'status': 'OK', 'timestamp': timezone.now().isoformat()})
