from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.authtoken.models import Token
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from django.contrib.auth import get_user_model
from django.utils import timezone
from .serializers import (
    UserSerializer, RegisterSerializer, LoginSerializer, ProfileUpdateSerializer,
    PortfolioItemSerializer, AvailabilitySerializer
)
from apps.reviews.models import Review
from apps.reviews.serializers import ReviewSerializer
from core.constants import AVAILABILITY_CHOICES
from core.exceptions import NotFoundError
from core.pagination import paginate
from core.utils import IsWorker, parse_float
import logging

User = get_user_model()
logger = logging.getLogger(__name__)

WORKER_SORT_FIELDS = {
    'rating': 'rating_average',
    'hourly_rate': 'hourly_rate',
    'experience': 'experience',
}

RECENT_REVIEWS_LIMIT = 10


class RegisterView(APIView):

    @swagger_auto_schema(
        operation_description="Register a customer or worker account and receive an API token.",
        request_body=RegisterSerializer,
        responses={201: UserSerializer, 400: 'Bad Request'}
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        token, _ = Token.objects.get_or_create(user=user)
        return Response({
            'message': 'User registered successfully',
            'token': token.key,
            'user': UserSerializer(user, context={'request': request}).data
        }, status=status.HTTP_201_CREATED)


class LoginView(APIView):

    @swagger_auto_schema(
        operation_description="Exchange email and password for an API token.",
        request_body=LoginSerializer,
        responses={200: UserSerializer, 400: 'Invalid credentials'}
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        user.last_active = timezone.now()
        user.save(update_fields=['last_active'])
        token, _ = Token.objects.get_or_create(user=user)
        logger.info(f"User {user.id} logged in")
        return Response({
            'message': 'Login successful',
            'token': token.key,
            'user': UserSerializer(user, context={'request': request}).data
        })


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Return the authenticated user.",
        responses={200: UserSerializer, 401: 'Unauthorized'}
    )
    def get(self, request):
        return Response({'user': UserSerializer(request.user, context={'request': request}).data})


class WorkerListView(APIView):

    @swagger_auto_schema(
        operation_description="List active workers, best first by the chosen sort key.",
        manual_parameters=[
            openapi.Parameter('service', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('city', openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter('min_rating', openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter('max_rate', openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter('availability', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              enum=[choice for choice, _ in AVAILABILITY_CHOICES]),
            openapi.Parameter('sort_by', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              enum=list(WORKER_SORT_FIELDS)),
            openapi.Parameter('page', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('limit', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: UserSerializer(many=True)}
    )
    def get(self, request):
        params = request.query_params
        workers = User.objects.filter(user_type='worker', is_active=True)

        service = params.get('service')
        if service and service.isdigit():
            workers = workers.filter(services__id=int(service))
        if params.get('city'):
            workers = workers.filter(city__icontains=params['city'])
        min_rating = parse_float(params.get('min_rating'))
        if min_rating is not None:
            workers = workers.filter(rating_average__gte=min_rating)
        max_rate = parse_float(params.get('max_rate'))
        if max_rate is not None:
            workers = workers.filter(hourly_rate__lte=max_rate)
        if params.get('availability'):
            workers = workers.filter(availability=params['availability'])

        sort_field = WORKER_SORT_FIELDS.get(params.get('sort_by'), 'rating_average')
        workers = workers.distinct().prefetch_related('services', 'portfolio').order_by(f'-{sort_field}', '-id')

        items, meta = paginate(workers, request)
        serializer = UserSerializer(items, many=True, context={'request': request})
        return Response({'workers': serializer.data, **meta})


class WorkerDetailView(APIView):

    @swagger_auto_schema(
        operation_description="Public worker profile with the 10 most recent reviews received.",
        responses={200: UserSerializer, 404: 'Worker not found'}
    )
    def get(self, request, pk):
        try:
            worker = User.objects.prefetch_related('services', 'portfolio').get(
                pk=pk, user_type='worker', is_active=True
            )
        except User.DoesNotExist:
            raise NotFoundError('Worker not found')

        reviews = (
            Review.objects.filter(reviewee=worker)
            .select_related('reviewer', 'reviewee', 'job')
            .order_by('-created_at', '-id')[:RECENT_REVIEWS_LIMIT]
        )
        return Response({
            'worker': UserSerializer(worker, context={'request': request}).data,
            'reviews': ReviewSerializer(reviews, many=True, context={'request': request}).data
        })


class ProfileView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @swagger_auto_schema(
        operation_description="Return the caller's own profile.",
        responses={200: UserSerializer, 401: 'Unauthorized'}
    )
    def get(self, request):
        return Response({'user': UserSerializer(request.user, context={'request': request}).data})

    @swagger_auto_schema(
        operation_description="Update the supplied profile fields. The picture is optional (images only, 5MB max).",
        request_body=ProfileUpdateSerializer,
        responses={200: UserSerializer, 400: 'Bad Request', 401: 'Unauthorized'}
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info(f"User {user.id} updated profile fields: {sorted(serializer.validated_data)}")
        return Response({
            'message': 'Profile updated successfully',
            'user': UserSerializer(user, context={'request': request}).data
        })


class PortfolioView(APIView):
    permission_classes = [IsAuthenticated, IsWorker]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @swagger_auto_schema(
        operation_description="Add an item to the worker's portfolio. The image is optional.",
        request_body=PortfolioItemSerializer,
        responses={201: UserSerializer, 400: 'Bad Request', 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def post(self, request):
        serializer = PortfolioItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = serializer.save(worker=request.user)
        logger.info(f"Worker {request.user.id} added portfolio item {item.id}")
        return Response({
            'message': 'Portfolio item added successfully',
            'item': PortfolioItemSerializer(item, context={'request': request}).data,
            'user': UserSerializer(request.user, context={'request': request}).data
        }, status=status.HTTP_201_CREATED)


class AvailabilityView(APIView):
    permission_classes = [IsAuthenticated, IsWorker]

    @swagger_auto_schema(
        operation_description="Set the worker's availability.",
        request_body=AvailabilitySerializer,
        responses={200: UserSerializer, 400: 'Bad Request', 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def patch(self, request):
        serializer = AvailabilitySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        request.user.availability = serializer.validated_data['availability']
        request.user.save(update_fields=['availability'])
        return Response({
            'message': 'Availability updated successfully',
            'user': UserSerializer(request.user, context={'request': request}).data
        })
