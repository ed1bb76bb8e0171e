from django.db.models import Count
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from .models import Job
from .serializers import (
    JobSerializer, JobDetailSerializer, JobApplicationSerializer, JobStatusUpdateSerializer
)
from .workflow import apply_to_job, accept_application, update_status
from core.constants import JOB_STATUS_CHOICES, URGENCY_CHOICES
from core.exceptions import NotFoundError
from core.pagination import paginate
from core.utils import IsCustomer, IsWorker, parse_float
import logging

logger = logging.getLogger(__name__)


def _job_detail_queryset():
    return Job.objects.select_related('customer', 'service', 'assigned_worker').prefetch_related(
        'images', 'applications__worker'
    )


def _job_response(job, request, message):
    job = _job_detail_queryset().get(pk=job.pk)
    return Response({
        'message': message,
        'job': JobDetailSerializer(job, context={'request': request}).data
    })


class JobListCreateView(APIView):
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_permissions(self):
        if self.request.method == 'POST':
            return [IsAuthenticated(), IsCustomer()]
        return []

    @swagger_auto_schema(
        operation_description="Browse jobs, newest first. Status defaults to open.",
        manual_parameters=[
            openapi.Parameter('service', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('city', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              description='Case-insensitive substring match'),
            openapi.Parameter('status', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              enum=[choice for choice, _ in JOB_STATUS_CHOICES]),
            openapi.Parameter('urgency', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              enum=[choice for choice, _ in URGENCY_CHOICES]),
            openapi.Parameter('min_budget', openapi.IN_QUERY, type=openapi.TYPE_NUMBER,
                              description='Only jobs whose minimum budget is at least this'),
            openapi.Parameter('max_budget', openapi.IN_QUERY, type=openapi.TYPE_NUMBER,
                              description='Only jobs whose maximum budget is at most this'),
            openapi.Parameter('page', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('limit', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: JobSerializer(many=True)}
    )
    def get(self, request):
        params = request.query_params
        jobs = Job.objects.filter(status=params.get('status') or 'open')

        service = params.get('service')
        if service and service.isdigit():
            jobs = jobs.filter(service_id=int(service))
        if params.get('city'):
            jobs = jobs.filter(city__icontains=params['city'])
        if params.get('urgency'):
            jobs = jobs.filter(urgency=params['urgency'])
        min_budget = parse_float(params.get('min_budget'))
        if min_budget is not None:
            jobs = jobs.filter(budget_min__gte=min_budget)
        max_budget = parse_float(params.get('max_budget'))
        if max_budget is not None:
            jobs = jobs.filter(budget_max__lte=max_budget)

        jobs = jobs.select_related('customer', 'service', 'assigned_worker').prefetch_related('images').annotate(
            num_applications=Count('applications')
        )
        items, meta = paginate(jobs, request)
        serializer = JobSerializer(items, many=True, context={'request': request})
        return Response({'jobs': serializer.data, **meta})

    @swagger_auto_schema(
        operation_description="Post a new job. Images are optional.",
        request_body=JobSerializer,
        responses={
            201: JobSerializer,
            400: 'Bad Request',
            401: 'Unauthorized',
            403: 'Forbidden'
        }
    )
    def post(self, request):
        serializer = JobSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        job = serializer.save(customer=request.user)
        logger.info(f"Customer {request.user.id} posted job {job.id}")
        return Response({
            'message': 'Job posted successfully',
            'job': JobSerializer(job, context={'request': request}).data
        }, status=status.HTTP_201_CREATED)


class JobDetailView(APIView):

    @swagger_auto_schema(
        operation_description="Retrieve a job with its customer, service, assigned worker and applications.",
        responses={200: JobDetailSerializer, 404: 'Not Found'}
    )
    def get(self, request, pk):
        try:
            job = _job_detail_queryset().get(pk=pk)
        except Job.DoesNotExist:
            raise NotFoundError('Job not found')
        return Response(JobDetailSerializer(job, context={'request': request}).data)


class JobApplyView(APIView):
    permission_classes = [IsAuthenticated, IsWorker]

    @swagger_auto_schema(
        operation_description="Apply to an open job.",
        request_body=JobApplicationSerializer,
        responses={
            200: JobDetailSerializer,
            400: 'Bad Request or job not open',
            401: 'Unauthorized',
            403: 'Forbidden',
            404: 'Not Found',
            409: 'Already applied'
        }
    )
    def post(self, request, pk):
        serializer = JobApplicationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job, _ = apply_to_job(pk, request.user, **serializer.validated_data)
        return _job_response(job, request, 'Application submitted successfully')


class JobAcceptApplicationView(APIView):
    permission_classes = [IsAuthenticated, IsCustomer]

    @swagger_auto_schema(
        operation_description="Accept one application; every other application on the job is rejected.",
        responses={
            200: JobDetailSerializer,
            400: 'Job is not open',
            401: 'Unauthorized',
            403: 'Forbidden',
            404: 'Not Found'
        }
    )
    def patch(self, request, pk, application_id):
        job = accept_application(pk, application_id, request.user)
        return _job_response(job, request, 'Application accepted successfully')


class JobStatusUpdateView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Start, complete or cancel a job (customer or assigned worker).",
        request_body=JobStatusUpdateSerializer,
        responses={
            200: JobDetailSerializer,
            400: 'Bad Request or transition not allowed',
            401: 'Unauthorized',
            403: 'Forbidden',
            404: 'Not Found'
        }
    )
    def patch(self, request, pk):
        serializer = JobStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = update_status(pk, serializer.validated_data['status'], request.user)
        return _job_response(job, request, 'Job status updated successfully')


class MyJobsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Jobs the caller posted (customers) or is assigned to (workers).",
        manual_parameters=[
            openapi.Parameter('status', openapi.IN_QUERY, type=openapi.TYPE_STRING,
                              enum=[choice for choice, _ in JOB_STATUS_CHOICES]),
            openapi.Parameter('page', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('limit', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: JobSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request):
        if request.user.is_customer:
            jobs = Job.objects.filter(customer=request.user)
        else:
            jobs = Job.objects.filter(assigned_worker=request.user)
        if request.query_params.get('status'):
            jobs = jobs.filter(status=request.query_params['status'])

        jobs = jobs.select_related('customer', 'service', 'assigned_worker').prefetch_related('images').annotate(
            num_applications=Count('applications')
        )
        items, meta = paginate(jobs, request)
        serializer = JobSerializer(items, many=True, context={'request': request})
        return Response({'jobs': serializer.data, **meta})
