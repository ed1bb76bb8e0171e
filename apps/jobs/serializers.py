from rest_framework import serializers
from .models import Job, JobApplication, JobImage
from apps.catalog.models import Service
from apps.catalog.serializers import ServiceSerializer
from apps.users.serializers import UserSummarySerializer, WorkerSummarySerializer
from core.constants import BUDGET_TYPE_CHOICES, STATUS_UPDATE_ACTIONS
from core.utils import validate_image_size


class JobLocationSerializer(serializers.Serializer):
    address = serializers.CharField(min_length=5, max_length=255, trim_whitespace=True)
    city = serializers.CharField(min_length=2, max_length=100, trim_whitespace=True)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)


class JobBudgetSerializer(serializers.Serializer):
    min = serializers.FloatField(source='budget_min', min_value=0)
    max = serializers.FloatField(source='budget_max', min_value=0)
    type = serializers.ChoiceField(source='budget_type', choices=BUDGET_TYPE_CHOICES, default='hourly')

    def validate(self, data):
        if data['budget_min'] > data['budget_max']:
            raise serializers.ValidationError("Minimum budget cannot exceed maximum budget.")
        return data


class JobImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = JobImage
        fields = ['id', 'image']


class JobApplicationSerializer(serializers.ModelSerializer):
    worker = WorkerSummarySerializer(read_only=True)
    proposal = serializers.CharField(min_length=20, trim_whitespace=True)
    proposed_rate = serializers.FloatField(min_value=0)
    estimated_duration = serializers.CharField(min_length=2, max_length=100, trim_whitespace=True)

    class Meta:
        model = JobApplication
        fields = ['id', 'worker', 'proposal', 'proposed_rate', 'estimated_duration', 'status', 'applied_at']
        read_only_fields = ['id', 'worker', 'status', 'applied_at']


class JobSerializer(serializers.ModelSerializer):
    customer = UserSummarySerializer(read_only=True)
    service = ServiceSerializer(read_only=True)
    service_id = serializers.PrimaryKeyRelatedField(
        queryset=Service.objects.filter(is_active=True), source='service', write_only=True
    )
    title = serializers.CharField(min_length=5, max_length=200, trim_whitespace=True)
    description = serializers.CharField(min_length=20, trim_whitespace=True)
    location = JobLocationSerializer(source='*')
    budget = JobBudgetSerializer(source='*')
    preferred_date = serializers.DateTimeField(required=False, allow_null=True)
    images = JobImageSerializer(many=True, read_only=True)
    uploaded_images = serializers.ListField(
        child=serializers.ImageField(validators=[validate_image_size]),
        write_only=True,
        required=False,
        default=list
    )
    assigned_worker = WorkerSummarySerializer(read_only=True)
    application_count = serializers.SerializerMethodField()

    class Meta:
        model = Job
        fields = [
            'id', 'customer', 'service', 'service_id', 'title', 'description', 'location',
            'budget', 'urgency', 'preferred_date', 'status', 'assigned_worker', 'completed_at',
            'images', 'uploaded_images', 'application_count', 'created_at', 'updated_at'
        ]
        read_only_fields = [
            'id', 'customer', 'status', 'assigned_worker', 'completed_at',
            'images', 'created_at', 'updated_at'
        ]

    def get_application_count(self, obj):
        # Listings annotate the count; a single job falls back to a query.
        count = getattr(obj, 'num_applications', None)
        return obj.applications.count() if count is None else count

    def create(self, validated_data):
        uploaded_images = validated_data.pop('uploaded_images', [])
        job = Job.objects.create(**validated_data)
        for image in uploaded_images:
            JobImage.objects.create(job=job, image=image)
        return job


class JobDetailSerializer(JobSerializer):
    customer = serializers.SerializerMethodField()
    applications = JobApplicationSerializer(many=True, read_only=True)

    class Meta(JobSerializer.Meta):
        fields = JobSerializer.Meta.fields + ['applications']

    def get_customer(self, obj):
        data = UserSummarySerializer(obj.customer, context=self.context).data
        data['phone'] = obj.customer.phone
        data['city'] = obj.customer.city
        return data


class JobStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=list(STATUS_UPDATE_ACTIONS))
