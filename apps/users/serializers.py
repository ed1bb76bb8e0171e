from rest_framework import serializers
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth import password_validation
from django.core.validators import RegexValidator
from .models import PortfolioItem
from apps.catalog.models import Service
from apps.catalog.serializers import ServiceSummarySerializer
from core.constants import USER_TYPE_CHOICES, AVAILABILITY_CHOICES
from core.utils import validate_image_size

import logging

User = get_user_model()
logger = logging.getLogger(__name__)

phone_validator = RegexValidator(
    regex=r'^\+?[\d\s-]{7,20}$',
    message="Enter a valid phone number."
)


class UserSummarySerializer(serializers.ModelSerializer):
    """Public face of a user embedded in jobs, reviews and messages."""
    class Meta:
        model = User
        fields = ['id', 'name', 'profile_picture', 'user_type']


class RatingSerializer(serializers.Serializer):
    average = serializers.FloatField(source='rating_average')
    count = serializers.IntegerField(source='rating_count')


class WorkerSummarySerializer(serializers.ModelSerializer):
    rating = RatingSerializer(source='*', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'profile_picture', 'rating', 'hourly_rate', 'experience']


class UserLocationSerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)


class PortfolioItemSerializer(serializers.ModelSerializer):
    title = serializers.CharField(min_length=2, max_length=200, trim_whitespace=True)
    description = serializers.CharField(min_length=10, trim_whitespace=True)
    image = serializers.ImageField(required=False, validators=[validate_image_size])

    class Meta:
        model = PortfolioItem
        fields = ['id', 'title', 'description', 'image', 'completed_at']
        read_only_fields = ['id', 'completed_at']


class UserSerializer(serializers.ModelSerializer):
    location = UserLocationSerializer(source='*', read_only=True)
    services = ServiceSummarySerializer(many=True, read_only=True)
    rating = RatingSerializer(source='*', read_only=True)
    portfolio = PortfolioItemSerializer(many=True, read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'name', 'email', 'phone', 'user_type', 'profile_picture', 'location',
            'services', 'skills', 'experience', 'hourly_rate', 'availability', 'bio',
            'rating', 'portfolio', 'is_verified', 'is_active', 'last_active', 'created_at'
        ]
        read_only_fields = fields


class RegisterSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2, max_length=150, trim_whitespace=True)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, style={'input_type': 'password'})
    phone = serializers.CharField(validators=[phone_validator])
    user_type = serializers.ChoiceField(choices=USER_TYPE_CHOICES)

    class Meta:
        model = User
        fields = ['name', 'email', 'password', 'phone', 'user_type', 'city', 'address']

    def validate_email(self, value):
        email = value.strip().lower()
        if User.objects.filter(email=email).exists():
            raise serializers.ValidationError("User already exists with this email.")
        return email

    def validate_password(self, value):
        password_validation.validate_password(value)
        return value

    def create(self, validated_data):
        password = validated_data.pop('password')
        user = User.objects.create_user(password=password, **validated_data)
        logger.info(f"Registered {user.user_type} {user.id} ({user.email})")
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})

    def validate(self, data):
        user = authenticate(
            request=self.context.get('request'),
            email=data['email'].strip().lower(),
            password=data['password']
        )
        if user is None:
            raise serializers.ValidationError("Invalid credentials.")
        data['user'] = user
        return data


class ProfileUpdateSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2, max_length=150, trim_whitespace=True)
    phone = serializers.CharField(validators=[phone_validator])
    bio = serializers.CharField(max_length=500, allow_blank=True)
    hourly_rate = serializers.FloatField(min_value=0)
    experience = serializers.IntegerField(min_value=0)
    skills = serializers.ListField(child=serializers.CharField(max_length=100), allow_empty=True)
    service_ids = serializers.PrimaryKeyRelatedField(
        queryset=Service.objects.filter(is_active=True), many=True, source='services'
    )
    profile_picture = serializers.ImageField(validators=[validate_image_size])
    latitude = serializers.FloatField(allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(allow_null=True, min_value=-180, max_value=180)

    class Meta:
        model = User
        fields = [
            'name', 'phone', 'bio', 'hourly_rate', 'experience', 'skills', 'service_ids',
            'profile_picture', 'city', 'address', 'latitude', 'longitude'
        ]

    def update(self, instance, validated_data):
        services = validated_data.pop('services', None)
        profile_picture = validated_data.pop('profile_picture', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if profile_picture is not None:
            # Only the storage reference is kept on the user.
            instance.profile_picture.save(profile_picture.name, profile_picture, save=False)
        instance.save()
        if services is not None:
            instance.services.set(services)
        return instance


class AvailabilitySerializer(serializers.Serializer):
    availability = serializers.ChoiceField(choices=AVAILABILITY_CHOICES)
