from rest_framework import serializers
from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    average_rate = serializers.SerializerMethodField()

    class Meta:
        model = Service
        fields = ['id', 'name', 'description', 'category', 'icon', 'average_rate', 'is_active']

    def get_average_rate(self, obj):
        return {'min': obj.average_rate_min, 'max': obj.average_rate_max}


class ServiceSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ['id', 'name', 'category', 'icon']
