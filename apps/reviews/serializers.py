from rest_framework import serializers
from .models import Review
from apps.users.serializers import UserSummarySerializer


class ReviewAspectsSerializer(serializers.Serializer):
    quality = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)
    punctuality = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)
    communication = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)
    professionalism = serializers.IntegerField(min_value=1, max_value=5, required=False, allow_null=True)


class ReviewSerializer(serializers.ModelSerializer):
    reviewer = UserSummarySerializer(read_only=True)
    reviewee = UserSummarySerializer(read_only=True)
    job = serializers.SerializerMethodField()
    aspects = ReviewAspectsSerializer(source='*', read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'job', 'reviewer', 'reviewee', 'rating', 'comment', 'aspects', 'created_at']

    def get_job(self, obj):
        return {'id': obj.job_id, 'title': obj.job.title}


class ReviewCreateSerializer(serializers.Serializer):
    job_id = serializers.IntegerField()
    reviewee_id = serializers.IntegerField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(min_length=10, max_length=500, trim_whitespace=True)
    aspects = ReviewAspectsSerializer(source='*', required=False)
