from rest_framework import serializers
from django.contrib.auth import get_user_model
from .models import Message
from apps.jobs.models import Job
from apps.users.serializers import UserSummarySerializer

User = get_user_model()


class MessageSerializer(serializers.ModelSerializer):
    sender = UserSummarySerializer(read_only=True)
    receiver = UserSummarySerializer(read_only=True)
    receiver_id = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(is_active=True), source='receiver', write_only=True
    )
    job_id = serializers.PrimaryKeyRelatedField(
        queryset=Job.objects.all(), source='job', required=False, allow_null=True
    )
    content = serializers.CharField(min_length=1, max_length=2000, trim_whitespace=True)

    class Meta:
        model = Message
        fields = ['id', 'sender', 'receiver', 'receiver_id', 'job_id', 'content', 'is_read', 'read_at', 'created_at']
        read_only_fields = ['id', 'sender', 'receiver', 'is_read', 'read_at', 'created_at']

    def validate(self, data):
        sender = self.context['request'].user
        if data['receiver'].pk == sender.pk:
            raise serializers.ValidationError({'receiver_id': ["You cannot send a message to yourself."]})
        return data


class ConversationSerializer(serializers.Serializer):
    other_user = UserSummarySerializer()
    last_message = MessageSerializer()
    unread_count = serializers.IntegerField()
