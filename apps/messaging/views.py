from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from django.contrib.auth import get_user_model
from .models import Message
from .serializers import MessageSerializer, ConversationSerializer
from .utils import group_conversations
from core.exceptions import NotFoundError
from core.pagination import paginate
import logging

User = get_user_model()
logger = logging.getLogger(__name__)

CONVERSATION_PAGE_SIZE = 50


class MessageSendView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Send a direct message, optionally about a job.",
        request_body=MessageSerializer,
        responses={201: MessageSerializer, 400: 'Bad Request', 401: 'Unauthorized'}
    )
    def post(self, request):
        serializer = MessageSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        message = serializer.save(sender=request.user)
        logger.info(f"User {request.user.id} sent message {message.id} to {message.receiver_id}")
        return Response({
            'message': 'Message sent successfully',
            'data': MessageSerializer(message, context={'request': request}).data
        }, status=status.HTTP_201_CREATED)


class ConversationView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description=(
            "Messages exchanged with one user, oldest first within the page. "
            "Page 1 holds the newest messages. Marks the other user's messages to the caller as read."
        ),
        manual_parameters=[
            openapi.Parameter('page', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('limit', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: MessageSerializer(many=True), 401: 'Unauthorized', 404: 'User not found'}
    )
    def get(self, request, user_id):
        try:
            other = User.objects.get(pk=user_id)
        except User.DoesNotExist:
            raise NotFoundError('User not found')

        marked = Message.objects.mark_read(sender=other, receiver=request.user)
        if marked:
            logger.info(f"Marked {marked} messages from {other.id} to {request.user.id} as read")

        messages = (
            Message.objects.between(request.user, other)
            .select_related('sender', 'receiver')
            .order_by('-created_at', '-id')
        )
        items, meta = paginate(messages, request, default_limit=CONVERSATION_PAGE_SIZE)
        items.reverse()
        return Response({
            'messages': MessageSerializer(items, many=True, context={'request': request}).data,
            **meta
        })


class ConversationListView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="One entry per correspondent with the latest message and unread count.",
        responses={200: ConversationSerializer(many=True), 401: 'Unauthorized'}
    )
    def get(self, request):
        messages = (
            Message.objects.involving(request.user)
            .order_by('-created_at', '-id')
        )
        conversations = group_conversations(request.user, messages)
        return Response(ConversationSerializer(conversations, many=True, context={'request': request}).data)
