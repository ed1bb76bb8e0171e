from django.urls import path
from .views import MessageSendView, ConversationView, ConversationListView

urlpatterns = [
    path('', MessageSendView.as_view(), name='message_send'),
    path('conversations/', ConversationListView.as_view(), name='conversation_list'),
    path('conversation/<int:user_id>/', ConversationView.as_view(), name='conversation'),
]
