from django.contrib import admin
from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ('sender', 'receiver', 'job', 'is_read', 'created_at')
    list_filter = ('is_read',)
    search_fields = ('sender__name', 'receiver__name', 'content')
    readonly_fields = ('created_at', 'read_at')
