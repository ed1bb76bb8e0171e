from django.contrib import admin
from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'average_rate_min', 'average_rate_max', 'is_active')
    list_filter = ('category', 'is_active')
    search_fields = ('name',)
