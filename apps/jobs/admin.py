from django.contrib import admin
from .models import Job, JobApplication, JobImage


class JobApplicationInline(admin.TabularInline):
    model = JobApplication
    extra = 0
    readonly_fields = ('applied_at',)


class JobImageInline(admin.TabularInline):
    model = JobImage
    extra = 0


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ('title', 'customer', 'service', 'city', 'status', 'urgency', 'assigned_worker', 'created_at')
    list_filter = ('status', 'urgency', 'budget_type', 'service')
    search_fields = ('title', 'city', 'customer__name', 'customer__email')
    inlines = [JobApplicationInline, JobImageInline]


@admin.register(JobApplication)
class JobApplicationAdmin(admin.ModelAdmin):
    list_display = ('job', 'worker', 'proposed_rate', 'status', 'applied_at')
    list_filter = ('status',)
    search_fields = ('job__title', 'worker__name', 'worker__email')
