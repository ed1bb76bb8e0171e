from django.contrib import admin
from .models import User, PortfolioItem


class PortfolioItemInline(admin.TabularInline):
    model = PortfolioItem
    extra = 0


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'phone', 'user_type', 'city', 'availability', 'rating_average', 'is_active', 'is_verified')
    list_filter = ('user_type', 'availability', 'is_active', 'is_verified')
    search_fields = ('name', 'email', 'phone', 'city')
    filter_horizontal = ('services',)
    inlines = [PortfolioItemInline]


@admin.register(PortfolioItem)
class PortfolioItemAdmin(admin.ModelAdmin):
    list_display = ('title', 'worker', 'completed_at')
    search_fields = ('title', 'worker__name', 'worker__email')
