from django.urls import path
from .views import ServiceListView, ServiceCategoryView

urlpatterns = [
    path('', ServiceListView.as_view(), name='service_list'),
    path('category/<str:category>/', ServiceCategoryView.as_view(), name='service_category'),
]
