from django.urls import path
from .views import (
    WorkerListView, WorkerDetailView, ProfileView, PortfolioView, AvailabilityView
)

urlpatterns = [
    path('workers/', WorkerListView.as_view(), name='worker_list'),
    path('worker/<int:pk>/', WorkerDetailView.as_view(), name='worker_detail'),
    path('profile/', ProfileView.as_view(), name='profile'),
    path('portfolio/', PortfolioView.as_view(), name='portfolio'),
    path('availability/', AvailabilityView.as_view(), name='availability'),
]
