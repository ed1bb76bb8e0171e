from django.urls import path
from .views import (
    JobListCreateView, JobDetailView, JobApplyView, JobAcceptApplicationView,
    JobStatusUpdateView, MyJobsView
)

urlpatterns = [
    path('', JobListCreateView.as_view(), name='job_list_create'),
    path('user/my-jobs/', MyJobsView.as_view(), name='my_jobs'),
    path('<int:pk>/', JobDetailView.as_view(), name='job_detail'),
    path('<int:pk>/apply/', JobApplyView.as_view(), name='job_apply'),
    path('<int:pk>/accept/<int:application_id>/', JobAcceptApplicationView.as_view(), name='job_accept_application'),
    path('<int:pk>/status/', JobStatusUpdateView.as_view(), name='job_status_update'),
]
