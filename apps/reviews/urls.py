from django.urls import path
from .views import ReviewCreateView, UserReviewsView

urlpatterns = [
    path('', ReviewCreateView.as_view(), name='review_create'),
    path('user/<int:user_id>/', UserReviewsView.as_view(), name='user_reviews'),
]
