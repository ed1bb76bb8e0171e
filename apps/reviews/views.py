from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from .models import Review
from .serializers import ReviewSerializer, ReviewCreateSerializer
from .utils import submit_review, rating_averages
from core.pagination import paginate


class ReviewCreateView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Review the other party of a completed job. Aspect scores are optional.",
        request_body=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            400: 'Bad Request or job not completed',
            401: 'Unauthorized',
            403: 'Not a participant of the job',
            404: 'Job not found',
            409: 'Already reviewed'
        }
    )
    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        review = submit_review(
            data.pop('job_id'), request.user, data.pop('reviewee_id'),
            data.pop('rating'), data.pop('comment'), **data
        )
        review = Review.objects.select_related('job', 'reviewer', 'reviewee').get(pk=review.pk)
        return Response({
            'message': 'Review submitted successfully',
            'review': ReviewSerializer(review, context={'request': request}).data
        }, status=status.HTTP_201_CREATED)


class UserReviewsView(APIView):

    @swagger_auto_schema(
        operation_description="Reviews a user received, newest first, with mean scores over all of them.",
        manual_parameters=[
            openapi.Parameter('page', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter('limit', openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: ReviewSerializer(many=True)}
    )
    def get(self, request, user_id):
        reviews = Review.objects.filter(reviewee_id=user_id)
        items, meta = paginate(
            reviews.select_related('job', 'reviewer', 'reviewee').order_by('-created_at', '-id'),
            request
        )
        return Response({
            'reviews': ReviewSerializer(items, many=True, context={'request': request}).data,
            **meta,
            'averages': rating_averages(reviews),
        })
