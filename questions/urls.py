from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import QuestionViewSet, MyStatisticsView

router = DefaultRouter()
router.register(r'', QuestionViewSet, basename='question')

urlpatterns = [
    path('statistics/me/', MyStatisticsView.as_view(), name='my-statistics'),
    path('', include(router.urls)),
]
