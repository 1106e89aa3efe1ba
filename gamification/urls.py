from django.urls import path
from .views import RankingView, MyPointsView


urlpatterns = [
    path("ranking/", RankingView.as_view(), name="ranking"),
    path("points/me/", MyPointsView.as_view(), name="my-points"),
]
