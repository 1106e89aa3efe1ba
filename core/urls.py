from django.urls import path
from .views import MyEventsView

urlpatterns = [
    path("events/me/", MyEventsView.as_view(), name="my-events"),
]
