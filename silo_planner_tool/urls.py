"""Root URL configuration for silo_planner_tool."""

from django.urls import include, path

urlpatterns = [
    path('', include('siloplanner.urls')),
]
