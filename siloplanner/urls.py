"""URL configuration for the silo planner app.

This module defines the URL patterns for the app's views. It also
specifies the ``app_name`` to allow namespacing from the project URL
configuration.
"""

from django.urls import path

from . import views

app_name = 'siloplanner'

urlpatterns = [
    path('', views.planner, name='planner'),
    path('fields/', views.update_fields, name='update_fields'),
    path('posts/add/', views.add_post, name='add_post'),
    path('posts/bulk/', views.bulk_add, name='bulk_add'),
    path('posts/<str:post_id>/title/', views.edit_post, name='edit_post'),
    path('posts/<str:post_id>/remove/', views.remove_post, name='remove_post'),
    path('reset/', views.reset, name='reset'),
    path('copy/', views.copy, name='copy'),
    path('plan.json', views.plan_json, name='plan_json'),
]
