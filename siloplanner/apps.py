from django.apps import AppConfig


class SiloPlannerConfig(AppConfig):
    """Configuration for the silo planner Django app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'siloplanner'
    verbose_name = 'Reverse Silo Planner'
