from django.apps import AppConfig


class WaterUsageConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "waterusage"
    verbose_name = "Water usage tracker"
