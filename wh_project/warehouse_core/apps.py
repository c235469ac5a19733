from django.apps import AppConfig


class WarehouseCoreConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "warehouse_core"

    # ensure receivers are registered
    def ready(self):
        import warehouse_core.signals  # noqa: F401
