import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class JqGridWidgetConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "jqgrid_widget"
    verbose_name = "jqGrid widget"

    def ready(self):
        """Warn about keys in settings.JQGRID that the app does not know."""
        from jqgrid_widget.conf import unknown_settings

        for name in unknown_settings():
            logger.warning("Ignoring unknown JQGRID setting %s", name)
