from __future__ import annotations

import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class DataGridConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "datagrid"
    verbose_name = "Data grid"

    def ready(self) -> None:
        # Surface translator misconfiguration at startup, not on the first render.
        from .conf import get_default_translator

        if get_default_translator() is None:
            logger.warning("DATAGRID['TRANSLATOR'] is not set; grids with group actions will not render.")
