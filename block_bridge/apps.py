import logging
from importlib import import_module

from django.apps import AppConfig

from .conf import settings
from .registry import block_registry

log = logging.getLogger(__name__)


class BlockBridgeConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "block_bridge"
    verbose_name = "Block Bridge"

    def ready(self):
        # Load block registrars listed in settings.BLOCKS ("module" or "module:callable").
        for entry in getattr(settings, "BLOCKS", []):
            try:
                module_path, callable_name = entry.split(":", 1)
            except ValueError:
                import_module(entry)
                continue
            try:
                module = import_module(module_path)
                registrar = getattr(module, callable_name)
            except (ImportError, AttributeError):
                log.warning("Could not load block registrar %s", entry)
                raise
            registrar(block_registry)
