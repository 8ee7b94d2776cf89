from __future__ import annotations

from django.conf import settings
from django.utils.module_loading import import_string

from .exceptions import GroupActionConfigurationError


DEFAULTS = {
    'ICON_PREFIX': 'fa fa-',
    'TRANSLATOR': 'datagrid.translator.SimpleTranslator',
    'TRANSLATIONS': {},
}


def get_setting(key: str):
    """Read one key of the ``DATAGRID`` settings dict, falling back to defaults."""
    overrides = getattr(settings, 'DATAGRID', None) or {}
    return overrides.get(key, DEFAULTS[key])


def get_default_translator():
    path = get_setting('TRANSLATOR')
    if not path:
        return None
    try:
        translator_class = import_string(path)
    except ImportError as e:
        raise GroupActionConfigurationError(f"DATAGRID['TRANSLATOR'] cannot be imported: {e}") from e
    return translator_class(get_setting('TRANSLATIONS') or None)
