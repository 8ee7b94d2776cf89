from __future__ import annotations

from django.utils.translation import gettext, gettext_lazy as _


DEFAULT_MESSAGES = {
    'datagrid.choose': _('Choose'),
    'datagrid.execute': _('Do'),
    'datagrid.choose_input_required': _('Group action text not filled'),
}


class SimpleTranslator:
    """Key based translator used by grid forms.

    Known keys resolve to lazily translated default messages, which may be
    overridden per project with ``DATAGRID['TRANSLATIONS']``. Unknown keys are
    passed through ``gettext`` unchanged so plain strings keep working.
    """

    def __init__(self, dictionary: dict[str, str] | None = None):
        self.dictionary = dict(DEFAULT_MESSAGES)
        if dictionary:
            self.dictionary.update(dictionary)

    def translate(self, key) -> str:
        message = self.dictionary.get(str(key))
        if message is None:
            return gettext(str(key))
        return str(message)

