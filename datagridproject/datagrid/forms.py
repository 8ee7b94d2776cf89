from __future__ import annotations

import json
import logging
import re
from dataclasses import asdict, dataclass

from django import forms
from django.core.validators import EMPTY_VALUES


logger = logging.getLogger(__name__)

EQUAL = 'equal'
FILLED = 'filled'

# Chooser values meaning "nothing selected".
EMPTY_CHOICE_VALUES = EMPTY_VALUES + ('0',)


@dataclass(frozen=True)
class ToggleRule:
    """Show the element with HTML id ``target`` while ``source`` matches.

    Rules are evaluated client side; ``matches`` mirrors that evaluation so
    the server can reason about what the user saw.
    """
    source: str
    target: str
    operator: str = EQUAL
    value: str | None = None

    def matches(self, value) -> bool:
        if self.operator == FILLED:
            return value not in EMPTY_CHOICE_VALUES
        return value is not None and str(value) == str(self.value)


@dataclass(frozen=True)
class RequiredRule:
    """``field`` must be filled whenever ``source`` equals ``value``."""
    field: str
    source: str
    value: str
    message: str


class SubmitInput(forms.widgets.Input):
    input_type = 'submit'

    def __init__(self, caption='', attrs=None):
        super().__init__(attrs)
        self.caption = caption

    def format_value(self, value):
        # A submit button always renders its caption, never the posted value.
        return str(self.caption)


class SubmitButton(forms.Field):
    """Named submit button taking part in a form like any other field.

    ``validation_scope`` lists the containers that must validate when this
    button submits the page form. ``None`` means the whole page form.
    """

    def __init__(self, caption='', *, validation_scope=None, **kwargs):
        kwargs.setdefault('required', False)
        kwargs.setdefault('label', '')
        super().__init__(widget=SubmitInput(caption), **kwargs)
        self.caption = caption
        self.validation_scope = validation_scope


class FormContainer(forms.Form):
    """A prefixed sub form of a :class:`GridForm`.

    Fields are added at runtime with the ``add_*`` helpers. Conditional
    required rules are enforced in ``clean``; both rule tables are exported
    as JSON for the client.
    """

    def __init__(self, name: str, parent: GridForm, data=None, files=None, *, prefix=None, **kwargs):
        super().__init__(data=data, files=files, prefix=prefix or name, **kwargs)
        self.name = name
        self.parent = parent
        self.toggles: list[ToggleRule] = []
        self.required_rules: list[RequiredRule] = []

    def _add(self, name, field):
        self.fields[str(name)] = field
        return field

    def add_submit(self, name, caption='', *, validation_scope=None) -> SubmitButton:
        return self._add(name, SubmitButton(caption, validation_scope=validation_scope))

    def add_select(self, name, label='', choices=None, *, prompt=None) -> forms.ChoiceField:
        options = [(str(value), text) for value, text in (choices or {}).items()]
        if prompt is not None:
            options.insert(0, ('', prompt))
        return self._add(name, forms.ChoiceField(label=label, choices=options, required=False))

    def add_multi_select(self, name, label='', choices=None) -> forms.MultipleChoiceField:
        options = [(str(value), text) for value, text in (choices or {}).items()]
        return self._add(name, forms.MultipleChoiceField(label=label, choices=options, required=False))

    def add_text(self, name, label='') -> forms.CharField:
        return self._add(name, forms.CharField(label=label, required=False))

    def add_textarea(self, name, label='') -> forms.CharField:
        return self._add(name, forms.CharField(label=label, required=False, widget=forms.Textarea))

    def add_condition_on(self, name, source, value, message) -> RequiredRule:
        rule = RequiredRule(field=str(name), source=str(source), value=str(value), message=str(message))
        self.required_rules.append(rule)
        return rule

    def add_toggle(self, source, target, *, value=None, operator=EQUAL) -> ToggleRule:
        rule = ToggleRule(
            source=str(source),
            target=target,
            operator=operator,
            value=None if value is None else str(value),
        )
        self.toggles.append(rule)
        return rule

    def clean(self):
        cleaned = super().clean()
        for rule in self.required_rules:
            if str(cleaned.get(rule.source) or '') != rule.value:
                continue
            if cleaned.get(rule.field) in EMPTY_VALUES:
                self.add_error(rule.field, rule.message)
        return cleaned

    def submit_buttons(self):
        for name, field in self.fields.items():
            if isinstance(field, SubmitButton):
                yield name, field

    def is_submitted_by(self, name) -> bool:
        if not self.is_bound:
            return False
        if not isinstance(self.fields.get(name), SubmitButton):
            return False
        return self.add_prefix(name) in self.data

    def is_valid_for(self, name) -> bool:
        """Validate the containers in the scope of submit button ``name``."""
        scope = self.fields[name].validation_scope
        if scope is None:
            return self.parent.is_valid()
        return all(container.is_valid() for container in scope)

    def get_value(self, name):
        """Cleaned value once validated, raw widget value before that."""
        cleaned = getattr(self, 'cleaned_data', None)
        if cleaned is not None and name in cleaned:
            return cleaned[name]
        field = self.fields.get(name)
        if field is None:
            return None
        return field.widget.value_from_datadict(self.data, self.files, self.add_prefix(name))

    def set_value(self, name, value) -> None:
        if self.is_bound:
            data = self.data.copy()
            data[self.add_prefix(name)] = '' if value is None else value
            self.data = data
        self.initial[name] = value
        cleaned = getattr(self, 'cleaned_data', None)
        if cleaned is not None:
            cleaned[name] = '' if value is None else value

    def visible_targets(self) -> list[str]:
        """HTML ids the toggle rules currently reveal."""
        return [
            rule.target for rule in self.toggles
            if rule.matches(self.get_value(rule.source))
        ]

    def toggles_as_json(self) -> str:
        return json.dumps([asdict(rule) for rule in self.toggles])

    def required_rules_as_json(self) -> str:
        """Conditional required rules, keyed by posted field names for the client."""
        return json.dumps([
            {
                **asdict(rule),
                'field': self.add_prefix(rule.field),
                'source': self.add_prefix(rule.source),
            }
            for rule in self.required_rules
        ])


class GridForm(forms.Form):
    """Page form of a grid.

    Holds the translator used for captions and messages, the named
    containers and the ``on_submit`` handlers fired for every submission
    whichever button was pressed.
    """

    def __init__(self, data=None, files=None, *, translator=None, **kwargs):
        super().__init__(data, files, **kwargs)
        self.translator = translator
        self.containers: dict[str, FormContainer] = {}
        self.on_submit: list = []

    def add_container(self, name: str, *, prefix: str | None = None) -> FormContainer:
        """Add a sub form; ``prefix`` namespaces its posted field names."""
        container = FormContainer(
            name,
            self,
            prefix=prefix,
            data=self.data if self.is_bound else None,
            files=self.files if self.is_bound else None,
        )
        self.containers[name] = container
        return container

    def is_valid(self):
        valid = super().is_valid()
        return all([valid] + [container.is_valid() for container in self.containers.values()])

    def get_http_data(self, key: str) -> list[str]:
        """Raw submitted values for ``key``, bypassing field binding.

        A key ending in ``[]`` collects the values posted as ``name[]`` and
        the bracketed keys of ``name[<key>]`` entries, in submission order.
        """
        data = self.data
        if not key.endswith('[]'):
            return _getlist(data, key)

        pattern = re.compile(r'^%s\[([^\]]+)\]$' % re.escape(key[:-2]))
        found = []
        for name in data.keys():
            if name == key:
                found.extend(_getlist(data, name))
                continue
            match = pattern.match(name)
            if match:
                found.append(match.group(1))
        return found

    def fire_submit(self) -> None:
        if not self.is_bound:
            return
        logger.debug("Firing %d submit handler(s)", len(self.on_submit))
        for handler in list(self.on_submit):
            handler(self)


def _getlist(data, key):
    if hasattr(data, 'getlist'):
        return [str(v) for v in data.getlist(key)]
    value = data.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]
