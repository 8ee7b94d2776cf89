from __future__ import annotations

import enum
import logging
from typing import Any, Callable

from .exceptions import GroupActionConfigurationError, GroupActionError, GroupActionNotFound
from .forms import EMPTY_CHOICE_VALUES, FILLED, FormContainer, GridForm


logger = logging.getLogger(__name__)

CONTAINER_NAME = 'group_action'
CHOOSER_NAME = 'group_action'
EXECUTE_NAME = 'submit'
ID_ATTRIBUTE_PREFIX = 'group_action_item_'

BUTTON_CLASS = 'btn btn-sm btn-success'
CONTROL_CLASS = 'form-control input-sm form-control-sm'


class GroupActionKind(enum.Enum):
    BUTTON = 'button'
    SELECT = 'select'
    MULTI_SELECT = 'multiselect'
    TEXT = 'text'
    TEXTAREA = 'textarea'


class GroupAction:
    """One bulk operation offered for the selected rows of a grid.

    Everything except the two callbacks is fixed at construction.
    ``on_click(ids)`` serves buttons, ``on_select(ids, value)`` every
    other kind.
    """

    def __init__(
        self,
        kind: GroupActionKind,
        title: str,
        *,
        options: dict | None = None,
        css_class: str | None = None,
        attributes: dict[str, str] | None = None,
    ):
        self._kind = kind
        self._title = title
        self._options = dict(options or {})
        if css_class is None:
            css_class = BUTTON_CLASS if kind is GroupActionKind.BUTTON else CONTROL_CLASS
        self._css_class = css_class
        self._attributes = dict(attributes or {})
        self.on_click: Callable[[list[str]], Any] | None = None
        self.on_select: Callable[[list[str], Any], Any] | None = None

    @property
    def kind(self) -> GroupActionKind:
        return self._kind

    @property
    def title(self) -> str:
        return self._title

    @property
    def css_class(self) -> str | None:
        return self._css_class

    @property
    def attributes(self) -> dict[str, str]:
        return dict(self._attributes)

    @property
    def options(self) -> dict:
        return dict(self._options)

    @property
    def is_button(self) -> bool:
        return self._kind is GroupActionKind.BUTTON

    def has_options(self) -> bool:
        return bool(self._options)

    def __repr__(self):
        return f"<GroupAction {self._kind.value} {self._title!r}>"


class GroupActionCollection:
    """Ordered registry of the group actions of one grid.

    Also binds the actions to the grid's page form and dispatches
    submissions back to the action callbacks.
    """

    def __init__(self, datagrid):
        self.datagrid = datagrid
        self._actions: dict[int, GroupAction] = {}
        self._last_id = 0

    def __len__(self):
        return len(self._actions)

    def __iter__(self):
        return iter(self._actions.items())

    def has_actions(self) -> bool:
        return bool(self._actions)

    def _register(self, action: GroupAction) -> GroupAction:
        self._last_id += 1
        self._actions[self._last_id] = action
        return action

    def add_button_action(self, title, css_class=None, attributes=None) -> GroupAction:
        return self._register(
            GroupAction(GroupActionKind.BUTTON, title, css_class=css_class, attributes=attributes)
        )

    def add_select_action(self, title, options, attributes=None) -> GroupAction:
        return self._register(
            GroupAction(GroupActionKind.SELECT, title, options=options, attributes=attributes)
        )

    def add_multi_select_action(self, title, options, attributes=None) -> GroupAction:
        return self._register(
            GroupAction(GroupActionKind.MULTI_SELECT, title, options=options, attributes=attributes)
        )

    def add_text_action(self, title, attributes=None) -> GroupAction:
        return self._register(GroupAction(GroupActionKind.TEXT, title, attributes=attributes))

    def add_textarea_action(self, title, attributes=None) -> GroupAction:
        return self._register(GroupAction(GroupActionKind.TEXTAREA, title, attributes=attributes))

    def get_action_by_title(self, title: str) -> GroupAction:
        for action in self._actions.values():
            if action.title == title:
                return action
        raise GroupActionNotFound(f"Group action {title} does not exist.")

    def get_action(self, action_id) -> GroupAction:
        try:
            return self._actions[int(action_id)]
        except (KeyError, TypeError, ValueError):
            raise GroupActionError(
                f"Submitted group action {action_id!r} is not registered on grid {self.datagrid.full_name!r}."
            ) from None

    @property
    def container_prefix(self) -> str:
        """Form prefix of the group action fields, unique per grid on a page."""
        return f"{self.datagrid.full_name.lower()}-{CONTAINER_NAME}"

    @property
    def execute_html_id(self) -> str:
        return f"{self.datagrid.full_name.lower()}group_action_submit"

    def add_to_form_container(self, container: FormContainer) -> None:
        form = container.parent
        translator = form.translator
        if translator is None:
            raise GroupActionConfigurationError(
                f"Grid {self.datagrid.full_name!r} needs a translator to render group actions."
            )

        # Buttons first so they never end up in the chooser.
        for action_id, action in self._actions.items():
            if action.is_button:
                control = container.add_submit(str(action_id), action.title)
                self._apply_attributes(control, action)

        main_options = {
            action_id: action.title
            for action_id, action in self._actions.items()
            if not action.is_button
        }

        chooser = None
        if main_options:
            chooser = container.add_select(
                CHOOSER_NAME, '', main_options, prompt=translator.translate('datagrid.choose')
            )

        for action_id, action in self._actions.items():
            name = str(action_id)
            control = None

            if action.kind is GroupActionKind.SELECT:
                if action.has_options():
                    control = container.add_select(name, '', action.options)
            elif action.kind is GroupActionKind.MULTI_SELECT:
                if action.has_options():
                    control = container.add_multi_select(name, '', action.options)
                    control.widget.attrs.update({
                        'data-datagrid-multiselect-id': ID_ATTRIBUTE_PREFIX + name,
                        'data-style': 'hidden',
                        'data-selected-icon-check': self.datagrid.icon_prefix + 'check',
                    })
            elif action.kind in (GroupActionKind.TEXT, GroupActionKind.TEXTAREA):
                if action.kind is GroupActionKind.TEXT:
                    control = container.add_text(name, '')
                else:
                    control = container.add_textarea(name, '')
                container.add_condition_on(
                    name,
                    CHOOSER_NAME,
                    name,
                    translator.translate('datagrid.choose_input_required'),
                )

            if control is not None:
                control.widget.attrs['id'] = ID_ATTRIBUTE_PREFIX + name
                self._apply_attributes(control, action)

        if chooser is not None:
            for action_id in self._actions:
                container.add_toggle(CHOOSER_NAME, ID_ATTRIBUTE_PREFIX + str(action_id), value=action_id)
            container.add_toggle(CHOOSER_NAME, self.execute_html_id, operator=FILLED)

            execute = container.add_submit(
                EXECUTE_NAME,
                translator.translate('datagrid.execute'),
                validation_scope=[container],
            )
            execute.widget.attrs['id'] = self.execute_html_id

        form.on_submit.append(self.submitted)

    @staticmethod
    def _apply_attributes(control, action: GroupAction) -> None:
        if action.css_class:
            control.widget.attrs['class'] = action.css_class
        control.widget.attrs.update(action.attributes)

    def get_selected_ids(self, form: GridForm) -> list[str]:
        """Row ids ticked in the grid, in order and without duplicates.

        Row checkboxes are rendered per visible row and are not fields of the
        form, so they are read from the raw submitted data.
        """
        raw = form.get_http_data(self.datagrid.group_action_item_key + '[]')
        return list(dict.fromkeys(raw))

    def submitted(self, form: GridForm) -> None:
        """Pass a submission of the page form on to the fired action."""
        container = form.containers.get(CONTAINER_NAME)
        if container is None:
            return

        submitter = self._get_form_submitter(container)
        if submitter is None:
            logger.debug("Grid %s submitted without a group action", self.datagrid.full_name)
            return

        if submitter == EXECUTE_NAME and container.get_value(CHOOSER_NAME) in EMPTY_CHOICE_VALUES:
            logger.debug("Grid %s: group action executed with nothing chosen", self.datagrid.full_name)
            return

        ids = self.get_selected_ids(form)

        if submitter == EXECUTE_NAME:
            if not container.is_valid_for(EXECUTE_NAME):
                logger.warning(
                    "Grid %s: group action not executed, invalid input: %s",
                    self.datagrid.full_name,
                    container.errors.as_json(),
                )
                return

            action_id = container.get_value(CHOOSER_NAME)
            action = self.get_action(action_id)
            if action.is_button:
                raise GroupActionError(f"Group action {action.title!r} is a button and cannot be chosen.")

            value = container.get_value(str(action_id)) if str(action_id) in container.fields else None
            logger.info(
                "Grid %s: running group action %r on %d row(s)",
                self.datagrid.full_name, action.title, len(ids),
            )
            if action.on_select is not None:
                action.on_select(ids, value)
            container.set_value(CHOOSER_NAME, None)
        else:
            action = self.get_action(submitter)
            if not action.is_button:
                raise GroupActionError(f"Group action {action.title!r} is not a button.")

            logger.info(
                "Grid %s: running group action %r on %d row(s)",
                self.datagrid.full_name, action.title, len(ids),
            )
            if action.on_click is not None:
                action.on_click(ids)

    def _get_form_submitter(self, container: FormContainer) -> str | None:
        if EXECUTE_NAME in container.fields and container.is_submitted_by(EXECUTE_NAME):
            return EXECUTE_NAME

        for name, _field in container.submit_buttons():
            if container.is_submitted_by(name):
                return name

        return None
