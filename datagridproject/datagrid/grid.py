from __future__ import annotations

import logging

from django.http import HttpRequest

from .conf import get_default_translator, get_setting
from .forms import GridForm
from .group_actions import CONTAINER_NAME, GroupAction, GroupActionCollection


logger = logging.getLogger(__name__)


class DataGrid:
    """Server side part of a data grid component.

    ``name`` identifies the grid on its page; nested grids pass the full
    name of their parent component so that field names stay unique.
    """

    def __init__(self, name: str, parent_name: str | None = None, *, translator=None):
        self.name = name
        self.parent_name = parent_name
        self.translator = translator if translator is not None else get_default_translator()
        self.icon_prefix = get_setting('ICON_PREFIX')
        self._group_actions: GroupActionCollection | None = None

    @property
    def full_name(self) -> str:
        if self.parent_name:
            return f"{self.parent_name}-{self.name}"
        return self.name

    @property
    def group_action_item_key(self) -> str:
        """Name of the per row checkboxes, without the ``[<id>]`` suffix."""
        return f"{self.full_name.lower()}_group_action_item"

    def group_action_item_name(self, row_id) -> str:
        return f"{self.group_action_item_key}[{row_id}]"

    @property
    def group_actions(self) -> GroupActionCollection:
        if self._group_actions is None:
            self._group_actions = GroupActionCollection(self)
        return self._group_actions

    def has_group_actions(self) -> bool:
        return self._group_actions is not None and self._group_actions.has_actions()

    def add_group_button_action(self, title, css_class=None, attributes=None) -> GroupAction:
        return self.group_actions.add_button_action(title, css_class, attributes)

    def add_group_select_action(self, title, options, attributes=None) -> GroupAction:
        return self.group_actions.add_select_action(title, options, attributes)

    def add_group_multi_select_action(self, title, options, attributes=None) -> GroupAction:
        return self.group_actions.add_multi_select_action(title, options, attributes)

    def add_group_text_action(self, title, attributes=None) -> GroupAction:
        return self.group_actions.add_text_action(title, attributes)

    def add_group_textarea_action(self, title, attributes=None) -> GroupAction:
        return self.group_actions.add_textarea_action(title, attributes)

    def get_group_action(self, title: str) -> GroupAction:
        return self.group_actions.get_action_by_title(title)

    def create_form(self, data=None, files=None) -> GridForm:
        form = GridForm(data, files, translator=self.translator)
        if self.has_group_actions():
            container = form.add_container(CONTAINER_NAME, prefix=self.group_actions.container_prefix)
            self.group_actions.add_to_form_container(container)
        return form

    def handle_request(self, request: HttpRequest) -> GridForm:
        """Build the grid form for ``request`` and run its submit handlers on POST.

        The returned form carries any validation errors for re-rendering.
        """
        if request.method != 'POST':
            return self.create_form()

        form = self.create_form(request.POST, request.FILES)
        form.fire_submit()
        return form
