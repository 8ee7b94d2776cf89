import pytest
from django.test import SimpleTestCase

from datagrid.exceptions import GroupActionNotFound
from datagrid.grid import DataGrid
from datagrid.group_actions import BUTTON_CLASS, CONTROL_CLASS, GroupActionKind


class GroupActionRegistryTests(SimpleTestCase):
    def setUp(self):
        self.grid = DataGrid('grid')
        self.actions = self.grid.group_actions

    def test_ids_follow_insertion_order_across_kinds(self):
        self.actions.add_button_action('Delete')
        self.actions.add_select_action('Export', {'csv': 'CSV'})
        self.actions.add_multi_select_action('Tag', {'a': 'A'})
        self.actions.add_text_action('Rename')
        self.actions.add_textarea_action('Note')

        registered = [(action_id, action.kind) for action_id, action in self.actions]
        self.assertEqual(registered, [
            (1, GroupActionKind.BUTTON),
            (2, GroupActionKind.SELECT),
            (3, GroupActionKind.MULTI_SELECT),
            (4, GroupActionKind.TEXT),
            (5, GroupActionKind.TEXTAREA),
        ])
        self.assertEqual(len(self.actions), 5)

    def test_add_returns_the_registered_action(self):
        export = self.actions.add_select_action('Export', {'csv': 'CSV', 'xls': 'Excel'})
        self.assertIs(self.actions.get_action(1), export)
        self.assertIs(self.actions.get_action('1'), export)
        self.assertEqual(export.options, {'csv': 'CSV', 'xls': 'Excel'})
        self.assertTrue(export.has_options())

    def test_title_lookup_returns_first_match(self):
        first = self.actions.add_button_action('Archive')
        self.actions.add_text_action('Archive')
        self.assertIs(self.actions.get_action_by_title('Archive'), first)

    def test_title_lookup_is_exact(self):
        self.actions.add_button_action('Archive')
        with self.assertRaises(GroupActionNotFound):
            self.actions.get_action_by_title('archive')
        with self.assertRaises(LookupError):
            self.actions.get_action_by_title('Missing')

    def test_default_classes_depend_on_kind(self):
        button = self.actions.add_button_action('Delete')
        styled = self.actions.add_button_action('Publish', 'btn btn-primary')
        text = self.actions.add_text_action('Rename')
        self.assertEqual(button.css_class, BUTTON_CLASS)
        self.assertEqual(styled.css_class, 'btn btn-primary')
        self.assertEqual(text.css_class, CONTROL_CLASS)

    def test_attributes_are_copied(self):
        attrs = {'data-confirm': 'Sure?'}
        action = self.actions.add_button_action('Delete', attributes=attrs)
        attrs['data-confirm'] = 'changed'
        action.attributes['data-confirm'] = 'changed too'
        self.assertEqual(action.attributes, {'data-confirm': 'Sure?'})

    def test_grid_delegates_to_collection(self):
        self.assertFalse(self.grid.has_group_actions())
        action = self.grid.add_group_textarea_action('Note')
        self.assertTrue(self.grid.has_group_actions())
        self.assertIs(self.grid.get_group_action('Note'), action)


def test_empty_grid_has_no_group_actions():
    grid = DataGrid('grid')
    assert not grid.has_group_actions()
    assert len(grid.group_actions) == 0
    with pytest.raises(GroupActionNotFound):
        grid.get_group_action('Delete')
