import json

from django.template import Context, Template

from datagrid.grid import DataGrid
from datagrid.templatetags.datagrid_tags import (
    group_action_required_rules,
    group_action_toggles,
    group_action_visible,
)


def _container(data=None):
    grid = DataGrid('grid')
    grid.add_group_button_action('Delete')
    grid.add_group_select_action('Export', {'csv': 'CSV'})
    return grid, grid.create_form(data).containers['group_action']


def test_toggles_filter_exports_rule_table():
    _grid, container = _container()
    rules = json.loads(group_action_toggles(container))
    assert rules[0] == {'source': 'group_action', 'target': 'group_action_item_1', 'operator': 'equal', 'value': '1'}
    assert rules[-1]['operator'] == 'filled'


def test_toggles_filter_tolerates_missing_container():
    assert group_action_toggles(None) == '[]'
    assert group_action_visible(None, 'group_action_item_1') is False


def test_visible_filter_reflects_submitted_choice():
    _grid, container = _container({'grid-group_action-group_action': '2'})
    assert group_action_visible(container, 'group_action_item_2')
    assert not group_action_visible(container, 'group_action_item_1')


def test_row_checkbox_tag_renders_name():
    grid, _container_ = _container()
    template = Template('{% load datagrid_tags %}{% group_action_item_name grid row_id %}')
    assert template.render(Context({'grid': grid, 'row_id': 12})) == 'grid_group_action_item[12]'


def test_required_rules_filter_uses_posted_names():
    grid = DataGrid('Users')
    grid.add_group_text_action('Rename')
    container = grid.create_form().containers['group_action']
    rules = json.loads(group_action_required_rules(container))
    assert rules == [{
        'field': 'users-group_action-1',
        'source': 'users-group_action-group_action',
        'value': '1',
        'message': 'Group action text not filled',
    }]
    assert group_action_required_rules(None) == '[]'
