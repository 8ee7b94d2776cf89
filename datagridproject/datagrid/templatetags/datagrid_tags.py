from django import template

register = template.Library()


@register.filter(name='group_action_toggles')
def group_action_toggles(container):
    """JSON list of the visibility rules of a grid form container.

    Usage: <div data-datagrid-toggles="{{ form.containers.group_action|group_action_toggles }}">
    """
    try:
        return container.toggles_as_json()
    except AttributeError:
        return '[]'


@register.filter(name='group_action_visible')
def group_action_visible(container, target):
    """True when the toggle rules of ``container`` currently reveal ``target``.

    Usage: {% if form.containers.group_action|group_action_visible:"group_action_item_2" %}
    """
    try:
        return target in container.visible_targets()
    except AttributeError:
        return False


@register.simple_tag
def group_action_item_name(grid, row_id):
    """Name of the row selection checkbox for ``row_id``."""
    return grid.group_action_item_name(row_id)


@register.filter(name='group_action_required_rules')
def group_action_required_rules(container):
    """JSON list of the conditional required rules of a grid form container."""
    try:
        return container.required_rules_as_json()
    except AttributeError:
        return '[]'
