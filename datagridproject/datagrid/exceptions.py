from django.core.exceptions import ImproperlyConfigured


class DataGridException(Exception):
    pass


class GroupActionError(DataGridException):
    """Raised when a submitted form and the group action registry disagree."""


class GroupActionNotFound(GroupActionError, LookupError):
    pass


class GroupActionConfigurationError(DataGridException, ImproperlyConfigured):
    """The grid was rendered without the services group actions depend on."""
