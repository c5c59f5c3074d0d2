"""View models and forms rendered by the dashboard templates."""
from .forms import CreateKeyForm, RenameKeyForm
from .table import ApiKeyRow, build_table, sort_icon, toggle_visible

__all__ = [
    'ApiKeyRow',
    'CreateKeyForm',
    'RenameKeyForm',
    'build_table',
    'sort_icon',
    'toggle_visible',
]
