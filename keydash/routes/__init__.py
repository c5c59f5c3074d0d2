"""Routes package."""
from .api_keys import create_api_keys_blueprint
from .dashboard import create_dashboard_blueprint
from .health import create_health_blueprint

__all__ = [
    'create_api_keys_blueprint',
    'create_dashboard_blueprint',
    'create_health_blueprint',
]
