"""services package."""
from .api_key_service import ApiKeyService

__all__ = ['ApiKeyService']
