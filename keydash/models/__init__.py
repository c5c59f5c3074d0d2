from .api_key import ApiKeyRecord, generate_key_value

__all__ = ['ApiKeyRecord', 'generate_key_value']
