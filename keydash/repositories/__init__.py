"""repositories package."""
from __future__ import annotations

from functools import partial

from keydash.db import get_db

from .api_keys import ApiKeyRepository
from .postgrest import PostgrestApiKeyRepository

STORE_BACKENDS = ('sqlite', 'postgrest')


def create_api_key_repository(config):
    """Build the record store selected by STORE_BACKEND."""
    backend = config['STORE_BACKEND']
    if backend == 'postgrest':
        return PostgrestApiKeyRepository(
            config['SUPABASE_URL'],
            config['SUPABASE_KEY'],
            timeout=config['STORE_TIMEOUT_SECONDS'],
        )
    if backend == 'sqlite':
        return ApiKeyRepository(partial(get_db, config['DATABASE_PATH']))
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}; use one of: {', '.join(STORE_BACKENDS)}")


__all__ = [
    'ApiKeyRepository',
    'PostgrestApiKeyRepository',
    'STORE_BACKENDS',
    'create_api_key_repository',
]
