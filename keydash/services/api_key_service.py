from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Union

from keydash.errors import StoreError
from keydash.models.api_key import ApiKeyRecord, generate_key_value

logger = logging.getLogger(__name__)

Notify = Optional[Callable[[str], None]]


class ApiKeyService:
    """Owns the in-memory list of key records and mediates every store call.

    Store failures never propagate: they are logged and reported once through
    ``on_error``. Successful mutations are mirrored into ``api_keys`` and
    reported through ``on_success``.
    """

    def __init__(self, repo, user_id: str, on_success: Notify = None, on_error: Notify = None):
        self._repo = repo
        self.user_id = user_id
        self._on_success = on_success
        self._on_error = on_error
        self.api_keys: list[ApiKeyRecord] = []
        self.is_loading = True

    def _success(self, message: str) -> None:
        if self._on_success:
            self._on_success(message)

    def _error(self, message: str) -> None:
        if self._on_error:
            self._on_error(message)

    def find(self, key_id: Union[int, str]) -> ApiKeyRecord | None:
        for key in self.api_keys:
            if str(key.id) == str(key_id):
                return key
        return None

    def fetch(self, sort_order: str = 'asc') -> list[ApiKeyRecord]:
        """Load all records for the user ordered by name; keeps prior state on failure."""
        try:
            self.is_loading = True
            self.api_keys = self._repo.list_for_user(self.user_id, ascending=sort_order == 'asc')
        except StoreError as e:
            logger.error(f"Failed to fetch API keys: {e}")
            self._error('Failed to fetch API keys')
        finally:
            self.is_loading = False
        return self.api_keys

    def get(self, key_id: Union[int, str]) -> ApiKeyRecord | None:
        """Load one of the user's records and track it in ``api_keys``."""
        try:
            record = self._repo.get_for_user(key_id, self.user_id)
        except StoreError as e:
            logger.error(f"Failed to fetch API key {key_id}: {e}")
            self._error('Failed to fetch API key')
            return None

        if record is not None:
            self.api_keys = [record, *(key for key in self.api_keys if str(key.id) != str(record.id))]
        return record

    def create(self, name: str, max_usage: int) -> ApiKeyRecord | None:
        new_key = {
            'name': name.strip(),
            'value': generate_key_value(),
            'user_id': self.user_id,
            'usage_count': 0,
            'max_usage': max_usage,
        }
        try:
            record = self._repo.create(new_key)
        except StoreError as e:
            logger.error(f"Failed to create API key: {e}")
            self._error('Failed to create API key')
            return None

        self.api_keys = [record, *self.api_keys]
        logger.info(f"API key created: {record.id} ({record.name})")
        self._success('API key created successfully')
        return record

    def update(
        self,
        key_id: Union[int, str],
        updates: Mapping[str, Any],
        success_message: str = 'API key updated successfully',
    ) -> bool:
        try:
            self._repo.update_for_user(key_id, self.user_id, updates)
        except StoreError as e:
            logger.error(f"Failed to update API key {key_id}: {e}")
            self._error('Failed to update API key')
            return False

        key = self.find(key_id)
        if key is not None:
            for field, value in updates.items():
                setattr(key, field, value)
        logger.info(f"API key updated: {key_id} ({', '.join(updates)})")
        self._success(success_message)
        return True

    def regenerate(self, key_id: Union[int, str]) -> bool:
        """Replace the key value; id, name and usage fields stay as they are."""
        return self.update(
            key_id,
            {'value': generate_key_value()},
            success_message='API key regenerated successfully',
        )

    def delete(self, key_id: Union[int, str]) -> bool:
        try:
            self._repo.delete_for_user(key_id, self.user_id)
        except StoreError as e:
            logger.error(f"Failed to delete API key {key_id}: {e}")
            self._error('Failed to delete API key')
            return False

        self.api_keys = [key for key in self.api_keys if str(key.id) != str(key_id)]
        logger.info(f"API key deleted: {key_id}")
        self._success('API key deleted successfully')
        return True
