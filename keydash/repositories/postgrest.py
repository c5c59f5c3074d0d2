from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

import requests

from keydash.errors import StoreError
from keydash.models.api_key import ApiKeyRecord
from keydash.repositories.api_keys import check_update_fields

logger = logging.getLogger(__name__)


class PostgrestApiKeyRepository:
    """Repository for API key records stored in a hosted PostgREST (Supabase) table."""

    name = 'postgrest'

    def __init__(self, base_url: str, api_key: str, table: str = 'api_keys', timeout: float = 10.0):
        if not base_url:
            raise ValueError('SUPABASE_URL is required for the postgrest store')
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.table = table
        self.timeout = timeout

    @property
    def table_url(self) -> str:
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self, prefer: Optional[str] = None) -> dict[str, str]:
        headers = {
            'apikey': self.api_key,
            'Authorization': f'Bearer {self.api_key}',
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        if prefer:
            headers['Prefer'] = prefer
        return headers

    def _request(
        self,
        method: str,
        operation: str,
        params: Optional[list[tuple[str, str]]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> requests.Response:
        try:
            response = requests.request(
                method,
                self.table_url,
                params=params,
                json=json,
                headers=self._headers(prefer),
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response
        except requests.RequestException as e:
            raise StoreError(f"Store {operation} failed: {e}", operation=operation) from e

    @staticmethod
    def _owner_filter(key_id: Union[int, str], user_id: str) -> list[tuple[str, str]]:
        return [('id', f'eq.{key_id}'), ('user_id', f'eq.{user_id}')]

    def list_for_user(self, user_id: str, ascending: bool = True) -> list[ApiKeyRecord]:
        direction = 'asc' if ascending else 'desc'
        response = self._request(
            'GET',
            'select',
            params=[('select', '*'), ('user_id', f'eq.{user_id}'), ('order', f'name.{direction}')],
        )
        return [ApiKeyRecord.from_row(row) for row in (response.json() or [])]

    def get_for_user(self, key_id: Union[int, str], user_id: str) -> ApiKeyRecord | None:
        response = self._request('GET', 'select', params=[('select', '*'), *self._owner_filter(key_id, user_id)])
        rows = response.json() or []
        return ApiKeyRecord.from_row(rows[0]) if rows else None

    def create(self, fields: Mapping[str, Any]) -> ApiKeyRecord:
        response = self._request(
            'POST',
            'insert',
            params=[('select', '*')],
            json=[dict(fields)],
            prefer='return=representation',
        )
        rows = response.json() or []
        if not rows:
            raise StoreError('Store returned no row for insert', operation='insert')
        return ApiKeyRecord.from_row(rows[0])

    def update_for_user(self, key_id: Union[int, str], user_id: str, fields: Mapping[str, Any]) -> None:
        check_update_fields(fields)
        self._request('PATCH', 'update', params=self._owner_filter(key_id, user_id), json=dict(fields))

    def delete_for_user(self, key_id: Union[int, str], user_id: str) -> None:
        self._request('DELETE', 'delete', params=self._owner_filter(key_id, user_id))

    def ping(self) -> None:
        self._request('GET', 'ping', params=[('select', 'id'), ('limit', '1')])
