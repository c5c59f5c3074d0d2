from __future__ import annotations

from typing import Any, Mapping, Union

from keydash.errors import StoreError
from keydash.models.api_key import ApiKeyRecord
from keydash.repositories.base import BaseRepository

UPDATABLE_COLUMNS = ('name', 'value', 'max_usage', 'usage_count')

SELECT_COLUMNS = 'id, name, value, user_id, usage_count, max_usage, "createdAt"'


def check_update_fields(fields: Mapping[str, Any]) -> None:
    """Reject updates touching columns other than the editable ones."""
    if not fields:
        raise ValueError('No fields to update')
    unknown = sorted(set(fields) - set(UPDATABLE_COLUMNS))
    if unknown:
        raise ValueError(f"Cannot update column(s): {', '.join(unknown)}")


class ApiKeyRepository(BaseRepository):
    """SQLite repository for API key records."""

    name = 'sqlite'

    def list_for_user(self, user_id: str, ascending: bool = True) -> list[ApiKeyRecord]:
        direction = 'ASC' if ascending else 'DESC'
        with self._cursor('select') as cursor:
            cursor.execute(
                f'''
                SELECT {SELECT_COLUMNS}
                FROM api_keys
                WHERE user_id = ?
                ORDER BY name COLLATE NOCASE {direction}, id {direction}
                ''',
                (user_id,),
            )
            return [ApiKeyRecord.from_row(row) for row in cursor.fetchall()]

    def get_for_user(self, key_id: Union[int, str], user_id: str) -> ApiKeyRecord | None:
        with self._cursor('select') as cursor:
            cursor.execute(
                f'SELECT {SELECT_COLUMNS} FROM api_keys WHERE id = ? AND user_id = ?',
                (key_id, user_id),
            )
            row = cursor.fetchone()
            return ApiKeyRecord.from_row(row) if row else None

    def create(self, fields: Mapping[str, Any]) -> ApiKeyRecord:
        with self._cursor('insert') as cursor:
            cursor.execute(
                '''
                INSERT INTO api_keys (name, value, user_id, usage_count, max_usage)
                VALUES (?, ?, ?, ?, ?)
                ''',
                (
                    fields['name'],
                    fields['value'],
                    fields['user_id'],
                    fields.get('usage_count', 0),
                    fields['max_usage'],
                ),
            )
            key_id = cursor.lastrowid
            cursor.execute(f'SELECT {SELECT_COLUMNS} FROM api_keys WHERE id = ?', (key_id,))
            row = cursor.fetchone()
        if row is None:
            raise StoreError('Inserted row could not be read back', operation='insert')
        return ApiKeyRecord.from_row(row)

    def update_for_user(self, key_id: Union[int, str], user_id: str, fields: Mapping[str, Any]) -> None:
        check_update_fields(fields)
        assignments = ', '.join(f'{column} = ?' for column in fields)
        with self._cursor('update') as cursor:
            cursor.execute(
                f'UPDATE api_keys SET {assignments} WHERE id = ? AND user_id = ?',
                (*fields.values(), key_id, user_id),
            )

    def delete_for_user(self, key_id: Union[int, str], user_id: str) -> None:
        with self._cursor('delete') as cursor:
            cursor.execute('DELETE FROM api_keys WHERE id = ? AND user_id = ?', (key_id, user_id))

    def ping(self) -> None:
        with self._cursor('ping') as cursor:
            cursor.execute('SELECT 1')
