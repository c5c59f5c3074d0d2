from __future__ import annotations

import secrets
import string
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional, Sequence, Union

KEY_PREFIX = 'key_'
KEY_ALPHABET = string.digits + string.ascii_lowercase
KEY_BODY_LENGTH = 26
VISIBLE_PREFIX_LENGTH = 12
MASK = '•' * 15

# Column order used by the SQLite repository
COLUMNS = ('id', 'name', 'value', 'user_id', 'usage_count', 'max_usage', 'createdAt')


def generate_key_value() -> str:
    """Generate a new key value (``key_`` plus base-36 characters)."""
    body = ''.join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_BODY_LENGTH))
    return f"{KEY_PREFIX}{body}"


@dataclass
class ApiKeyRecord:
    id: Union[int, str]
    name: str
    value: str
    user_id: str
    usage_count: int = 0
    max_usage: int = 1
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Union[Mapping[str, Any], Sequence[Any]]) -> 'ApiKeyRecord':
        """Build a record from a store row (PostgREST dict or SQLite tuple)."""
        if not isinstance(row, Mapping):
            row = dict(zip(COLUMNS, row))
        return cls(
            id=row['id'],
            name=row['name'],
            value=row['value'],
            user_id=row['user_id'],
            usage_count=int(row.get('usage_count') or 0),
            max_usage=int(row['max_usage']),
            created_at=row.get('createdAt', row.get('created_at')),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['createdAt'] = data.pop('created_at')
        return data

    def masked_value(self) -> str:
        return f"{self.value[:VISIBLE_PREFIX_LENGTH]}{MASK}"

    def usage_percent(self) -> float:
        if self.max_usage <= 0:
            return 100.0
        return min(self.usage_count / self.max_usage * 100, 100.0)

    def is_exhausted(self) -> bool:
        return self.usage_count >= self.max_usage
