from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from keydash.models.api_key import ApiKeyRecord

EMPTY_MESSAGE = 'No API keys found. Create one to get started.'
LOADING_MESSAGE = 'Loading...'


@dataclass
class ApiKeyRow:
    key: ApiKeyRecord
    visible: bool
    editing: bool

    @property
    def id(self):
        return self.key.id

    @property
    def display_value(self) -> str:
        return self.key.value if self.visible else self.key.masked_value()

    @property
    def usage_text(self) -> str:
        return f"{self.key.usage_count} / {self.key.max_usage}"

    @property
    def usage_percent(self) -> float:
        return self.key.usage_percent()

    @property
    def exhausted(self) -> bool:
        return self.key.is_exhausted()

    @property
    def visibility_title(self) -> str:
        return 'Hide API Key' if self.visible else 'Show API Key'


def build_table(
    api_keys: Iterable[ApiKeyRecord],
    visible_ids: Iterable[Union[int, str]] = (),
    editing_id: Optional[Union[int, str]] = None,
) -> list[ApiKeyRow]:
    """Turn records into rows; order is kept exactly as given."""
    visible = {str(key_id) for key_id in visible_ids}
    editing = str(editing_id) if editing_id is not None else None
    return [
        ApiKeyRow(key=key, visible=str(key.id) in visible, editing=str(key.id) == editing)
        for key in api_keys
    ]


def toggle_visible(visible_ids: Iterable[Union[int, str]], key_id: Union[int, str]) -> list[str]:
    """Return revealed ids with key_id flipped."""
    ids = [str(v) for v in visible_ids]
    key_id = str(key_id)
    if key_id in ids:
        return [v for v in ids if v != key_id]
    return [*ids, key_id]


def sort_icon(sort_order: str) -> str:
    return 'up' if sort_order == 'asc' else 'down'


def empty_message(is_loading: bool) -> str:
    return LOADING_MESSAGE if is_loading else EMPTY_MESSAGE
