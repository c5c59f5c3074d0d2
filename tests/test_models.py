from __future__ import annotations

from keydash.models import ApiKeyRecord, generate_key_value


def test_generate_key_value_format():
    value = generate_key_value()
    assert value.startswith('key_')
    assert len(value) == 30
    assert value[4:].isalnum() and value[4:].lower() == value[4:]


def test_generated_values_differ():
    assert generate_key_value() != generate_key_value()


def test_from_sqlite_row_and_to_dict():
    key = ApiKeyRecord.from_row((1, 'name', 'key_x', 'dev-local', 2, 5, '2026-10-19 12:00:00'))
    assert key.usage_count == 2
    data = key.to_dict()
    assert data['createdAt'] == '2026-10-19 12:00:00'
    assert 'created_at' not in data


def test_from_mapping_defaults_usage_count():
    key = ApiKeyRecord.from_row({'id': 'u1', 'name': 'n', 'value': 'key_y', 'user_id': 'dev-local', 'usage_count': None, 'max_usage': 3})
    assert key.usage_count == 0
    assert key.created_at is None


def test_masked_value():
    key = ApiKeyRecord(id=1, name='n', value='key_abcdefghijklmnopqrstuvwxyz', user_id='dev-local', max_usage=1)
    assert key.masked_value() == 'key_abcdefgh' + '•' * 15


def test_usage_percent_is_capped():
    key = ApiKeyRecord(id=1, name='n', value='key_a', user_id='u', usage_count=15, max_usage=10)
    assert key.usage_percent() == 100.0
    assert key.is_exhausted() is True

    key.usage_count = 5
    assert key.usage_percent() == 50.0
    assert key.is_exhausted() is False
