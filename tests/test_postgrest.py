"""Tests for the hosted PostgREST record store."""
import pytest
import requests

from keydash.errors import StoreError
from keydash.repositories import PostgrestApiKeyRepository

ROW = {
    'id': 'b7f9',
    'name': 'Test',
    'value': 'key_abc',
    'user_id': 'dev-local',
    'usage_count': 0,
    'max_usage': 10,
    'createdAt': '2026-10-19T12:00:00+00:00',
}


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f'{self.status_code} error')


@pytest.fixture
def sent(monkeypatch):
    calls = []
    responses = []

    def fake_request(method, url, params=None, json=None, headers=None, timeout=None):
        calls.append({'method': method, 'url': url, 'params': params, 'json': json, 'headers': headers})
        return responses.pop(0) if responses else FakeResponse(200, [])

    monkeypatch.setattr('keydash.repositories.postgrest.requests.request', fake_request)
    return calls, responses


@pytest.fixture
def store():
    return PostgrestApiKeyRepository('https://project.supabase.co/', 'anon-key', timeout=5)


def test_list_filters_by_user_and_orders(store, sent):
    calls, responses = sent
    responses.append(FakeResponse(200, [ROW]))

    keys = store.list_for_user('dev-local', ascending=False)

    assert keys[0].id == 'b7f9'
    assert keys[0].created_at == ROW['createdAt']
    call = calls[0]
    assert call['method'] == 'GET'
    assert call['url'] == 'https://project.supabase.co/rest/v1/api_keys'
    assert ('user_id', 'eq.dev-local') in call['params']
    assert ('order', 'name.desc') in call['params']
    assert call['headers']['apikey'] == 'anon-key'
    assert call['headers']['Authorization'] == 'Bearer anon-key'


def test_create_asks_for_representation(store, sent):
    calls, responses = sent
    responses.append(FakeResponse(201, [ROW]))

    key = store.create({'name': 'Test', 'value': 'key_abc', 'user_id': 'dev-local', 'usage_count': 0, 'max_usage': 10})

    assert key.name == 'Test'
    assert calls[0]['method'] == 'POST'
    assert calls[0]['json'][0]['max_usage'] == 10
    assert calls[0]['headers']['Prefer'] == 'return=representation'


def test_update_and_delete_filter_by_id_and_user(store, sent):
    calls, _ = sent
    store.update_for_user('b7f9', 'dev-local', {'name': 'renamed'})
    store.delete_for_user('b7f9', 'dev-local')

    for call, method in zip(calls, ('PATCH', 'DELETE')):
        assert call['method'] == method
        assert ('id', 'eq.b7f9') in call['params']
        assert ('user_id', 'eq.dev-local') in call['params']
    assert calls[0]['json'] == {'name': 'renamed'}


def test_http_errors_become_store_errors(store, sent):
    _, responses = sent
    responses.append(FakeResponse(500, {'message': 'boom'}))
    with pytest.raises(StoreError) as excinfo:
        store.list_for_user('dev-local')
    assert excinfo.value.operation == 'select'


def test_network_errors_become_store_errors(store, monkeypatch):
    def fail(*args, **kwargs):
        raise requests.ConnectionError('unreachable')

    monkeypatch.setattr('keydash.repositories.postgrest.requests.request', fail)
    with pytest.raises(StoreError):
        store.delete_for_user('b7f9', 'dev-local')


def test_empty_insert_response_is_an_error(store, sent):
    _, responses = sent
    responses.append(FakeResponse(201, []))
    with pytest.raises(StoreError):
        store.create({'name': 'x', 'value': 'key_x', 'user_id': 'dev-local', 'usage_count': 0, 'max_usage': 1})


def test_requires_base_url():
    with pytest.raises(ValueError):
        PostgrestApiKeyRepository('', 'anon-key')


def test_get_filters_by_id_and_user(store, sent):
    calls, responses = sent
    responses.append(FakeResponse(200, [ROW]))

    key = store.get_for_user('b7f9', 'dev-local')

    assert key.name == 'Test'
    params = calls[0]['params']
    assert ('id', 'eq.b7f9') in params
    assert ('user_id', 'eq.dev-local') in params
    assert store.get_for_user('missing', 'dev-local') is None
