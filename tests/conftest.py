"""
Pytest fixtures for keydash tests
"""
import os
import tempfile

import pytest

from keydash import create_app
from keydash.config import TestingConfig
from keydash.errors import StoreError
from keydash.models import ApiKeyRecord


@pytest.fixture
def app():
    """Create application for testing"""
    # Use a temporary database for tests
    db_fd, db_path = tempfile.mkstemp(suffix='.db')

    class Config(TestingConfig):
        DATABASE_PATH = db_path
        STATIC_USER_ID = 'dev-local'

    flask_app = create_app(Config)

    yield flask_app

    # Cleanup
    os.close(db_fd)
    os.unlink(db_path)


@pytest.fixture
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture
def runner(app):
    """Create a CLI test runner"""
    return app.test_cli_runner()


@pytest.fixture
def repo(app):
    """The SQLite repository the app is wired to"""
    return app.extensions['api_key_repo']


@pytest.fixture
def make_key(repo):
    """Insert a key row directly into the store"""
    def _make_key(name='Key', max_usage=10, usage_count=0, value=None, user_id='dev-local'):
        return repo.create({
            'name': name,
            'value': value or f'key_{name.lower()}value0000000000000000',
            'user_id': user_id,
            'usage_count': usage_count,
            'max_usage': max_usage,
        })
    return _make_key


class FakeRepo:
    """In-memory stand-in for a repository that records every call"""

    name = 'fake'

    def __init__(self, records=None, fail=False):
        self.records = list(records or [])
        self.fail = fail
        self.calls = []
        self._next_id = len(self.records) + 1

    def _maybe_fail(self, operation):
        if self.fail:
            raise StoreError(f'{operation} failed', operation=operation)

    def list_for_user(self, user_id, ascending=True):
        self.calls.append(('list_for_user', user_id, ascending))
        self._maybe_fail('select')
        rows = [r for r in self.records if r.user_id == user_id]
        return sorted(rows, key=lambda r: (r.name.casefold(), r.id), reverse=not ascending)

    def get_for_user(self, key_id, user_id):
        self.calls.append(('get_for_user', key_id, user_id))
        self._maybe_fail('select')
        for record in self.records:
            if str(record.id) == str(key_id) and record.user_id == user_id:
                return record
        return None

    def create(self, fields):
        self.calls.append(('create', dict(fields)))
        self._maybe_fail('insert')
        record = ApiKeyRecord(id=self._next_id, created_at='2026-10-19 12:00:00', **fields)
        self._next_id += 1
        self.records.append(record)
        return record

    def update_for_user(self, key_id, user_id, fields):
        self.calls.append(('update_for_user', key_id, user_id, dict(fields)))
        self._maybe_fail('update')

    def delete_for_user(self, key_id, user_id):
        self.calls.append(('delete_for_user', key_id, user_id))
        self._maybe_fail('delete')

    def ping(self):
        self.calls.append(('ping',))
        self._maybe_fail('ping')


@pytest.fixture
def fake_repo_factory():
    return FakeRepo
