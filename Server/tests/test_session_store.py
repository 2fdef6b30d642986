from unittest.mock import MagicMock

import pytest
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from wordle_service.config import TestingConfig
from wordle_service.errors import ServiceUnavailableError
from wordle_service.services.session_store import (
    MemorySessionStore,
    MongoSessionStore,
    create_session_store,
)


class TestMemorySessionStore:

    def test_set_and_get(self, store):
        store.set('k', 'v1', 60)
        assert store.get('k') == 'v1'
        assert store.get_versioned('k') == ('v1', 1)

        store.set('k', 'v2', 60)
        assert store.get_versioned('k') == ('v2', 2)

    def test_missing_key(self, store):
        assert store.get('missing') is None
        assert store.get_versioned('missing') is None

    def test_entries_expire(self, store, clock):
        store.set('k', 'v', 60)
        clock.advance(59)
        assert store.get('k') == 'v'

        clock.advance(1)
        assert store.get('k') is None

    def test_set_if_absent(self, store, clock):
        assert store.set_if_absent('k', 'first', 60) is True
        assert store.set_if_absent('k', 'second', 60) is False
        assert store.get('k') == 'first'

        clock.advance(61)
        assert store.set_if_absent('k', 'third', 60) is True
        assert store.get_versioned('k') == ('third', 1)

    def test_compare_and_set(self, store):
        store.set('k', 'v1', 60)

        assert store.compare_and_set('k', 'v2', 60, expected_version=1) is True
        assert store.get_versioned('k') == ('v2', 2)

        # Stale version loses
        assert store.compare_and_set('k', 'v3', 60, expected_version=1) is False
        assert store.get('k') == 'v2'

    def test_compare_and_set_on_expired_entry_fails(self, store, clock):
        store.set('k', 'v1', 10)
        clock.advance(11)

        assert store.compare_and_set('k', 'v2', 60, expected_version=1) is False
        assert store.get('k') is None

    def test_compare_and_set_renews_ttl(self, store, clock):
        store.set('k', 'v1', 10)
        clock.advance(5)
        store.compare_and_set('k', 'v2', 100, expected_version=1)
        clock.advance(50)

        assert store.get('k') == 'v2'

    def test_delete(self, store):
        store.set('k', 'v', 60)
        assert store.delete('k') is True
        assert store.delete('k') is False
        assert store.get('k') is None

    def test_delete_if_equals(self, store):
        store.set('k', 'session-1', 60)

        assert store.delete_if_equals('k', 'session-2') is False
        assert store.get('k') == 'session-1'

        assert store.delete_if_equals('k', 'session-1') is True
        assert store.get('k') is None

    def test_ping(self, store):
        assert store.ping() is True


@pytest.fixture()
def collection():
    return MagicMock()


@pytest.fixture()
def mongo_store(collection):
    return MongoSessionStore(collection=collection)


class TestMongoSessionStore:

    def test_creates_ttl_index(self, mongo_store, collection):
        collection.create_index.assert_called_once_with([('expires_at', ASCENDING)], expireAfterSeconds=0)

    def test_get_versioned_filters_expired_entries(self, mongo_store, collection):
        collection.find_one.return_value = {'_id': 'k', 'value': 'v', 'version': 3}

        assert mongo_store.get_versioned('k') == ('v', 3)

        query = collection.find_one.call_args[0][0]
        assert query['_id'] == 'k'
        assert '$gt' in query['expires_at']

    def test_get_missing(self, mongo_store, collection):
        collection.find_one.return_value = None

        assert mongo_store.get('k') is None

    def test_set_upserts_and_bumps_version(self, mongo_store, collection):
        mongo_store.set('k', 'v', 60)

        query, update = collection.update_one.call_args[0]
        assert query == {'_id': 'k'}
        assert update['$set']['value'] == 'v'
        assert update['$inc'] == {'version': 1}
        assert collection.update_one.call_args[1]['upsert'] is True

    def test_set_if_absent_inserts(self, mongo_store, collection):
        assert mongo_store.set_if_absent('k', 'v', 60) is True

        document = collection.insert_one.call_args[0][0]
        assert document['_id'] == 'k'
        assert document['value'] == 'v'
        assert document['version'] == 1
        # Expired leftovers are cleared first
        query = collection.delete_one.call_args[0][0]
        assert query['_id'] == 'k'
        assert '$lte' in query['expires_at']

    def test_set_if_absent_existing_key(self, mongo_store, collection):
        collection.insert_one.side_effect = DuplicateKeyError('duplicate key')

        assert mongo_store.set_if_absent('k', 'v', 60) is False

    def test_compare_and_set(self, mongo_store, collection):
        collection.update_one.return_value.matched_count = 1
        assert mongo_store.compare_and_set('k', 'v', 60, expected_version=4) is True

        query = collection.update_one.call_args[0][0]
        assert query['_id'] == 'k'
        assert query['version'] == 4

        collection.update_one.return_value.matched_count = 0
        assert mongo_store.compare_and_set('k', 'v', 60, expected_version=4) is False

    def test_delete_if_equals(self, mongo_store, collection):
        collection.delete_one.return_value.deleted_count = 0
        assert mongo_store.delete_if_equals('k', 'other') is False
        collection.delete_one.assert_called_with({'_id': 'k', 'value': 'other'})

        collection.delete_one.return_value.deleted_count = 1
        assert mongo_store.delete_if_equals('k', 'session-1') is True

    def test_driver_errors_become_service_unavailable(self, mongo_store, collection):
        collection.find_one.side_effect = ServerSelectionTimeoutError('no servers')

        with pytest.raises(ServiceUnavailableError):
            mongo_store.get('k')

    def test_ping(self, mongo_store, collection):
        assert mongo_store.ping() is True
        collection.database.command.assert_called_once_with('ping')

        collection.database.command.side_effect = ServerSelectionTimeoutError('no servers')
        assert mongo_store.ping() is False


def test_memory_store_without_mongo_uri():
    assert isinstance(create_session_store(TestingConfig), MemorySessionStore)
