"""Tests for the MongoDB startup connector."""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from src.db.mongodb_client import ConnectionState, MongoDBClient
from src.exceptions import PersistenceError, StoreUnavailable


class TestMongoDBClient:
    @pytest.fixture
    def sleep(self):
        return MagicMock()

    @pytest.fixture
    def healthy_client(self):
        client = MagicMock()
        client.admin.command.return_value = {"ok": 1}
        return client

    @pytest.fixture
    def failing_client(self):
        client = MagicMock()
        client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")
        return client

    def make_client(self, factory, sleep):
        return MongoDBClient(
            uri="mongodb://db.example:27017/reviews",
            database="reviews",
            max_retries=3,
            retry_delay=5,
            client_factory=factory,
            sleep=sleep,
        )

    def test_connect_first_attempt(self, healthy_client, sleep):
        """Test a reachable store connects without waiting."""
        factory = MagicMock(return_value=healthy_client)
        client = self.make_client(factory, sleep)

        db = client.connect()

        assert client.state is ConnectionState.CONNECTED
        assert client.attempts == 1
        assert db is healthy_client.get_default_database.return_value
        healthy_client.get_default_database.assert_called_once_with(default="reviews")
        sleep.assert_not_called()

    def test_connect_passes_uri_and_options(self, healthy_client, sleep):
        factory = MagicMock(return_value=healthy_client)

        self.make_client(factory, sleep).connect()

        args, kwargs = factory.call_args
        assert args == ("mongodb://db.example:27017/reviews",)
        assert kwargs["tz_aware"] is True
        assert "serverSelectionTimeoutMS" in kwargs

    def test_connect_succeeds_on_third_attempt(self, healthy_client, failing_client, sleep):
        """Test two failures then success stays within the retry budget."""
        factory = MagicMock(side_effect=[failing_client, failing_client, healthy_client])
        client = self.make_client(factory, sleep)

        client.connect()

        assert client.is_connected
        assert client.attempts == 3
        assert sleep.call_count == 2
        sleep.assert_called_with(5)
        assert failing_client.close.call_count == 2

    def test_connect_fails_after_max_retries(self, failing_client, sleep):
        """Test three failures end in StoreUnavailable."""
        factory = MagicMock(return_value=failing_client)
        client = self.make_client(factory, sleep)

        with pytest.raises(StoreUnavailable):
            client.connect()

        assert client.state is ConnectionState.FAILED
        assert factory.call_count == 3
        # no wait after the final attempt
        assert sleep.call_count == 2

    def test_connect_factory_error_counts_as_attempt(self, healthy_client, sleep):
        factory = MagicMock(side_effect=[ServerSelectionTimeoutError("boom"), healthy_client])
        client = self.make_client(factory, sleep)

        client.connect()

        assert client.attempts == 2
        assert client.is_connected

    def test_connect_when_already_connected(self, healthy_client, sleep):
        factory = MagicMock(return_value=healthy_client)
        client = self.make_client(factory, sleep)
        client.connect()

        client.connect()

        factory.assert_called_once()

    def test_get_collection_requires_connection(self, sleep):
        client = self.make_client(MagicMock(), sleep)

        with pytest.raises(PersistenceError):
            client.get_collection("reviews")

    def test_get_collection(self, healthy_client, sleep):
        client = self.make_client(MagicMock(return_value=healthy_client), sleep)
        client.connect()

        collection = client.get_collection("reviews")

        assert collection is healthy_client.get_default_database.return_value.__getitem__.return_value

    def test_close(self, healthy_client, sleep):
        client = self.make_client(MagicMock(return_value=healthy_client), sleep)
        client.connect()

        client.close()

        healthy_client.close.assert_called_once()
        assert client.state is ConnectionState.DISCONNECTED
