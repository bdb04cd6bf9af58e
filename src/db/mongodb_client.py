"""MongoDB connection and utilities."""

import logging
import time
from enum import Enum
from typing import Any, Callable

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from src.config import CONNECT_MAX_RETRIES, CONNECT_RETRY_DELAY, MONGO_CONFIG
from src.exceptions import PersistenceError, StoreUnavailable

logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    FAILED = "failed"


class MongoDBClient:
    def __init__(
        self,
        uri: str = MONGO_CONFIG["uri"],
        database: str = MONGO_CONFIG["database"],
        max_retries: int = CONNECT_MAX_RETRIES,
        retry_delay: float = CONNECT_RETRY_DELAY,
        client_factory: Callable[..., Any] = MongoClient,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.uri = uri
        self.database_name = database
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.client_factory = client_factory
        self.sleep = sleep
        self.state = ConnectionState.DISCONNECTED
        self.attempts = 0
        self.client: MongoClient | None = None
        self.db: Database | None = None

    @property
    def is_connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def _attempt(self) -> MongoClient:
        """Open a client and make sure the server actually answers."""
        client = self.client_factory(
            self.uri,
            tz_aware=True,
            serverSelectionTimeoutMS=MONGO_CONFIG["server_selection_timeout_ms"],
        )
        try:
            client.admin.command("ping")
        except PyMongoError:
            client.close()
            raise
        return client

    def connect(self) -> Database:
        """
        Connect to MongoDB, retrying a fixed number of times with a fixed delay.

        Returns:
            The connected database handle

        Raises:
            StoreUnavailable: if every attempt failed
        """
        if self.is_connected:
            return self.db

        self.attempts = 0
        while self.attempts < self.max_retries:
            self.attempts += 1
            try:
                client = self._attempt()
            except PyMongoError as e:
                logger.error(f"MongoDB connection attempt {self.attempts} failed: {e}")
                if self.attempts < self.max_retries:
                    self.sleep(self.retry_delay)
                continue

            self.client = client
            self.db = client.get_default_database(default=self.database_name)
            self.state = ConnectionState.CONNECTED
            logger.info("Connected to MongoDB")
            return self.db

        self.state = ConnectionState.FAILED
        raise StoreUnavailable(f"Failed to connect to MongoDB after {self.max_retries} attempts")

    def get_collection(self, name: str) -> Collection:
        """Get a MongoDB collection."""
        if not self.is_connected:
            raise PersistenceError("MongoDB is not connected")
        return self.db[name]

    def close(self):
        if self.client is not None:
            self.client.close()
        self.client = None
        self.db = None
        self.state = ConnectionState.DISCONNECTED


# Singleton instance
mongo_client = MongoDBClient()
