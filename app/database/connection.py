"""Document store connectivity."""

import logging
from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING
from pymongo.errors import CollectionInvalid, PyMongoError

from app.config import Config
from app.database.models import PERSON_JSON_SCHEMA

logger = logging.getLogger(__name__)

PEOPLE_COLLECTION = "people"


class DatabaseManager:
    """Owns the motor client; the driver pools connections across requests."""

    def __init__(self, config: Config) -> None:
        self.url = config.MONGO_CONNECTION
        self.db_name = config.MONGO_DB_NAME
        self.client: Optional[AsyncIOMotorClient] = None
        self.connected = False

    @property
    def db(self) -> Optional[AsyncIOMotorDatabase]:
        if self.client is None:
            return None
        return self.client[self.db_name]

    @property
    def people(self) -> Optional[AsyncIOMotorCollection]:
        db = self.db
        if db is None:
            return None
        return db[PEOPLE_COLLECTION]

    async def initialize(self) -> None:
        """
        Connect and prepare the people collection.

        A failed connection is logged and not retried: the application keeps
        serving and store operations fail per request until the server is
        reachable. A malformed connection string leaves no client at all.
        """
        logger.info("Connecting to document store database %s", self.db_name)
        try:
            self.client = AsyncIOMotorClient(self.url, serverSelectionTimeoutMS=5000)
        except PyMongoError as e:
            logger.error(f"Invalid database connection string: {e}")
            self.client = None
            self.connected = False
            return

        try:
            await self.client.admin.command("ping")
        except PyMongoError as e:
            logger.error(f"Database connection failed: {e}")
            self.connected = False
            return

        self.connected = True
        logger.info("Database connection successful")
        await self._prepare_people_collection()

    async def _prepare_people_collection(self) -> None:
        db = self.db
        try:
            await db.create_collection(
                PEOPLE_COLLECTION, validator={"$jsonSchema": PERSON_JSON_SCHEMA}
            )
        except CollectionInvalid:
            # Already exists; refresh the validator
            try:
                await db.command(
                    "collMod", PEOPLE_COLLECTION, validator={"$jsonSchema": PERSON_JSON_SCHEMA}
                )
            except PyMongoError as e:
                logger.warning(f"Could not update people validator: {e}")
        except PyMongoError as e:
            logger.warning(f"Could not create people collection: {e}")

        try:
            await self.people.create_index([("email", ASCENDING)], unique=True)
        except PyMongoError as e:
            logger.warning(f"Could not create email index: {e}")

    async def ping(self) -> bool:
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError:
            return False

    async def close(self) -> None:
        if self.client is not None:
            logger.info("Closing database connection")
            self.client.close()
            self.client = None
            self.connected = False
