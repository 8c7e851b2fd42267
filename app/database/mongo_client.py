from pymongo import MongoClient
from pymongo.database import Database
from app.config.settings import settings


class MongoDBClient:
    _client: MongoClient = None

    @classmethod
    def get_client(cls) -> MongoClient:
        if cls._client is None:
            cls._client = MongoClient(
                settings.mongodb_url,
                serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
                tz_aware=True,
            )
        return cls._client

    @classmethod
    def get_database(cls) -> Database:
        return cls.get_client()[settings.mongodb_db_name]

    @classmethod
    def reset_client(cls):
        if cls._client is not None:
            cls._client.close()
        cls._client = None


def get_database() -> Database:
    return MongoDBClient.get_database()
