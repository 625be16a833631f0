from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from college_id.config.settings import Settings, settings as default_settings
from college_id.utils.errors import ConfigurationError


def create_mongo_client(settings: Optional[Settings] = None) -> MongoClient:
    """Build a client for ``MONGO_URI``.

    The driver connects lazily, so this does not fail when the server is down;
    the first operation does.
    """
    settings = settings or default_settings
    if not settings.MONGO_URI:
        raise ConfigurationError("MONGO_URI is not set")

    return MongoClient(
        settings.MONGO_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        appname=settings.NAME,
    )


def get_database(client: MongoClient, settings: Optional[Settings] = None) -> Database:
    settings = settings or default_settings
    return client[settings.MONGO_DB_NAME]
