from college_id.config.settings import settings
from college_id.db.session import create_mongo_client, get_database
from college_id.db.student_store import StudentStore
from college_id.utils.logging import get_logger

logger = get_logger()


def create_indexes(client) -> None:
    database = get_database(client, settings)
    StudentStore(database[settings.MONGO_COLLECTION]).ensure_indexes()
    logger.info("Created all indexes.")


def drop_collections(client) -> None:
    database = get_database(client, settings)
    database.drop_collection(settings.MONGO_COLLECTION)
    logger.info(f"Dropped collection {settings.MONGO_COLLECTION}.")


def reset_db(client) -> None:
    logger.info("Resetting database...")
    drop_collections(client)
    create_indexes(client)
    logger.info("Database reset complete.")


if __name__ == "__main__":
    mongo_client = create_mongo_client(settings)
    try:
        reset_db(mongo_client)
    finally:
        mongo_client.close()
