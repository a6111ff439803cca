import logging

from pymongo import MongoClient, ASCENDING, DESCENDING

from devconnector.core.config import MONGO_URI, DB_NAME

logger = logging.getLogger(__name__)

client = MongoClient(MONGO_URI)
db = client[DB_NAME]


def get_db():
    return db


def get_users_collection():
    return db["users"]


def get_profiles_collection():
    return db["profiles"]


def get_posts_collection():
    return db["posts"]


def setup_collections(database=db):
    """Create the unique and sort indexes the handlers rely on."""
    try:
        database["users"].create_index("email", unique=True)
        database["profiles"].create_index("user", unique=True)
        database["profiles"].create_index("handle", unique=True)
        database["posts"].create_index([("user", ASCENDING)])
        database["posts"].create_index([("date", DESCENDING)])
        logger.info(f"[✓] Initialized indexes on database {database.name}")
    except Exception as e:
        logger.error(f"[✗] Error setting up indexes on database {database.name}: {e}")
        raise
