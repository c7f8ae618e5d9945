"""MongoDB client lifecycle and the per-request database dependency."""

from teamhub.db.mongodb import close_mongo_connection, connect_to_mongo, db, get_database

__all__ = ["close_mongo_connection", "connect_to_mongo", "db", "get_database"]
