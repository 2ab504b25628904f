"""
Database module - MongoDB connection and collection definitions.
"""
from app.database.connections import (
    ConnectionHandle,
    ConnectionProvider,
    close_connections,
    database_name_from_uri,
    get_connection_provider,
)
from app.database.databases import auth_db
from app.database.indexes import create_indexes

__all__ = [
    "ConnectionHandle",
    "ConnectionProvider",
    "close_connections",
    "database_name_from_uri",
    "get_connection_provider",
    "create_indexes",
    "auth_db",
]
