"""
Auth collection configuration.
Stores user identity and credential digests.
"""


class Collections:
    """Collection names in the auth database."""
    USERS = "users"


class Fields:
    """Field names of a stored user document."""
    ID = "_id"
    EMAIL = "email"
    PASSWORD = "password"
    CREATED_AT = "createdAt"
