"""
User model for the auth database.
"""
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    User document model for the ``users`` collection.

    ``password`` always holds the bcrypt digest, never plaintext.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="MongoDB ObjectId as string")
    email: str = Field(..., description="Lowercased, unique email address")
    password: str = Field(..., description="Bcrypt digest of the password")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
        description="Account creation timestamp",
    )

    def to_document(self) -> dict:
        """Document to insert; the store assigns ``_id``."""
        return self.model_dump(by_alias=True, exclude={"id"})
