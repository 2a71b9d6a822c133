"""User record persisted in the credential store (users.json)."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Role = Literal["admin", "user"]


class User(BaseModel):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin' or 'user'. Older users.json files store the hash under
    'password'; it is read from either key and always written as 'passwordHash'.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    username: str
    email: str = ""
    password_hash: str = Field(
        validation_alias=AliasChoices("passwordHash", "password", "password_hash"),
        serialization_alias="passwordHash",
    )
    role: Role = "user"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
