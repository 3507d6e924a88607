"""
Shared schema base and the compact user shape embedded in other responses.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ecodeli_admin.models.user import Role, UserType


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    id: UUID
    email: str
    name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    role: Role
    user_type: UserType | None = None
    company_name: str | None = None


class MessageResponse(CamelModel):
    message: str
