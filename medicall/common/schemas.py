# medicall/common/schemas.py
"""Base schema and the reference summaries used when expanding relations."""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python; accepts either on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class UserSummary(CamelModel):
    id: UUID
    name: str
    email: str


class AgentSummary(UserSummary):
    avatar: str = ""


class PatientSummary(CamelModel):
    id: UUID
    name: str
    email: str
    mobile_number: str
    avatar: str = ""


class DoctorSummary(CamelModel):
    id: UUID
    name: str
    specialty: str
    avatar: str = ""


class MessageResponse(BaseModel):
    message: str


def clean_string_list(value: Optional[List[str]]) -> Optional[List[str]]:
    """Strip entries and drop the blank ones."""
    if value is None:
        return None
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def blank_to_none(value):
    """Form inputs send "" for untouched optional fields."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
