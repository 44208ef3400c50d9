from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lively_langs.aliases import parse_id, split_aliases
from lively_langs.exceptions import InvalidLanguageError


def normalize_language_name(name: str) -> str:
    """Trim and lowercase a language name.

    Raises InvalidLanguageError when the result is empty or numeric, since a
    numeric name would be shadowed by id lookups.
    """
    name = name.strip().lower()
    if not name:
        raise InvalidLanguageError()
    if parse_id(name) is not None:
        raise InvalidLanguageError("invalid language: name may not be a number")
    return name


# ========== Language Schemas ==========

class LanguageBase(BaseModel):
    """Base schema for Language."""
    name: str = Field(..., description="Language name (e.g. 'spanish')")
    aliases: list[str] = Field(default_factory=list, description="Alternate names (e.g. 'es')")
    notes: str = Field("", description="Free-form notes")


class LanguageCreate(LanguageBase):
    """Schema for creating a Language; the name is validated by the store."""
    name: str = Field("", description="Language name (e.g. 'spanish')")


class LanguageDiff(BaseModel):
    """Fields of a Language that can be changed; unset fields are left alone."""
    name: str | None = Field(None, description="New language name")
    aliases: list[str] | None = Field(None, description="Replacement alias list")
    notes: str | None = Field(None, description="Replacement notes")

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually set."""
        return self.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)


class LanguageUpdate(LanguageDiff):
    """Schema for updating a Language by id."""
    id: int = Field(..., description="Language ID")


class LanguageResponse(LanguageBase):
    """Schema for Language response."""
    id: int

    model_config = ConfigDict(from_attributes=True)

    @field_validator("aliases", mode="before")
    @classmethod
    def decode_aliases(cls, value):
        if isinstance(value, str):
            return split_aliases(value)
        return value
