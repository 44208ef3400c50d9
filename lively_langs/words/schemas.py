from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lively_langs.aliases import split_aliases
from lively_langs.exceptions import InvalidWordError


def word_is_valid(word: str) -> bool:
    """Check a trimmed word: non-empty, some non-space character, no leading digit."""
    if not word or "0" <= word[0] <= "9":
        return False
    return any(not char.isspace() for char in word)


def normalize_word(word: str) -> str:
    """Trim a word, raising InvalidWordError if it fails ``word_is_valid``."""
    word = word.strip()
    if not word_is_valid(word):
        raise InvalidWordError()
    return word


# ========== Word Schemas ==========

class WordBase(BaseModel):
    """Base schema for Word."""
    word: str = Field(..., description="The word itself (e.g. 'gato')")
    definition: str = Field("", description="Definition of the word")
    aliases: list[str] = Field(default_factory=list, description="Alternate spellings")
    notes: str = Field("", description="Free-form notes")


class WordCreate(WordBase):
    """Schema for creating a Word; the text is validated by the store."""
    word: str = Field("", description="The word itself (e.g. 'gato')")


class WordDiff(BaseModel):
    """Fields of a Word that can be changed; unset fields are left alone."""
    word: str | None = Field(None, description="New word text")
    definition: str | None = Field(None, description="Replacement definition")
    aliases: list[str] | None = Field(None, description="Replacement alias list")
    notes: str | None = Field(None, description="Replacement notes")

    def changes(self) -> dict[str, Any]:
        """Return only the fields the client actually set."""
        return self.model_dump(exclude={"id"}, exclude_unset=True, exclude_none=True)


class WordUpdate(WordDiff):
    """Schema for updating a Word by id."""
    id: int = Field(..., description="Word ID within its language")


class WordResponse(WordBase):
    """Schema for Word response."""
    id: int

    model_config = ConfigDict(from_attributes=True)

    @field_validator("aliases", mode="before")
    @classmethod
    def decode_aliases(cls, value):
        if isinstance(value, str):
            return split_aliases(value)
        return value
