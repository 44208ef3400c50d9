from lively_langs.words.models import word_table, word_table_name
from lively_langs.words.schemas import (
    WordBase,
    WordCreate,
    WordDiff,
    WordResponse,
    WordUpdate,
)

__all__ = [
    # Models
    "word_table",
    "word_table_name",
    # Schemas
    "WordBase",
    "WordCreate",
    "WordDiff",
    "WordUpdate",
    "WordResponse",
]
