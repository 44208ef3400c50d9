from lively_langs.languages.models import Language
from lively_langs.languages.schemas import (
    LanguageBase,
    LanguageCreate,
    LanguageDiff,
    LanguageResponse,
    LanguageUpdate,
)

__all__ = [
    # Models
    "Language",
    # Schemas
    "LanguageBase",
    "LanguageCreate",
    "LanguageDiff",
    "LanguageUpdate",
    "LanguageResponse",
]
