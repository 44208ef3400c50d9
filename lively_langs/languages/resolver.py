"""Resolution of client language references.

A reference is whatever the client put in the URL: a numeric id, a name, or
an alias. Every word operation goes through the resolver first, and only the
integer id it returns is ever used to address a word table.
"""
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lively_langs.aliases import ALIAS_DELIMITER, alias_token, has_alias, parse_id
from lively_langs.exceptions import LanguageNotFoundError
from lively_langs.languages.models import Language
from lively_langs.logging_config import get_logger

logger = get_logger(__name__)


class LanguageResolver:
    """Looks languages up by id, exact name, then alias candidates in order.

    Runs inside the caller's session so the lookup and whatever the caller
    does with the result share one transaction.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve_language(self, ref: str, aliases: Sequence[str] = ()) -> Language:
        """Return the Language ``ref`` points to, or raise LanguageNotFoundError."""
        return await self._resolve(Language, ref, aliases)

    async def resolve_table_id(self, ref: str, aliases: Sequence[str] = ()) -> int:
        """Return the id (word table identifier) of the language ``ref`` points to."""
        return await self._resolve(Language.id, ref, aliases)

    async def _resolve(self, column, ref: str, aliases: Sequence[str]) -> Any:
        language_id = parse_id(ref)
        if language_id is not None:
            # Ids never fall back to names or aliases
            found = await self._first(select(column).where(Language.id == language_id))
            if found is None:
                raise LanguageNotFoundError()
            return found

        name = ref.strip().lower()
        if name:
            found = await self._first(select(column).where(Language.name == name))
            if found is not None:
                return found

        for alias in aliases:
            found = await self._find_by_alias(column, alias)
            if found is not None:
                return found

        logger.debug(f"No language matches {ref!r} (aliases tried: {list(aliases)})")
        raise LanguageNotFoundError()

    async def _find_by_alias(self, column, alias: str) -> Optional[Any]:
        alias = alias.strip()
        if not alias or ALIAS_DELIMITER in alias:
            return None
        # LIKE narrows the rows; the token check makes the match exact and
        # case-sensitive whatever the backend's LIKE collation is.
        query = (
            select(column, Language.aliases)
            .where(Language.aliases.contains(alias_token(alias), autoescape=True))
            .order_by(Language.id)
        )
        result = await self.session.execute(query)
        for found, stored in result.all():
            if has_alias(stored, alias):
                return found
        return None

    async def _first(self, query) -> Optional[Any]:
        result = await self.session.execute(query.limit(1))
        return result.scalars().first()
