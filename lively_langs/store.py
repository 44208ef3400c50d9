"""Persistence for languages and their words.

Languages live in the ``languages`` table; each language's words live in a
table of their own named after the language id (see ``words.models``).
Creating or deleting a language touches both its row and its word table,
and both changes commit in the same transaction.
"""
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import AsyncIterator, Generic, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError
from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from lively_langs.aliases import ALIAS_DELIMITER, alias_token, has_alias, join_aliases, normalize_aliases, parse_id
from lively_langs.database import DATABASE_URL, create_engine, create_session_maker, init_db
from lively_langs.exceptions import (
    InvalidInputError,
    InvalidLanguageError,
    InvalidWordError,
    LanguageExistsError,
    LanguageNotFoundError,
    WordNotFoundError,
)
from lively_langs.languages.models import Language
from lively_langs.languages.resolver import LanguageResolver
from lively_langs.languages.schemas import (
    LanguageCreate,
    LanguageResponse,
    LanguageUpdate,
    normalize_language_name,
)
from lively_langs.logging_config import get_logger
from lively_langs.words.models import word_table
from lively_langs.words.schemas import WordCreate, WordResponse, WordUpdate, normalize_word

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


@dataclass
class Listing(Generic[T]):
    """Result of a bulk read: the rows that decoded, plus how many did not."""
    items: List[T] = field(default_factory=list)
    failures: int = 0

    @property
    def partial(self) -> bool:
        return self.failures > 0


def _clean_aliases(aliases: Iterable[str], error: Type[InvalidInputError]) -> List[str]:
    try:
        return normalize_aliases(aliases)
    except ValueError as e:
        raise error(f"{error.message}: {e}") from e


def _decode_rows(rows: Iterable[Mapping], schema: Type[T], what: str) -> Listing[T]:
    listing: Listing[T] = Listing()
    for row in rows:
        try:
            listing.items.append(schema.model_validate(dict(row)))
        except ValidationError as e:
            listing.failures += 1
            logger.warning(f"Skipping {what} row {row.get('id')} that failed to decode: {e}")
    return listing


class Store:
    """All database access for the application.

    One instance is shared by every request; each operation opens its own
    session and transaction.
    """

    def __init__(self, database_url: str = DATABASE_URL, echo: bool = False):
        self.database_url = database_url
        self.engine = create_engine(database_url, echo=echo)
        self.session_maker = create_session_maker(self.engine)

    async def init(self) -> None:
        """Create the languages table if needed."""
        await init_db(self.engine)

    async def close(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session with a transaction that commits on success and rolls back on error."""
        async with self.session_maker() as session:
            async with session.begin():
                yield session

    async def _word_table(self, session: AsyncSession, lang_ref: str) -> Table:
        # The reference itself is also tried as an alias ("es" -> spanish)
        table_id = await LanguageResolver(session).resolve_table_id(lang_ref, (lang_ref,))
        return word_table(table_id)

    # ========== Languages ==========

    async def create_language(self, language: LanguageCreate) -> LanguageResponse:
        """Insert a language and provision its (empty) word table."""
        name = normalize_language_name(language.name)
        aliases = _clean_aliases(language.aliases, InvalidLanguageError)

        async with self.session() as session:
            row = Language(name=name, aliases=join_aliases(aliases), notes=language.notes.strip())
            session.add(row)
            try:
                await session.flush()
            except IntegrityError as e:
                raise LanguageExistsError() from e

            conn = await session.connection()
            await conn.run_sync(word_table(row.id).create)

        logger.info(f"Created language '{name}' (id={row.id})")
        return LanguageResponse.model_validate(row)

    async def get_language(self, ref: str, aliases: Sequence[str] = ()) -> LanguageResponse:
        """Look a language up by id, name, then each alias candidate in order."""
        async with self.session() as session:
            language = await LanguageResolver(session).resolve_language(ref, aliases)
            return LanguageResponse.model_validate(language)

    async def list_languages(self) -> Listing[LanguageResponse]:
        """Return every language, skipping rows that fail to decode."""
        async with self.session() as session:
            result = await session.execute(
                select(Language.id, Language.name, Language.aliases, Language.notes)
                .order_by(Language.id)
            )
            rows = result.mappings().all()
        return _decode_rows(rows, LanguageResponse, "language")

    async def update_language(self, diff: LanguageUpdate) -> LanguageUpdate:
        """Apply the fields set in ``diff`` to the language with ``diff.id``.

        An empty diff is a no-op. Returns the diff as stored (normalized).
        """
        changes = diff.changes()
        if not changes:
            return diff

        values = {}
        if "name" in changes:
            values["name"] = normalize_language_name(changes["name"])
        if "aliases" in changes:
            values["aliases"] = _clean_aliases(changes["aliases"], InvalidLanguageError)
        if "notes" in changes:
            values["notes"] = changes["notes"].strip()

        stored = dict(values)
        if "aliases" in stored:
            stored["aliases"] = join_aliases(stored["aliases"])

        async with self.session() as session:
            try:
                result = await session.execute(
                    update(Language)
                    .where(Language.id == diff.id)
                    .values(**stored)
                    .execution_options(synchronize_session=False)
                )
            except IntegrityError as e:
                raise LanguageExistsError() from e
            if result.rowcount == 0:
                raise LanguageNotFoundError()

        logger.info(f"Updated language id={diff.id}: {sorted(values)}")
        return LanguageUpdate(id=diff.id, **values)

    async def delete_language(self, ref: str) -> LanguageResponse:
        """Delete a language (by id or exact name) together with its word table.

        The table is only dropped when the row delete removed a row; a
        language that vanished in between is returned as it was resolved,
        without error.
        """
        async with self.session() as session:
            language = await LanguageResolver(session).resolve_language(ref)
            snapshot = LanguageResponse.model_validate(language)

            result = await session.execute(
                delete(Language)
                .where(Language.id == snapshot.id)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                logger.warning(f"Language '{snapshot.name}' (id={snapshot.id}) was already deleted")
                return snapshot

            conn = await session.connection()
            await conn.run_sync(word_table(snapshot.id).drop)

        logger.info(f"Deleted language '{snapshot.name}' (id={snapshot.id}) and its words")
        return snapshot

    # ========== Words ==========

    async def create_word(self, lang_ref: str, word: WordCreate) -> WordResponse:
        """Insert a word into the language's table."""
        values = {
            "word": normalize_word(word.word),
            "definition": word.definition.strip(),
            "aliases": join_aliases(_clean_aliases(word.aliases, InvalidWordError)),
            "notes": word.notes.strip(),
        }

        async with self.session() as session:
            table = await self._word_table(session, lang_ref)
            result = await session.execute(insert(table).values(**values))
            word_id = result.inserted_primary_key[0]

        logger.info(f"Added word '{values['word']}' (id={word_id}) to language table {table.name}")
        return WordResponse.model_validate({"id": word_id, **values})

    async def get_word(
            self,
            lang_ref: str,
            word_ref: str,
            like: bool = False,
            aliases: Sequence[str] = ()) -> WordResponse:
        """
        Look a word up in a language.

        A numeric ``word_ref`` is an id lookup. Otherwise the word text is
        matched exactly (or as a substring when ``like`` is set), and if that
        misses each alias candidate is tried against the word aliases with
        the same policy, in order.
        """
        async with self.session() as session:
            table = await self._word_table(session, lang_ref)

            word_id = parse_id(word_ref)
            if word_id is not None:
                row = await self._first_word(session, select(table).where(table.c.id == word_id))
            else:
                # An empty reference never matches, even as a substring
                text = word_ref.strip()
                row = None
                if text:
                    if like:
                        condition = table.c.word.contains(text, autoescape=True)
                    else:
                        condition = table.c.word == text
                    row = await self._first_word(session, select(table).where(condition))

                for alias in aliases:
                    if row is not None:
                        break
                    row = await self._find_word_by_alias(session, table, alias, like)

        if row is None:
            raise WordNotFoundError()
        return WordResponse.model_validate(dict(row))

    async def list_words(self, lang_ref: str) -> Listing[WordResponse]:
        """Return every word of a language, skipping rows that fail to decode."""
        async with self.session() as session:
            table = await self._word_table(session, lang_ref)
            result = await session.execute(select(table).order_by(table.c.id))
            rows = result.mappings().all()
        return _decode_rows(rows, WordResponse, "word")

    async def update_word(self, lang_ref: str, diff: WordUpdate) -> WordUpdate:
        """Apply the fields set in ``diff`` to the word with ``diff.id``."""
        changes = diff.changes()
        if not changes:
            return diff

        values = {}
        if "word" in changes:
            values["word"] = normalize_word(changes["word"])
        if "definition" in changes:
            values["definition"] = changes["definition"].strip()
        if "aliases" in changes:
            values["aliases"] = _clean_aliases(changes["aliases"], InvalidWordError)
        if "notes" in changes:
            values["notes"] = changes["notes"].strip()

        stored = dict(values)
        if "aliases" in stored:
            stored["aliases"] = join_aliases(stored["aliases"])

        async with self.session() as session:
            table = await self._word_table(session, lang_ref)
            result = await session.execute(
                update(table).where(table.c.id == diff.id).values(**stored)
            )
            if result.rowcount == 0:
                raise WordNotFoundError()

        return WordUpdate(id=diff.id, **values)

    async def delete_word(self, lang_ref: str, word_id: int) -> WordResponse:
        """Delete a word by id, returning it as it was before the delete."""
        async with self.session() as session:
            table = await self._word_table(session, lang_ref)
            row = await self._first_word(session, select(table).where(table.c.id == word_id))
            if row is None:
                raise WordNotFoundError()
            word = WordResponse.model_validate(dict(row))
            await session.execute(delete(table).where(table.c.id == word_id))

        logger.info(f"Deleted word '{word.word}' (id={word.id}) from language table {table.name}")
        return word

    async def _find_word_by_alias(
            self,
            session: AsyncSession,
            table: Table,
            alias: str,
            like: bool) -> Optional[Mapping]:
        alias = alias.strip()
        if not alias or ALIAS_DELIMITER in alias:
            return None
        if like:
            query = select(table).where(table.c.aliases.contains(alias, autoescape=True))
            return await self._first_word(session, query.order_by(table.c.id))

        query = (
            select(table)
            .where(table.c.aliases.contains(alias_token(alias), autoescape=True))
            .order_by(table.c.id)
        )
        result = await session.execute(query)
        for row in result.mappings():
            if has_alias(row["aliases"], alias):
                return row
        return None

    @staticmethod
    async def _first_word(session: AsyncSession, query) -> Optional[Mapping]:
        result = await session.execute(query.limit(1))
        return result.mappings().first()
