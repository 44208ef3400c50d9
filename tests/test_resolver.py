"""Tests for resolving language references."""

import pytest

from lively_langs.exceptions import LanguageNotFoundError
from lively_langs.languages.models import Language
from lively_langs.languages.resolver import LanguageResolver
from lively_langs.languages.schemas import LanguageCreate


@pytest.fixture
async def languages(store, spanish):
    french = await store.create_language(LanguageCreate(name="french", aliases=["fr", "Fra"]))
    band = await store.create_language(LanguageCreate(name="bandish", aliases=["band"]))
    return spanish, french, band


async def resolve(store, ref, aliases=()):
    async with store.session() as session:
        return await LanguageResolver(session).resolve_language(ref, aliases)


async def resolve_id(store, ref, aliases=()):
    async with store.session() as session:
        return await LanguageResolver(session).resolve_table_id(ref, aliases)


class TestResolveLanguage:

    async def test_by_name(self, store, languages):
        spanish, _, _ = languages
        language = await resolve(store, "spanish")
        assert isinstance(language, Language)
        assert language.id == spanish.id

    async def test_name_is_normalized(self, store, languages):
        language = await resolve(store, "  SPANISH ")
        assert language.name == "spanish"

    async def test_by_id(self, store, languages):
        _, french, _ = languages
        language = await resolve(store, str(french.id))
        assert language.name == "french"

    async def test_unknown_id_does_not_fall_back(self, store, languages):
        with pytest.raises(LanguageNotFoundError):
            await resolve(store, "999", aliases=["es"])

    async def test_alias_only_when_supplied(self, store, languages):
        with pytest.raises(LanguageNotFoundError):
            await resolve(store, "es")
        language = await resolve(store, "es", aliases=["es"])
        assert language.name == "spanish"

    async def test_alias_candidates_tried_in_order(self, store, languages):
        language = await resolve(store, "nope", aliases=["zz", "fr", "es"])
        assert language.name == "french"

    async def test_name_wins_over_alias(self, store, languages):
        language = await resolve(store, "french", aliases=["es"])
        assert language.name == "french"

    async def test_alias_is_token_exact(self, store, languages):
        for candidate in ["e", "s", "sp", "ban", "an", "|es|"]:
            with pytest.raises(LanguageNotFoundError):
                await resolve(store, "nope", aliases=[candidate])

    async def test_alias_is_case_sensitive(self, store, languages):
        with pytest.raises(LanguageNotFoundError):
            await resolve(store, "nope", aliases=["fra"])
        language = await resolve(store, "nope", aliases=["Fra"])
        assert language.name == "french"

    async def test_like_wildcards_are_literal(self, store, languages):
        for candidate in ["%", "_s", "e_"]:
            with pytest.raises(LanguageNotFoundError):
                await resolve(store, "nope", aliases=[candidate])

    async def test_not_found(self, store, languages):
        with pytest.raises(LanguageNotFoundError):
            await resolve(store, "german", aliases=["de", "deu"])


class TestResolveTableId:

    async def test_returns_id(self, store, languages):
        spanish, _, band = languages
        assert await resolve_id(store, "spanish") == spanish.id
        assert await resolve_id(store, "x", aliases=["band"]) == band.id
        assert await resolve_id(store, str(band.id)) == band.id

    async def test_not_found(self, store, languages):
        with pytest.raises(LanguageNotFoundError):
            await resolve_id(store, "spanish]; DROP TABLE languages; --")
