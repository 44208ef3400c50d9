"""Tests for word CRUD in the store."""

import asyncio

import pytest
from sqlalchemy import text

from lively_langs.exceptions import InvalidWordError, LanguageNotFoundError, WordNotFoundError
from lively_langs.languages.schemas import LanguageCreate
from lively_langs.words.schemas import WordCreate, WordResponse, WordUpdate


class TestCreateWord:

    async def test_create(self, store, spanish):
        word = await store.create_word(
            "spanish", WordCreate(word=" gato ", definition=" cat ", aliases=["michi", " "], notes=" n ")
        )
        assert isinstance(word, WordResponse)
        assert word.id == 1
        assert word.word == "gato"
        assert word.definition == "cat"
        assert word.aliases == ["michi"]
        assert word.notes == "n"

    async def test_ids_are_scoped_per_language(self, store, spanish):
        await store.create_language(LanguageCreate(name="french"))
        gato = await store.create_word("spanish", WordCreate(word="gato"))
        chat = await store.create_word("french", WordCreate(word="chat"))
        perro = await store.create_word("spanish", WordCreate(word="perro"))
        assert gato.id == 1
        assert chat.id == 1
        assert perro.id == 2

    async def test_via_alias_and_id(self, store, spanish):
        by_alias = await store.create_word("es", WordCreate(word="gato"))
        by_id = await store.create_word(str(spanish.id), WordCreate(word="perro"))
        listing = await store.list_words("spanish")
        assert [word.id for word in listing.items] == [by_alias.id, by_id.id]

    @pytest.mark.parametrize("text", ["3x", "", "   ", "9 lives"])
    async def test_invalid_word(self, store, spanish, text):
        with pytest.raises(InvalidWordError):
            await store.create_word("spanish", WordCreate(word=text))
        assert (await store.list_words("spanish")).items == []

    async def test_digit_after_first_character(self, store, spanish):
        word = await store.create_word("spanish", WordCreate(word="x3"))
        assert word.word == "x3"

    async def test_alias_with_delimiter(self, store, spanish):
        with pytest.raises(InvalidWordError):
            await store.create_word("spanish", WordCreate(word="gato", aliases=["a|b"]))

    async def test_unknown_language(self, store):
        with pytest.raises(LanguageNotFoundError):
            await store.create_word("klingon", WordCreate(word="qapla"))

    async def test_concurrent_creates(self, store, spanish):
        results = await asyncio.gather(
            *(store.create_word("spanish", WordCreate(word=f"w{i}")) for i in range(20)),
            return_exceptions=True,
        )
        assert [r for r in results if isinstance(r, Exception)] == []
        assert sorted(word.id for word in results) == list(range(1, 21))
        assert len((await store.list_words("spanish")).items) == 20


class TestGetWord:

    async def test_exact(self, store, gato):
        assert await store.get_word("spanish", "gato") == gato
        assert await store.get_word("spanish", " gato ") == gato

    async def test_by_id(self, store, gato):
        assert await store.get_word("spanish", str(gato.id)) == gato

    async def test_unknown_id_does_not_fall_back(self, store, gato):
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "99", aliases=["michi"])

    async def test_language_by_alias(self, store, gato):
        assert await store.get_word("es", "gato") == gato

    async def test_missing(self, store, gato):
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "perro")

    async def test_substring_needs_like(self, store, gato):
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "at")
        assert await store.get_word("spanish", "at", like=True) == gato

    async def test_like_wildcards_are_literal(self, store, gato):
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "g%o", like=True)
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "g_to", like=True)

    async def test_alias_fallback(self, store, gato):
        assert await store.get_word("spanish", "perro", aliases=["nope", "michi"]) == gato

    async def test_alias_fallback_is_token_exact(self, store, gato):
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "perro", aliases=["mich"])
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "perro", aliases=["MICHI"])

    @pytest.mark.parametrize("like", [False, True])
    async def test_empty_reference_matches_nothing(self, store, gato, like):
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "   ", like=like)
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "", like=like, aliases=["nope"])

    async def test_empty_reference_uses_aliases(self, store, gato):
        assert await store.get_word("spanish", "", like=True, aliases=["mich"]) == gato

    async def test_alias_fallback_with_like(self, store, gato):
        assert await store.get_word("spanish", "perro", like=True, aliases=["mich"]) == gato

    async def test_primary_match_wins(self, store, gato):
        perro = await store.create_word("spanish", WordCreate(word="perro", aliases=["gato"]))
        assert await store.get_word("spanish", "perro", aliases=["michi"]) == perro
        assert await store.get_word("spanish", "gato", aliases=["gato"]) == gato

    async def test_unknown_language(self, store, gato):
        with pytest.raises(LanguageNotFoundError):
            await store.get_word("french", "gato")


class TestListWords:

    async def test_list(self, store, gato):
        perro = await store.create_word("spanish", WordCreate(word="perro", definition="dog"))
        listing = await store.list_words("spanish")
        assert listing.items == [gato, perro]
        assert not listing.partial

    async def test_undecodable_row_is_skipped(self, store, spanish, gato):
        async with store.engine.begin() as conn:
            await conn.execute(
                text(f"INSERT INTO \"{spanish.id}\" (word, definition, aliases, notes) VALUES (:word, '', '', '')"),
                {"word": b"\xff\xfe"},
            )

        listing = await store.list_words("spanish")
        assert listing.items == [gato]
        assert listing.failures == 1

    async def test_unknown_language(self, store):
        with pytest.raises(LanguageNotFoundError):
            await store.list_words("klingon")


class TestUpdateWord:

    async def test_update_fields(self, store, gato):
        updated = await store.update_word("spanish", WordUpdate(id=gato.id, definition=" a cat ", aliases=["minino"]))
        assert updated.definition == "a cat"
        assert updated.aliases == ["minino"]
        assert updated.word is None

        word = await store.get_word("spanish", "gato")
        assert word.definition == "a cat"
        assert word.aliases == ["minino"]
        assert word.notes == gato.notes

    async def test_rename(self, store, gato):
        await store.update_word("es", WordUpdate(id=gato.id, word="gata"))
        assert (await store.get_word("spanish", "gata")).id == gato.id

    async def test_empty_diff_is_noop(self, store, gato):
        diff = WordUpdate(id=gato.id)
        assert await store.update_word("spanish", diff) == diff
        assert await store.get_word("spanish", "gato") == gato

    @pytest.mark.parametrize("text", ["1gato", "  "])
    async def test_invalid_word(self, store, gato, text):
        with pytest.raises(InvalidWordError):
            await store.update_word("spanish", WordUpdate(id=gato.id, word=text))
        assert await store.get_word("spanish", "gato") == gato

    async def test_unknown_word(self, store, gato):
        with pytest.raises(WordNotFoundError):
            await store.update_word("spanish", WordUpdate(id=99, notes="x"))


class TestDeleteWord:

    async def test_delete_returns_snapshot(self, store, gato):
        deleted = await store.delete_word("spanish", gato.id)
        assert deleted == gato
        with pytest.raises(WordNotFoundError):
            await store.get_word("spanish", "gato")

    async def test_concurrent_deletes(self, store, spanish):
        for i in range(10):
            await store.create_word("spanish", WordCreate(word=f"w{i}"))

        results = await asyncio.gather(
            *(store.delete_word("spanish", word_id) for word_id in range(1, 11)),
            return_exceptions=True,
        )
        assert [r for r in results if isinstance(r, Exception)] == []
        assert (await store.list_words("spanish")).items == []

    async def test_delete_missing(self, store, spanish):
        with pytest.raises(WordNotFoundError):
            await store.delete_word("spanish", 1)

    async def test_delete_only_touches_own_language(self, store, gato):
        await store.create_language(LanguageCreate(name="french"))
        chat = await store.create_word("french", WordCreate(word="chat"))
        assert chat.id == gato.id

        await store.delete_word("french", chat.id)
        assert await store.get_word("spanish", "gato") == gato
