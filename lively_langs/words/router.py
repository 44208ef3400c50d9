from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query

from lively_langs.api import Envelope, get_store, listing_envelope
from lively_langs.store import Store
from lively_langs.words.schemas import WordCreate, WordDiff, WordResponse, WordUpdate

router = APIRouter(prefix="/langs/{lang}/words", tags=["Words"])


@router.get(
    "",
    response_model=Envelope[Union[List[WordResponse], WordResponse]],
    response_model_exclude_none=True,
)
async def list_words(
    lang: str,
    word: Optional[str] = Query(None, description="Look up a single word by text"),
    id: Optional[str] = Query(None, description="Look up a single word by id"),
    alias: List[str] = Query([], description="Look up a single word by alias"),
    like: bool = Query(False, description="Match word text and aliases as substrings"),
    store: Store = Depends(get_store)
):
    """List all words of a language, or look one up when `word`, `id` or `alias` is given."""
    if word or id or alias:
        found = await store.get_word(lang, id or word or "", like=like, aliases=alias)
        return {"content": found}

    listing = await store.list_words(lang)
    return listing_envelope(listing)


@router.get("/{word}", response_model=Envelope[WordResponse], response_model_exclude_none=True)
async def get_word(
    lang: str,
    word: str,
    like: bool = Query(False, description="Match word text and aliases as substrings"),
    alias: List[str] = Query([], description="Fallback aliases to try"),
    store: Store = Depends(get_store)
):
    """Get a word by id, text or alias."""
    found = await store.get_word(lang, word, like=like, aliases=alias)
    return {"content": found}


@router.post("", response_model=Envelope[WordResponse], response_model_exclude_none=True)
async def create_word(
    lang: str,
    word: WordCreate,
    store: Store = Depends(get_store)
):
    """Add a word to a language."""
    created = await store.create_word(lang, word)
    return {"content": created}


@router.patch("/{word_id}", response_model=Envelope[WordUpdate], response_model_exclude_none=True)
async def update_word(
    lang: str,
    word_id: int,
    diff: WordDiff,
    store: Store = Depends(get_store)
):
    """Change the given fields of a word."""
    updated = await store.update_word(lang, WordUpdate(id=word_id, **diff.changes()))
    return {"content": updated}


@router.delete("/{word_id}", response_model=Envelope[WordResponse], response_model_exclude_none=True)
async def delete_word(
    lang: str,
    word_id: int,
    store: Store = Depends(get_store)
):
    """Delete a word by id."""
    deleted = await store.delete_word(lang, word_id)
    return {"content": deleted}
