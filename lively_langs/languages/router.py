from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query

from lively_langs.api import Envelope, get_store, listing_envelope
from lively_langs.languages.schemas import (
    LanguageCreate,
    LanguageDiff,
    LanguageResponse,
    LanguageUpdate,
)
from lively_langs.store import Store

router = APIRouter(prefix="/langs", tags=["Languages"])


async def _lookup_language(store: Store, ref: str, aliases: List[str]) -> dict:
    # The reference is itself the first alias candidate
    language = await store.get_language(ref, [ref, *aliases])
    return {"content": language}


@router.get(
    "",
    response_model=Envelope[Union[List[LanguageResponse], LanguageResponse]],
    response_model_exclude_none=True,
)
async def list_languages(
    name: Optional[str] = Query(None, description="Look up a single language by name"),
    alias: List[str] = Query([], description="Look up a single language by alias"),
    store: Store = Depends(get_store)
):
    """List all languages, or look one up when `name` or `alias` is given."""
    if name or alias:
        ref = name or alias[0]
        return await _lookup_language(store, ref, alias)

    listing = await store.list_languages()
    return listing_envelope(listing)


@router.get("/{lang}", response_model=Envelope[LanguageResponse], response_model_exclude_none=True)
async def get_language(
    lang: str,
    alias: List[str] = Query([], description="Fallback aliases to try"),
    store: Store = Depends(get_store)
):
    """Get a language by id, name or alias."""
    return await _lookup_language(store, lang, alias)


@router.post("", response_model=Envelope[LanguageResponse], response_model_exclude_none=True)
async def create_language(
    language: LanguageCreate,
    store: Store = Depends(get_store)
):
    """Create a new language and its word table."""
    created = await store.create_language(language)
    return {"content": created}


@router.patch("/{lang}", response_model=Envelope[LanguageUpdate], response_model_exclude_none=True)
async def update_language(
    lang: str,
    diff: LanguageDiff,
    store: Store = Depends(get_store)
):
    """Change the given fields of a language."""
    language = await store.get_language(lang, [lang])
    updated = await store.update_language(LanguageUpdate(id=language.id, **diff.changes()))
    return {"content": updated}


@router.delete("/{lang}", response_model=Envelope[LanguageResponse], response_model_exclude_none=True)
async def delete_language(
    lang: str,
    store: Store = Depends(get_store)
):
    """Delete a language (by id or name) and all of its words."""
    deleted = await store.delete_language(lang)
    return {"content": deleted}
