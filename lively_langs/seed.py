"""
Seed script to populate the database with sample data.

This script creates a few sample languages, each with a handful of words.
Run it with ``lively-langs seed`` to get something to browse.
"""

from lively_langs.exceptions import LanguageExistsError
from lively_langs.languages.schemas import LanguageCreate
from lively_langs.store import Store
from lively_langs.words.schemas import WordCreate


# ========== SEED DATA ==========

LANGUAGES_DATA = {
    "spanish": {
        "aliases": ["es", "esp", "español"],
        "notes": "Castilian Spanish",
        "words": [
            {"word": "gato", "definition": "cat", "aliases": ["gata", "michi"]},
            {"word": "perro", "definition": "dog", "aliases": ["perra"]},
            {"word": "casa", "definition": "house"},
            {"word": "agua", "definition": "water", "notes": "feminine, but takes 'el' in the singular"},
            {"word": "libro", "definition": "book"},
        ],
    },
    "french": {
        "aliases": ["fr", "fra", "français"],
        "notes": "",
        "words": [
            {"word": "chat", "definition": "cat", "aliases": ["chatte"]},
            {"word": "chien", "definition": "dog", "aliases": ["chienne"]},
            {"word": "maison", "definition": "house"},
            {"word": "eau", "definition": "water"},
        ],
    },
    "japanese": {
        "aliases": ["ja", "jp", "日本語"],
        "notes": "Words are given in kana with romaji aliases",
        "words": [
            {"word": "ねこ", "definition": "cat", "aliases": ["neko", "猫"]},
            {"word": "いぬ", "definition": "dog", "aliases": ["inu", "犬"]},
            {"word": "みず", "definition": "water", "aliases": ["mizu", "水"]},
        ],
    },
}


async def clear_database(store: Store):
    """Delete every language (and with it every word table)."""

    print("🗑️  Clearing database...")

    listing = await store.list_languages()
    for language in listing.items:
        await store.delete_language(str(language.id))

    print("✅ Database cleared!")


async def seed_database(store: Store, clear: bool = False):
    """Seed the database with sample data; languages that already exist are skipped."""

    if clear:
        await clear_database(store)

    print("🌱 Seeding database with sample data...")

    total_languages = 0
    total_words = 0

    for name, language_data in LANGUAGES_DATA.items():
        try:
            await store.create_language(LanguageCreate(
                name=name,
                aliases=language_data["aliases"],
                notes=language_data["notes"],
            ))
        except LanguageExistsError:
            print(f"   - {name}: already present, skipping")
            continue

        for word_data in language_data["words"]:
            await store.create_word(name, WordCreate(**word_data))
            total_words += 1

        total_languages += 1
        print(f"   ✓ {name}: {len(language_data['words'])} words")

    print("\n✅ Database seeded successfully!")
    print(f"   - {total_languages} languages created")
    print(f"   - {total_words} words created")
    return total_languages, total_words


async def seed_if_empty(store: Store):
    """Seed the database only if it's empty (no languages exist)."""
    listing = await store.list_languages()
    if listing.items:
        print("📦 Database already has data, skipping seed.")
        return False

    print("🌱 Database is empty, running seed...")
    await seed_database(store)
    return True
