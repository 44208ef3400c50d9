"""Helpers for the pipe-delimited alias column and numeric references."""
import re
from typing import Iterable, List, Optional

ALIAS_DELIMITER = "|"

_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_id(ref: str) -> Optional[int]:
    """Return ``ref`` as an integer id, or None if it is not numeric."""
    if _ID_RE.fullmatch(ref):
        return int(ref)
    return None


def normalize_aliases(aliases: Iterable[str]) -> List[str]:
    """Trim aliases, dropping empty ones and repeats (first occurrence wins).

    Raises ValueError if an alias contains the delimiter.
    """
    result: List[str] = []
    for alias in aliases:
        alias = alias.strip()
        if not alias:
            continue
        if ALIAS_DELIMITER in alias:
            raise ValueError(f"alias may not contain '{ALIAS_DELIMITER}': {alias!r}")
        if alias not in result:
            result.append(alias)
    return result


def join_aliases(aliases: Iterable[str]) -> str:
    """Encode aliases for storage as ``|a|b|c|`` ('' when there are none)."""
    aliases = list(aliases)
    if not aliases:
        return ""
    return ALIAS_DELIMITER + ALIAS_DELIMITER.join(aliases) + ALIAS_DELIMITER


def split_aliases(stored: Optional[str]) -> List[str]:
    """Decode a stored alias column."""
    if not stored:
        return []
    return [alias for alias in stored.split(ALIAS_DELIMITER) if alias]


def alias_token(alias: str) -> str:
    """The substring a stored alias column contains when ``alias`` is one of its tokens."""
    return ALIAS_DELIMITER + alias + ALIAS_DELIMITER


def has_alias(stored: Optional[str], alias: str) -> bool:
    """Case-sensitive whole-token membership test."""
    return bool(stored) and alias_token(alias) in stored
