"""Cache key builders. Single place for key format (DRY).

Key components (programme_id etc.) must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys.
"""

from app.core.constants import CACHE_KEY_ANY, CACHE_KEY_SEP, CACHE_PREFIX_SUBJECTS


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value contains CACHE_KEY_SEP.
    """
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def subjects_key(programme_id: str | None = None, semester: int | None = None) -> str:
    """Cache key for a subject listing, e.g. subjects:list:DBS:2 or subjects:list:*:*."""
    if programme_id is not None:
        _validate_key_component(programme_id, "programme_id")
    programme = programme_id if programme_id is not None else CACHE_KEY_ANY
    sem = str(semester) if semester is not None else CACHE_KEY_ANY
    return f"{CACHE_PREFIX_SUBJECTS}{CACHE_KEY_SEP}list{CACHE_KEY_SEP}{programme}{CACHE_KEY_SEP}{sem}"
