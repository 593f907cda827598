"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache and the cached subject repository.
"""

# Cache key prefixes (used with :list:programme:semester etc.)
CACHE_PREFIX_SUBJECTS = "subjects"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Placeholder for an unset filter component in a cache key
CACHE_KEY_ANY = "*"

# Comment envelope titles are the first N characters of the content.
COMMENT_TITLE_MAX_LENGTH = 100

# Comments compete in combined ranking with a flat score.
COMMENT_ENVELOPE_SCORE = 1
