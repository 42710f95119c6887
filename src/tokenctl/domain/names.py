"""Token and group name rules.

Names are used as dotted-path segments in aliases, so they must not
contain the characters that delimit a path or an alias.
"""

from __future__ import annotations

from tokenctl.domain.errors import InvalidNameError
from tokenctl.domain.types import RESERVED_PREFIX

FORBIDDEN_CHARACTERS: tuple[str, ...] = ("{", "}", ".")


def validate_name(name: str) -> None:
    """Raise :class:`InvalidNameError` if *name* is not a legal token or group name."""
    if not isinstance(name, str) or not name:
        msg = f"Token and group names MUST be non-empty strings. Found: {name!r}"
        raise InvalidNameError(msg, name=str(name))
    if name.startswith(RESERVED_PREFIX):
        msg = f"Token and group names MUST NOT begin with '{RESERVED_PREFIX}'. Found: {name!r}"
        raise InvalidNameError(msg, name=name)
    if any(char in name for char in FORBIDDEN_CHARACTERS):
        msg = f"Token and group names MUST NOT contain '{{', '}}' or '.'. Found: {name!r}"
        raise InvalidNameError(msg, name=name)
