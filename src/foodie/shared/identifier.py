"""Identifier helpers: every aggregate is keyed by a canonical UUID string."""

import re

from protean.exceptions import ValidationError

_CANONICAL_UUID = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


def is_identifier(value) -> bool:
    return isinstance(value, str) and bool(_CANONICAL_UUID.match(value))


def parse_identifier(value, field="id", message="Invalid ID format") -> str:
    """Return ``value`` normalised to lower case, or raise ``ValidationError``.

    Only the 8-4-4-4-12 hex form is accepted; braces, URNs and bare hex
    strings are rejected even though ``uuid.UUID`` would parse them.
    """
    if not is_identifier(value):
        raise ValidationError({field: [message]})
    return value.lower()
