"""Resolution of user/video references that may be a UUID or an external id."""

import re
from dataclasses import dataclass
from uuid import UUID

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


@dataclass(frozen=True)
class ByCanonicalId:
    id: UUID


@dataclass(frozen=True)
class ByExternalId:
    external_id: str


EntityRef = ByCanonicalId | ByExternalId


def resolve_ref(raw: str | UUID) -> EntityRef:
    """Classify a raw reference by shape before any lookup happens.

    Only strings in the canonical 8-4-4-4-12 hex layout are treated as
    primary keys; anything else is matched against the external identity
    column.
    """
    if isinstance(raw, UUID):
        return ByCanonicalId(raw)
    value = raw.strip()
    if UUID_PATTERN.match(value):
        return ByCanonicalId(UUID(value))
    return ByExternalId(value)
