"""Relations that are either embedded in a response or only referenced.

Depending on the ``embed`` query parameter the API returns a relation such
as a game's platforms either as a list of identifiers or as a nested
``{"data": ...}`` envelope. The shape is decided once when a resource is
decoded; accessors then either decode the embedded payload or fetch each
identifier.
"""

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar

from speedrun_client.errors import SpeedrunError

log = logging.getLogger(__name__)

T = TypeVar("T")


class RelationKind(enum.Enum):
    ABSENT = "absent"
    REFERENCE = "reference"
    EMBEDDED = "embedded"


class Relation:
    """Tagged variant for an embedded-or-reference field.

    Attributes:
        kind: Which of the three shapes the raw value had
        ids: Identifiers, in response order, for references
        payload: The content of the ``data`` key for embedded relations; a
            list for to-many relations, a mapping for to-one relations

    """

    def __init__(
        self,
        kind: RelationKind = RelationKind.ABSENT,
        ids: Sequence[str] = (),
        payload: Any = None,
    ):
        self.kind = kind
        self.ids = list(ids)
        self.payload = payload

    @classmethod
    def from_raw(cls, raw: Any) -> "Relation":
        """Classify a raw decoded JSON value."""
        if isinstance(raw, Relation):
            return raw

        if isinstance(raw, str):
            return cls(RelationKind.REFERENCE, ids=[raw])

        if isinstance(raw, list):
            # either plain ids, or reference objects such as run players
            # ({"rel": "user", "id": ...}); guests have no id and are skipped
            ids = []
            for entry in raw:
                if isinstance(entry, str):
                    ids.append(entry)
                elif isinstance(entry, dict) and isinstance(entry.get("id"), str):
                    ids.append(entry["id"])
            return cls(RelationKind.REFERENCE, ids=ids, payload=raw)

        if isinstance(raw, dict):
            if "data" in raw:
                return cls(RelationKind.EMBEDDED, payload=raw["data"])
            # game moderators: {user_id: role}
            return cls(RelationKind.REFERENCE, ids=list(raw), payload=raw)

        return cls()

    @property
    def is_embedded(self) -> bool:
        """True if the related data came nested in the response."""
        return self.kind is RelationKind.EMBEDDED

    @property
    def is_absent(self) -> bool:
        """True if the response said nothing about the relation."""
        return self.kind is RelationKind.ABSENT

    def embedded_items(self) -> List[Any]:
        """Return the embedded payload as a list of raw items."""
        if not self.is_embedded or self.payload is None:
            return []
        if isinstance(self.payload, list):
            return list(self.payload)
        return [self.payload]

    def __eq__(self, other):
        if not isinstance(other, Relation):
            return NotImplemented
        return (self.kind, self.ids, self.payload) == (
            other.kind,
            other.ids,
            other.payload,
        )

    def __repr__(self):
        if self.is_embedded:
            return f"Relation(embedded, {len(self.embedded_items())} items)"
        if self.is_absent:
            return "Relation(absent)"
        return f"Relation(reference, {self.ids!r})"


def relation_ids(client, relation: Relation, cls: Type[T]) -> List[str]:
    """Return the identifiers of a relation in response order."""
    if relation.is_embedded:
        return [item.id for item in decode_embedded(client, relation, cls)]
    return list(relation.ids)


def decode_embedded(client, relation: Relation, cls: Type[T]) -> List[T]:
    """Decode an embedded payload into resources; no network access."""
    result = []
    for item in relation.embedded_items():
        try:
            result.append(client.decode(cls, item))
        except SpeedrunError as e:
            log.warning("Skipping embedded %s that failed to decode: %s", cls.__name__, e)
    return result


def resolve_many(
    client,
    relation: Relation,
    cls: Type[T],
    fetch: Callable[[str], T],
) -> List[T]:
    """Resolve a to-many relation into full resources.

    Embedded payloads are decoded directly. References are fetched one
    request per identifier; identifiers that fail to resolve are dropped
    and the rest keep their order.
    """
    if relation.is_embedded:
        return decode_embedded(client, relation, cls)
    if relation.is_absent or not relation.ids:
        return []

    def fetch_quietly(resource_id: str) -> Optional[T]:
        try:
            return fetch(resource_id)
        except SpeedrunError as e:
            log.warning("Could not resolve %s %s: %s", cls.__name__, resource_id, e)
            return None

    workers = min(client.max_workers, len(relation.ids))
    if workers <= 1:
        resolved = [fetch_quietly(resource_id) for resource_id in relation.ids]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            resolved = list(executor.map(fetch_quietly, relation.ids))

    return [item for item in resolved if item is not None]


def resolve_one(
    client,
    relation: Relation,
    cls: Type[T],
    fetch: Callable[[str], T],
) -> Optional[T]:
    """Resolve a to-one relation; None when absent or when the fetch fails."""
    resolved = resolve_many(client, relation, cls, fetch)
    return resolved[0] if resolved else None
