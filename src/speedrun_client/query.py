"""Query-string building blocks: filters, sorting and cursors.

Every filter, sorting and cursor object knows how to write its own fields
into a query mapping. Unset fields are left out so that "no filter" and
"filter by false" stay distinguishable; tri-state booleans are therefore
``Optional[bool]`` and serialise to ``yes``/``no``.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def yes_no(value: Optional[bool]) -> Optional[str]:
    """Map a tri-state boolean to the API's ``yes``/``no`` tokens."""
    if value is None:
        return None
    return "yes" if value else "no"


def set_if(params: Dict[str, str], key: str, value: Any) -> None:
    """Set ``params[key]``; booleans become yes/no, empty values are skipped."""
    if isinstance(value, bool):
        params[key] = yes_no(value)
    elif value is not None and value != "" and value != 0:
        params[key] = str(value)


class QueryParams:
    """Base class for anything that can be applied to a URL's query."""

    def apply_to_params(self, params: Dict[str, str]) -> None:
        """Write this object's set fields into ``params``."""
        raise NotImplementedError

    def apply_to_url(self, url: str) -> str:
        """Return ``url`` with this object's fields merged into its query.

        Only the keys this object writes are replaced; other keys of the
        existing query are kept, repeated ones included.
        """
        parts = urlsplit(url)
        own: Dict[str, str] = {}
        self.apply_to_params(own)
        pairs = [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key not in own
        ]
        pairs.extend(own.items())
        return urlunsplit(parts._replace(query=urlencode(pairs)))


class Direction(enum.Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass(frozen=True)
class Sorting(QueryParams):
    """Sort order for list requests."""

    order_by: str
    direction: Direction = Direction.ASCENDING

    def apply_to_params(self, params: Dict[str, str]) -> None:
        params["orderby"] = self.order_by
        params["direction"] = self.direction.value


@dataclass(frozen=True)
class Cursor(QueryParams):
    """Offset and page size; both are always sent."""

    offset: int = 0
    max: int = 20

    def apply_to_params(self, params: Dict[str, str]) -> None:
        params["offset"] = str(self.offset)
        params["max"] = str(self.max)
