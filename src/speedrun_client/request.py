"""Request descriptors: what to fetch, not the fetching itself."""

from dataclasses import dataclass
from typing import Optional, Tuple

from speedrun_client.query import Cursor, QueryParams, Sorting


@dataclass(frozen=True)
class Request:
    """An immutable description of one API call.

    ``path`` is relative to the configured base URL, or an absolute URL when
    it came from a link that points elsewhere.
    """

    method: str
    path: str
    filter: Optional[QueryParams] = None
    sort: Optional[Sorting] = None
    cursor: Optional[Cursor] = None
    embed: Tuple[str, ...] = ()

    def url(self, base_url: str) -> str:
        """Build the full URL including every query parameter."""
        if self.path.startswith(("http://", "https://")):
            url = self.path
        else:
            url = base_url.rstrip("/") + self.path

        for part in (self.filter, self.sort, self.cursor):
            if part is not None:
                url = part.apply_to_url(url)

        if self.embed:
            url = _Embed(self.embed).apply_to_url(url)

        return url


@dataclass(frozen=True)
class _Embed(QueryParams):
    names: Tuple[str, ...]

    def apply_to_params(self, params):
        params["embed"] = ",".join(self.names)
