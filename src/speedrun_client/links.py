"""Hyperlinks attached to resources and pagination blocks."""

from dataclasses import dataclass
from typing import List, Optional

from speedrun_client.query import QueryParams, Sorting
from speedrun_client.request import Request


@dataclass(frozen=True)
class Link:
    """A (relation, URI) pair pointing at a related resource or action."""

    rel: str
    uri: str

    def request(
        self,
        base_url: str,
        filter: Optional[QueryParams] = None,
        sort: Optional[Sorting] = None,
    ) -> Request:
        """Turn the link into a GET request relative to ``base_url``.

        URIs outside of ``base_url`` are kept absolute.
        """
        base_url = base_url.rstrip("/")
        path = self.uri
        if base_url and path.startswith(base_url):
            path = path[len(base_url):]

        return Request("GET", path, filter=filter, sort=sort)


class Linked:
    """Mixin for anything that carries a list of links."""

    def get_links(self) -> List[Link]:
        """Links of this object, in response order."""
        return getattr(self, "links", None) or []

    def first_link(self, rel: str) -> Optional[Link]:
        """Shortcut for the module-level ``first_link``."""
        return first_link(self, rel)


def first_link(owner: Linked, rel: str) -> Optional[Link]:
    """Return the earliest link in ``owner`` whose relation is ``rel``.

    A missing link is a normal outcome (e.g. a category without a primary
    leaderboard), so None is returned instead of raising.
    """
    for link in owner.get_links():
        if link.rel == rel:
            return link
    return None
