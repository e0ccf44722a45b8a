"""Pages of resources and navigation between them."""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

from speedrun_client.errors import NoSuchLinkError, SpeedrunError
from speedrun_client.links import Link, Linked

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Pagination(Linked):
    """Pagination block of a list response."""

    offset: int = 0
    max: int = 0
    size: int = 0
    links: List[Link] = field(default_factory=list)


class Collection(Generic[T]):
    """One page of resources of a single kind.

    A collection is always a usable value: when the request that should
    have produced it failed, it is empty and ``error`` holds the failure.
    """

    def __init__(
        self,
        item_type: Type[T],
        data: Optional[List[T]] = None,
        pagination: Optional[Pagination] = None,
        error: Optional[SpeedrunError] = None,
        client: Any = None,
    ):
        self.item_type = item_type
        self.data = list(data or [])
        self.pagination = pagination or Pagination()
        self.error = error
        self._client = client

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[T]:
        return iter(self.data)

    def __getitem__(self, index):
        return self.data[index]

    def __bool__(self) -> bool:
        return bool(self.data)

    def __repr__(self) -> str:
        name = self.item_type.__name__
        if self.error is not None:
            return f"<Collection[{name}] error={self.error!s}>"
        return f"<Collection[{name}] {len(self.data)} of {self.pagination.size}>"

    @property
    def ok(self) -> bool:
        """True unless the request for this page failed."""
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the stored error, if the request for this page failed."""
        if self.error is not None:
            raise self.error

    def ids(self) -> List[str]:
        """Identifiers of the items on this page, in order."""
        return [item.id for item in self.data]

    def next_page(self) -> "Collection[T]":
        """Fetch the page behind the ``next`` link.

        Returns:
            The next page. Without a ``next`` link it is empty and carries a
            NoSuchLinkError; a collection created without a client cannot
            follow links and carries a plain SpeedrunError instead.

        """
        return self._fetch_link("next")

    def prev_page(self) -> "Collection[T]":
        """Fetch the page behind the ``prev`` link."""
        return self._fetch_link("prev")

    def _fetch_link(self, rel: str) -> "Collection[T]":
        link = self.pagination.first_link(rel)
        if link is None:
            return self._empty(NoSuchLinkError(rel))
        if self._client is None:
            return self._empty(
                SpeedrunError(f"Cannot follow '{rel}' link: collection has no client", link.uri)
            )

        # pagination links carry the full query; filter and sort are not reapplied
        return self._client.fetch_many(
            link.request(self._client.base_url), self.item_type
        )

    def _empty(self, error: SpeedrunError) -> "Collection[T]":
        return Collection(self.item_type, error=error, client=self._client)

    def walk(self) -> Iterator[T]:
        """Yield the items of this page and every following page."""
        page = self
        while True:
            yield from page.data
            if page.pagination.first_link("next") is None:
                return
            page = page.next_page()
            if page.error is not None:
                log.warning("Stopped paging %s: %s", self.item_type.__name__, page.error)
                return
