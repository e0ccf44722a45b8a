"""High-level access to the speedrun.com API."""

import logging
from typing import Any, Callable, Optional, Sequence, Type, TypeVar
from urllib.parse import quote

from speedrun_client.config import ClientConfig
from speedrun_client.decoding import decode
from speedrun_client.errors import DecodeError, SpeedrunError
from speedrun_client.filters import (
    GameFilter,
    LeaderboardOptions,
    RunFilter,
    UserFilter,
)
from speedrun_client.http_client import HttpClient
from speedrun_client.links import Link
from speedrun_client.models import (
    Category,
    Game,
    Leaderboard,
    Level,
    Platform,
    Region,
    Run,
    User,
    Variable,
    bind_client,
)
from speedrun_client.pagination import Collection, Pagination
from speedrun_client.query import Cursor, QueryParams, Sorting
from speedrun_client.request import Request

log = logging.getLogger(__name__)

T = TypeVar("T")


class SpeedrunClient:
    """Fetches resources and collections from the API.

    Resources decoded by a client are bound to it, so their relation
    accessors reuse the same transport and configuration.
    """

    def __init__(self, config: Optional[ClientConfig] = None, transport: Any = None):
        """Initialize the client.

        Args:
            config: Client settings; defaults to ``ClientConfig()``
            transport: Object with ``do(request)`` and ``base_url``; defaults
                to an ``HttpClient`` built from ``config``

        """
        self.config = config or ClientConfig()
        self.transport = transport or HttpClient(self.config)

    @property
    def base_url(self) -> str:
        """API root the transport sends requests to."""
        return self.transport.base_url

    @property
    def max_workers(self) -> int:
        """Thread count for resolving referenced relations."""
        return self.config.max_workers

    def decode(self, cls: Type[T], data: Any) -> T:
        """Decode ``data`` into ``cls`` and bind the result to this client."""
        resource = decode(cls, data)
        bind_client(resource, self)
        return resource

    # Generic fetchers

    def fetch_one(self, request: Request, cls: Type[T]) -> T:
        """Fetch a single resource.

        Raises:
            SpeedrunError: on transport, status or decoding failures

        """
        body = self.transport.do(request)
        try:
            return self.decode(cls, body.get("data"))
        except DecodeError as e:
            e.url = request.url(self.base_url)
            raise

    def fetch_many(self, request: Request, cls: Type[T]) -> Collection[T]:
        """Fetch a page of resources.

        Never raises for request failures: the returned collection is empty
        and carries the error instead, so paging calls can be chained.
        """
        try:
            body = self.transport.do(request)
            items = body.get("data")
            if not isinstance(items, list):
                raise DecodeError(f"Expected a list of {cls.__name__}")

            data = [self.decode(cls, item) for item in items]
            pagination = Pagination()
            if body.get("pagination") is not None:
                pagination = decode(Pagination, body["pagination"])
        except SpeedrunError as e:
            if e.url is None:
                e.url = request.url(self.base_url)
            log.warning("Could not fetch %s list: %s", cls.__name__, e)
            return Collection(cls, error=e, client=self)

        return Collection(cls, data, pagination, client=self)

    def fetch_one_link(
        self, link: Optional[Link], cls: Type[T], filter: Optional[QueryParams] = None
    ) -> Optional[T]:
        """Follow ``link`` to a single resource; None if there is no link.

        Fetch errors are logged and reported as None as well.
        """
        if link is None:
            return None

        try:
            return self.fetch_one(link.request(self.base_url, filter), cls)
        except SpeedrunError as e:
            log.warning("Could not follow '%s' link: %s", link.rel, e)
            return None

    def fetch_many_link(
        self,
        link: Optional[Link],
        cls: Type[T],
        filter: Optional[QueryParams] = None,
        sort: Optional[Sorting] = None,
    ) -> Collection[T]:
        """Follow ``link`` to a collection; empty if there is no link.

        A failed fetch is logged and also reported as an empty collection,
        without an error attached.
        """
        if link is None:
            return Collection(cls, client=self)

        collection = self.fetch_many(link.request(self.base_url, filter, sort), cls)
        if collection.error is not None:
            log.warning("Could not follow '%s' link: %s", link.rel, collection.error)
            return Collection(cls, client=self)
        return collection

    def by_id(self, cls: Type[T], resource_id: str, embed: Sequence[str] = ()) -> T:
        """Fetch one resource of ``cls`` by its id."""
        path = f"{cls.endpoint}/{quote(resource_id, safe='')}"
        return self.fetch_one(Request("GET", path, embed=tuple(embed)), cls)

    def fetcher(self, cls: Type[T]) -> Callable[[str], T]:
        """Return a function that fetches a ``cls`` by id."""
        return lambda resource_id: self.by_id(cls, resource_id)

    def _list(
        self,
        cls: Type[T],
        filter: Optional[QueryParams] = None,
        sort: Optional[Sorting] = None,
        cursor: Optional[Cursor] = None,
        embed: Sequence[str] = (),
    ) -> Collection[T]:
        request = Request("GET", cls.endpoint, filter, sort, cursor, tuple(embed))
        return self.fetch_many(request, cls)

    # Games

    def game_by_id(self, game_id: str, embed: Sequence[str] = ()) -> Game:
        """Fetch a game by id, optionally embedding relations."""
        return self.by_id(Game, game_id, embed)

    def game_by_abbreviation(self, abbreviation: str, embed: Sequence[str] = ()) -> Game:
        """The API resolves abbreviations on the same endpoint as ids."""
        return self.by_id(Game, abbreviation, embed)

    def games(
        self,
        filter: Optional[GameFilter] = None,
        sort: Optional[Sorting] = None,
        cursor: Optional[Cursor] = None,
        embed: Sequence[str] = (),
    ) -> Collection[Game]:
        """List games.

        Args:
            filter: Restricts the listing, e.g. by name or platform
            sort: Ordering of the results
            cursor: Page offset and size
            embed: Relations to embed in each game

        Returns:
            One page of games; check ``error`` for failures

        """
        return self._list(Game, filter, sort, cursor, embed)

    # Categories, levels and variables

    def category_by_id(self, category_id: str, embed: Sequence[str] = ()) -> Category:
        """Fetch a category by id."""
        return self.by_id(Category, category_id, embed)

    def level_by_id(self, level_id: str, embed: Sequence[str] = ()) -> Level:
        """Fetch a level by id."""
        return self.by_id(Level, level_id, embed)

    def variable_by_id(self, variable_id: str) -> Variable:
        """Fetch a variable by id."""
        return self.by_id(Variable, variable_id)

    # Users

    def user_by_id(self, user_id: str) -> User:
        """Fetch a user by id or name."""
        return self.by_id(User, user_id)

    def users(
        self,
        filter: Optional[UserFilter] = None,
        sort: Optional[Sorting] = None,
        cursor: Optional[Cursor] = None,
    ) -> Collection[User]:
        """List users matching ``filter``; one page per call."""
        return self._list(User, filter, sort, cursor)

    # Platforms and regions

    def platform_by_id(self, platform_id: str) -> Platform:
        """Fetch a platform by id."""
        return self.by_id(Platform, platform_id)

    def platforms(
        self, sort: Optional[Sorting] = None, cursor: Optional[Cursor] = None
    ) -> Collection[Platform]:
        """List platforms; one page per call."""
        return self._list(Platform, sort=sort, cursor=cursor)

    def region_by_id(self, region_id: str) -> Region:
        """Fetch a region by id."""
        return self.by_id(Region, region_id)

    def regions(
        self, sort: Optional[Sorting] = None, cursor: Optional[Cursor] = None
    ) -> Collection[Region]:
        """List regions; one page per call."""
        return self._list(Region, sort=sort, cursor=cursor)

    # Runs and leaderboards

    def run_by_id(self, run_id: str, embed: Sequence[str] = ()) -> Run:
        """Fetch a run by id, optionally embedding relations."""
        return self.by_id(Run, run_id, embed)

    def runs(
        self,
        filter: Optional[RunFilter] = None,
        sort: Optional[Sorting] = None,
        cursor: Optional[Cursor] = None,
        embed: Sequence[str] = (),
    ) -> Collection[Run]:
        """List runs.

        Args:
            filter: Restricts the listing, e.g. by game, user or status
            sort: Ordering of the results
            cursor: Page offset and size
            embed: Relations to embed in each run

        Returns:
            One page of runs; check ``error`` for failures

        """
        return self._list(Run, filter, sort, cursor, embed)

    def leaderboard(
        self,
        game: str,
        category: str,
        options: Optional[LeaderboardOptions] = None,
        embed: Sequence[str] = (),
    ) -> Leaderboard:
        """Full-game leaderboard of ``category`` in ``game`` (ids or abbreviations)."""
        path = f"/leaderboards/{quote(game, safe='')}/category/{quote(category, safe='')}"
        return self.fetch_one(Request("GET", path, options, embed=tuple(embed)), Leaderboard)

    def level_leaderboard(
        self,
        game: str,
        level: str,
        category: str,
        options: Optional[LeaderboardOptions] = None,
        embed: Sequence[str] = (),
    ) -> Leaderboard:
        """Individual-level leaderboard of ``category`` on ``level``."""
        path = "/leaderboards/{}/level/{}/{}".format(
            quote(game, safe=""), quote(level, safe=""), quote(category, safe="")
        )
        return self.fetch_one(Request("GET", path, options, embed=tuple(embed)), Leaderboard)

    def close(self) -> None:
        """Release the transport's connections, if it holds any."""
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
