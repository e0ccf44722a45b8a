"""Data models for speedrun.com resources.

Every resource is a snapshot of one API response. Relations that the API
can either embed or merely reference are kept as ``Relation`` values in
``*_relation`` fields; use the accessor methods to get at the related
resources.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar

from speedrun_client.decoding import register_type_hook
from speedrun_client.embeds import (
    Relation,
    decode_embedded,
    relation_ids,
    resolve_many,
    resolve_one,
)
from speedrun_client.errors import SpeedrunError
from speedrun_client.filters import (
    CategoryFilter,
    GameFilter,
    LeaderboardFilter,
    LeaderboardOptions,
    RunFilter,
)
from speedrun_client.links import Link, Linked
from speedrun_client.pagination import Collection
from speedrun_client.query import Sorting

R = TypeVar("R", bound="Resource")


@dataclass
class Resource(Linked):
    """Base class for all top-level API resources."""

    id: str = ""
    links: List[Link] = field(default_factory=list)

    # path of the resource's endpoint, e.g. "/games"
    endpoint: ClassVar[str] = ""
    # JSON keys that hold embedded-or-reference data
    relation_keys: ClassVar[Tuple[str, ...]] = ()
    _client: ClassVar[Any] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        register_type_hook(cls, cls.prepare)

    @classmethod
    def prepare(cls, data: Any) -> Any:
        """Move relation keys to their ``<key>_relation`` fields."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key in cls.relation_keys:
            if key in data:
                data[f"{key}_relation"] = data.pop(key)
        return data

    def bind(self, client) -> "Resource":
        """Attach ``client`` for follow-up requests; returns self."""
        self._client = client
        return self

    @property
    def client(self):
        """The bound client.

        Raises:
            SpeedrunError: if the resource was built without a client

        """
        if self._client is None:
            raise SpeedrunError(f"{type(self).__name__} is not bound to a client")
        return self._client

    def _follow(self, rel: str, cls: Type[R], filter=None) -> Optional[R]:
        return self.client.fetch_one_link(self.first_link(rel), cls, filter=filter)

    def _follow_many(
        self, rel: str, cls: Type[R], filter=None, sort=None
    ) -> Collection[R]:
        return self.client.fetch_many_link(self.first_link(rel), cls, filter, sort)

    def _related_one(self, relation: Relation, cls: Type[R], rel: str) -> Optional[R]:
        """Embedded, referenced by id, or reachable through the ``rel`` link."""
        if relation.is_absent:
            return self._follow(rel, cls)
        return resolve_one(self.client, relation, cls, self.client.fetcher(cls))

    def _related_list(
        self, relation: Relation, cls: Type[R], rel: str, filter=None, sort=None
    ) -> List[R]:
        """Embedded items, or the list behind the ``rel`` link."""
        if relation.is_embedded:
            return decode_embedded(self.client, relation, cls)
        return list(self._follow_many(rel, cls, filter, sort))


def bind_client(value: Any, client) -> None:
    """Bind every resource reachable from ``value`` to ``client``."""
    if isinstance(value, Resource):
        value.bind(client)
    if is_dataclass(value) and not isinstance(value, type):
        for f in fields(value):
            bind_client(getattr(value, f.name), client)
    elif isinstance(value, list):
        for item in value:
            bind_client(item, client)
    elif isinstance(value, dict):
        for item in value.values():
            bind_client(item, client)


@dataclass
class Names:
    international: str = ""
    japanese: Optional[str] = None
    twitch: Optional[str] = None


@dataclass
class AssetLink:
    uri: str = ""
    width: Optional[int] = None
    height: Optional[int] = None


@dataclass
class Ruleset:
    show_milliseconds: bool = False
    require_verification: bool = False
    require_video: bool = False
    run_times: List[str] = field(default_factory=list)
    default_time: str = ""
    emulators_allowed: bool = False


###############
## PLATFORMS ##
###############


@dataclass
class Platform(Resource):
    endpoint: ClassVar[str] = "/platforms"

    name: str = ""
    released: Optional[int] = None

    def games(
        self, filter: Optional[GameFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Game"]:
        """Games available on this platform."""
        return self._follow_many("games", Game, filter, sort)

    def runs(
        self, filter: Optional[RunFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Run"]:
        """Runs played on this platform."""
        return self._follow_many("runs", Run, filter, sort)


@dataclass
class Region(Resource):
    endpoint: ClassVar[str] = "/regions"

    name: str = ""

    def games(
        self, filter: Optional[GameFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Game"]:
        """Games released in this region."""
        return self._follow_many("games", Game, filter, sort)

    def runs(
        self, filter: Optional[RunFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Run"]:
        """Runs played on a copy from this region."""
        return self._follow_many("runs", Run, filter, sort)


###########
## USERS ##
###########


@dataclass
class NameColor:
    light: str = ""
    dark: str = ""


@dataclass
class NameStyle:
    style: str = ""
    color: Optional[NameColor] = None
    color_from: Optional[NameColor] = None
    color_to: Optional[NameColor] = None


@dataclass
class Location:
    code: str = ""
    names: Names = field(default_factory=Names)


@dataclass
class UserLocation:
    country: Location = field(default_factory=Location)
    region: Optional[Location] = None


@dataclass
class SocialLink:
    uri: str = ""


@dataclass
class User(Resource):
    endpoint: ClassVar[str] = "/users"

    names: Names = field(default_factory=Names)
    weblink: str = ""
    name_style: NameStyle = field(default_factory=NameStyle)
    role: str = ""
    signup: Optional[str] = None
    location: Optional[UserLocation] = None
    twitch: Optional[SocialLink] = None
    hitbox: Optional[SocialLink] = None
    youtube: Optional[SocialLink] = None
    twitter: Optional[SocialLink] = None
    speedrunslive: Optional[SocialLink] = None

    def runs(
        self, filter: Optional[RunFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Run"]:
        """Runs submitted by this user."""
        return self._follow_many("runs", Run, filter, sort)

    def moderated_games(
        self, filter: Optional[GameFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Game"]:
        """Games this user moderates."""
        return self._follow_many("games", Game, filter, sort)


###########
## GAMES ##
###########


@dataclass
class Game(Resource):
    endpoint: ClassVar[str] = "/games"
    relation_keys: ClassVar[Tuple[str, ...]] = (
        "platforms",
        "regions",
        "moderators",
        "categories",
        "levels",
        "variables",
    )

    names: Names = field(default_factory=Names)
    abbreviation: str = ""
    weblink: str = ""
    released: Optional[int] = None
    release_date: Optional[str] = None
    ruleset: Ruleset = field(default_factory=Ruleset)
    romhack: Optional[bool] = None
    created: Optional[str] = None
    assets: Dict[str, Optional[AssetLink]] = field(default_factory=dict)

    platforms_relation: Relation = field(default_factory=Relation)
    regions_relation: Relation = field(default_factory=Relation)
    moderators_relation: Relation = field(default_factory=Relation)
    categories_relation: Relation = field(default_factory=Relation)
    levels_relation: Relation = field(default_factory=Relation)
    variables_relation: Relation = field(default_factory=Relation)

    def platform_ids(self) -> List[str]:
        """Ids of the game's platforms, without extra requests."""
        return relation_ids(self.client, self.platforms_relation, Platform)

    def platforms(self) -> List[Platform]:
        """Platforms the game runs on; one request per platform unless embedded."""
        return resolve_many(
            self.client, self.platforms_relation, Platform, self.client.fetcher(Platform)
        )

    def region_ids(self) -> List[str]:
        """Ids of the regions the game was released in."""
        return relation_ids(self.client, self.regions_relation, Region)

    def regions(self) -> List[Region]:
        """Regions the game was released in."""
        return resolve_many(
            self.client, self.regions_relation, Region, self.client.fetcher(Region)
        )

    def moderator_ids(self) -> List[str]:
        """User ids of the moderators, in response order."""
        return relation_ids(self.client, self.moderators_relation, User)

    def moderators(self) -> List[User]:
        """Moderators of the game; fetched one by one unless embedded."""
        return resolve_many(
            self.client, self.moderators_relation, User, self.client.fetcher(User)
        )

    def categories(
        self, filter: Optional[CategoryFilter] = None, sort: Optional[Sorting] = None
    ) -> List["Category"]:
        """Embedded categories, otherwise fetched; filter and sort apply only then."""
        return self._related_list(
            self.categories_relation, Category, "categories", filter, sort
        )

    def levels(self, sort: Optional[Sorting] = None) -> List["Level"]:
        """Levels of the game; embedded or fetched."""
        return self._related_list(self.levels_relation, Level, "levels", sort=sort)

    def variables(self, sort: Optional[Sorting] = None) -> List["Variable"]:
        """Variables of the game; embedded or fetched."""
        return self._related_list(
            self.variables_relation, Variable, "variables", sort=sort
        )

    def runs(
        self, filter: Optional[RunFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Run"]:
        """Runs of the game."""
        return self._follow_many("runs", Run, filter, sort)

    def records(
        self, filter: Optional[LeaderboardFilter] = None
    ) -> Collection["Leaderboard"]:
        """Top runs of every category (and level) of the game."""
        return self._follow_many("records", Leaderboard, filter)

    def derived_games(
        self, filter: Optional[GameFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Game"]:
        """Romhacks and other games derived from this one."""
        return self._follow_many("derived-games", Game, filter, sort)


################
## CATEGORIES ##
################


@dataclass
class Players:
    type: str = ""
    value: int = 0


@dataclass
class Category(Resource):
    """A full-game or per-level category of a game."""

    endpoint: ClassVar[str] = "/categories"
    relation_keys: ClassVar[Tuple[str, ...]] = ("game", "variables")

    name: str = ""
    weblink: str = ""
    type: str = ""
    rules: Optional[str] = None
    players: Players = field(default_factory=Players)
    miscellaneous: bool = False

    game_relation: Relation = field(default_factory=Relation)
    variables_relation: Relation = field(default_factory=Relation)

    def game(self) -> Optional[Game]:
        """The embedded game, or the game fetched through the ``game`` link."""
        return self._related_one(self.game_relation, Game, "game")

    def variables(self, sort: Optional[Sorting] = None) -> List["Variable"]:
        """Embedded variables, otherwise fetched; sort applies only then."""
        return self._related_list(
            self.variables_relation, Variable, "variables", sort=sort
        )

    def primary_leaderboard(
        self, options: Optional[LeaderboardOptions] = None
    ) -> Optional["Leaderboard"]:
        """The primary leaderboard; None for categories that have none."""
        return self._follow("leaderboard", Leaderboard, filter=options)

    def records(
        self, filter: Optional[LeaderboardFilter] = None
    ) -> Collection["Leaderboard"]:
        """One leaderboard for full-game categories, one per level otherwise."""
        return self._follow_many("records", Leaderboard, filter)

    def runs(
        self, filter: Optional[RunFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Run"]:
        """Runs in this category; empty if they cannot be fetched."""
        return self._follow_many("runs", Run, filter, sort)


############
## LEVELS ##
############


@dataclass
class Level(Resource):
    endpoint: ClassVar[str] = "/levels"
    relation_keys: ClassVar[Tuple[str, ...]] = ("categories", "variables")

    name: str = ""
    weblink: str = ""
    rules: Optional[str] = None

    categories_relation: Relation = field(default_factory=Relation)
    variables_relation: Relation = field(default_factory=Relation)

    def game(self) -> Optional[Game]:
        """The game this level belongs to."""
        return self._follow("game", Game)

    def categories(
        self, filter: Optional[CategoryFilter] = None, sort: Optional[Sorting] = None
    ) -> List[Category]:
        """Per-level categories; embedded or fetched."""
        return self._related_list(
            self.categories_relation, Category, "categories", filter, sort
        )

    def variables(self, sort: Optional[Sorting] = None) -> List["Variable"]:
        """Variables that apply to this level."""
        return self._related_list(
            self.variables_relation, Variable, "variables", sort=sort
        )

    def records(
        self, filter: Optional[LeaderboardFilter] = None
    ) -> Collection["Leaderboard"]:
        """One leaderboard per category of this level."""
        return self._follow_many("records", Leaderboard, filter)

    def runs(
        self, filter: Optional[RunFilter] = None, sort: Optional[Sorting] = None
    ) -> Collection["Run"]:
        """Runs of this level."""
        return self._follow_many("runs", Run, filter, sort)


###############
## VARIABLES ##
###############


@dataclass
class VariableScope:
    type: str = ""
    level: Optional[str] = None


@dataclass
class VariableValueFlags:
    miscellaneous: Optional[bool] = None


@dataclass
class VariableValue:
    label: str = ""
    rules: Optional[str] = None
    flags: Optional[VariableValueFlags] = None


@dataclass
class VariableValues:
    values: Dict[str, VariableValue] = field(default_factory=dict)
    default: Optional[str] = None


@dataclass
class Variable(Resource):
    endpoint: ClassVar[str] = "/variables"
    relation_keys: ClassVar[Tuple[str, ...]] = ("category",)

    name: str = ""
    scope: VariableScope = field(default_factory=VariableScope)
    mandatory: bool = False
    user_defined: bool = False
    obsoletes: bool = False
    values: VariableValues = field(default_factory=VariableValues)
    is_subcategory: bool = False

    category_relation: Relation = field(default_factory=Relation)

    def game(self) -> Optional[Game]:
        """The game this variable is defined for."""
        return self._follow("game", Game)

    def category(self) -> Optional[Category]:
        """The category this variable belongs to; None for game-wide variables."""
        return self._related_one(self.category_relation, Category, "category")


##########
## RUNS ##
##########


@dataclass
class VideoLink:
    uri: str = ""


@dataclass
class RunVideos:
    text: Optional[str] = None
    links: List[VideoLink] = field(default_factory=list)


@dataclass
class RunStatus:
    status: str = ""
    examiner: Optional[str] = None
    verify_date: Optional[str] = None
    reason: Optional[str] = None


@dataclass
class RunTimes:
    primary: Optional[str] = None
    primary_t: float = 0.0
    realtime: Optional[str] = None
    realtime_t: float = 0.0
    realtime_noloads: Optional[str] = None
    realtime_noloads_t: float = 0.0
    ingame: Optional[str] = None
    ingame_t: float = 0.0


@dataclass
class RunSystem:
    platform: Optional[str] = None
    emulated: bool = False
    region: Optional[str] = None


@dataclass
class Run(Resource):
    endpoint: ClassVar[str] = "/runs"
    relation_keys: ClassVar[Tuple[str, ...]] = ("game", "level", "category", "players")

    weblink: str = ""
    videos: Optional[RunVideos] = None
    comment: Optional[str] = None
    status: RunStatus = field(default_factory=RunStatus)
    date: Optional[str] = None
    submitted: Optional[str] = None
    times: RunTimes = field(default_factory=RunTimes)
    system: RunSystem = field(default_factory=RunSystem)
    splits: Optional[Link] = None
    values: Dict[str, str] = field(default_factory=dict)

    game_relation: Relation = field(default_factory=Relation)
    level_relation: Relation = field(default_factory=Relation)
    category_relation: Relation = field(default_factory=Relation)
    players_relation: Relation = field(default_factory=Relation)

    def game(self) -> Optional[Game]:
        """The game the run was played in."""
        return self._related_one(self.game_relation, Game, "game")

    def category(self) -> Optional[Category]:
        """The category the run was submitted to."""
        return self._related_one(self.category_relation, Category, "category")

    def level(self) -> Optional[Level]:
        """The level of an individual-level run; None for full-game runs."""
        return self._related_one(self.level_relation, Level, "level")

    def platform(self) -> Optional[Platform]:
        """The platform the run was played on, if recorded."""
        return self._follow("platform", Platform)

    def region(self) -> Optional[Region]:
        """The region of the game copy, if recorded."""
        return self._follow("region", Region)

    def examiner(self) -> Optional[User]:
        """The moderator who verified or rejected the run."""
        return self._follow("examiner", User)

    def _embedded_players(self, guests: bool) -> List[Dict[str, Any]]:
        return [
            item
            for item in self.players_relation.embedded_items()
            if isinstance(item, dict) and (item.get("rel") == "guest") == guests
        ]

    def player_ids(self) -> List[str]:
        """Ids of the registered users among the players; guests have none."""
        if self.players_relation.is_embedded:
            return [item.get("id", "") for item in self._embedded_players(guests=False)]
        return list(self.players_relation.ids)

    def players(self) -> List[User]:
        """Registered users who performed the run."""
        if self.players_relation.is_embedded:
            embedded = Relation.from_raw({"data": self._embedded_players(guests=False)})
            return decode_embedded(self.client, embedded, User)
        return resolve_many(
            self.client, self.players_relation, User, self.client.fetcher(User)
        )

    def guest_names(self) -> List[str]:
        """Names of the players without an account."""
        if self.players_relation.is_embedded:
            entries = self._embedded_players(guests=True)
        else:
            entries = [
                entry
                for entry in self.players_relation.payload or []
                if isinstance(entry, dict) and entry.get("rel") == "guest"
            ]
        return [entry.get("name", "") for entry in entries]


##################
## LEADERBOARDS ##
##################


@dataclass
class RankedRun:
    place: int = 0
    run: Run = field(default_factory=Run)


@dataclass
class Leaderboard(Resource):
    """Ranked runs of one category (and level), as seen with given options."""

    relation_keys: ClassVar[Tuple[str, ...]] = ("game", "category", "level", "players")

    weblink: str = ""
    platform: Optional[str] = None
    region: Optional[str] = None
    emulators: Optional[bool] = None
    video_only: bool = False
    timing: Optional[str] = None
    values: Dict[str, str] = field(default_factory=dict)
    runs: List[RankedRun] = field(default_factory=list)

    game_relation: Relation = field(default_factory=Relation)
    category_relation: Relation = field(default_factory=Relation)
    level_relation: Relation = field(default_factory=Relation)
    players_relation: Relation = field(default_factory=Relation)

    def game(self) -> Optional[Game]:
        """The game of the leaderboard."""
        return self._related_one(self.game_relation, Game, "game")

    def category(self) -> Optional[Category]:
        """The category of the leaderboard."""
        return self._related_one(self.category_relation, Category, "category")

    def level(self) -> Optional[Level]:
        """The level of an individual-level leaderboard, else None."""
        return self._related_one(self.level_relation, Level, "level")

    def players(self) -> List[User]:
        """Embedded players of all ranked runs; empty unless ``players`` was embedded."""
        items = [
            item
            for item in self.players_relation.embedded_items()
            if isinstance(item, dict) and item.get("rel") != "guest"
        ]
        return decode_embedded(self.client, Relation.from_raw({"data": items}), User)
