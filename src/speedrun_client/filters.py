"""Filters and options accepted by list and leaderboard requests."""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from speedrun_client.query import QueryParams, set_if


@dataclass(frozen=True)
class GameFilter(QueryParams):
    name: str = ""
    abbreviation: str = ""
    released: int = 0
    platform: str = ""
    region: str = ""
    moderator: str = ""
    romhack: Optional[bool] = None

    def apply_to_params(self, params: Dict[str, str]) -> None:
        set_if(params, "name", self.name)
        set_if(params, "abbreviation", self.abbreviation)
        set_if(params, "released", self.released)
        set_if(params, "platform", self.platform)
        set_if(params, "region", self.region)
        set_if(params, "moderator", self.moderator)
        set_if(params, "romhack", self.romhack)


@dataclass(frozen=True)
class CategoryFilter(QueryParams):
    miscellaneous: Optional[bool] = None

    def apply_to_params(self, params: Dict[str, str]) -> None:
        set_if(params, "miscellaneous", self.miscellaneous)


@dataclass(frozen=True)
class UserFilter(QueryParams):
    lookup: str = ""
    name: str = ""
    twitch: str = ""
    hitbox: str = ""
    twitter: str = ""
    speedrunslive: str = ""

    def apply_to_params(self, params: Dict[str, str]) -> None:
        set_if(params, "lookup", self.lookup)
        set_if(params, "name", self.name)
        set_if(params, "twitch", self.twitch)
        set_if(params, "hitbox", self.hitbox)
        set_if(params, "twitter", self.twitter)
        set_if(params, "speedrunslive", self.speedrunslive)


@dataclass(frozen=True)
class RunFilter(QueryParams):
    """Filter for run listings; ``status`` is one of new, verified, rejected."""

    user: str = ""
    guest: str = ""
    examiner: str = ""
    game: str = ""
    level: str = ""
    category: str = ""
    platform: str = ""
    region: str = ""
    emulated: Optional[bool] = None
    status: str = ""

    def apply_to_params(self, params: Dict[str, str]) -> None:
        set_if(params, "user", self.user)
        set_if(params, "guest", self.guest)
        set_if(params, "examiner", self.examiner)
        set_if(params, "game", self.game)
        set_if(params, "level", self.level)
        set_if(params, "category", self.category)
        set_if(params, "platform", self.platform)
        set_if(params, "region", self.region)
        set_if(params, "emulated", self.emulated)
        set_if(params, "status", self.status)


@dataclass(frozen=True)
class LeaderboardOptions(QueryParams):
    """Options for a single leaderboard.

    ``values`` maps variable ids to value ids and is sent as ``var-<id>``.
    A mapping or a sequence of pairs is accepted; it is copied into sorted
    pairs so the options stay hashable and later changes to the caller's
    mapping do not leak into requests.
    """

    top: int = 0
    platform: str = ""
    region: str = ""
    emulators: Optional[bool] = None
    video_only: Optional[bool] = None
    timing: str = ""
    date: str = ""
    values: Tuple[Tuple[str, str], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(sorted(dict(self.values).items())))

    def apply_to_params(self, params: Dict[str, str]) -> None:
        set_if(params, "top", self.top)
        set_if(params, "platform", self.platform)
        set_if(params, "region", self.region)
        set_if(params, "emulators", self.emulators)
        set_if(params, "video-only", self.video_only)
        set_if(params, "timing", self.timing)
        set_if(params, "date", self.date)
        for variable_id, value_id in self.values:
            set_if(params, f"var-{variable_id}", value_id)


@dataclass(frozen=True)
class LeaderboardFilter(QueryParams):
    """Filter for record listings; ``scope`` is full-game, levels or all."""

    top: int = 0
    scope: str = ""
    miscellaneous: Optional[bool] = None
    skip_empty: Optional[bool] = None

    def apply_to_params(self, params: Dict[str, str]) -> None:
        set_if(params, "top", self.top)
        set_if(params, "scope", self.scope)
        set_if(params, "miscellaneous", self.miscellaneous)
        set_if(params, "skip-empty", self.skip_empty)
