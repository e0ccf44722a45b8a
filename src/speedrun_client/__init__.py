"""speedrun_client: typed client for the speedrun.com REST API.

This library maps API resources (games, categories, levels, users,
platforms, regions, runs, leaderboards and variables) onto dataclasses,
handles pagination and filtering, and resolves relations either from
embedded data or through follow-up requests.
"""

import logging

from .client import SpeedrunClient
from .config import ClientConfig, load_config
from .embeds import Relation, RelationKind
from .errors import (
    DecodeError,
    HttpStatusError,
    NoSuchLinkError,
    SpeedrunError,
    TransportError,
)
from .filters import (
    CategoryFilter,
    GameFilter,
    LeaderboardFilter,
    LeaderboardOptions,
    RunFilter,
    UserFilter,
)
from .http_client import HttpClient
from .links import Link, first_link
from .logging_utils import setup_logging
from .models import (
    Category,
    Game,
    Leaderboard,
    Level,
    Platform,
    RankedRun,
    Region,
    Run,
    User,
    Variable,
)
from .pagination import Collection, Pagination
from .query import Cursor, Direction, Sorting
from .request import Request

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Client
    "SpeedrunClient",
    "HttpClient",
    "ClientConfig",
    "load_config",
    "setup_logging",
    # Errors
    "SpeedrunError",
    "TransportError",
    "HttpStatusError",
    "DecodeError",
    "NoSuchLinkError",
    # Requests
    "Request",
    "Link",
    "first_link",
    "Cursor",
    "Direction",
    "Sorting",
    "CategoryFilter",
    "GameFilter",
    "LeaderboardFilter",
    "LeaderboardOptions",
    "RunFilter",
    "UserFilter",
    # Data models
    "Category",
    "Game",
    "Leaderboard",
    "Level",
    "Platform",
    "RankedRun",
    "Region",
    "Run",
    "User",
    "Variable",
    "Relation",
    "RelationKind",
    "Collection",
    "Pagination",
]
