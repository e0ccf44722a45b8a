"""Shared fakes and sample payloads for the test suite."""

import copy

from speedrun_client.errors import HttpStatusError

BASE_URL = "https://www.speedrun.com/api/v1"


class FakeTransport:
    """Answers requests from a path -> body table and records every call.

    Keys may be a bare path ("/games/xyz") or a path with its query string.
    A value that is an exception is raised instead of returned.
    """

    def __init__(self, responses=None, base_url=BASE_URL):
        self.responses = dict(responses or {})
        self.base_url = base_url
        self.requests = []

    def do(self, request):
        self.requests.append(request)
        url = request.url(self.base_url)
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url

        for key in (path, path.split("?", 1)[0]):
            if key in self.responses:
                response = self.responses[key]
                if isinstance(response, Exception):
                    raise response
                return copy.deepcopy(response)

        raise HttpStatusError(404, "Resource not found", url)

    @property
    def paths(self):
        return [request.path for request in self.requests]


def link(rel, path):
    return {"rel": rel, "uri": BASE_URL + path}


def game_data(game_id="xyz", **extra):
    data = {
        "id": game_id,
        "names": {"international": "Celeste", "japanese": None, "twitch": "Celeste"},
        "abbreviation": "celeste",
        "weblink": "https://www.speedrun.com/celeste",
        "released": 2018,
        "release-date": "2018-01-25",
        "ruleset": {
            "show-milliseconds": True,
            "require-verification": True,
            "require-video": False,
            "run-times": ["realtime", "ingame"],
            "default-time": "realtime",
            "emulators-allowed": False,
        },
        "romhack": False,
        "created": "2018-01-25T20:21:01Z",
        "assets": {
            "logo": {"uri": "https://example.com/logo.png", "width": 200, "height": 100},
            "cover-tiny": None,
        },
        "links": [
            link("self", f"/games/{game_id}"),
            link("runs", f"/runs?game={game_id}"),
            link("levels", f"/games/{game_id}/levels"),
            link("categories", f"/games/{game_id}/categories"),
            link("variables", f"/games/{game_id}/variables"),
            link("records", f"/games/{game_id}/records"),
            link("derived-games", f"/games/{game_id}/derived-games"),
        ],
    }
    data.update(extra)
    return data


def platform_data(platform_id, name):
    return {
        "id": platform_id,
        "name": name,
        "released": 2017,
        "links": [link("self", f"/platforms/{platform_id}")],
    }


def category_data(category_id="abc123", **extra):
    data = {
        "id": category_id,
        "name": "Any%",
        "weblink": "https://www.speedrun.com/celeste#Any",
        "type": "per-game",
        "rules": "Finish the game.",
        "players": {"type": "exactly", "value": 1},
        "miscellaneous": False,
        "links": [
            link("self", f"/categories/{category_id}"),
            link("game", "/games/xyz"),
            link("variables", f"/categories/{category_id}/variables"),
            link("records", f"/categories/{category_id}/records"),
            link("runs", f"/runs?category={category_id}"),
            link("leaderboard", f"/leaderboards/xyz/category/{category_id}"),
        ],
    }
    data.update(extra)
    return data


def user_data(user_id, name):
    return {
        "id": user_id,
        "names": {"international": name, "japanese": None},
        "weblink": f"https://www.speedrun.com/user/{name}",
        "name-style": {
            "style": "gradient",
            "color-from": {"light": "#FFFFFF", "dark": "#000000"},
            "color-to": {"light": "#EEEEEE", "dark": "#111111"},
        },
        "role": "user",
        "signup": "2016-03-01T00:00:00Z",
        "location": {
            "country": {"code": "de", "names": {"international": "Germany"}},
            "region": None,
        },
        "twitch": {"uri": f"https://www.twitch.tv/{name}"},
        "hitbox": None,
        "youtube": None,
        "twitter": None,
        "speedrunslive": None,
        "links": [
            link("self", f"/users/{user_id}"),
            link("runs", f"/runs?user={user_id}"),
            link("games", f"/games?moderator={user_id}"),
        ],
    }


def run_data(run_id="run1", **extra):
    data = {
        "id": run_id,
        "weblink": f"https://www.speedrun.com/celeste/run/{run_id}",
        "game": "xyz",
        "level": None,
        "category": "abc123",
        "videos": {"links": [{"uri": "https://youtu.be/example"}]},
        "comment": None,
        "status": {
            "status": "verified",
            "examiner": "u1",
            "verify-date": "2020-01-02T00:00:00Z",
        },
        "players": [
            {"rel": "user", "id": "u1", "uri": BASE_URL + "/users/u1"},
            {"rel": "guest", "name": "Someone", "uri": BASE_URL + "/guests/Someone"},
        ],
        "date": "2020-01-01",
        "submitted": "2020-01-01T12:00:00Z",
        "times": {
            "primary": "PT26M12S",
            "primary_t": 1572,
            "realtime": "PT26M12S",
            "realtime_t": 1572,
            "realtime_noloads": None,
            "realtime_noloads_t": 0,
            "ingame": "PT25M1.5S",
            "ingame_t": 1501.5,
        },
        "system": {"platform": "pc1", "emulated": False, "region": None},
        "splits": None,
        "values": {"var1": "val1"},
        "links": [
            link("self", f"/runs/{run_id}"),
            link("game", "/games/xyz"),
            link("category", "/categories/abc123"),
            link("platform", "/platforms/pc1"),
            link("examiner", "/users/u1"),
        ],
    }
    data.update(extra)
    return data
