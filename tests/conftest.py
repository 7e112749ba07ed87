"""
Shared fixtures: a fake upstream platform served through httpx.MockTransport
"""
import re
from typing import Callable, List

import httpx
import pytest

from app.config import Settings

USER_ID = 123

CATALOG_PATH = "/v1/search/items/details"
DETAIL_PATTERN = r"^/game-passes/v1/game-passes/(\d+)/product-info$"


def games_path(user_id: int = USER_ID) -> str:
    return f"/v2/users/{user_id}/games"


def game_passes_path(universe_id: int) -> str:
    return f"/v1/games/{universe_id}/game-passes"


def user_passes_path(user_id: int = USER_ID) -> str:
    return f"/game-passes/v1/users/{user_id}/game-passes"


def detail_path(pass_id: int) -> str:
    return f"/game-passes/v1/game-passes/{pass_id}/product-info"


def experiences_path(user_id: int = USER_ID) -> str:
    return f"/cloud/v2/users/{user_id}/universes"


def detail_body(price, creator_id=USER_ID) -> dict:
    """Detail record in the PascalCase shape"""
    return {
        "Name": "pass",
        "PriceInRobux": price,
        "Creator": {"Id": creator_id, "CreatorTargetId": creator_id, "CreatorType": "User"}
    }


def make_settings(**overrides) -> Settings:
    """Settings isolated from any local .env file"""
    return Settings(_env_file=None, **overrides)


class FakeUpstream:
    """Routes requests by URL path to canned JSON or handler callables"""

    def __init__(self):
        self.routes = {}
        self.patterns: List[tuple] = []
        self.requests: List[httpx.Request] = []

    def add(self, path: str, body=None, status: int = 200, handler: Callable = None):
        self.routes[path] = handler or (lambda request: httpx.Response(status, json=body))

    def add_pattern(self, pattern: str, handler: Callable):
        self.patterns.append((re.compile(pattern), handler))

    def add_details(self, details: dict):
        """Serve detail records keyed by pass id; unknown ids get 404"""
        def _detail(request, match):
            pass_id = int(match.group(1))
            if pass_id not in details:
                return httpx.Response(404, json={"errors": [{"message": "not found"}]})
            return httpx.Response(200, json=details[pass_id])
        self.add_pattern(DETAIL_PATTERN, _detail)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.routes:
            return self.routes[path](request)
        for pattern, handler in self.patterns:
            match = pattern.match(path)
            if match:
                return handler(request, match)
        return httpx.Response(404, json={"errors": [{"message": "no route"}]})

    def calls(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings():
    return make_settings()
