"""
Tests for GamepassAggregator fallback, de-duplication and ordering
"""
import pytest

from app.aggregation import GamepassAggregator, build_aggregator, build_sources
from app.schemas.gamepass import PassCandidate
from app.sources import (
    BaseSource,
    CatalogSource,
    ExperiencesSource,
    GameEnumerationSource,
    UserPassesSource
)
from conftest import (
    CATALOG_PATH,
    USER_ID,
    detail_body,
    game_passes_path,
    games_path,
    make_settings,
    user_passes_path
)


class StaticSource(BaseSource):
    """Source returning fixed candidates and counting calls"""

    def __init__(self, name, candidates, settings):
        super().__init__(client=None, settings=settings)
        self.name = name
        self.candidates = candidates
        self.calls = 0

    async def discover(self, user_id):
        self.calls += 1
        return list(self.candidates)


class BrokenSource(StaticSource):
    """Source whose discovery blows up"""

    async def discover(self, user_id):
        self.calls += 1
        raise RuntimeError("unexpected upstream shape")


def candidate(pass_id, price, name=None, creator_id=None):
    return PassCandidate(id=pass_id, name=name or f"Pass {pass_id}", price=price, creator_id=creator_id)


class TestFallback:
    """Source priority and fallback"""

    @pytest.mark.asyncio
    async def test_first_non_empty_source_wins(self, settings):
        primary = StaticSource("primary", [candidate(1, 10), candidate(2, 20)], settings)
        backup = StaticSource("backup", [candidate(3, 30)], settings)

        result = await GamepassAggregator([primary, backup]).resolve(USER_ID)

        assert [p.id for p in result.passes] == [1, 2]
        assert backup.calls == 0

    @pytest.mark.asyncio
    async def test_empty_source_falls_back(self, settings):
        primary = StaticSource("primary", [candidate(1, 0)], settings)
        backup = StaticSource("backup", [candidate(3, 30)], settings)

        result = await GamepassAggregator([primary, backup]).resolve(USER_ID)

        assert [p.id for p in result.passes] == [3]
        assert primary.calls == 1
        assert backup.calls == 1

    @pytest.mark.asyncio
    async def test_failing_source_falls_back(self, settings):
        broken = BrokenSource("broken", [], settings)
        backup = StaticSource("backup", [candidate(3, 30)], settings)

        result = await GamepassAggregator([broken, backup]).resolve(USER_ID)

        assert result.ok is True
        assert [p.id for p in result.passes] == [3]

    @pytest.mark.asyncio
    async def test_nothing_found_is_still_ok(self, settings):
        sources = [
            BrokenSource("broken", [], settings),
            StaticSource("empty", [], settings),
        ]

        result = await GamepassAggregator(sources).resolve(USER_ID)

        assert result.ok is True
        assert result.user_id == USER_ID
        assert result.count == 0
        assert result.passes == []

    @pytest.mark.asyncio
    async def test_no_sources_configured(self):
        result = await GamepassAggregator([]).resolve(USER_ID)

        assert result.ok is True
        assert result.count == 0


class TestFiltering:
    """Invariants on the final result"""

    @pytest.mark.asyncio
    async def test_unique_ids_and_positive_prices(self, settings):
        source = StaticSource("mixed", [
            candidate(1, 10),
            candidate(1, 99),
            candidate(2, -5),
            candidate(3, None),
            candidate(4, "abc"),
            candidate(5, True),
            candidate(6, 7.0),
            candidate(7, 12, creator_id=USER_ID),
            candidate(8, 12, creator_id=42),
        ], settings)

        result = await GamepassAggregator([source]).resolve(USER_ID)

        assert [(p.id, p.price) for p in result.passes] == [(1, 10), (6, 7), (7, 12)]
        assert result.count == 3

    @pytest.mark.asyncio
    async def test_repeated_calls_are_identical(self, settings):
        source = StaticSource("stable", [candidate(2, 20), candidate(1, 10)], settings)
        aggregator = GamepassAggregator([source])

        first = await aggregator.resolve(USER_ID)
        second = await aggregator.resolve(USER_ID)

        assert first == second


class TestOrdering:
    """Optional price sort"""

    @pytest.mark.asyncio
    async def test_discovery_order_by_default(self, settings):
        source = StaticSource("s", [candidate(1, 30), candidate(2, 10), candidate(3, 20)], settings)

        result = await GamepassAggregator([source]).resolve(USER_ID)

        assert [p.id for p in result.passes] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_sort_by_price(self, settings):
        source = StaticSource("s", [
            candidate(1, 30), candidate(2, 10), candidate(3, 20), candidate(4, 10)
        ], settings)

        result = await GamepassAggregator([source], sort_by_price=True).resolve(USER_ID)

        assert [p.id for p in result.passes] == [2, 4, 3, 1]


class TestWiring:
    """Building sources from settings"""

    def test_default_order_without_key(self, upstream):
        settings = make_settings()

        sources = build_sources(upstream.client(), settings)

        assert [type(s) for s in sources] == [CatalogSource, GameEnumerationSource, UserPassesSource]

    def test_experiences_included_with_key(self, upstream):
        settings = make_settings(OPEN_CLOUD_API_KEY="secret")

        sources = build_sources(upstream.client(), settings)

        assert isinstance(sources[-1], ExperiencesSource)

    def test_custom_order_drops_unknown(self, upstream):
        settings = make_settings(SOURCE_ORDER="user_passes, bogus ,catalog,user_passes")

        sources = build_sources(upstream.client(), settings)

        assert [s.name for s in sources] == ["user_passes", "catalog"]

    def test_sources_share_one_detail_lookup(self, upstream, settings):
        sources = build_sources(upstream.client(), settings)

        assert len({id(s.details) for s in sources}) == 1


class TestEndToEnd:
    """Aggregator over the fake upstream"""

    @pytest.mark.asyncio
    async def test_direct_listing_example(self, upstream):
        upstream.add(user_passes_path(), {"gamePasses": [
            {"id": 1, "name": "Sword"},
            {"id": 2, "name": "Shield"},
        ]})
        upstream.add_details({1: detail_body(50), 2: detail_body(0)})
        settings = make_settings(SOURCE_ORDER="user_passes")

        result = await build_aggregator(upstream.client(), settings).resolve(USER_ID)

        assert result.model_dump(by_alias=True) == {
            "ok": True,
            "userId": 123,
            "count": 1,
            "passes": [{"id": 1, "name": "Sword", "price": 50}],
        }

    @pytest.mark.asyncio
    async def test_catalog_hit_skips_fallbacks(self, upstream, settings):
        upstream.add(CATALOG_PATH, {"data": [
            {"id": 1, "name": "VIP", "price": 10, "assetType": 46},
            {"id": 2, "name": "Boost", "price": 20, "assetType": 46},
        ]})

        result = await build_aggregator(upstream.client(), settings).resolve(USER_ID)

        assert [p.id for p in result.passes] == [1, 2]
        assert upstream.calls(games_path()) == []
        assert upstream.calls(user_passes_path()) == []

    @pytest.mark.asyncio
    async def test_catalog_miss_falls_back_to_games(self, upstream, settings):
        upstream.add(CATALOG_PATH, {"errors": []}, status=429)
        upstream.add(games_path(), {"data": [{"id": 10}]})
        upstream.add(game_passes_path(10), {"data": [{"id": 101, "name": "Sword", "price": 10}]})
        upstream.add_details({101: detail_body(10)})

        result = await build_aggregator(upstream.client(), settings).resolve(USER_ID)

        assert [p.id for p in result.passes] == [101]
        assert upstream.calls(user_passes_path()) == []

    @pytest.mark.asyncio
    async def test_everything_down_returns_empty(self, upstream, settings):
        result = await build_aggregator(upstream.client(), settings).resolve(USER_ID)

        assert result.ok is True
        assert result.passes == []
        assert len(upstream.calls(CATALOG_PATH)) == 1
        assert len(upstream.calls(games_path())) == 1
        assert len(upstream.calls(user_passes_path())) == 1
