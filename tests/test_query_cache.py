import pytest

from datetime import date

from dashboard.data import api_client, loaders, query_cache
from dashboard.data.query_cache import QueryCache


class TestFetch:
    def test_snapshots_are_reused(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        first = cache.items("/v1/todos")
        second = cache.items("/v1/todos")
        assert first == second == [{"id": "t1", "title": "Write report"}]
        assert len(fake_fetcher.gets("/v1/todos")) == 1

    def test_force_refetches(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/todos")
        cache.fetch("/v1/todos", force=True)
        assert len(fake_fetcher.gets("/v1/todos")) == 2

    def test_params_are_part_of_the_key(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/habit-entries", {"date": "2024-03-10"})
        cache.fetch("/v1/habit-entries", {"date": "2024-03-09"})
        cache.fetch("/v1/habit-entries", {"date": "2024-03-10"})
        assert len(fake_fetcher.gets("/v1/habit-entries")) == 2

    def test_stale_snapshots_are_refetched(self, fake_fetcher, monkeypatch):
        clock = [100.0]
        monkeypatch.setattr(query_cache.time, "monotonic", lambda: clock[0])
        cache = QueryCache(fetcher=fake_fetcher, ttl_seconds=60)
        cache.fetch("/v1/todos")
        clock[0] += 30
        cache.fetch("/v1/todos")
        clock[0] += 61
        cache.fetch("/v1/todos")
        assert len(fake_fetcher.gets("/v1/todos")) == 2

    def test_failed_read_yields_empty_items_and_is_not_cached(self, fake_fetcher):
        fake_fetcher.fail_on.add("/v1/goals")
        cache = QueryCache(fetcher=fake_fetcher)
        assert cache.items("/v1/goals") == []
        assert cache.peek("/v1/goals") is None
        cache.items("/v1/goals")
        assert len(fake_fetcher.gets("/v1/goals")) == 2

    def test_prefetch_fills_every_snapshot(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        results = cache.prefetch([("/v1/todos", None), ("/v1/habits", None), ("/v1/goals", {"x": 1})])
        assert len(results) == 3
        assert cache.peek("/v1/habits") == {"items": [{"id": "h1", "name": "Read"}]}
        assert cache.peek("/v1/goals", {"x": 1}) == {"items": []}


class TestLoaders:
    def test_short_food_queries_skip_the_api(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        assert loaders.search_foods(cache, " b ") == []
        assert fake_fetcher.calls == []
        loaders.search_foods(cache, " ban ")
        assert fake_fetcher.gets(loaders.FOOD_SEARCH_PATH) == [
            ("GET", loaders.FOOD_SEARCH_PATH, {"q": "ban", "limit": 10}, None)
        ]

    def test_planning_reads_the_week_of_the_day(self, fake_fetcher):
        fake_fetcher.responses[loaders.WEEKLY_PLANS_PATH] = {"items": [{"id": "w1", "title": "Sprint"}]}
        cache = QueryCache(fetcher=fake_fetcher)
        data = loaders.load_planning(cache, date(2024, 3, 6))
        assert data["weekly_plan"] == {"id": "w1", "title": "Sprint"}
        assert data["daily_plan"] is None
        assert fake_fetcher.gets(loaders.WEEKLY_PLANS_PATH)[0][2] == {"date": "2024-03-04"}
        params = [call[2] for call in fake_fetcher.gets(loaders.DAILY_PLANS_PATH)]
        assert {"start": "2024-03-04", "end": "2024-03-10"} in params


class TestMutations:
    def test_invalidate_by_prefix(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/todos")
        cache.fetch("/v1/todos", {"status": "pending"})
        cache.fetch("/v1/habits")
        assert cache.invalidate("/v1/todos") == 2
        assert cache.peek("/v1/habits") is not None

    def test_successful_write_drops_the_written_path(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/todos")
        result = cache.mutate("POST", "/v1/todos", json={"title": "New"})
        assert result == {"ok": True}
        assert cache.peek("/v1/todos") is None
        assert fake_fetcher.calls[-1] == ("POST", "/v1/todos", None, {"title": "New"})

    def test_explicit_invalidations(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/habits")
        cache.fetch("/v1/todos")
        cache.mutate("POST", "/v1/habit-entries", json={}, invalidates=("/v1/habits",))
        assert cache.peek("/v1/habits") is None
        assert cache.peek("/v1/todos") is not None

    def test_failed_write_raises_and_keeps_snapshots(self, fake_fetcher):
        fake_fetcher.fail_on.add("/v1/todos/t1")
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/todos")
        with pytest.raises(RuntimeError):
            cache.mutate("PATCH", "/v1/todos/t1", json={"status": "completed"}, invalidates=("/v1/todos",))
        assert cache.peek("/v1/todos") == {"items": [{"id": "t1", "title": "Write report"}]}

    def test_clear(self, fake_fetcher):
        cache = QueryCache(fetcher=fake_fetcher)
        cache.fetch("/v1/todos")
        cache.clear()
        assert cache.peek("/v1/todos") is None


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", content_type="application/json"):
        self.status_code = status_code
        self.ok = status_code < 400
        self.reason = "OK" if self.ok else "Not Found"
        self._payload = payload
        self.text = text
        self.headers = {"content-type": content_type}

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def request(self, method, url, params=None, json=None, timeout=None):
        self.requests.append((method, url, params, json))
        return self.response


class TestApiClient:
    @pytest.fixture(autouse=True)
    def configured(self, monkeypatch):
        monkeypatch.delenv("API_BASE_URL", raising=False)
        api_client.configure(lambda path, default=None: {("app", "API_BASE_URL"): "http://api.local/"}.get(tuple(path), default))
        yield
        api_client.configure(None)

    def test_joins_base_url_and_returns_json(self):
        session = FakeSession(FakeResponse(payload={"items": []}))
        assert api_client.request("GET", "/v1/todos", params={"status": "pending"}, session=session) == {"items": []}
        assert session.requests == [("GET", "http://api.local/v1/todos", {"status": "pending"}, None)]

    def test_error_status_raises_with_detail(self):
        session = FakeSession(FakeResponse(status_code=404, payload={"detail": "Todo not found"}))
        with pytest.raises(RuntimeError, match="API error 404"):
            api_client.request("PATCH", "/v1/todos/x", json={}, session=session)

    def test_csv_is_returned_as_text(self):
        session = FakeSession(FakeResponse(text="title\nDune\n", content_type="text/csv; charset=utf-8"))
        assert api_client.request("GET", "/v1/watchlist/export", session=session) == "title\nDune\n"

    def test_missing_base_url(self):
        api_client.configure(None)
        with pytest.raises(RuntimeError, match="not configured"):
            api_client.request("GET", "/v1/todos", session=FakeSession(FakeResponse()))
