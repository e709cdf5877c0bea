"""Per-user rate limiting on quote submission"""
import pytest

from movingco.core.config import settings
from movingco.core.exceptions import RateLimitError
from movingco.core.rate_limit import check_rate_limit


class TestRateLimiting:

    def test_rate_limit_defaults(self):
        assert settings.RATE_LIMIT == 100
        assert settings.RATE_LIMIT_WINDOW == 600  # 10 minutes

    @pytest.mark.asyncio
    async def test_no_redis_means_no_limit(self, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT", 1)
        for _ in range(5):
            await check_rate_limit(1)

    @pytest.mark.asyncio
    async def test_limit_is_per_user(self, fake_redis, monkeypatch):
        monkeypatch.setattr(settings, "RATE_LIMIT", 2)

        await check_rate_limit(1)
        await check_rate_limit(1)
        with pytest.raises(RateLimitError):
            await check_rate_limit(1)

        await check_rate_limit(2)

    @pytest.mark.asyncio
    async def test_window_is_set_on_first_hit(self, fake_redis):
        await check_rate_limit(7)

        ttl = await fake_redis.ttl("rl:quotes:7")
        assert 0 < ttl <= settings.RATE_LIMIT_WINDOW

    @pytest.mark.asyncio
    async def test_quote_endpoint_returns_429(
        self, test_client, fake_redis, monkeypatch, customer_headers, seed_service_areas, quote_payload
    ):
        monkeypatch.setattr(settings, "RATE_LIMIT", 2)

        for _ in range(2):
            response = await test_client.post("/quotes", json=quote_payload, headers=customer_headers)
            assert response.status_code == 201

        response = await test_client.post("/quotes", json=quote_payload, headers=customer_headers)
        assert response.status_code == 429
        body = response.json()
        assert body["success"] is False
        assert body["statusCode"] == 429
        assert body["message"].startswith("Rate limit exceeded")
