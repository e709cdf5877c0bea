import pytest

from movingco.utils.idempotency import get_idempotent, set_idempotent


@pytest.mark.asyncio
async def test_idemp_flow(fake_redis):
    key = "pytest-idemp"
    assert await get_idempotent(1, key) is None
    await set_idempotent(1, key, {"ok": True})
    found = await get_idempotent(1, key)
    assert found == {"ok": True}
    assert await fake_redis.ttl(f"idemp:1:{key}") > 0


@pytest.mark.asyncio
async def test_keys_are_scoped_per_user(fake_redis):
    await set_idempotent(1, "shared-key", {"id": 10})

    assert await get_idempotent(2, "shared-key") is None


@pytest.mark.asyncio
async def test_without_redis_nothing_is_stored():
    await set_idempotent(1, "k", {"ok": True})

    assert await get_idempotent(1, "k") is None


@pytest.mark.asyncio
async def test_replayed_quote_submission(
    test_client, fake_redis, customer_headers, seed_service_areas, quote_payload
):
    headers = {**customer_headers, "Idempotency-Key": "move-2030"}

    first = await test_client.post("/quotes", json=quote_payload, headers=headers)
    second = await test_client.post("/quotes", json=quote_payload, headers=headers)
    assert first.status_code == second.status_code == 201
    assert first.json()["data"]["id"] == second.json()["data"]["id"]

    mine = await test_client.get("/quotes/user/my-quotes", headers=customer_headers)
    assert mine.json()["data"]["pagination"]["totalItems"] == 1
