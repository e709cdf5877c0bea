import pytest

from movingco.core.metrics import get_metrics_text


@pytest.mark.asyncio
async def test_health(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Server is running"
    assert body["data"]["dependencies"]["redis"] == "disabled"


@pytest.mark.asyncio
async def test_readiness(test_client, monkeypatch):
    import movingco.main as main_module

    async def ping():
        return True

    monkeypatch.setattr(main_module, "ping_database", ping)
    response = await test_client.get("/readiness")

    assert response.status_code == 200
    assert response.json()["data"]["ready"] is True


@pytest.mark.asyncio
async def test_readiness_reports_database_down(test_client, monkeypatch):
    import movingco.main as main_module

    async def ping():
        raise ConnectionError("database unreachable")

    monkeypatch.setattr(main_module, "ping_database", ping)
    response = await test_client.get("/readiness")

    assert response.status_code == 503
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_metrics_label_by_route_template(test_client, admin_headers):
    await test_client.get("/quotes/12345", headers=admin_headers)

    response = await test_client.get("/metrics")
    assert response.status_code == 200
    assert 'endpoint="/quotes/{quote_id}"' in response.text
    assert "http_requests_total" in get_metrics_text()


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(test_client):
    response = await test_client.get("/no-such-route")

    assert response.status_code == 404
    assert response.json() == {"success": False, "statusCode": 404, "message": "Not Found", "data": None}


@pytest.mark.asyncio
async def test_unmatched_paths_share_one_series(test_client):
    await test_client.get("/scan/wp-login.php")
    await test_client.get("/scan/.env")

    text = get_metrics_text()
    assert 'endpoint="unmatched"' in text
    assert "wp-login.php" not in text
