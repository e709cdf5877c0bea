import pytest

from movingco.services.service_areas import CONTINENTAL_STATES


@pytest.mark.integration
class TestInitialize:

    @pytest.mark.asyncio
    async def test_initialize_seeds_inactive_continental_states(self, test_client, admin_headers):
        response = await test_client.post("/service-areas/initialize", headers=admin_headers)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["count"] == 48 == len(CONTINENTAL_STATES)
        codes = {area["stateCode"] for area in data["serviceAreas"]}
        assert "AK" not in codes and "HI" not in codes
        assert not any(area["isActive"] for area in data["serviceAreas"])

    @pytest.mark.asyncio
    async def test_initialize_twice_conflicts(self, test_client, admin_headers):
        await test_client.post("/service-areas/initialize", headers=admin_headers)

        response = await test_client.post("/service-areas/initialize", headers=admin_headers)
        assert response.status_code == 409
        assert response.json()["message"] == "States already initialized"

    @pytest.mark.asyncio
    async def test_initialize_requires_admin(self, test_client, customer_headers):
        response = await test_client.post("/service-areas/initialize", headers=customer_headers)

        assert response.status_code == 403


@pytest.mark.integration
class TestActivation:

    @pytest.mark.asyncio
    async def test_toggle_twice_restores_state(self, test_client, admin_headers, seed_service_areas):
        first = await test_client.patch("/service-areas/WY/toggle", headers=admin_headers)
        assert first.status_code == 200
        assert first.json()["data"]["isActive"] is True
        assert first.json()["message"] == "Service area activated successfully"

        second = await test_client.patch("/service-areas/wy/toggle", headers=admin_headers)
        assert second.json()["data"]["isActive"] is False
        assert second.json()["message"] == "Service area deactivated successfully"

    @pytest.mark.asyncio
    async def test_toggle_unknown_state(self, test_client, admin_headers, seed_service_areas):
        response = await test_client.patch("/service-areas/AK/toggle", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "Service area not found"

    @pytest.mark.asyncio
    async def test_active_list_is_public_and_sorted(self, test_client, seed_service_areas):
        response = await test_client.get("/service-areas/active")

        assert response.status_code == 200
        data = response.json()["data"]
        names = [area["stateName"] for area in data["serviceAreas"]]
        assert data["count"] == 5
        assert names == sorted(names)
        assert "Wyoming" not in names

    @pytest.mark.asyncio
    async def test_toggle_changes_admission(
        self, test_client, admin_headers, customer_headers, seed_service_areas, quote_payload
    ):
        quote_payload["toAddress"] = {"street": "1 Main St", "city": "Cheyenne", "state": "WY", "zip": "82001"}
        rejected = await test_client.post("/quotes", json=quote_payload, headers=customer_headers)
        assert rejected.status_code == 400

        await test_client.patch("/service-areas/WY/toggle", headers=admin_headers)

        accepted = await test_client.post("/quotes", json=quote_payload, headers=customer_headers)
        assert accepted.status_code == 201

    @pytest.mark.asyncio
    async def test_list_all_requires_admin(self, test_client, customer_headers, admin_headers, seed_service_areas):
        assert (await test_client.get("/service-areas", headers=customer_headers)).status_code == 403

        response = await test_client.get("/service-areas", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["data"]["count"] == 6


@pytest.mark.integration
class TestEligibility:

    @pytest.mark.asyncio
    async def test_both_serviced(self, test_client, seed_service_areas):
        response = await test_client.get("/service-areas/eligibility?from_state=ca&to_state=TX")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {"eligible": True, "states": ["CA", "TX"], "unservicedStates": []}

    @pytest.mark.asyncio
    async def test_one_unserviced(self, test_client, seed_service_areas):
        response = await test_client.get("/service-areas/eligibility?from_state=CA&to_state=WY")

        data = response.json()["data"]
        assert data["eligible"] is False
        assert data["unservicedStates"] == ["WY"]

    @pytest.mark.asyncio
    async def test_malformed_code(self, test_client):
        response = await test_client.get("/service-areas/eligibility?from_state=CAL&to_state=TX")

        assert response.status_code == 400


@pytest.mark.integration
class TestServiceAreaCrud:

    @pytest.mark.asyncio
    async def test_create_update_delete(self, test_client, admin_headers):
        created = await test_client.post(
            "/service-areas",
            json={"stateCode": "or", "stateName": "Oregon", "isActive": True},
            headers=admin_headers,
        )
        assert created.status_code == 201
        assert created.json()["data"]["stateCode"] == "OR"

        duplicate = await test_client.post(
            "/service-areas", json={"stateCode": "OR", "stateName": "Oregon"}, headers=admin_headers
        )
        assert duplicate.status_code == 409

        updated = await test_client.put(
            "/service-areas/OR", json={"isActive": False}, headers=admin_headers
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["isActive"] is False
        assert updated.json()["data"]["stateName"] == "Oregon"

        deleted = await test_client.delete("/service-areas/OR", headers=admin_headers)
        assert deleted.status_code == 200

        missing = await test_client.get("/service-areas/OR", headers=admin_headers)
        assert missing.status_code == 404
