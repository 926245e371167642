import pytest

from raas.core.logging.middleware import REQUEST_ID_HEADER
from raas.schemas import ItemDistributionDTO


@pytest.mark.asyncio
class TestCrudRoutes:

    async def test_create_accepts_camel_case(self, api_client):
        """
        Behavior:
            - POST a camelCase body; the record comes back with 201 and an id.
        Importance:
            - JSON stays camelCase on the wire while the code works in snake_case.
        """
        resp = await api_client.post("/domain", json={"designationFr": "Informatique", "designationEn": "  "})

        assert resp.status_code == 201
        body = resp.json()
        assert isinstance(body["id"], int)
        assert body["designationFr"] == "Informatique"
        assert body["designationEn"] is None
        assert resp.headers[REQUEST_ID_HEADER]

    async def test_duplicate_returns_409_payload(self, api_client, domain):
        resp = await api_client.post("/domain", json={"designationFr": domain.designation_fr})

        assert resp.status_code == 409
        assert resp.json() == {
            "detail": f"Domain with French designation '{domain.designation_fr}' already exists",
            "code": "duplicate",
            "fields": ["designation_fr"],
            "value": domain.designation_fr,
        }

    async def test_missing_required_field_returns_422(self, api_client):
        resp = await api_client.post("/domain", json={"designationEn": "Computing"})

        assert resp.status_code == 422
        assert resp.json()["code"] == "missing_field"
        assert resp.json()["detail"] == "French designation is required for create"

    async def test_unknown_id_returns_404(self, api_client):
        resp = await api_client.get("/domain/999999")

        assert resp.status_code == 404
        assert resp.json() == {"detail": "Domain not found with ID: 999999", "code": "not_found"}

    async def test_list_count_and_exists(self, api_client, domain):
        listing = await api_client.get("/domain", params={"size": 5, "sortBy": "designationFr"})
        count = await api_client.get("/domain/count/all")
        exists = await api_client.get(f"/domain/{domain.id}/exists")
        missing = await api_client.get(f"/domain/{domain.id + 1000}/exists")

        assert listing.status_code == 200
        page = listing.json()
        assert set(page) == {"items", "total", "page", "size", "pages"}
        assert page["size"] == 5
        assert domain.id in {d["id"] for d in page["items"]}
        assert count.json() == {"count": page["total"]}
        assert exists.json() == {"exists": True}
        assert missing.json() == {"exists": False}

    async def test_invalid_sort_direction_is_rejected(self, api_client):
        resp = await api_client.get("/domain", params={"sortDir": "sideways"})
        assert resp.status_code == 422

    async def test_update_and_delete(self, api_client, domain):
        updated = await api_client.put(
            f"/domain/{domain.id}", json={"designationFr": domain.designation_fr, "designationAr": "إعلام آلي"}
        )
        assert updated.status_code == 200
        assert updated.json()["designationAr"] == "إعلام آلي"

        deleted = await api_client.delete(f"/domain/{domain.id}")
        assert deleted.status_code == 204
        assert (await api_client.get(f"/domain/{domain.id}")).status_code == 404

    async def test_delete_guard_returns_409(self, api_client, rubric, item):
        resp = await api_client.delete(f"/rubric/{rubric.id}")

        assert resp.status_code == 409
        assert resp.json()["code"] == "invariant_violation"
        assert (await api_client.get(f"/rubric/{rubric.id}")).status_code == 200

    async def test_with_relations(self, api_client, rubric, domain):
        resp = await api_client.get(f"/rubric/{rubric.id}/with-relations")

        assert resp.status_code == 200
        assert resp.json()["domain"]["id"] == domain.id
        assert resp.json()["items"] == []

    async def test_search(self, api_client, domain):
        resp = await api_client.get("/domain/search", params={"query": domain.designation_fr.upper()})

        assert [d["id"] for d in resp.json()["items"]] == [domain.id]


@pytest.mark.asyncio
class TestPlanningRoutes:

    async def test_quantity_conservation_over_http(self, api_client, planned_item, structure):
        body = {"quantity": 100, "plannedItemId": planned_item.id, "structureId": structure.id}
        first = await api_client.post("/itemDistribution", json=body)
        assert first.status_code == 201

        second = await api_client.post("/itemDistribution", json={**body, "quantity": 1})

        assert second.status_code == 409
        assert second.json() == {
            "detail": "Total distribution quantity (101) cannot exceed planned quantity (100)",
            "code": "invariant_violation",
            "fields": ["quantity"],
        }

    async def test_quantity_aggregates(self, api_client, item_distribution_service, planned_item, structure):
        await item_distribution_service.create(
            ItemDistributionDTO(quantity=30, planned_item_id=planned_item.id, structure_id=structure.id)
        )

        total = await api_client.get(f"/itemDistribution/planned-item/{planned_item.id}/sum-quantity")
        remaining = await api_client.get(f"/itemDistribution/planned-item/{planned_item.id}/remaining-quantity")
        by_structure = await api_client.get(f"/itemDistribution/structure/{structure.id}/sum-quantity")
        band = await api_client.get("/itemDistribution/quantity/medium")
        ranged = await api_client.get("/itemDistribution/quantity-range", params={"min": 30, "max": 30})

        assert total.json() == {"value": 30.0}
        assert remaining.json() == {"value": 70.0}
        assert by_structure.json() == {"value": 30.0}
        assert band.json()["total"] == 1
        assert ranged.json()["items"][0]["plannedItemId"] == planned_item.id

    async def test_unknown_band_returns_422(self, api_client):
        resp = await api_client.get("/itemDistribution/quantity/huge")

        assert resp.status_code == 422
        assert resp.json()["fields"] == ["band"]

    async def test_dangling_reference_returns_422(self, api_client, domain):
        resp = await api_client.post("/rubric", json={"designationFr": "Matériel", "domainId": 999999})

        assert resp.status_code == 422
        assert resp.json()["code"] == "reference_not_found"
        assert resp.json()["detail"] == "Domain not found with ID: 999999"

    async def test_budget_year_is_validated(self, api_client, budget_type):
        resp = await api_client.post(
            "/financialOperation",
            json={"operation": "OP-2099", "budgetYear": "20x5", "budgetTypeId": budget_type.id},
        )
        assert resp.status_code == 422
        assert resp.json()["fields"] == ["budget_year"]


@pytest.mark.asyncio
class TestUserRoutes:

    async def test_password_never_leaves_the_server(self, api_client):
        resp = await api_client.post(
            "/user", json={"username": "dana", "email": "dana@example.org", "password": "correct horse"}
        )

        assert resp.status_code == 201
        assert "password" not in resp.json()
        assert resp.json()["enabled"] is True

        fetched = await api_client.get("/user/username/dana")
        assert "password" not in fetched.json()

    async def test_role_assignment(self, api_client):
        user = (await api_client.post(
            "/user", json={"username": "erin", "email": "erin@example.org", "password": "pw"}
        )).json()
        role = (await api_client.post("/role", json={"name": "ADMIN"})).json()

        resp = await api_client.post(f"/user/{user['id']}/roles/{role['id']}")

        assert resp.status_code == 200
        assert [r["name"] for r in resp.json()["roles"]] == ["ADMIN"]
        assert (await api_client.delete(f"/role/{role['id']}")).status_code == 409
