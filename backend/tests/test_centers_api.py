"""HTTP tests for Anganwadi center management."""

from __future__ import annotations

import re

import pytest
from httpx import AsyncClient

from sampoorna.services import centers as centers_service

pytestmark = pytest.mark.asyncio


def _center(name: str, ward: int, **extra: object) -> dict[str, object]:
    return {"name": name, "ward": {"number": ward, "name": f"Ward {ward}"}, **extra}


async def test_create_center_generates_code_and_defaults(client: AsyncClient) -> None:
    response = await client.post("/api/centers", json=_center("  Panamattom AWC  ", 4))

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["name"] == "Panamattom AWC"
    assert re.fullmatch(r"AWC04\d{4}", data["code"])
    assert data["status"] == "active"
    assert data["capacity"] == {"children": 50, "adolescents": 25, "pregnantWomen": 15}
    assert data["operatingHours"]["start"] == "09:00"
    assert data["assignedWorker"] is None


async def test_create_center_with_worker_populates_name_and_email(
    client: AsyncClient, worker: dict[str, object]
) -> None:
    response = await client.post(
        "/api/centers",
        json=_center("Elikkulam AWC", 1, code="awc-eli-01", assignedWorker=worker["id"], facilities=["kitchen"]),
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["code"] == "AWC-ELI-01"
    assert data["assignedWorker"] == worker
    assert data["facilities"] == ["kitchen"]


async def test_create_center_validation(client: AsyncClient) -> None:
    missing_ward = await client.post("/api/centers", json={"name": "No Ward"})
    bad_facility = await client.post("/api/centers", json=_center("Bad", 2, facilities=["swimming_pool"]))
    unknown_worker = await client.post("/api/centers", json=_center("Ghost", 2, assignedWorker=999))

    assert missing_ward.status_code == 400
    assert bad_facility.status_code == 400
    assert unknown_worker.status_code == 400
    assert missing_ward.json()["success"] is False


async def test_duplicate_code_is_rejected(client: AsyncClient) -> None:
    first = await client.post("/api/centers", json=_center("One", 1, code="AWC0001"))
    second = await client.post("/api/centers", json=_center("Two", 2, code="awc0001"))

    assert first.status_code == 201
    assert second.status_code == 400
    assert "already in use" in second.json()["error"]


async def test_list_centers_sorted_by_name(client: AsyncClient, worker: dict[str, object]) -> None:
    await client.post("/api/centers", json=_center("Vazhoor", 7))
    await client.post("/api/centers", json=_center("Anickad", 2, assignedWorker=worker["id"]))
    await client.post("/api/centers", json=_center("Kooroppada", 5))

    response = await client.get("/api/centers")

    assert response.status_code == 200
    centers = response.json()["data"]
    assert [center["name"] for center in centers] == ["Anickad", "Kooroppada", "Vazhoor"]
    assert centers[0]["assignedWorker"]["email"] == worker["email"]


async def test_update_center_merges_fields(client: AsyncClient, worker: dict[str, object]) -> None:
    created = (await client.post("/api/centers", json=_center("Thampalakkad", 9, facilities=["toilet"]))).json()["data"]

    response = await client.put(
        f"/api/centers/{created['id']}",
        json={"status": "maintenance", "assignedWorker": worker["id"]},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "maintenance"
    assert data["assignedWorker"]["name"] == worker["name"]
    assert data["facilities"] == ["toilet"]
    assert data["code"] == created["code"]


async def test_update_center_rejects_bad_status(client: AsyncClient) -> None:
    created = (await client.post("/api/centers", json=_center("Kanjirappally", 6))).json()["data"]

    response = await client.put(f"/api/centers/{created['id']}", json={"status": "demolished"})

    assert response.status_code == 400


async def test_update_and_delete_missing_center_is_404(client: AsyncClient) -> None:
    update = await client.put("/api/centers/4242", json={"status": "closed"})
    delete = await client.delete("/api/centers/4242")

    assert update.status_code == 404
    assert delete.status_code == 404
    assert delete.json()["message"] == "Anganwadi center not found"


async def test_delete_center(client: AsyncClient) -> None:
    created = (await client.post("/api/centers", json=_center("Ponkunnam", 3))).json()["data"]

    response = await client.delete(f"/api/centers/{created['id']}")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert (await client.get("/api/centers")).json()["data"] == []


async def test_generated_code_collision_gets_a_fresh_suffix(
    client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(centers_service, "_epoch_ms", lambda: 1_700_000_010_000)

    first = await client.post("/api/centers", json=_center("Erumely", 8))
    second = await client.post("/api/centers", json=_center("Mundakayam", 8))

    assert first.status_code == 201
    assert second.status_code == 201
    assert first.json()["data"]["code"] == "AWC080000"
    assert re.fullmatch(r"AWC08\d{4}", second.json()["data"]["code"])
    assert second.json()["data"]["code"] != "AWC080000"


async def test_center_keeps_established_date_and_statistics(client: AsyncClient) -> None:
    created = await client.post(
        "/api/centers",
        json=_center(
            "Pala AWC",
            11,
            establishedDate="2015-06-01T00:00:00Z",
            statistics={"totalBeneficiaries": 40, "activeChildren": 30},
        ),
    )
    data = created.json()["data"]

    assert created.status_code == 201
    assert data["establishedDate"].startswith("2015-06-01")
    assert data["statistics"] == {
        "totalBeneficiaries": 40,
        "activeChildren": 30,
        "activeAdolescents": 0,
        "pregnantWomen": 0,
    }

    updated = (await client.put(f"/api/centers/{data['id']}", json={"status": "inactive"})).json()["data"]
    assert updated["establishedDate"] == data["establishedDate"]
    assert updated["statistics"] == data["statistics"]


async def test_update_center_accepts_attribute_names(client: AsyncClient) -> None:
    created = (await client.post("/api/centers", json=_center("Bharananganam", 12))).json()["data"]

    response = await client.put(
        f"/api/centers/{created['id']}",
        json={"operating_hours": {"start": "08:30", "end": "15:30"}},
    )

    assert response.status_code == 200
    assert response.json()["data"]["operatingHours"]["start"] == "08:30"
    assert "operating_hours" not in response.json()["data"]
