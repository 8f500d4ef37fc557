from __future__ import annotations

import uuid

import pytest

BASE = "/api/v1/subscriptions"
USER_ID = "60601fee-2bf1-4721-ae6f-7636e79a0cba"


def _create(client, **overrides):
    payload = {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": USER_ID,
        "start_date": "07-2025",
    }
    payload.update(overrides)
    return client.post(BASE, json=payload)


def test_create_and_get(client):
    response = _create(client, end_date="12-2025")
    assert response.status_code == 201
    body = response.json()
    assert body["service_name"] == "Yandex Plus"
    assert body["price"] == 400
    assert body["user_id"] == USER_ID
    assert body["start_date"] == "2025-07-01"
    assert body["end_date"] == "2025-12-01"
    assert body["id"]
    assert body["created_at"] and body["updated_at"]

    fetched = client.get(f"{BASE}/{body['id']}")
    assert fetched.status_code == 200
    assert fetched.json() == body


@pytest.mark.parametrize(
    "overrides, kind",
    [
        ({"service_name": ""}, "InvalidServiceName"),
        ({"price": 0}, "InvalidPrice"),
        ({"user_id": None}, "InvalidUserId"),
        ({"start_date": "13-2024"}, "InvalidDate"),
        ({"end_date": "06-2025"}, "InvalidDateRange"),
    ],
)
def test_create_validation_errors(client, overrides, kind):
    response = _create(client, **overrides)
    assert response.status_code == 400
    assert response.json()["kind"] == kind


def test_malformed_body_is_rejected_by_request_parsing(client):
    response = _create(client, price="a lot")
    assert response.status_code == 422


def test_boolean_price_is_not_coerced(client):
    assert _create(client, price=True).status_code == 422
    assert _create(client, price="400").status_code == 422

    created = _create(client).json()
    response = client.patch(f"{BASE}/{created['id']}", json={"price": True})
    assert response.status_code == 422
    assert client.get(f"{BASE}/{created['id']}").json()["price"] == 400


def test_update_partial_and_delete(client):
    created = _create(client, end_date="12-2025").json()

    patched = client.patch(f"{BASE}/{created['id']}", json={"price": 500})
    assert patched.status_code == 200
    assert patched.json()["price"] == 500
    assert patched.json()["end_date"] == "2025-12-01"

    cleared = client.put(f"{BASE}/{created['id']}", json={"end_date": None})
    assert cleared.status_code == 200
    assert cleared.json()["end_date"] is None
    assert cleared.json()["price"] == 500

    assert client.delete(f"{BASE}/{created['id']}").status_code == 204
    missing = client.get(f"{BASE}/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["kind"] == "NotFound"
    assert client.delete(f"{BASE}/{created['id']}").status_code == 404


def test_update_rejects_merged_range(client):
    created = _create(client, end_date="09-2025").json()
    response = client.put(f"{BASE}/{created['id']}", json={"start_date": "10-2025"})
    assert response.status_code == 400
    assert response.json()["kind"] == "InvalidDateRange"


def test_update_unknown_id(client):
    response = client.put(f"{BASE}/{uuid.uuid4()}", json={"price": 5})
    assert response.status_code == 404


def test_list_pagination(client):
    for index in range(3):
        _create(client, service_name=f"svc-{index}")
    _create(client, user_id=str(uuid.uuid4()), service_name="someone-else")

    response = client.get(BASE, params={"user_id": USER_ID, "limit": 2})
    assert response.status_code == 200
    body = response.json()
    assert [item["service_name"] for item in body["items"]] == ["svc-2", "svc-1"]
    assert body["total"] == 3
    assert body["limit"] == 2
    assert body["offset"] == 0
    assert body["has_more"] is True

    default_page = client.get(BASE).json()
    assert default_page["limit"] == 20
    assert default_page["total"] == 4
    assert default_page["has_more"] is False


@pytest.mark.parametrize(
    "params, kind",
    [({"limit": 0}, "InvalidLimit"), ({"limit": 101}, "InvalidLimit"), ({"offset": -1}, "InvalidOffset")],
)
def test_list_rejects_bad_paging(client, params, kind):
    response = client.get(BASE, params=params)
    assert response.status_code == 400
    assert response.json()["kind"] == kind


def test_total_cost(client):
    _create(client, service_name="A", price=100, start_date="01-2024", end_date="03-2024")
    _create(client, service_name="B", price=50, start_date="06-2024")

    def total(**params):
        return client.get(f"{BASE}/total", params=params)

    assert total(start_date="02-2024", end_date="02-2024").json() == {"total_cost": 100}
    assert total(start_date="06-2024", end_date="01-2030", user_id=USER_ID).json() == {"total_cost": 50}
    assert total(start_date="01-2024", end_date="12-2024", service_name="B").json() == {"total_cost": 50}

    empty = total(start_date="04-2024", end_date="05-2024")
    assert empty.status_code == 404
    assert empty.json()["kind"] == "NoMatchesFound"

    assert total(start_date="02-abcd", end_date="03-2024").status_code == 400
    assert total(end_date="03-2024").json()["kind"] == "InvalidDate"


def test_sql_backend_end_to_end(sql_client):
    created = _create(sql_client, price=120, start_date="01-2024", end_date="02-2024").json()
    assert sql_client.get(f"{BASE}/{created['id']}").json()["price"] == 120

    total = sql_client.get(f"{BASE}/total", params={"start_date": "02-2024", "end_date": "05-2024"})
    assert total.json() == {"total_cost": 120}

    page = sql_client.get(BASE, params={"user_id": USER_ID}).json()
    assert page["total"] == 1
    assert page["items"][0]["id"] == created["id"]


def test_health_and_root(client, sql_client):
    assert client.get("/health").json()["storage"]["backend"] == "memory"
    sql_health = sql_client.get("/health")
    assert sql_health.status_code == 200
    assert sql_health.json()["status"] == "healthy"
    assert client.get("/").json()["environment"] == "test"


def test_sql_backend_lists_rapid_creates_newest_first(sql_client):
    for index in range(6):
        assert _create(sql_client, service_name=f"svc-{index}").status_code == 201

    items = sql_client.get(BASE).json()["items"]
    assert [item["service_name"] for item in items] == [f"svc-{index}" for index in range(5, -1, -1)]
    assert all(item["created_at"].endswith(("Z", "+00:00")) for item in items)
