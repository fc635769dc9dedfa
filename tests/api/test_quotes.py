# tests/api/test_quotes.py
import pytest
from fastapi.testclient import TestClient

from api.main import app

client = TestClient(app)


@pytest.fixture
def window_item(profile_data):
    """Fixture for a 2.0m x 1.5m two-leaf sliding window."""
    return {
        "id": "w1",
        "type": "window",
        "system": "Sliding",
        "width": 2.0,
        "height": 1.5,
        "leaves": 2,
        "glassType": "single",
        "profile": profile_data,
    }


@pytest.fixture
def painted_design_id():
    """4x3 design with windows at 0-1 and 0-2 and a door at 2-1."""
    design_id = client.post("/designs", json={}).json()["session_id"]
    client.put(f"/designs/{design_id}/tool", json={"tool": "window"})
    client.post(f"/designs/{design_id}/cells/0/1/click")
    client.post(f"/designs/{design_id}/cells/0/2/click")
    client.put(f"/designs/{design_id}/tool", json={"tool": "door"})
    client.post(f"/designs/{design_id}/cells/2/1/click")
    return design_id


def test_price_single_item(window_item):
    response = client.post("/quotes/items/price", json=window_item)
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == "w1"
    assert data["area"] == 3.0
    assert data["sachCost"] == 800.0
    assert data["totalBeforeProfit"] == 2600.0
    assert data["totalPrice"] == 3120.0


def test_price_quote_with_discount(window_item):
    second = dict(window_item, id="w2", quantity=2)
    response = client.post("/quotes/price", json={
        "items": [window_item, second],
        "discountPercentage": 10,
    })
    assert response.status_code == 200

    data = response.json()
    assert [item["id"] for item in data["items"]] == ["w1", "w2"]
    assert "items" not in data["totals"]

    totals = data["totals"]
    assert totals["totalAfter"] == 9360.0
    assert totals["discountAmount"] == 936.0
    assert totals["totalPrice"] == 8424.0
    assert totals["downPayment"] == pytest.approx(6739.2)
    assert totals["supplyPayment"] == pytest.approx(842.4)


def test_curtain_wall_from_design(painted_design_id, profile_data):
    """Test that designId pulls the live design aggregates."""
    response = client.post("/quotes/items/price", json={
        "id": "cw1",
        "type": "curtain_wall",
        "system": "Curtain Wall",
        "width": 4.0,
        "height": 3.0,
        "profile": profile_data,
        "designId": painted_design_id,
    })
    assert response.status_code == 200

    data = response.json()
    assert data["numWindows"] == 2
    assert data["numDoors"] == 1
    assert data["cornerCount"] == 10
    assert data["totalPrice"] == 30072.0


def test_curtain_wall_unknown_design(profile_data):
    response = client.post("/quotes/items/price", json={
        "id": "cw1",
        "type": "curtain_wall",
        "width": 4.0,
        "height": 3.0,
        "profile": profile_data,
        "designId": "missing",
    })
    assert response.status_code == 404


def test_design_reference_only_for_curtain_walls(window_item):
    window_item["designId"] = "anything"
    response = client.post("/quotes/items/price", json=window_item)
    assert response.status_code == 422


def test_design_data_and_id_exclusive(profile_data):
    response = client.post("/quotes/items/price", json={
        "id": "cw1",
        "type": "curtain_wall",
        "width": 4.0,
        "height": 3.0,
        "designData": {"frameMeters": 14.0},
        "designId": "abc",
    })
    assert response.status_code == 422


def test_curtain_wall_malformed_panels_ignored(profile_data):
    """Test that panel entries which are not objects are skipped."""
    response = client.post("/quotes/items/price", json={
        "id": "cw1",
        "type": "curtain_wall",
        "width": 2.0,
        "height": 2.0,
        "profile": profile_data,
        "designData": {"frameMeters": 8.0, "glassArea": 4.0, "panels": ["x", 1]},
    })
    assert response.status_code == 200

    data = response.json()
    assert data["numWindows"] == 0
    assert data["numDoors"] == 0
    assert data["area"] == 4.0


@pytest.mark.parametrize("payload", [
    {"items": []},
    {"items": [{"id": "w", "width": 1, "height": 1}], "discountPercentage": 120},
    {"items": [{"id": "w", "width": 1, "height": 1, "system": "Revolving"}]},
])
def test_invalid_quote(payload):
    response = client.post("/quotes/price", json=payload)
    assert response.status_code == 422
