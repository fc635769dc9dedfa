# tests/api/test_designs.py
import pytest
from fastapi.testclient import TestClient

# Import your application
from api.main import app

# Create test client
client = TestClient(app)


@pytest.fixture
def design_id():
    """Fixture for a fresh 4x3 design on a 4m x 3m wall."""
    response = client.post("/designs", json={"columns": 4, "rows": 3, "width": 4.0, "height": 3.0})
    assert response.status_code == 201
    return response.json()["session_id"]


def _select(design_id, *cells):
    for row, col in cells:
        response = client.post(f"/designs/{design_id}/cells/{row}/{col}/click")
        assert response.status_code == 200


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "development"


def test_create_design():
    """Test creating a design with the default grid."""
    response = client.post("/designs", json={})
    assert response.status_code == 201

    data = response.json()
    assert "session_id" in data
    assert data["grid"]["cols"] == 4
    assert data["grid"]["rows"] == 3
    assert data["grid"]["tool"] == "structure"
    assert data["summary"] == {"total": 12, "structure": 12, "window": 0, "door": 0}
    assert data["can_undo"] is False


def test_create_design_from_preset():
    response = client.post("/designs", json={"preset": "residential", "width": 3.0, "height": 4.0})
    assert response.status_code == 201

    data = response.json()
    assert data["grid"]["cols"] == 3
    assert data["grid"]["rows"] == 4
    assert data["summary"]["window"] == 2
    assert data["summary"]["door"] == 1
    # The preset is the starting point, not an undoable step
    assert data["can_undo"] is False


def test_create_design_unknown_preset():
    response = client.post("/designs", json={"preset": "skyscraper"})
    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "resource_not_found"
    assert client.get("/designs").json() == []


@pytest.mark.parametrize("payload", [
    {"columns": 0},
    {"columns": 11},
    {"rows": 11},
    {"width": 0},
    {"height": -1.0},
])
def test_create_design_invalid_input(payload):
    response = client.post("/designs", json=payload)
    assert response.status_code == 422


def test_get_and_delete_design(design_id):
    response = client.get(f"/designs/{design_id}")
    assert response.status_code == 200
    assert response.json()["session_id"] == design_id

    response = client.delete(f"/designs/{design_id}")
    assert response.status_code == 204

    response = client.get(f"/designs/{design_id}")
    assert response.status_code == 404


def test_get_unknown_design():
    response = client.get("/designs/does-not-exist")
    assert response.status_code == 404
    detail = response.json()["detail"]
    assert detail["code"] == "resource_not_found"
    assert "does-not-exist" in detail["detail"]


def test_list_designs_most_recent_first():
    first = client.post("/designs", json={}).json()["session_id"]
    second = client.post("/designs", json={"columns": 2, "rows": 2}).json()["session_id"]

    listed = client.get("/designs").json()
    assert [d["session_id"] for d in listed] == [second, first]
    assert listed[0]["columns"] == 2

    # Touching a design moves it to the front
    client.get(f"/designs/{first}")
    listed = client.get("/designs", params={"limit": 1}).json()
    assert [d["session_id"] for d in listed] == [first]


def test_oldest_design_evicted_at_limit(clean_session_store):
    ids = [
        client.post("/designs", json={}).json()["session_id"]
        for _ in range(clean_session_store.max_sessions + 1)
    ]
    assert len(clean_session_store) == clean_session_store.max_sessions
    assert client.get(f"/designs/{ids[0]}").status_code == 404
    assert client.get(f"/designs/{ids[-1]}").status_code == 200


class TestPainting:
    def test_paint_window(self, design_id):
        response = client.put(f"/designs/{design_id}/tool", json={"tool": "window"})
        assert response.status_code == 200
        assert response.json()["grid"]["tool"] == "window"

        response = client.post(f"/designs/{design_id}/cells/0/1/click")
        assert response.status_code == 200
        cell = response.json()
        assert cell["id"] == "0-1"
        assert cell["kind"] == "window"

        summary = client.get(f"/designs/{design_id}/summary").json()
        assert summary["window"] == 1

    def test_unknown_tool_rejected(self, design_id):
        response = client.put(f"/designs/{design_id}/tool", json={"tool": "skylight"})
        assert response.status_code == 422

    def test_set_cell_type_requires_painting_tool(self, design_id):
        response = client.put(f"/designs/{design_id}/cells/1/1/type", json={"type": "door"})
        assert response.status_code == 200
        assert response.json()["kind"] == "structure"

        client.put(f"/designs/{design_id}/tool", json={"tool": "door"})
        response = client.put(f"/designs/{design_id}/cells/1/1/type", json={"type": "door"})
        assert response.json()["kind"] == "door"

    def test_click_out_of_range(self, design_id):
        response = client.post(f"/designs/{design_id}/cells/5/5/click")
        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "cell_out_of_range"

    def test_structure_click_toggles_selection(self, design_id):
        _select(design_id, (0, 0), (1, 1))
        data = client.get(f"/designs/{design_id}").json()
        assert data["grid"]["selection"] == ["0-0", "1-1"]

        response = client.post(f"/designs/{design_id}/selection/clear")
        assert response.json()["grid"]["selection"] == []


class TestMergeSplit:
    def test_merge_selection(self, design_id):
        _select(design_id, (0, 0), (1, 1))
        response = client.post(f"/designs/{design_id}/merge")
        assert response.status_code == 200

        data = response.json()
        anchor = data["grid"]["cells"][0][0]
        assert anchor["col_span"] == 2
        assert anchor["row_span"] == 2
        assert data["grid"]["cells"][1][1]["is_spanned"] is True
        assert data["summary"]["total"] == 9
        assert data["can_undo_merge"] is True

    def test_merge_explicit_ids(self, design_id):
        response = client.post(f"/designs/{design_id}/merge", json={"cell_ids": ["2-2", "2-3"]})
        assert response.status_code == 200
        assert response.json()["grid"]["cells"][2][2]["col_span"] == 2

    def test_merge_needs_two_cells(self, design_id):
        _select(design_id, (0, 0))
        response = client.post(f"/designs/{design_id}/merge")
        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["code"] == "insufficient_selection"
        assert detail["extra"]["selected_count"] == 1

    def test_malformed_cell_id(self, design_id):
        response = client.post(f"/designs/{design_id}/merge", json={"cell_ids": ["a-b", "0-1"]})
        assert response.status_code == 422

    def test_split(self, design_id):
        client.post(f"/designs/{design_id}/merge", json={"cell_ids": ["0-0", "1-1"]})
        response = client.post(f"/designs/{design_id}/split", json={"cell_id": "0-0"})
        assert response.status_code == 200
        data = response.json()
        assert data["summary"]["total"] == 12
        assert data["grid"]["cells"][0][0]["col_span"] == 1

    def test_split_conflicting_selection(self, design_id):
        client.post(f"/designs/{design_id}/merge", json={"cell_ids": ["0-0", "1-1"]})
        _select(design_id, (2, 2), (2, 3))
        response = client.post(f"/designs/{design_id}/split", json={"cell_id": "0-0"})
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "not_splittable"

        data = client.get(f"/designs/{design_id}").json()
        assert data["grid"]["cells"][0][0]["col_span"] == 2
        assert data["grid"]["selection"] == ["2-2", "2-3"]

    def test_split_unmerged_cell(self, design_id):
        response = client.post(f"/designs/{design_id}/split", json={"cell_id": "0-0"})
        assert response.status_code == 409
        assert response.json()["detail"]["code"] == "not_splittable"


class TestRatios:
    def test_set_column_ratio(self, design_id):
        response = client.put(f"/designs/{design_id}/ratios/columns/0", json={"value": 3})
        assert response.status_code == 200
        assert response.json()["grid"]["col_ratios"] == [3.0, 1.0, 1.0, 1.0]

        response = client.get(f"/designs/{design_id}/cells/0/0/dimensions")
        assert response.status_code == 200
        assert response.json() == {"row": 0, "col": 0, "width": 2.0, "height": 1.0}

    def test_non_positive_ratio_becomes_one(self, design_id):
        response = client.put(f"/designs/{design_id}/ratios/rows/1", json={"value": -2})
        assert response.json()["grid"]["row_ratios"] == [1.0, 1.0, 1.0]

    def test_unknown_axis(self, design_id):
        response = client.put(f"/designs/{design_id}/ratios/diagonal/0", json={"value": 2})
        assert response.status_code == 422

    def test_index_out_of_range(self, design_id):
        response = client.put(f"/designs/{design_id}/ratios/rows/3", json={"value": 2})
        assert response.status_code == 400

    def test_reset_ratios(self, design_id):
        client.put(f"/designs/{design_id}/ratios/columns/2", json={"value": 4})
        response = client.post(f"/designs/{design_id}/ratios/reset")
        assert response.json()["grid"]["col_ratios"] == [1.0, 1.0, 1.0, 1.0]


class TestGridLifecycle:
    def test_apply_grid_clears_history(self, design_id):
        client.post(f"/designs/{design_id}/merge", json={"cell_ids": ["0-0", "0-1"]})
        response = client.post(f"/designs/{design_id}/grid", json={"columns": 5, "rows": 2})
        assert response.status_code == 200
        data = response.json()
        assert data["grid"]["cols"] == 5
        assert data["grid"]["width"] == 4.0
        assert data["summary"]["total"] == 10
        assert data["can_undo"] is False

    def test_set_dimensions(self, design_id):
        response = client.put(f"/designs/{design_id}/dimensions", json={"width": 8.0, "height": 6.0})
        assert response.status_code == 200
        dims = client.get(f"/designs/{design_id}/cells/1/1/dimensions").json()
        assert (dims["width"], dims["height"]) == (2.0, 2.0)

    def test_apply_preset(self, design_id):
        response = client.post(f"/designs/{design_id}/preset", json={"name": "Retail Front"})
        assert response.status_code == 200
        data = response.json()
        assert data["grid"]["cols"] == 6
        assert data["summary"]["window"] == 4
        assert data["can_undo"] is True

    def test_apply_unknown_preset(self, design_id):
        response = client.post(f"/designs/{design_id}/preset", json={"name": "Nope"})
        assert response.status_code == 404


class TestMaterialSettings:
    def test_defaults_in_state(self, design_id):
        grid = client.get(f"/designs/{design_id}").json()["grid"]
        assert grid["material"] == "aluminum"
        assert grid["glass_type"] == "double"
        assert grid["frame_color"] == "#606060"

    def test_set_material_and_undo(self, design_id):
        response = client.put(f"/designs/{design_id}/material", json={"material": "steel"})
        assert response.status_code == 200
        data = response.json()
        assert data["grid"]["material"] == "steel"
        assert data["history"][-1]["action"] == "material_change"

        data = client.post(f"/designs/{design_id}/undo").json()
        assert data["action"] == "material_change"
        assert data["design"]["grid"]["material"] == "aluminum"

    def test_set_glass_type(self, design_id):
        response = client.put(f"/designs/{design_id}/glass-type", json={"glass_type": "laminated"})
        assert response.status_code == 200
        data = response.json()
        assert data["grid"]["glass_type"] == "laminated"
        assert data["history"][-1]["action"] == "glass_type_change"

    def test_set_color(self, design_id):
        response = client.put(f"/designs/{design_id}/color", json={"color": "#A0B0C0"})
        assert response.status_code == 200
        data = response.json()
        assert data["grid"]["frame_color"] == "#a0b0c0"
        assert data["history"][-1]["action"] == "color_change"

    def test_malformed_color(self, design_id):
        response = client.put(f"/designs/{design_id}/color", json={"color": "teal"})
        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["code"] == "invalid_setting"
        assert detail["extra"]["field"] == "frame_color"
        assert client.get(f"/designs/{design_id}").json()["can_undo"] is False

    @pytest.mark.parametrize("path, payload", [
        ("material", {"material": "wood"}),
        ("glass-type", {"glass_type": "quadruple"}),
    ])
    def test_unknown_setting_rejected(self, design_id, path, payload):
        response = client.put(f"/designs/{design_id}/{path}", json=payload)
        assert response.status_code == 422

    def test_metrics_estimate(self, design_id):
        client.put(f"/designs/{design_id}/tool", json={"tool": "window"})
        client.post(f"/designs/{design_id}/cells/0/1/click")
        client.put(f"/designs/{design_id}/material", json={"material": "composite"})

        data = client.get(f"/designs/{design_id}/metrics").json()
        assert data["material"] == "composite"
        assert data["glassType"] == "double"
        assert data["materialBreakdown"]["composite"] == pytest.approx(770.0)
        assert data["materialBreakdown"]["glass"] == pytest.approx(120.0)
        assert data["materialBreakdown"]["hardware"] == pytest.approx(133.5)
        assert data["totalCost"] == pytest.approx(1023.5)


class TestHistory:
    def test_undo_redo(self, design_id):
        client.put(f"/designs/{design_id}/tool", json={"tool": "window"})
        client.post(f"/designs/{design_id}/cells/0/0/click")

        response = client.post(f"/designs/{design_id}/undo")
        assert response.status_code == 200
        data = response.json()
        assert data["applied"] is True
        assert data["action"] == "panel_type_change"
        assert data["design"]["summary"]["window"] == 0
        assert data["design"]["can_redo"] is True

        data = client.post(f"/designs/{design_id}/redo").json()
        assert data["applied"] is True
        assert data["design"]["summary"]["window"] == 1

    def test_undo_with_empty_history(self, design_id):
        data = client.post(f"/designs/{design_id}/undo").json()
        assert data["applied"] is False
        assert data["action"] is None

    def test_undo_last_merge(self, design_id):
        client.post(f"/designs/{design_id}/merge", json={"cell_ids": ["0-0", "1-1"]})
        client.put(f"/designs/{design_id}/ratios/columns/3", json={"value": 2})

        data = client.post(f"/designs/{design_id}/undo-merge").json()
        assert data["applied"] is True
        assert data["action"] == "panel_merge"
        assert data["design"]["summary"]["total"] == 12


def test_metrics(design_id):
    client.put(f"/designs/{design_id}/tool", json={"tool": "window"})
    client.post(f"/designs/{design_id}/cells/0/1/click")

    response = client.get(f"/designs/{design_id}/metrics")
    assert response.status_code == 200
    data = response.json()
    assert data["frameMeters"] == 14.0
    assert data["windowMeters"] == 4.0
    assert data["glassArea"] == 1.0
    assert data["cornerCount"] == 10
    assert len(data["panels"]) == 12
