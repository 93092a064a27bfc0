"""Integration tests for the nesting and export endpoints."""

from __future__ import annotations

from typing import Any

import ezdxf
import pytest
from fastapi.testclient import TestClient

NESTING_URL = "/api/v1/cabinet-calculator/nesting"
EXPORT_URL = "/api/v1/cabinet-calculator/nesting/export"


class TestAuthentication:
    """Tests for token and permission checks on the nesting endpoint."""

    def test_missing_token(self, client: TestClient, cutting_list: list[dict[str, Any]]) -> None:
        response = client.post(NESTING_URL, json={"cuttingList": cutting_list})

        assert response.status_code == 401
        assert response.json()["detail"] == "Access token required"

    def test_header_without_token(self, client: TestClient, cutting_list: list[dict[str, Any]]) -> None:
        response = client.post(
            NESTING_URL, json={"cuttingList": cutting_list}, headers={"Authorization": "Bearer"}
        )

        assert response.status_code == 401

    def test_unknown_token(self, client: TestClient, cutting_list: list[dict[str, Any]]) -> None:
        response = client.post(
            NESTING_URL,
            json={"cuttingList": cutting_list},
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Invalid or expired token"

    def test_viewer_may_nest(
        self, client: TestClient, viewer_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        response = client.post(NESTING_URL, json={"cuttingList": cutting_list}, headers=viewer_headers)

        assert response.status_code == 200

    def test_mock_manager_lacks_permission(
        self, offline_client: TestClient, cutting_list: list[dict[str, Any]]
    ) -> None:
        response = offline_client.post(
            NESTING_URL,
            json={"cuttingList": cutting_list},
            headers={"Authorization": "Bearer manager-token"},
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "Insufficient permissions"

    def test_mock_admin_when_offline(
        self, offline_client: TestClient, cutting_list: list[dict[str, Any]]
    ) -> None:
        response = offline_client.post(
            NESTING_URL,
            json={"cuttingList": cutting_list},
            headers={"Authorization": "Bearer admin-token"},
        )

        assert response.status_code == 200


class TestNestingEndpoint:
    """Tests for POST /nesting."""

    def test_single_part(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        body = {
            "cuttingList": [
                {"id": "p1", "materialType": "Plywood", "thickness": 18, "length": 720, "width": 560, "quantity": 1}
            ],
            "sheetSize": "not-a-size",
        }

        response = client.post(NESTING_URL, json=body, headers=admin_headers)

        assert response.status_code == 200
        results = response.json()
        assert len(results) == 1
        result = results[0]
        assert result["sheetSize"] == {"length": 2440, "width": 1220}
        assert result["materialType"] == "Plywood"
        assert result["thickness"] == 18
        assert result["sheetCount"] == 1
        assert result["efficiency"] == pytest.approx(min(85, 720 * 560 / (2440 * 1220) * 100))
        assert result["totalArea"] == pytest.approx(2440 * 1220)
        assert result["wasteArea"] == pytest.approx(2440 * 1220 - 720 * 560)
        part = result["parts"][0]
        assert part["partId"] == "p1"
        assert (part["x"], part["y"], part["rotation"]) == (0, 0, 0)
        assert "grain" not in part

    def test_groups_and_filter(
        self, client: TestClient, admin_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        response = client.post(
            NESTING_URL,
            json={"cuttingList": cutting_list, "materialType": "plywood", "sheetSize": {"length": 2800, "width": 2070}},
            headers=admin_headers,
        )

        results = response.json()
        assert [r["materialType"] for r in results] == ["Plywood"]
        assert results[0]["sheetSize"] == {"length": 2800, "width": 2070}
        assert len(results[0]["parts"]) == 3
        shelf = results[0]["parts"][2]
        assert shelf["rotation"] == 90
        assert (shelf["length"], shelf["width"]) == (540, 564)
        assert shelf["grain"] == "width"

    def test_all_materials(
        self, client: TestClient, admin_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        response = client.post(
            NESTING_URL, json={"cuttingList": cutting_list, "materialType": "all"}, headers=admin_headers
        )

        assert [r["materialType"] for r in response.json()] == ["Plywood", "MDF"]

    def test_empty_cutting_list(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(NESTING_URL, json={"cuttingList": []}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "item",
        [
            {"materialType": "MDF", "thickness": 6, "length": 0, "width": 50},
            {"materialType": "MDF", "thickness": 6, "length": 100, "width": 50, "quantity": 0},
            {"materialType": "MDF", "thickness": "thick", "length": 100, "width": 50},
            {"thickness": 6, "length": 100, "width": 50},
        ],
    )
    def test_malformed_item_fails_request(
        self, client: TestClient, admin_headers: dict[str, str], item: dict[str, Any]
    ) -> None:
        response = client.post(NESTING_URL, json={"cuttingList": [item]}, headers=admin_headers)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to perform nesting optimization"
        assert body["error_type"] == "nesting"
        assert body["details"][0]["message"].startswith("cuttingList[0]")

    def test_missing_length_reported_by_path(
        self, client: TestClient, admin_headers: dict[str, str]
    ) -> None:
        body = {"cuttingList": [{"materialType": "MDF", "thickness": 6, "width": 50}]}

        response = client.post(NESTING_URL, json=body, headers=admin_headers)

        assert response.status_code == 500
        messages = [d["message"] for d in response.json()["details"]]
        assert messages == ["cuttingList[0].length: Field required"]

    def test_one_bad_item_fails_whole_list(
        self, client: TestClient, admin_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        bad = {"materialType": "MDF", "thickness": 6, "length": -1, "width": 50}

        response = client.post(
            NESTING_URL, json={"cuttingList": [*cutting_list, bad]}, headers=admin_headers
        )

        assert response.status_code == 500
        assert "parts" not in response.text

    def test_infinite_length(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        content = (
            '{"cuttingList": [{"materialType": "MDF", "thickness": 6, '
            '"length": 1e999, "width": 50}]}'
        )

        response = client.post(
            NESTING_URL,
            content=content,
            headers={**admin_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert response.json()["error_type"] == "nesting"

    def test_missing_cutting_list(self, client: TestClient, admin_headers: dict[str, str]) -> None:
        response = client.post(NESTING_URL, json={"sheetSize": "2800x2070"}, headers=admin_headers)

        assert response.status_code == 500
        assert response.json()["details"] == [{"message": "cuttingList: Field required"}]

    def test_malformed_item_still_needs_token(self, client: TestClient) -> None:
        body = {"cuttingList": [{"materialType": "MDF", "thickness": 6, "width": 50}]}

        response = client.post(NESTING_URL, json=body)

        assert response.status_code == 401

    def test_malformed_export_fails_request(
        self, client: TestClient, viewer_headers: dict[str, str]
    ) -> None:
        body = {"cuttingList": [{"materialType": "MDF", "thickness": 6, "length": 0, "width": 50}]}

        response = client.post(f"{EXPORT_URL}/svg", json=body, headers=viewer_headers)

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to perform nesting optimization"


class TestExportEndpoint:
    """Tests for POST /nesting/export/{format}."""

    def test_list_formats(self, client: TestClient, viewer_headers: dict[str, str]) -> None:
        response = client.get(f"{EXPORT_URL}/formats", headers=viewer_headers)

        assert response.json() == {"formats": ["dxf", "json", "svg"]}

    def test_svg(
        self, client: TestClient, viewer_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        response = client.post(f"{EXPORT_URL}/svg", json={"cuttingList": cutting_list}, headers=viewer_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.headers["content-disposition"] == "attachment; filename=nesting.svg"
        assert response.text.startswith("<svg")

    def test_json(
        self, client: TestClient, viewer_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        response = client.post(f"{EXPORT_URL}/json", json={"cuttingList": cutting_list}, headers=viewer_headers)

        assert response.status_code == 200
        assert [r["materialType"] for r in response.json()] == ["Plywood", "MDF"]

    def test_dxf(
        self,
        client: TestClient,
        viewer_headers: dict[str, str],
        cutting_list: list[dict[str, Any]],
        tmp_path,
    ) -> None:
        response = client.post(f"{EXPORT_URL}/dxf", json={"cuttingList": cutting_list}, headers=viewer_headers)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/dxf")
        path = tmp_path / "nesting.dxf"
        path.write_bytes(response.content)
        doc = ezdxf.readfile(path)
        assert len(doc.modelspace().query('LWPOLYLINE[layer=="PARTS"]')) == 4

    def test_unsupported_format(
        self, client: TestClient, viewer_headers: dict[str, str], cutting_list: list[dict[str, Any]]
    ) -> None:
        response = client.post(f"{EXPORT_URL}/pdf", json={"cuttingList": cutting_list}, headers=viewer_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["error_type"] == "unsupported_format"
        assert body["details"] == {"format": "pdf", "available": ["dxf", "json", "svg"]}

    def test_export_requires_token(self, client: TestClient, cutting_list: list[dict[str, Any]]) -> None:
        response = client.post(f"{EXPORT_URL}/svg", json={"cuttingList": cutting_list})

        assert response.status_code == 401


class TestHealth:
    def test_connected(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "OK", "database": "connected"}

    def test_disconnected(self, offline_client: TestClient) -> None:
        assert offline_client.get("/health").json() == {"status": "OK", "database": "disconnected"}
