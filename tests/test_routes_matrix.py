"""
Tests for api/routes/matrix.py.

Validates:
    - The round posted by literal sets and by name returns the known histogram
    - Score filtering and detail records
    - Structural, matrix and set-class errors map to 422
    - Oversized matrices are rejected before running
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def round_body(round_melody: list[int]):
    """Builder for a three-voice round request; keyword arguments override fields."""

    def _build(**overrides: object) -> dict:
        body: dict = {
            "description": "Round",
            "groups": [{"rows": [round_melody]} for _ in range(3)],
            "search_sets": [
                {"pitch_classes": [0, 4, 7], "transpositions": "all"},
                {"pitch_classes": [0, 3, 7], "transpositions": "all"},
            ],
        }
        body.update(overrides)
        return body

    return _build


def _histogram(data: dict) -> dict[int, int]:
    return {item["score"]: item["count"] for item in data["totals"]}


class TestAnalyzeMatrix:
    def test_round_histogram(self, api_client: TestClient, round_body, round_histogram: dict) -> None:
        resp = api_client.post("/matrix/analyze", json=round_body())
        assert resp.status_code == 200
        data = resp.json()
        assert _histogram(data) == round_histogram
        assert data["rotation_count"] == data["maximum_rotations"] == 256
        assert data["description"] == "Round"
        assert data["details"] == []
        assert data["summary"].startswith("Score : # Instances\n")
        assert data["summary"].endswith("** End of Report\n")
        assert data["elapsed_ms"] >= 0

    def test_round_by_name(self, api_client: TestClient, round_body, round_histogram: dict) -> None:
        body = round_body(
            search_sets=[
                {"name": "3-11i", "transpositions": "all"},
                {"name": "3-11", "transpositions": "all"},
            ]
        )
        resp = api_client.post("/matrix/analyze", json=body)
        assert resp.status_code == 200
        assert _histogram(resp.json()) == round_histogram

    def test_details_for_best_snapshots(self, api_client: TestClient, round_body) -> None:
        resp = api_client.post("/matrix/analyze", json=round_body(min_score=6, report_details=True))
        data = resp.json()
        assert _histogram(data) == {6: 6}
        assert len(data["details"]) == 6
        detail = next(d for d in data["details"] if d["offsets"] == [0, 12, 8])
        assert detail["score"] == 6
        assert detail["row_groups"] == [1, 2, 3]
        assert detail["column_counts"] == [0, 1, 0, 1, 1, 0, 0, 0, 0, 1, 0, 0, 1, 0, 0, 1]

    def test_score_window(self, api_client: TestClient, round_body) -> None:
        resp = api_client.post("/matrix/analyze", json=round_body(min_score=1, max_score=2))
        data = resp.json()
        assert _histogram(data) == {1: 18, 2: 48}
        assert data["rotation_count"] == 256

    def test_lenient_pitch_classes(self, api_client: TestClient) -> None:
        body = {"groups": [{"rows": [[12, 16, 19]]}], "search_sets": [{"pitch_classes": [0, 4, 7]}]}
        strict = api_client.post("/matrix/analyze", json=body)
        assert strict.status_code == 422
        lenient = api_client.post("/matrix/analyze", json={**body, "strict_pitch_classes": False})
        assert lenient.status_code == 200
        assert _histogram(lenient.json()) == {0: 1}


class TestAnalyzeMatrixErrors:
    def test_no_groups(self, api_client: TestClient) -> None:
        assert api_client.post("/matrix/analyze", json={"groups": []}).status_code == 422

    def test_mismatched_rows(self, api_client: TestClient) -> None:
        body = {"groups": [{"rows": [[0, 1, 2]]}, {"rows": [[0, 1]]}]}
        resp = api_client.post("/matrix/analyze", json=body)
        assert resp.status_code == 422
        assert "every row must have 3" in resp.json()["detail"]

    def test_unknown_set_class(self, api_client: TestClient, round_body) -> None:
        resp = api_client.post("/matrix/analyze", json=round_body(search_sets=[{"name": "3-99"}]))
        assert resp.status_code == 422
        assert "3-99" in resp.json()["detail"]

    def test_search_set_needs_one_source(self, api_client: TestClient, round_body) -> None:
        resp = api_client.post("/matrix/analyze", json=round_body(search_sets=[{"transpositions": [0]}]))
        assert resp.status_code == 422
        assert "exactly one" in resp.json()["detail"]

    def test_inverted_score_range(self, api_client: TestClient, round_body) -> None:
        resp = api_client.post("/matrix/analyze", json=round_body(min_score=4, max_score=2))
        assert resp.status_code == 422

    def test_too_many_snapshots(self, api_client: TestClient, round_body, round_melody: list[int]) -> None:
        resp = api_client.post(
            "/matrix/analyze",
            json=round_body(groups=[{"rows": [round_melody]} for _ in range(4)]),
        )
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Matrix needs 4096 snapshots; the limit is 1000"
