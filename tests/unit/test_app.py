"""Tests for the Flask JSON surface."""

import pytest

from algotrace.algorithms import REGISTRY
from algotrace.app import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


class TestAlgorithmsEndpoint:
    def test_lists_every_algorithm(self, client):
        resp = client.get("/api/algorithms")
        assert resp.status_code == 200
        keys = [a["key"] for a in resp.get_json()["algorithms"]]
        assert keys == list(REGISTRY)
        assert len(keys) == 15

    def test_filter_by_tag(self, client):
        resp = client.get("/api/algorithms?tag=graph")
        keys = {a["key"] for a in resp.get_json()["algorithms"]}
        assert keys == {"bfs", "dfs", "dijkstra", "bellman_ford"}

    def test_single_card(self, client):
        card = client.get("/api/algorithms/binary_search").get_json()
        assert card["complexity_time"] == "O(log n)"
        assert card["pseudocode"][0].startswith("def BinarySearch")

    def test_unknown_card(self, client):
        resp = client.get("/api/algorithms/nope")
        assert resp.status_code == 400
        assert "Unknown algorithm" in resp.get_json()["error"]


class TestTraceEndpoint:
    def test_bubble_sort(self, client):
        resp = client.post("/api/trace", json={"algorithm": "bubble_sort", "input": {"values": [5, 3, 1]}})
        assert resp.status_code == 200
        body = resp.get_json()
        assert len(body["trace"]["steps"]) == 9
        assert body["trace"]["steps"][-1]["state"]["array"] == [1, 3, 5]
        assert body["metrics"]["comparisons"] == 3

    def test_graph_from_json_edges(self, client):
        resp = client.post("/api/trace", json={
            "algorithm": "dijkstra",
            "input": {"graph": [["A", "B", 4], ["B", "C", 1]], "source": "A", "target": "C"},
        })
        body = resp.get_json()
        assert body["trace"]["steps"][0]["state"]["distances"]["C"] == "inf"
        assert body["trace"]["steps"][-1]["state"]["distance"] == 5

    def test_invalid_input(self, client):
        resp = client.post("/api/trace", json={"algorithm": "knapsack_01",
                                               "input": {"weights": [1], "values": [1], "capacity": -3}})
        assert resp.status_code == 400
        assert "non-negative" in resp.get_json()["error"]

    def test_unknown_algorithm(self, client):
        resp = client.post("/api/trace", json={"algorithm": "nope", "input": {}})
        assert resp.status_code == 400

    def test_missing_algorithm(self, client):
        resp = client.post("/api/trace", json={"input": {}})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Missing 'algorithm'"

    def test_non_string_algorithm(self, client):
        resp = client.post("/api/trace", json={"algorithm": ["bfs"], "input": {}})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "'algorithm' must be a string"

    def test_non_json_body(self, client):
        resp = client.post("/api/trace", data="not json", content_type="text/plain")
        assert resp.status_code == 400


class TestCompareEndpoint:
    def test_compare_two_sorts(self, client):
        resp = client.post("/api/compare", json={
            "left": {"algorithm": "bubble_sort", "input": {"values": [5, 3, 1]}},
            "right": {"algorithm": "merge_sort", "input": {"values": [5, 3, 1]}},
        })
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["winner_steps"] == "left"
        assert body["left"]["algorithm_id"] == "bubble_sort"
        assert body["right"]["algorithm_id"] == "merge_sort"

    def test_compare_missing_side(self, client):
        resp = client.post("/api/compare", json={"left": {"algorithm": "lis", "input": {"values": [1]}}})
        assert resp.status_code == 400
