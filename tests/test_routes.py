from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from support import FakeSubgraphSession, day_row, token_row
from uniswap_dashboard.config import Settings
from uniswap_dashboard.main import create_app
from uniswap_dashboard.services.subgraph_client import SubgraphClient


def _app(session: FakeSubgraphSession, **settings):
    client = SubgraphClient("https://example.test/subgraph", session=session)
    return create_app(Settings(**settings), client=client)


class RouteTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = FakeSubgraphSession(
            tokens=[token_row("WETH", "10"), token_row("USDC", "5")],
            days=[day_row(1_726_272_000, "100", "10", "1")],
            failures={"pools": "indexer unavailable"},
        )

    def test_health(self) -> None:
        with TestClient(_app(self.session)) as client:
            self.assertEqual(client.get("/health").json(), {"status": "ok"})

    def test_overview_page_lists_every_widget_endpoint(self) -> None:
        with TestClient(_app(self.session)) as client:
            response = client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("/api/v1/sections/swaps/widgets/swap-volume", response.text)
        self.assertIn("/api/v1/sections/protocol/widgets/protocol-fees", response.text)
        self.assertEqual(self.session.calls, [], "page render does not query the subgraph")

    def test_sections_listing(self) -> None:
        with TestClient(_app(self.session)) as client:
            body = client.get("/api/v1/sections").json()
        self.assertEqual([item["id"] for item in body["sections"]], ["swaps", "tokens", "pools", "protocol"])
        self.assertIn("token-volume", body["sections"][1]["widgets"])

    def test_widget_success(self) -> None:
        with TestClient(_app(self.session)) as client:
            body = client.get("/api/v1/sections/tokens/widgets/token-volume").json()
        self.assertEqual(body["status"], "success")
        self.assertIsNone(body["error"])
        self.assertEqual(body["metadata"]["widget"], "token-volume")
        self.assertEqual(body["data"]["x"], ["WETH", "USDC"])

    def test_failed_section_is_reported_in_body(self) -> None:
        with TestClient(_app(self.session)) as client:
            response = client.get("/api/v1/sections/pools/widgets/pool-volume")
            sections = client.get("/api/v1/sections").json()["sections"]
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "error")
        self.assertIn("indexer unavailable", response.json()["error"])
        self.assertEqual(sections[2]["status"], "failed")
        # Other sections are unaffected.
        self.assertEqual(sections[1]["status"], "pending")

    def test_unknown_section_and_widget_are_404(self) -> None:
        with TestClient(_app(self.session)) as client:
            missing_section = client.get("/api/v1/sections/nope/widgets/token-volume")
            missing_widget = client.get("/api/v1/sections/tokens/widgets/nope")
        self.assertEqual(missing_section.status_code, 404)
        self.assertEqual(missing_section.json()["detail"], "Unsupported section: nope")
        self.assertEqual(missing_widget.status_code, 404)
        self.assertIn("nope", missing_widget.json()["detail"])

    def test_handler_bug_is_500_not_404(self) -> None:
        app = _app(self.session)

        def broken(result, params):
            return {}["missing"]

        app.state.dashboard.section("tokens")._handlers["token-volume"] = broken
        with TestClient(app) as client:
            response = client.get("/api/v1/sections/tokens/widgets/token-volume")
        self.assertEqual(response.status_code, 500)
        self.assertIn("Widget query failed", response.json()["detail"])

    def test_pages_must_be_positive(self) -> None:
        with TestClient(_app(self.session)) as client:
            response = client.get("/api/v1/sections/swaps/widgets/swap-volume", params={"pages": 0})
        self.assertEqual(response.status_code, 422)

    def test_prewarm_loads_all_sections_and_shutdown_closes_client(self) -> None:
        with TestClient(_app(self.session, prewarm_enabled=True)) as client:
            self.assertEqual(len(self.session.calls), 4)
            statuses = {item["id"]: item["status"] for item in client.get("/api/v1/sections").json()["sections"]}
        self.assertEqual(statuses["pools"], "failed")
        self.assertEqual(statuses["tokens"], "succeeded")
        self.assertTrue(self.session.closed)


if __name__ == "__main__":
    unittest.main()
