from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import UTC, datetime
from typing import Any

from uniswap_dashboard.config import Settings
from uniswap_dashboard.services.query_state import QueryStatus
from uniswap_dashboard.services.sections.base import BaseSectionService, StatusListener
from uniswap_dashboard.services.sections.pools import PoolsSectionService
from uniswap_dashboard.services.sections.protocol import ProtocolSectionService
from uniswap_dashboard.services.sections.swaps import SwapsSectionService
from uniswap_dashboard.services.sections.tokens import TokensSectionService
from uniswap_dashboard.services.subgraph_client import SubgraphClient

logger = logging.getLogger(__name__)


class DashboardService:
    """Coordinator for the four dashboard sections, in page order."""

    def __init__(self, client: SubgraphClient, settings: Settings | None = None):
        self.client = client
        self.settings = settings or Settings()
        sections: list[BaseSectionService] = [
            SwapsSectionService(client, self.settings),
            TokensSectionService(client, self.settings),
            PoolsSectionService(client, self.settings),
            ProtocolSectionService(client, self.settings),
        ]
        self._sections = {section.section_id: section for section in sections}

    def close(self) -> None:
        self.client.close()

    @property
    def section_ids(self) -> list[str]:
        return list(self._sections.keys())

    def section(self, section_id: str) -> BaseSectionService:
        service = self._sections.get(section_id)
        if service is None:
            raise ValueError(f"Unsupported section: {section_id}")
        return service

    def has_widget(self, section_id: str, widget_id: str) -> bool:
        service = self._sections.get(section_id)
        return service is not None and widget_id in service.list_widgets()

    def add_listener(self, listener: StatusListener) -> None:
        for service in self._sections.values():
            service.add_listener(listener)

    def list_sections(self) -> list[dict[str, Any]]:
        return [
            {
                "id": service.section_id,
                "title": service.title,
                "status": service.last_status.value,
                "widgets": service.list_widgets(),
            }
            for service in self._sections.values()
        ]

    def warmup(self) -> dict[str, QueryStatus]:
        """Fetch every section once, concurrently, so the first page view hits the cache."""
        started = time.perf_counter()
        statuses: dict[str, QueryStatus] = {}
        with ThreadPoolExecutor(max_workers=len(self._sections)) as pool:
            future_map = {pool.submit(service.load, {}): section_id for section_id, service in self._sections.items()}
            for future in as_completed(future_map):
                statuses[future_map[future]] = future.result().status
        failures = sum(1 for status in statuses.values() if status is QueryStatus.FAILED)
        logger.info(
            "Warmup complete: %s sections in %.2fs, %s failures",
            len(statuses),
            time.perf_counter() - started,
            failures,
        )
        return statuses

    def get_widget_data(self, section_id: str, widget_id: str, params: dict[str, Any]) -> dict[str, Any]:
        started = time.perf_counter()
        service = self.section(section_id)
        payload = service.get_widget_payload(widget_id, params)
        is_error = payload.get("kind") == "error"
        response = {
            "metadata": {
                "section": section_id,
                "widget": widget_id,
                "generated_at": datetime.now(UTC),
            },
            "data": payload,
            "status": "error" if is_error else "success",
            "error": payload.get("message") if is_error else None,
        }
        if self.settings.log_slow_widgets:
            elapsed_ms = (time.perf_counter() - started) * 1000.0
            if elapsed_ms >= self.settings.slow_widget_threshold_ms:
                logger.warning("Slow widget %.2fms section=%s widget=%s", elapsed_ms, section_id, widget_id)
        return response
