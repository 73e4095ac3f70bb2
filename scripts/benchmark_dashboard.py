#!/usr/bin/env python3
"""
Benchmark dashboard widget endpoints.

Records, per widget:
- Cold request latency (first call, usually a subgraph round trip)
- Warm request latency distribution (repeated calls served from the query cache)
- Error rate and response payload size

Example:
  python scripts/benchmark_dashboard.py --section all --repeats 5 --parallel 4
"""

from __future__ import annotations

import argparse
import json
import statistics
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen


@dataclass(frozen=True)
class WidgetScenario:
    widget: str
    extra_params: dict[str, str] = field(default_factory=dict)


SECTION_DEFAULT_SCENARIOS: dict[str, list[WidgetScenario]] = {
    "swaps": [
        WidgetScenario("kpi-swap-volume"),
        WidgetScenario("kpi-swap-count"),
        WidgetScenario("swap-volume"),
        WidgetScenario("swap-volume", {"pages": "2"}),
        WidgetScenario("recent-swaps"),
    ],
    "tokens": [
        WidgetScenario("kpi-top-token"),
        WidgetScenario("token-volume"),
    ],
    "pools": [
        WidgetScenario("kpi-top-pool"),
        WidgetScenario("pool-volume"),
    ],
    "protocol": [
        WidgetScenario("kpi-latest-tvl"),
        WidgetScenario("protocol-tvl"),
        WidgetScenario("protocol-volume"),
        WidgetScenario("protocol-fees"),
    ],
}

QUICK_WIDGETS_BY_SECTION: dict[str, list[str]] = {
    "swaps": ["swap-volume"],
    "tokens": ["token-volume"],
    "pools": ["pool-volume"],
    "protocol": ["protocol-tvl"],
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark dashboard API endpoints")
    parser.add_argument("--base-url", default="http://127.0.0.1:8000", help="Dashboard base URL")
    parser.add_argument("--section", default="all", help="Section id(s): single, comma-separated, or 'all'")
    parser.add_argument("--repeats", type=int, default=5, help="Warm repeats per scenario")
    parser.add_argument("--timeout-seconds", type=float, default=60.0, help="HTTP timeout")
    parser.add_argument("--parallel", type=int, default=1, help="Concurrent scenario workers")
    parser.add_argument("--quick", action="store_true", help="Only benchmark one chart per section")
    parser.add_argument("--output-json", default="", help="Optional output path for JSON report")
    return parser.parse_args(argv)


def percentile(sorted_values: list[float], p: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return sorted_values[0]
    idx = (len(sorted_values) - 1) * p
    lo = int(idx)
    hi = min(lo + 1, len(sorted_values) - 1)
    frac = idx - lo
    return sorted_values[lo] * (1 - frac) + sorted_values[hi] * frac


def fetch_json(url: str, timeout_seconds: float) -> tuple[dict[str, Any] | None, int, str]:
    req = Request(url, method="GET")
    try:
        with urlopen(req, timeout=timeout_seconds) as resp:
            code = int(resp.status)
            text = resp.read().decode("utf-8")
            return json.loads(text), code, text
    except HTTPError as exc:
        payload = exc.read().decode("utf-8", errors="replace")
        return None, int(exc.code), payload
    except TimeoutError as exc:
        return None, 0, str(exc)
    except URLError as exc:
        return None, 0, str(exc)


def benchmark_once(url: str, timeout_seconds: float) -> dict[str, Any]:
    started = time.perf_counter()
    payload, status_code, raw = fetch_json(url, timeout_seconds)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    ok = status_code == 200 and payload is not None and payload.get("status") == "success"
    return {
        "ok": ok,
        "status_code": status_code,
        "elapsed_ms": elapsed_ms,
        "payload_bytes": len(raw.encode("utf-8", errors="ignore")),
        "error": "" if ok else raw[:500],
    }


def build_url(base_url: str, section: str, widget: str, params: dict[str, Any]) -> str:
    url = f"{base_url.rstrip('/')}/api/v1/sections/{section}/widgets/{widget}"
    return f"{url}?{urlencode(params)}" if params else url


def parse_sections(section_arg: str) -> list[str]:
    raw_items = [item.strip().lower() for item in section_arg.split(",") if item.strip()]
    if not raw_items or "all" in raw_items:
        return list(SECTION_DEFAULT_SCENARIOS)
    for item in raw_items:
        if item not in SECTION_DEFAULT_SCENARIOS:
            raise ValueError(f"Unsupported section: {item}")
    return raw_items


def scenario_list_for_section(section: str, quick: bool) -> list[WidgetScenario]:
    scenarios = SECTION_DEFAULT_SCENARIOS[section]
    if not quick:
        return list(scenarios)
    quick_ids = set(QUICK_WIDGETS_BY_SECTION.get(section, []))
    return [scenario for scenario in scenarios if scenario.widget in quick_ids and not scenario.extra_params]


def run_scenario(
    base_url: str,
    section: str,
    scenario: WidgetScenario,
    repeats: int,
    timeout_seconds: float,
) -> dict[str, Any]:
    url = build_url(base_url, section, scenario.widget, scenario.extra_params)
    cold = benchmark_once(url, timeout_seconds)
    warm_runs = [benchmark_once(url, timeout_seconds) for _ in range(repeats)]
    warm_latencies = sorted(run["elapsed_ms"] for run in warm_runs)
    success_count = sum(1 for run in warm_runs if run["ok"])

    return {
        "section": section,
        "widget": scenario.widget,
        "params": dict(scenario.extra_params),
        "cold_ms": round(cold["elapsed_ms"], 2),
        "cold_ok": cold["ok"],
        "warm_repeats": repeats,
        "warm_error_count": repeats - success_count,
        "warm_p50_ms": round(statistics.median(warm_latencies), 2) if warm_latencies else 0.0,
        "warm_p95_ms": round(percentile(warm_latencies, 0.95), 2),
        "payload_bytes_p50": int(statistics.median(run["payload_bytes"] for run in warm_runs)) if warm_runs else 0,
        "error_samples": [run["error"] for run in [cold, *warm_runs] if not run["ok"]][:2],
    }


def print_report(results: list[dict[str, Any]]) -> None:
    print("\nBenchmark results")
    print("=" * 88)
    header = f"{'Section':10} {'Widget':26} {'Cold(ms)':>9} {'P50(ms)':>9} {'P95(ms)':>9} {'Err':>5} {'Payload(B)':>10}"
    print(header)
    print("-" * len(header))
    for row in results:
        widget_name = row["widget"]
        if "pages" in row["params"]:
            widget_name = f"{widget_name}:p{row['params']['pages']}"
        print(
            f"{row['section'][:10]:10} {widget_name[:26]:26} {row['cold_ms']:9.2f} "
            f"{row['warm_p50_ms']:9.2f} {row['warm_p95_ms']:9.2f} {row['warm_error_count']:5d} "
            f"{row['payload_bytes_p50']:10d}"
        )
    print("=" * 88)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    sections = parse_sections(args.section)
    start = datetime.now(timezone.utc)
    jobs = [(section, scenario) for section in sections for scenario in scenario_list_for_section(section, args.quick)]

    results: list[dict[str, Any]] = []
    with ThreadPoolExecutor(max_workers=max(1, args.parallel)) as pool:
        futures = [
            pool.submit(run_scenario, args.base_url, section, scenario, args.repeats, args.timeout_seconds)
            for section, scenario in jobs
        ]
        for future in as_completed(futures):
            results.append(future.result())

    order = {section: idx for idx, section in enumerate(SECTION_DEFAULT_SCENARIOS)}
    results.sort(key=lambda item: (order[item["section"]], item["widget"], str(item["params"].get("pages", ""))))
    print_report(results)

    if args.output_json:
        report = {
            "run_started_utc": start.isoformat(),
            "run_finished_utc": datetime.now(timezone.utc).isoformat(),
            "config": {
                "base_url": args.base_url,
                "sections": sections,
                "repeats": args.repeats,
                "timeout_seconds": args.timeout_seconds,
                "parallel": args.parallel,
                "quick": args.quick,
            },
            "results": results,
        }
        output_path = Path(args.output_json)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        print(f"\nJSON report written: {output_path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
