from __future__ import annotations

from uniswap_dashboard.pages.common import PageConfig, SectionConfig, WidgetConfig


PAGE_CONFIG = PageConfig(
    slug="overview",
    label="Uniswap V3 Overview",
    sections=[
        SectionConfig(
            "swaps",
            "Swap Activity",
            widgets=[
                WidgetConfig("kpi-swap-volume", "Loaded Swap Volume", "kpi", "panel panel-kpi"),
                WidgetConfig("kpi-swap-count", "Loaded Swaps", "kpi", "panel panel-kpi"),
                WidgetConfig(
                    "swap-volume",
                    "Swap Volume",
                    "chart",
                    "panel panel-large",
                    tooltip="Swap USD amounts summed per bucket. Hover a point for the swap count.",
                    paginated=True,
                ),
                WidgetConfig("recent-swaps", "Most Recent Swaps", "table", "panel panel-wide-table"),
            ],
        ),
        SectionConfig(
            "tokens",
            "Token Volume",
            widgets=[
                WidgetConfig("kpi-top-token", "Top Token", "kpi", "panel panel-kpi"),
                WidgetConfig("token-volume", "Top 5 Tokens by Volume", "chart", "panel panel-large"),
            ],
        ),
        SectionConfig(
            "pools",
            "Pair Volume",
            widgets=[
                WidgetConfig("kpi-top-pool", "Top Pair", "kpi", "panel panel-kpi"),
                WidgetConfig("pool-volume", "Top 5 Pairs by Volume", "chart", "panel panel-large"),
            ],
        ),
        SectionConfig(
            "protocol",
            "Protocol Statistics (Last 30 Days)",
            widgets=[
                WidgetConfig("kpi-latest-tvl", "Latest TVL", "kpi", "panel panel-kpi"),
                WidgetConfig("protocol-tvl", "Total Value Locked (TVL)", "chart", "panel panel-large"),
                WidgetConfig("protocol-volume", "Volume", "chart", "panel panel-large"),
                WidgetConfig("protocol-fees", "Fees", "chart", "panel panel-large"),
            ],
        ),
    ],
)
