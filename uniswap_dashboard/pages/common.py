from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WidgetConfig:
    id: str
    title: str
    kind: str
    css_class: str
    tooltip: str = ""
    paginated: bool = False


@dataclass(frozen=True)
class SectionConfig:
    id: str
    title: str
    widgets: list[WidgetConfig]


@dataclass(frozen=True)
class PageConfig:
    slug: str
    label: str
    sections: list[SectionConfig] = field(default_factory=list)


def build_widget_endpoint(api_base_url: str, section_id: str, widget_id: str) -> str:
    base = api_base_url.rstrip("/")
    return f"{base}/api/v1/sections/{section_id}/widgets/{widget_id}"
