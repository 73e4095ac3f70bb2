from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.templating import Jinja2Templates

from uniswap_dashboard.api.schemas import SectionsResponse, WidgetResponse
from uniswap_dashboard.pages.common import build_widget_endpoint
from uniswap_dashboard.pages.overview import PAGE_CONFIG
from uniswap_dashboard.services.dashboard_service import DashboardService

APP_TITLE = "Uniswap V3 Dashboard"
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))

router = APIRouter()


def get_dashboard_service(request: Request) -> DashboardService:
    return request.app.state.dashboard


@router.get("/", include_in_schema=False)
def overview(request: Request):
    sections = [
        {
            "id": section.id,
            "title": section.title,
            "widgets": [
                {
                    "id": widget.id,
                    "title": widget.title,
                    "kind": widget.kind,
                    "css_class": widget.css_class,
                    "tooltip": widget.tooltip,
                    "paginated": widget.paginated,
                    "endpoint": build_widget_endpoint("", section.id, widget.id),
                }
                for widget in section.widgets
            ],
        }
        for section in PAGE_CONFIG.sections
    ]
    return templates.TemplateResponse(
        request=request,
        name="base.html",
        context={
            "app_title": APP_TITLE,
            "page_title": PAGE_CONFIG.label,
            "sections": sections,
        },
    )


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/api/v1/sections", response_model=SectionsResponse)
def list_sections(svc: DashboardService = Depends(get_dashboard_service)) -> SectionsResponse:
    return SectionsResponse(sections=svc.list_sections())


@router.get("/api/v1/sections/{section}/widgets/{widget}", response_model=WidgetResponse)
def get_widget(
    section: str,
    widget: str,
    pages: Annotated[int, Query(ge=1, le=100)] = 1,
    svc: DashboardService = Depends(get_dashboard_service),
) -> WidgetResponse:
    if section not in svc.section_ids:
        raise HTTPException(status_code=404, detail=f"Unsupported section: {section}")
    if not svc.has_widget(section, widget):
        raise HTTPException(status_code=404, detail=f"Unsupported widget id '{widget}' for section '{section}'")
    try:
        payload = svc.get_widget_data(section_id=section, widget_id=widget, params={"pages": pages})
        return WidgetResponse(**payload)
    except Exception as exc:
        raise HTTPException(status_code=500, detail=f"Widget query failed: {exc}") from exc
