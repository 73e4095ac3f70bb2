import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Response
from fastapi.staticfiles import StaticFiles

from uniswap_dashboard import __version__
from uniswap_dashboard.api.routes import router
from uniswap_dashboard.config import Settings, configure_logging
from uniswap_dashboard.services.cache_store import QueryCache
from uniswap_dashboard.services.dashboard_service import DashboardService
from uniswap_dashboard.services.subgraph_client import SubgraphClient

PACKAGE_ROOT = Path(__file__).resolve().parent
logger = logging.getLogger(__name__)


def build_client(settings: Settings) -> SubgraphClient:
    cache = QueryCache(ttl_seconds=settings.cache_ttl_seconds, max_entries=settings.cache_max_entries)
    return SubgraphClient(settings.subgraph_url, timeout_seconds=settings.subgraph_timeout_seconds, cache=cache)


def create_app(settings: Settings | None = None, client: SubgraphClient | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    dashboard = DashboardService(client or build_client(settings), settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        if settings.prewarm_enabled:
            dashboard.warmup()
        yield
        dashboard.close()

    app = FastAPI(
        title="Uniswap V3 Dashboard",
        description="Swap, token, pair and protocol charts from the Uniswap V3 subgraph.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.dashboard = dashboard
    app.state.settings = settings
    app.mount("/static", StaticFiles(directory=str(PACKAGE_ROOT / "static")), name="static")

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon():
        return Response(status_code=204)

    app.include_router(router)
    logger.info("Dashboard ready: endpoint=%s bucket_mode=%s", settings.subgraph_url, settings.swap_bucket_mode)
    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(create_app(settings), host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
