# price_scraper/api/app.py

"""HTTP front end: ``GET /scrape?url=...&key=...``."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from price_scraper.browser.playwright_page import BrowserLauncher
from price_scraper.config.settings import Settings
from price_scraper.exceptions import AuthError, ScraperError
from price_scraper.services.scrape_orchestrator import ScrapeOrchestrator
from price_scraper.storage.result_cache import ResultCache

logger = logging.getLogger("price_scraper.api")
access_logger = logging.getLogger("price_scraper.access")

SECURITY_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def get_orchestrator(request: Request) -> ScrapeOrchestrator:
    """Return the orchestrator built for this app instance."""
    orchestrator: ScrapeOrchestrator = request.app.state.orchestrator
    return orchestrator


def require_key(request: Request, key: str | None = None) -> None:
    """Reject the request unless ``?key=`` matches the configured key.

    The gate is open when no key is configured.
    """
    expected: str = request.app.state.scraper_key
    if expected and key != expected:
        logger.warning(
            "Rejected request with invalid key from %s",
            request.client.host if request.client else "unknown",
        )
        raise AuthError()


async def handle_scraper_error(
    request: Request, exc: ScraperError,
) -> JSONResponse:
    """Render a :class:`ScraperError` as a JSON error document."""
    content: dict[str, str] = {"error": exc.error}
    if exc.message:
        content["message"] = exc.message
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app(
    orchestrator: ScrapeOrchestrator | None = None,
    scraper_key: str | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Without an injected *orchestrator* the cache, browser launcher and
    orchestrator are created at startup and the browser driver is
    stopped at shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if orchestrator is not None:
            yield
            return
        launcher = BrowserLauncher()
        await launcher.start()
        cache = ResultCache()
        app.state.orchestrator = ScrapeOrchestrator(cache, launcher)
        logger.info("Price scraper ready (cache ttl=%.0fs)", cache.ttl)
        try:
            yield
        finally:
            await launcher.stop()
            logger.info("Price scraper shut down")

    app = FastAPI(
        title="UK Price Scraper",
        description="Extracts a GBP price from a product page.",
        lifespan=lifespan,
    )
    app.state.orchestrator = orchestrator
    app.state.scraper_key = (
        Settings.SCRAPER_KEY if scraper_key is None else scraper_key
    )
    app.exception_handler(ScraperError)(handle_scraper_error)

    @app.middleware("http")
    async def security_headers(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def log_requests(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        # Path only: the query string may carry the access key
        access_logger.info(
            "%s %s %d %s - %.1f ms",
            request.method,
            request.url.path,
            response.status_code,
            response.headers.get("content-length", "-"),
            elapsed_ms,
        )
        return response

    @app.get("/scrape", dependencies=[Depends(require_key)])
    async def scrape(
        url: str | None = None,
        orch: ScrapeOrchestrator = Depends(get_orchestrator),
    ) -> dict[str, Any]:
        """Scrape *url* (or serve it from cache) and return the result."""
        return await orch.scrape(url)

    @app.get("/health")
    async def health(
        orch: ScrapeOrchestrator = Depends(get_orchestrator),
    ) -> dict[str, Any]:
        """Liveness probe with the number of live cache entries."""
        return {"status": "ok", "cached_entries": len(orch.cache)}

    return app
