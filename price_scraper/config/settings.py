# price_scraper/config/settings.py

"""Central configuration for the price_scraper service."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the price_scraper service.

    Environment-backed values are read once, when this module is
    first imported.
    """

    # --- Cache ---
    CACHE_TTL_SECONDS: float = float(
        os.getenv("CACHE_TTL_SECONDS") or 900
    )

    # --- HTTP server ---
    SCRAPER_KEY: str = os.getenv("SCRAPER_KEY", "")  # Empty disables the gate
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT") or 3000)

    # --- Browser ---
    HEADLESS: bool = True
    BROWSER_ARGS: list[str] = ["--no-sandbox"]
    WAIT_UNTIL: str = "domcontentloaded"
    NAVIGATION_TIMEOUT_MS: int = 35_000   # Ceiling for initial load
    SETTLE_DELAY_MS: int = int(
        os.getenv("SETTLE_DELAY_MS") or 2_000
    )                                      # Wait for client-side render

    # --- Pricing ---
    CURRENCY_SYMBOL: str = "£"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = (
        BASE_DIR / "price_scraper" / "config" / "selectors.json"
    )
    LOGS_DIR: Path = BASE_DIR / "logs"
