"""Configuration settings for the Document Highlight Search tool"""

from pathlib import Path
from dataclasses import dataclass
import os


@dataclass
class Config:
    """Application configuration - dynamic based on user settings"""

    # Proxy service
    PROXY_ENDPOINT = "/sec-link1"
    UPSTREAM_URL = os.environ.get(
        "DHS_UPSTREAM_URL",
        "https://www.sec.gov/Archives/edgar/data/1318605/000162828024043486/tsla-20240930.htm"
    )
    USER_AGENT = os.environ.get("DHS_USER_AGENT", "ransom app App/1.0 (your.email@domain.com)")
    UPSTREAM_TIMEOUT = 30
    PROXY_HOST = os.environ.get("DHS_PROXY_HOST", "127.0.0.1")
    PROXY_PORT = int(os.environ.get("DHS_PROXY_PORT", "8000"))
    PROXY_ERROR_MESSAGE = "Error Occured"

    # Client side (can be overridden by user settings)
    PROXY_BASE_URL = f"http://{PROXY_HOST}:{PROXY_PORT}"
    FETCH_TIMEOUT = 30

    # Search settings (can be overridden by user settings)
    MIN_QUERY_LENGTH = 3
    MIN_QUERY_LENGTH_FLOOR = 3  # shorter queries are never searched
    DISCARD_STALE_RESPONSES = True

    # Highlighting
    HIGHLIGHT_CLASS = "highlighted-text"
    CURRENT_MATCH_CLASS = "current-match"
    HIGHLIGHT_BACKGROUND = "yellow"
    HIGHLIGHT_COLOR = "black"
    CURRENT_MATCH_BACKGROUND = "orange"

    # UI settings
    PAGE_TITLE = "📄 Document Highlight Search"
    PAGE_ICON = "🔍"
    LAYOUT = "wide"
    PANEL_HEIGHT = 600
    CONTEXT_CHARS = 80

    # Export settings
    OUTPUT_DIR = Path("search_results")

    # Logging
    LOG_LEVEL = os.environ.get("DHS_LOG_LEVEL", "INFO")

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist"""
        cls.OUTPUT_DIR.mkdir(exist_ok=True)
        return cls.OUTPUT_DIR

    @classmethod
    def apply_user_settings(cls, settings):
        """
        Apply user settings to config

        Args:
            settings: UserSettings object from SettingsManager
        """
        # Apply proxy settings
        cls.PROXY_BASE_URL = settings.proxy.base_url
        cls.FETCH_TIMEOUT = settings.proxy.timeout

        # Apply search settings
        cls.MIN_QUERY_LENGTH = max(settings.search.min_query_length, cls.MIN_QUERY_LENGTH_FLOOR)
        cls.DISCARD_STALE_RESPONSES = settings.search.discard_stale_responses

        # Apply display settings
        cls.HIGHLIGHT_BACKGROUND = settings.display.highlight_background
        cls.CURRENT_MATCH_BACKGROUND = settings.display.current_match_background
        cls.PANEL_HEIGHT = settings.display.panel_height
        cls.CONTEXT_CHARS = settings.display.context_chars
