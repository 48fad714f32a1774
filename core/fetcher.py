"""Fetch the raw document through the proxy service"""

import logging
from typing import Optional

import requests

from config import Config

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """The document could not be retrieved from the proxy"""


class DocumentFetcher:
    """Client for the proxy's document endpoint"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.base_url = (base_url or Config.PROXY_BASE_URL).rstrip('/')
        self.timeout = timeout or Config.FETCH_TIMEOUT

    @property
    def url(self) -> str:
        return f"{self.base_url}{Config.PROXY_ENDPOINT}"

    def fetch(self) -> str:
        """
        Retrieve the raw document

        Raises:
            FetchError: on connection failures and non-200 responses
        """
        try:
            response = requests.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error fetching document from %s: %s", self.url, e)
            raise FetchError(str(e)) from e

        if response.status_code != 200:
            message = self._error_message(response)
            logger.error("Proxy returned %s for %s: %s", response.status_code, self.url, message)
            raise FetchError(f"{response.status_code}: {message}")

        return response.text

    @staticmethod
    def _error_message(response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.reason or ""
        if isinstance(data, dict) and data.get('message'):
            return str(data['message'])
        return response.reason or ""
