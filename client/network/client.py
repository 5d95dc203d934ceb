"""
Purpose: Ask the route server for land routes; network calls wrapped with retry/back-off.
Dependencies: requests, time, core/config.py.
Ext Hooks: Add authentication.
Client Only: HTTP client with resilience.
"""

import logging
import requests
import time
from typing import Optional, Dict, Any
from core.config import SERVER_URL

log = logging.getLogger(__name__)


class NetworkClient:
    def __init__(self, base_url: str, max_retries: int = 3, retry_delay: float = 1.0, backoff_factor: float = 2.0):
        self.base_url = base_url.rstrip('/')
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.backoff_factor = backoff_factor

    def post_with_retry(self, endpoint: str, data: Dict[str, Any], timeout: float = 5.0) -> Optional[Dict[str, Any]]:
        """Post with exponential backoff retry. 4xx answers are not retried; None is returned."""
        url = f"{self.base_url}{endpoint}"
        delay = self.retry_delay
        for attempt in range(self.max_retries):
            try:
                response = requests.post(url, json=data, timeout=timeout)
                if response.status_code == 200:
                    return response.json()
                if 400 <= response.status_code < 500:
                    log.error("Server rejected %s: %s", endpoint, response.text)
                    return None
                log.warning("Server error %s on attempt %d", response.status_code, attempt + 1)
            except requests.exceptions.RequestException as e:
                log.warning("Network error on attempt %d: %s", attempt + 1, e)

            if attempt < self.max_retries - 1:
                log.info("Retrying in %s seconds...", delay)
                time.sleep(delay)
                delay *= self.backoff_factor
        log.error("Giving up on %s after %d attempts", endpoint, self.max_retries)
        return None


class RouteClient(NetworkClient):
    def __init__(self, base_url: str = SERVER_URL, **kwargs):
        super().__init__(base_url, **kwargs)

    def request_route(self, grid, start, end, range: Optional[int] = None, player=None,
                      weights: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        """
        POST /api/route. Returns {"path": [[q, r], ...] end -> start, "cost": n, "found": bool},
        or None when the server could not be reached or refused the request.
        """
        payload = {'grid': grid.to_dict(), 'start': list(start), 'end': list(end)}
        if range is not None:
            payload['range'] = range
        if player is not None:
            payload['player'] = player
        if weights:
            payload['weights'] = weights
        result = self.post_with_retry("/api/route", payload)
        if result is not None:
            result['path'] = [tuple(cell) for cell in result.get('path', [])]
        return result
