"""
Shared HTTP helper for the upstream data providers.

Every call carries an explicit timeout. Network errors, HTTP errors and
undecodable bodies are all raised as UpstreamFetchError.
"""

import logging
from typing import Any, Dict, Optional

import requests

from ..config.settings import REQUEST_TIMEOUT_SECONDS
from ..exceptions import UpstreamFetchError

logger = logging.getLogger(__name__)


def get_json(
    url: str,
    source: str,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    GET a JSON document.

    Args:
        url: Full request URL
        source: Provider name used in errors and logs
        params: Query parameters
        headers: Extra request headers
        timeout: Seconds before the request is abandoned

    Returns:
        Decoded JSON body

    Raises:
        UpstreamFetchError: on timeout, connection error, non-2xx status or bad JSON
    """
    if timeout is None:
        timeout = REQUEST_TIMEOUT_SECONDS

    logger.debug("GET %s params=%s", url, params)
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.Timeout as e:
        raise UpstreamFetchError(source, f"timed out after {timeout}s") from e
    except requests.RequestException as e:
        raise UpstreamFetchError(source, f"request failed: {e}") from e
    except ValueError as e:
        raise UpstreamFetchError(source, f"invalid JSON body: {e}") from e
