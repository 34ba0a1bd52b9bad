"""Adobe Target Admin API request gateway.

Each call opens a fresh httpx client, sends exactly one request and resolves
the outcome: parsed JSON for 2xx responses, a typed error otherwise. There are
no retries; the only timeout is httpx's default.
"""

import json
import logging
from typing import Any, Optional

import httpx

from ..models.config import TargetConfig
from .error_handler import (
    ConfigurationError,
    NetworkError,
    ResponseParseError,
    TargetAPIError,
)

logger = logging.getLogger(__name__)

TARGET_API_HOST = "mc.adobe.io"
DEFAULT_API_VERSION = "v1"
_BODY_METHODS = {"POST", "PUT", "PATCH"}


def media_type(api_version: str) -> str:
    """Versioned Adobe Target media type, e.g. application/vnd.adobe.target.v3+json"""
    return f"application/vnd.adobe.target.{api_version}+json"


def build_headers(config: TargetConfig, method: str, api_version: str, has_body: bool) -> dict[str, str]:
    headers = {
        "Authorization": f"Bearer {config.access_token}",
        "X-Api-Key": config.api_key,
        "Accept": media_type(api_version),
    }
    if has_body and method in _BODY_METHODS:
        headers["Content-Type"] = media_type(api_version)
    return headers


async def make_target_request(
    config: TargetConfig,
    method: str,
    path: str,
    body: Optional[Any] = None,
    api_version: str = DEFAULT_API_VERSION,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """Perform one authenticated request against the Admin API.

    Args:
        config: Loaded configuration; tenant id, api key and access token are required
        method: HTTP method
        path: Tenant-scoped path, including any query string (e.g. "/target/activities?limit=5")
        body: Optional JSON-serializable request body
        api_version: Admin API version used for Accept/Content-Type media types
        transport: Optional httpx transport override

    Returns:
        The parsed JSON response body ({} for an empty body)

    Raises:
        ConfigurationError: If credentials are missing (no request is sent)
        TargetAPIError: If the API answers with a non-2xx status
        NetworkError: If the request fails at the transport level
        ResponseParseError: If a 2xx response body is not valid JSON
    """
    if not config.has_credentials:
        raise ConfigurationError()

    method = method.upper()
    url = f"https://{TARGET_API_HOST}/{config.tenant_id}{path}"
    headers = build_headers(config, method, api_version, body is not None)
    content = json.dumps(body).encode("utf-8") if body is not None else None

    logger.debug(f"{method} {path} ({api_version})")

    try:
        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.request(method, url, headers=headers, content=content)
    except httpx.TransportError as e:
        raise NetworkError(f"Request failed: {e}", {"method": method, "path": path}) from e

    status_code = response.status_code
    raw = response.text
    try:
        data = json.loads(raw) if raw else {}
    except json.JSONDecodeError as e:
        if 200 <= status_code < 300:
            raise ResponseParseError(f"Failed to parse response: {e}", {"status_code": status_code}) from e
        raise TargetAPIError(status_code, raw, {"method": method, "path": path}) from e

    if 200 <= status_code < 300:
        return data

    logger.debug(f"{method} {path} failed with status {status_code}")
    raise TargetAPIError(status_code, data, {"method": method, "path": path})
