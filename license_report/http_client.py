"""HTTP client utilities with consistent user agent and request deadlines."""

import json
import time
from dataclasses import dataclass
from typing import Any, Optional

import requests
from urllib3.exceptions import DecodeError, ProtocolError, ReadTimeoutError

from .logging_config import logger

# Overall deadline for one registry request (connect + headers + body)
DEFAULT_TIMEOUT = 10.0
# Maximum wait for the response headers, and for any single read of the body
HEADER_TIMEOUT = 5.0
CHUNK_SIZE = 64 * 1024


def _get_package_version() -> str:
    """Get the package version for User-Agent header."""
    try:
        from importlib.metadata import version

        return version("license-report")
    except Exception:
        try:
            from pathlib import Path

            import tomllib

            pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
            if pyproject_path.exists():
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                return pyproject_data.get("project", {}).get("version", "unknown")
        except Exception:
            pass
        return "unknown"


USER_AGENT = f"license-report/{_get_package_version()}"


def get_default_headers(accept: Optional[str] = None) -> dict:
    """
    Get default HTTP headers with user agent.

    Args:
        accept: Optional Accept header value (e.g., "application/json")

    Returns:
        Dictionary of HTTP headers
    """
    headers = {"User-Agent": USER_AGENT}
    if accept:
        headers["Accept"] = accept
    return headers


def create_session() -> requests.Session:
    """Create a requests session carrying the default headers."""
    session = requests.Session()
    session.headers.update(get_default_headers())
    return session


@dataclass(frozen=True)
class HTTPResult:
    """Status and fully read body of a registry response."""

    status_code: int
    content: bytes = b""
    encoding: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def text(self) -> str:
        return self.content.decode(self.encoding or "utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON (raises json.JSONDecodeError)."""
        return json.loads(self.content)


def fetch(
    session: requests.Session,
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    header_timeout: float = HEADER_TIMEOUT,
) -> HTTPResult:
    """
    GET a URL within a bounded overall deadline.

    The header wait is delegated to requests (read timeout). The body is
    read with short reads (``read1``) that return as soon as any bytes
    arrive, and the overall deadline is checked after each of them, so a
    server trickling its body cannot hold the request open. A server that
    stalls completely is cut off by the read timeout. Bodies of non-200
    responses are not read.

    Args:
        session: requests.Session to issue the request with
        url: Absolute URL
        timeout: Overall deadline in seconds
        header_timeout: Maximum wait for response headers in seconds

    Returns:
        HTTPResult with status code and body

    Raises:
        requests.exceptions.Timeout: If either deadline is exceeded
        requests.exceptions.RequestException: On transport errors
    """
    deadline = time.monotonic() + timeout
    logger.debug(f"GET {url}")
    response = session.get(url, timeout=(timeout, header_timeout), stream=True)
    try:
        if response.status_code != 200:
            return HTTPResult(status_code=response.status_code)

        chunks = []
        while True:
            if time.monotonic() > deadline:
                raise requests.exceptions.Timeout(f"Reading {url} exceeded {timeout:g}s")
            try:
                chunk = response.raw.read1(CHUNK_SIZE, decode_content=True)
            except ReadTimeoutError as e:
                raise requests.exceptions.ReadTimeout(f"Reading {url} stalled: {e}") from e
            except (ProtocolError, DecodeError) as e:
                raise requests.exceptions.ConnectionError(f"Reading {url} failed: {e}") from e
            if not chunk:
                break
            chunks.append(chunk)

        if time.monotonic() > deadline:
            raise requests.exceptions.Timeout(f"Reading {url} exceeded {timeout:g}s")

        return HTTPResult(
            status_code=response.status_code,
            content=b"".join(chunks),
            encoding=response.encoding,
        )
    finally:
        response.close()
