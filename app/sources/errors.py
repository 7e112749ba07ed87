"""
Upstream error taxonomy.

Every failure of a single upstream call maps onto one of these. They are
carried inside a FetchResult rather than raised through the sources.
"""


class UpstreamError(Exception):
    """Base class for a failed upstream call"""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url
        self.message = message


class TransportError(UpstreamError):
    """Request never produced a usable response: network, timeout, redirect or content decoding"""


class HttpStatusError(UpstreamError):
    """Upstream answered with a non-2xx status"""

    def __init__(self, url: str, status_code: int, body: str = ""):
        super().__init__(url, f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class DecodeError(UpstreamError):
    """Body was not JSON or not the expected shape"""
