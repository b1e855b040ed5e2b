"""Remote data service exceptions: transport failures, bad payloads."""

from typing import Dict, Optional

from .base import NorthwindReportingError


class RemoteFetchError(NorthwindReportingError):
    """Raised when the initial or any continuation request fails."""

    def __init__(self, url: str, reason: str, page: Optional[int] = None):
        details: Dict[str, str] = {"url": url, "reason": reason}
        if page is not None:
            details["page"] = str(page)

        super().__init__(f"Failed to fetch {url}", details=details)
        self.url = url
        self.reason = reason
        self.page = page


class MalformedResponseError(RemoteFetchError):
    """Raised when a response body is not a recognizable OData payload."""

    pass
