"""Shared helpers for pyssdp tests."""

from datetime import timedelta
from typing import AsyncIterator, List, Optional

from requests.structures import CaseInsensitiveDict

from pyssdp.models import SearchRequest, SSDPResponse

BASIC_ST = "urn:schemas-upnp-org:device:Basic:1"
BASIC_USN = "uuid:abc::urn:schemas-upnp-org:device:Basic:1"
BASIC_LOCATION = "http://192.168.1.10:49152/description.xml"


def make_response(
    status: int = 200,
    st: Optional[str] = BASIC_ST,
    usn: Optional[str] = BASIC_USN,
    location: Optional[str] = BASIC_LOCATION,
) -> SSDPResponse:
    """Build a search response, omitting headers passed as None."""
    headers = CaseInsensitiveDict()
    if st is not None:
        headers["ST"] = st
    if usn is not None:
        headers["USN"] = usn
    if location is not None:
        headers["LOCATION"] = location
    return SSDPResponse(status=status, reason="OK", headers=headers, address=("192.168.1.10", 1900))


class FakeTransport:
    """Replays canned responses and records how it was called."""

    def __init__(self, responses: List[SSDPResponse] = None, error: Exception = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []
        self.closed = False
        self.yielded = 0

    async def send(
        self, request: SearchRequest, total_wait: timedelta, repeat_count: int
    ) -> AsyncIterator[SSDPResponse]:
        self.calls.append((request, total_wait, repeat_count))
        if self.error is not None:
            raise self.error
        return self._stream()

    async def _stream(self) -> AsyncIterator[SSDPResponse]:
        try:
            for response in self.responses:
                self.yielded += 1
                yield response
        finally:
            self.closed = True
