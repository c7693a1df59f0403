from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Tuple

from pyssdp.static import (
    SSDP_HOST,
    SSDP_PORT,
    SSDP_ADDRESS,
    METHOD_SEARCH,
    SSDP_DISCOVER,
    SEARCH_GRACE
)
from pyssdp.exceptions import InvalidArgumentError

@dataclass(frozen=True)
class SearchRequest:
    """
    An M-SEARCH request, immutable once built

    headers are kept as (name, value) pairs in wire order, names are
    case sensitive and written exactly as given
    """

    search_target: str
    max_wait_seconds: int
    headers: Tuple[Tuple[str, str], ...]
    method: str = METHOD_SEARCH
    host: str = SSDP_HOST
    port: int = SSDP_PORT

    @classmethod
    def build(cls, search_target: str, max_wait_seconds: int) -> SearchRequest:
        """
        search_target - value of the ST header
        max_wait_seconds - value of the MX header, must be at least 1

        Raises InvalidArgumentError if max_wait_seconds is not an integer >= 1
        """

        # bool is an int subclass but never a meaningful MX
        if isinstance(max_wait_seconds, bool) or not isinstance(max_wait_seconds, int):
            raise InvalidArgumentError(
                "max_wait_seconds must be an integer, got {!r}".format(max_wait_seconds)
            )
        if max_wait_seconds < 1:
            raise InvalidArgumentError(
                "max_wait_seconds must be >= 1, got {}".format(max_wait_seconds)
            )

        return cls(
            search_target=search_target,
            max_wait_seconds=max_wait_seconds,
            headers=(
                ("HOST", SSDP_ADDRESS),
                ("MAN", SSDP_DISCOVER),
                ("MX", str(max_wait_seconds)),
                ("ST", search_target),
            ),
        )

    @property
    def address(self) -> Tuple[str, int]:
        return (self.host, self.port)

    @property
    def total_wait(self) -> timedelta:
        """
        How long the transport should collect replies for
        """

        return timedelta(seconds=self.max_wait_seconds) + SEARCH_GRACE

    def header(self, name: str) -> Optional[str]:
        """
        Looks up a header by its exact name
        """

        for key, value in self.headers:
            if key == name:
                return value
        return None

    def encode(self) -> bytes:
        lines = ["{method} * HTTP/1.1".format(method=self.method)]
        lines.extend("{}: {}".format(key, value) for key, value in self.headers)
        return ("\r\n".join(lines) + "\r\n\r\n").encode()
