from __future__ import annotations

import re
from typing import Optional, Tuple

from requests.structures import CaseInsensitiveDict
from yarl import URL

from pyssdp.exceptions import MalformedResponseError, NoLocationError

STATUS_LINE = re.compile(r"^HTTP/(?P<version>\d\.\d) (?P<status>\d{3})(?: (?P<reason>.*))?$")
HEADER_LINE = re.compile(r"^(?P<name>[^:\s][^:]*?)\s*:\s*(?P<value>.*?)\s*$")

class SSDPResponse:
    def __init__(self,
        status: int,
        reason: str="",
        headers: CaseInsensitiveDict=None,
        address: Tuple[str, int]=None
    ):
        """
        status - http status code of the response
        reason - reason phrase following the status code
        headers - response headers, looked up case insensitively
        address - (ip, port) the response was received from
        """

        self.status = status
        self.reason = reason
        self.headers = headers if headers is not None else CaseInsensitiveDict()
        self.address = address

    @classmethod
    def parse(cls, data: bytes, address: Tuple[str, int]=None) -> SSDPResponse:
        """
        Parses a raw datagram into a response

        Raises MalformedResponseError if the datagram is not an HTTP response
        """

        text = data.decode("utf-8", errors="replace")
        lines = text.splitlines()
        if not lines:
            raise MalformedResponseError("empty datagram")

        match = STATUS_LINE.match(lines[0].strip())
        if match is None:
            raise MalformedResponseError("bad status line {!r}".format(lines[0]))

        headers = CaseInsensitiveDict()
        name = None
        for line in lines[1:]:
            # blank line ends the header block
            if not line.strip():
                break
            # continuation line, fold into the previous header
            if line[0] in " \t":
                if name is None:
                    raise MalformedResponseError("continuation before first header {!r}".format(line))
                if kept:
                    headers[name] = (headers[name] + " " + line.strip()).strip()
                continue
            header = HEADER_LINE.match(line)
            if header is None:
                raise MalformedResponseError("bad header line {!r}".format(line))
            name = header.group("name")
            # first occurrence wins
            kept = name not in headers
            if kept:
                headers[name] = header.group("value")

        return cls(
            status=int(match.group("status")),
            reason=match.group("reason") or "",
            headers=headers,
            address=address
        )

    def header(self, name: str) -> str:
        """
        Returns header value, or empty string if it is absent
        """

        return self.headers.get(name) or ""

    @property
    def st(self) -> str:
        return self.header("ST")

    @property
    def usn(self) -> str:
        return self.header("USN")

    def location(self) -> URL:
        """
        Returns the LOCATION header as a url, which may be relative

        Raises NoLocationError if it is missing or cannot be resolved
        """

        raw = self.header("LOCATION")
        if not raw:
            raise NoLocationError("no LOCATION header in response")
        try:
            url = URL(raw)
        except (TypeError, ValueError) as e:
            raise NoLocationError("cannot parse LOCATION {!r}: {}".format(raw, e)) from e

        return url

    def __repr__(self) -> str:
        return f"SSDPResponse(status={self.status}, reason={self.reason}, st={self.st}, usn={self.usn}, address={self.address})"
