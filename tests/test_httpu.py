"""Tests for the UDP transport, over loopback."""

import asyncio
import dataclasses
from datetime import timedelta
from typing import List, Tuple
from unittest.mock import Mock

import pytest

from pyssdp.exceptions import TransportError
from pyssdp.models import SearchRequest
from pyssdp.network import HTTPUClient, ssdp_raw_search

from .common import BASIC_ST

RESPONSE = (
    "HTTP/1.1 200 OK\r\n"
    "LOCATION: http://127.0.0.1:49152/description.xml\r\n"
    "ST: {st}\r\n"
    "USN: uuid:loopback::{st}\r\n"
    "\r\n"
).format(st=BASIC_ST).encode()


class Responder(asyncio.DatagramProtocol):
    """Answers every datagram with a canned response."""

    def __init__(self, replies: List[bytes]):
        self.replies = replies
        self.received: List[bytes] = []
        self.transport = None

    def connection_made(self, transport) -> None:
        self.transport = transport

    def datagram_received(self, data: bytes, addr: Tuple[str, int]) -> None:
        self.received.append(data)
        for reply in self.replies:
            self.transport.sendto(reply, addr)


async def start_responder(replies: List[bytes]) -> Tuple[asyncio.DatagramTransport, Responder]:
    loop = asyncio.get_running_loop()
    return await loop.create_datagram_endpoint(
        lambda: Responder(replies), local_addr=("127.0.0.1", 0)
    )


def loopback_request(port: int) -> SearchRequest:
    return dataclasses.replace(SearchRequest.build(BASIC_ST, 1), host="127.0.0.1", port=port)


@pytest.mark.asyncio
async def test_send_and_collect() -> None:
    """Test requests are repeated and replies streamed until the deadline."""
    transport, responder = await start_responder([RESPONSE, b"garbage"])
    port = transport.get_extra_info("sockname")[1]
    log = Mock()
    client = HTTPUClient(local_addr=("127.0.0.1", 0), log=log)

    try:
        request = loopback_request(port)
        responses = await client.send(request, timedelta(milliseconds=300), 3)
        collected = [response async for response in responses]
    finally:
        transport.close()

    assert responder.received == [request.encode()] * 3
    assert len(collected) == 3
    assert all(response.status == 200 for response in collected)
    assert all(response.st == BASIC_ST for response in collected)
    # the garbage replies were logged and dropped
    assert any("parsing" in " ".join(map(str, call.args)) for call in log.call_args_list)


@pytest.mark.asyncio
async def test_search_over_loopback() -> None:
    """Test a full search deduplicates repeated replies."""
    transport, _ = await start_responder([RESPONSE])
    port = transport.get_extra_info("sockname")[1]

    class LoopbackClient(HTTPUClient):
        async def send(self, request, total_wait, repeat_count):
            return await super().send(
                dataclasses.replace(request, host="127.0.0.1", port=port),
                timedelta(milliseconds=300),
                repeat_count,
            )

    try:
        advertisements = await ssdp_raw_search(
            LoopbackClient(local_addr=("127.0.0.1", 0), log=Mock()), BASIC_ST, 1, 3, log=Mock()
        )
        collected = [advertisement async for advertisement in advertisements]
    finally:
        transport.close()

    assert len(collected) == 1
    assert str(collected[0].location) == "http://127.0.0.1:49152/description.xml"


@pytest.mark.asyncio
async def test_stream_ends_at_deadline_without_replies() -> None:
    """Test the stream closes once the wait is over even if nothing answers."""
    transport, _ = await start_responder([])
    port = transport.get_extra_info("sockname")[1]
    client = HTTPUClient(local_addr=("127.0.0.1", 0), log=Mock())

    try:
        responses = await client.send(loopback_request(port), timedelta(milliseconds=100), 1)
        collected = await asyncio.wait_for(
            _drain(responses), timeout=5
        )
    finally:
        transport.close()

    assert collected == []


async def _drain(responses) -> list:
    return [response async for response in responses]


@pytest.mark.asyncio
async def test_bind_failure() -> None:
    """Test a socket that cannot be bound raises TransportError."""
    # TEST-NET-3, never assigned to a local interface
    client = HTTPUClient(local_addr=("203.0.113.1", 0), log=Mock())

    with pytest.raises(TransportError):
        await client.send(loopback_request(1900), timedelta(milliseconds=100), 1)


@pytest.mark.asyncio
async def test_send_failure() -> None:
    """Test a request the socket refuses to send raises TransportError."""
    # broadcast is refused without SO_BROADCAST
    request = dataclasses.replace(
        SearchRequest.build(BASIC_ST, 1), host="255.255.255.255", port=1900
    )
    client = HTTPUClient(log=Mock())

    with pytest.raises(TransportError):
        await client.send(request, timedelta(milliseconds=100), 3)
