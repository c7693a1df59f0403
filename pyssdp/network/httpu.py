from __future__ import annotations

import asyncio
import socket
from datetime import timedelta
from typing import AsyncIterator, Callable, Tuple

from pyssdp.static import MULTICAST_TTL
from pyssdp.exceptions import MalformedResponseError, TransportError
from pyssdp.models import SearchRequest, SSDPResponse
from pyssdp.log import Log

# queued when the socket closes, ends the response stream
_CLOSED = object()

class _HTTPUProtocol(asyncio.DatagramProtocol):
    def __init__(self, queue: asyncio.Queue, log: Callable):
        self.queue = queue
        self.log = log

    def datagram_received(self, data: bytes, address: Tuple[str, int]):
        try:
            response = SSDPResponse.parse(data, address)
        except MalformedResponseError as e:
            self.log("httpu: error while parsing response from", address, e)
            return
        self.queue.put_nowait(response)

    def error_received(self, exc: Exception):
        self.log("httpu: error on socket:", exc)

    def connection_lost(self, exc: Exception):
        self.queue.put_nowait(_CLOSED)

class HTTPUClient:
    """
    Sends HTTP-style requests over UDP and collects the replies
    """

    def __init__(self,
        local_addr: Tuple[str, int]=("0.0.0.0", 0),
        ttl: int=MULTICAST_TTL,
        log: Callable=None
    ):
        """
        local_addr - (ip, port) to bind the socket to (default is any interface, random port)
        ttl - multicast time to live
        log - diagnostic sink, called with message parts
        """

        self.local_addr = local_addr
        self.ttl = ttl
        self.log = log if log is not None else Log()

    async def send(self,
        request: SearchRequest,
        total_wait: timedelta,
        repeat_count: int
    ) -> AsyncIterator[SSDPResponse]:
        """
        request - request to send to the request's address
        total_wait - how long to collect replies for
        repeat_count - how many times to send the request

        Returns an async iterator over every reply received before total_wait
            elapses, the socket is closed once the wait is over
            or the iterator is closed, whichever comes first
        Raises TransportError if the socket cannot be opened or written to
        """

        loop = asyncio.get_running_loop()
        queue = asyncio.Queue()

        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        try:
            sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, self.ttl)
            sock.bind(self.local_addr)
        except OSError as e:
            sock.close()
            raise TransportError("could not open multicast socket: {}".format(e)) from e

        # send on the bare socket so write errors raise here
        try:
            data = request.encode()
            for _ in range(repeat_count):
                sock.sendto(data, request.address)
        except OSError as e:
            sock.close()
            raise TransportError("could not send request: {}".format(e)) from e

        try:
            transport, _ = await loop.create_datagram_endpoint(
                lambda: _HTTPUProtocol(queue, self.log),
                sock=sock
            )
        except OSError as e:
            sock.close()
            raise TransportError("could not listen for replies: {}".format(e)) from e

        self.log("httpu: sent request", repeat_count, "time(s) to", request.address)
        # close at the deadline even if nobody reads the replies
        deadline = loop.call_later(total_wait.total_seconds(), transport.close)

        return self._collect(transport, queue, deadline)

    async def _collect(self, transport, queue: asyncio.Queue, deadline: asyncio.TimerHandle):
        try:
            while True:
                response = await queue.get()
                if response is _CLOSED:
                    return
                yield response
        finally:
            deadline.cancel()
            transport.close()
