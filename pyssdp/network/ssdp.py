from __future__ import annotations

from typing import AsyncIterator, Callable, List

from pyssdp.static import (
    MAX_WAIT_SECONDS,
    NUM_SENDS,
    DISCARD_STATUS,
    DISCARD_SEARCH_TARGET,
    DISCARD_LOCATION,
    FALLBACK_USN
)
from pyssdp.exceptions import NoLocationError, TransportError
from pyssdp.models import SearchRequest, SSDPResponse, Advertisement
from pyssdp.network.httpu import HTTPUClient
from pyssdp.log import Log

async def ssdp_raw_search(
    transport,
    search_target: str,
    max_wait_seconds: int,
    num_sends: int,
    log: Callable=None
) -> AsyncIterator[Advertisement]:
    """
    transport - sends the request and streams back replies (see HTTPUClient)
    search_target - ST to search for, only replies with this exact ST are kept
    max_wait_seconds - MX of the request, must be at least 1
        (replies are collected for an extra 100ms past this)
    num_sends - how many times to send the request
    log - diagnostic sink for discarded replies

    Returns an async iterator of unique advertisements, each with status 200,
        the requested ST and a usable location, which ends when the transport
        stops collecting
    Raises InvalidArgumentError before sending anything if max_wait_seconds is invalid,
        TransportError if the transport could not send the request
    """

    if log is None:
        log = Log()

    request = SearchRequest.build(search_target, max_wait_seconds)
    try:
        all_responses = await transport.send(request, request.total_wait, num_sends)
    except OSError as e:
        raise TransportError("ssdp: could not start search: {}".format(e)) from e

    return _filter_responses(all_responses, search_target, log)

async def _filter_responses(
    all_responses: AsyncIterator[SSDPResponse],
    search_target: str,
    log: Callable
) -> AsyncIterator[Advertisement]:
    # identity -> seen, only this generator touches it
    seen = {}

    try:
        async for response in all_responses:
            if response.status != 200:
                log("ssdp:", DISCARD_STATUS, response.status, response.reason)
                continue
            if response.st != search_target:
                log("ssdp:", DISCARD_SEARCH_TARGET, repr(response.st))
                continue
            try:
                location = response.location()
            except NoLocationError as e:
                log("ssdp:", DISCARD_LOCATION, e)
                continue

            advertisement = Advertisement(response, location)
            if not advertisement.usn:
                log("ssdp:", FALLBACK_USN, "using location", location)

            if advertisement.identity in seen:
                continue
            seen[advertisement.identity] = True
            yield advertisement
    finally:
        # stop the transport too if the consumer quit early
        aclose = getattr(all_responses, "aclose", None)
        if aclose is not None:
            await aclose()

class SSDP:
    def __init__(self,
        transport=None,
        max_wait_seconds: int=MAX_WAIT_SECONDS,
        num_sends: int=NUM_SENDS,
        debug: bool=False
    ):
        """
        transport - transport to search with (default is an HTTPUClient)
        max_wait_seconds - MX of each search (default is 2 seconds)
        num_sends - times each search request is sent (default is 3)
        debug - whether to display debug information
        """

        self.log = Log(debug)
        self.transport = transport if transport is not None else HTTPUClient(log=self.log)
        self.max_wait_seconds = max_wait_seconds
        self.num_sends = num_sends

    async def search(self, search_target: str) -> AsyncIterator[Advertisement]:
        """
        Starts a search, returns the async iterator of advertisements
        """

        self.log("Searching for", search_target)
        return await ssdp_raw_search(
            self.transport,
            search_target,
            self.max_wait_seconds,
            self.num_sends,
            log=self.log
        )

    async def discover(self, search_target: str) -> List[Advertisement]:
        """
        Searches and waits for the search to finish
        Returns list of every advertisement found
        """

        advertisements = [
            advertisement async for advertisement in await self.search(search_target)
        ]
        self.log("Found", len(advertisements), "advertisement(s) for", search_target)
        return advertisements
