"""
PySSDP: SSDP search for UPnP devices and services
Finds devices on the local network by multicasting M-SEARCH requests
"""

from pyssdp.exceptions import (
    SSDPError,
    InvalidArgumentError,
    TransportError,
    MalformedResponseError,
    NoLocationError
)
from pyssdp.models import SearchRequest, SSDPResponse, Advertisement
from pyssdp.network import HTTPUClient, SSDP, ssdp_raw_search
from pyssdp.log import Log
