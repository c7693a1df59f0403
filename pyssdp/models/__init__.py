from pyssdp.models.request import SearchRequest
from pyssdp.models.response import SSDPResponse
from pyssdp.models.advertisement import Advertisement
