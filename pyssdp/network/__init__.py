from pyssdp.network.httpu import HTTPUClient
from pyssdp.network.ssdp import SSDP, ssdp_raw_search
