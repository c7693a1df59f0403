from datetime import timedelta

# ipv4 multicast group every ssdp responder listens on
SSDP_HOST = "239.255.255.250"
SSDP_PORT = 1900
SSDP_ADDRESS = "{host}:{port}".format(host=SSDP_HOST, port=SSDP_PORT)

METHOD_SEARCH = "M-SEARCH"
SSDP_DISCOVER = '"ssdp:discover"'

# search defaults
MAX_WAIT_SECONDS = 2
NUM_SENDS = 3
# extra time to wait past MX for late replies
SEARCH_GRACE = timedelta(milliseconds=100)

MULTICAST_TTL = 2

LOG_FILE = "log.txt"

# reasons a search response gets discarded
DISCARD_STATUS = "unexpected status"
DISCARD_SEARCH_TARGET = "unexpected search target"
DISCARD_LOCATION = "no usable location"
FALLBACK_USN = "missing USN"
