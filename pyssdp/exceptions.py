class SSDPError(Exception):
    pass

class InvalidArgumentError(SSDPError, ValueError):
    """
    Raised before any network activity when search arguments are unusable
    """

class TransportError(SSDPError):
    """
    Raised when the multicast socket cannot be opened or written to
    """

class MalformedResponseError(SSDPError):
    """
    Raised when a datagram is not an HTTP response
    """

class NoLocationError(SSDPError):
    """
    Raised when a response has no usable LOCATION header
    """
