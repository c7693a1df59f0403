from requests.structures import CaseInsensitiveDict
from yarl import URL

from pyssdp.models.response import SSDPResponse

class Advertisement:
    def __init__(self, response: SSDPResponse, location: URL):
        """
        response - the accepted search response
        location - its resolved LOCATION url
        """

        self.response = response
        self.location = location

    @property
    def status(self) -> int:
        return self.response.status

    @property
    def headers(self) -> CaseInsensitiveDict:
        return self.response.headers

    @property
    def st(self) -> str:
        return self.response.st

    @property
    def usn(self) -> str:
        return self.response.usn

    @property
    def identity(self) -> str:
        """
        USN if the response has one, otherwise the location
        """

        return self.usn or str(self.location)

    def __repr__(self) -> str:
        return f"Advertisement(st={self.st}, usn={self.usn}, location={self.location})"
