"""
Exceptions raised by the lookup pipeline.
Batch-level errors abort a request; everything else degrades per address.
"""
from typing import List, Optional


class IPLookupError(Exception):
    """Base class for all lookup errors"""


class BatchValidationError(IPLookupError):
    """The request payload is missing, empty or not a list of addresses"""

    def __init__(self, message: str = "Array of IP addresses is required"):
        super().__init__(message)
        self.message = message


class AddressSyntaxError(BatchValidationError):
    """One or more entries are not dotted-quad IPv4 addresses"""

    def __init__(self, invalid_ips: List[str]):
        self.invalid_ips = list(invalid_ips)
        super().__init__(f"Invalid IP addresses: {', '.join(str(ip) for ip in self.invalid_ips)}")


class DNSLookupFailure(IPLookupError):
    """A DNS query returned no usable answer (NXDOMAIN, no answer, timeout, ...)"""

    def __init__(self, name: str, record_type: str, reason: Optional[str] = None):
        self.name = name
        self.record_type = record_type
        self.reason = reason or "no answer"
        super().__init__(f"{record_type} lookup for {name} failed: {self.reason}")


class AddressProcessingError(IPLookupError):
    """Unexpected failure while processing a single address"""

    def __init__(self, ip: str, reason: str):
        self.ip = ip
        self.reason = reason
        super().__init__(f"Lookup for {ip} failed: {reason}")


class InternalError(IPLookupError):
    """Any other unexpected failure; details are logged, not returned"""
