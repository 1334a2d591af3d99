"""
Input validation for batches of IPv4 addresses.
"""
import re
import logging
from typing import Any, List

from iplookup.errors import AddressSyntaxError, BatchValidationError

logger = logging.getLogger(__name__)

IP_REGEX = re.compile(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$")

# Separators accepted between addresses in free-form text (uploads, textareas)
TOKEN_SPLIT_REGEX = re.compile(r"[\s,]+")


def is_valid_ip(ip: Any) -> bool:
    """
    Check that a value is a dotted-quad IPv4 address.

    Each octet is 1-3 digits and within 0-255. No surrounding whitespace,
    IPv6 or CIDR suffixes are accepted.
    """
    if not isinstance(ip, str):
        return False
    # re's $ also matches before a trailing newline
    if not IP_REGEX.match(ip) or ip.endswith("\n"):
        return False
    return all(int(octet) <= 255 for octet in ip.split("."))


def validate_ips(ips: Any) -> List[str]:
    """
    Validate a batch of addresses as a whole.

    Args:
        ips: The raw "ips" value from the request body

    Returns:
        The same addresses, in the same order

    Raises:
        BatchValidationError: If ips is missing, not a list or empty
        AddressSyntaxError: If any entry is not a valid address; lists every offender
    """
    if not ips or not isinstance(ips, list):
        raise BatchValidationError()

    invalid_ips = [ip for ip in ips if not is_valid_ip(ip)]
    if invalid_ips:
        logger.info(f"Rejected batch of {len(ips)} with {len(invalid_ips)} invalid entries")
        raise AddressSyntaxError(invalid_ips)

    return list(ips)


def parse_ip_text(text: str) -> List[str]:
    """
    Split free-form text into address candidates.

    Commas, spaces and newlines all separate entries; empty tokens are dropped.
    The tokens are not validated.
    """
    if not text:
        return []
    return [token.strip() for token in TOKEN_SPLIT_REGEX.split(text) if token.strip()]
