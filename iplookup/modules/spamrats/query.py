"""
SpamRATS query module - DNSxL lookup of an address
"""
import logging
from typing import Optional, Dict, Any, List

from iplookup import dns_client
from iplookup.config import Settings, get_settings
from iplookup.errors import DNSLookupFailure

logger = logging.getLogger(__name__)


def reverse_ip(ip: str) -> str:
    """Reverse the octets of an address for a DNSxL query."""
    return ".".join(reversed(ip.split(".")))


def build_query_name(ip: str, zone: str) -> str:
    """Build the DNSxL query name, e.g. 4.3.2.1.all.spamrats.com"""
    return f"{reverse_ip(ip)}.{zone.strip('.')}"


def extract_codes(addresses: List[str]) -> List[int]:
    """Collect the last octet of each answer address, skipping malformed ones."""
    codes = []
    for address in addresses:
        last_octet = address.rsplit(".", 1)[-1]
        if not last_octet.isdigit():
            logger.warning(f"Ignoring malformed blocklist answer: {address}")
            continue
        code = int(last_octet)
        if code not in codes:
            codes.append(code)
    return codes


async def query_spamrats_async(ip: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Query the SpamRATS zone for an address.

    A failed lookup is the usual "not listed" answer and yields no codes.

    Args:
        ip (str): The IP address to query.
        settings: Optional settings override.

    Returns:
        dict: Raw lookup data with the response codes found.
    """
    zone = (settings or get_settings()).blocklist_zone
    query_name = build_query_name(ip, zone)
    logger.info(f"Querying {zone} for IP: {ip}")

    try:
        addresses = await dns_client.resolve_ipv4(query_name, settings)
    except DNSLookupFailure as e:
        logger.debug(f"{ip} not listed on {zone}: {e.reason}")
        addresses = []

    return {
        "ip": ip,
        "raw_data": {
            "zone": zone,
            "query": query_name,
            "addresses": addresses,
            "codes": extract_codes(addresses),
        },
    }
