"""
ReverseDNS query module - PTR lookup and forward confirmation
"""
import logging
from typing import Optional, Dict, Any, List

from iplookup import dns_client
from iplookup.config import Settings
from iplookup.errors import DNSLookupFailure

logger = logging.getLogger(__name__)


async def query_reversedns_async(ip: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Look up the PTR hostnames of an address and check that one resolves back to it.

    Args:
        ip (str): The IP address to query.
        settings: Optional settings override.

    Returns:
        dict: Raw lookup data. DNS failures are recorded, never raised.
    """
    logger.info(f"Performing reverse DNS lookup for IP: {ip}")

    try:
        hostnames = await dns_client.reverse_lookup(ip, settings)
        reverse_found = True
    except DNSLookupFailure as e:
        logger.debug(f"No reverse DNS record found for {ip}: {e.reason}")
        hostnames = []
        reverse_found = False

    forward: Dict[str, List[str]] = {}
    matched_hostname = None

    for hostname in hostnames:
        try:
            addresses = await dns_client.resolve_ipv4(hostname, settings)
        except DNSLookupFailure as e:
            logger.debug(f"Forward lookup of {hostname} failed: {e.reason}")
            continue

        forward[hostname] = addresses
        if ip in addresses:
            matched_hostname = hostname
            break

    return {
        "ip": ip,
        "raw_data": {
            "reverse_found": reverse_found,
            "hostnames": hostnames,
            "forward": forward,
            "matched_hostname": matched_hostname,
        },
    }
