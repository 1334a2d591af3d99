"""
ReverseDNS normalizer - maps lookup data to standards compliance statuses
"""
import logging
from typing import Dict, Any, Optional

from iplookup.models import CheckStatus, StandardsCompliance

logger = logging.getLogger(__name__)


def normalize_reversedns_result(raw_result: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Normalize reverse DNS lookup data into standards compliance statuses.

    The reverse hostname check passes when the PTR lookup answered with a hostname; the naming
    convention check passes when one of the hostnames resolves back to the address.

    Args:
        raw_result: Raw data from query_reversedns_async

    Returns:
        {"standardsCompliance": StandardsCompliance}
    """
    data = (raw_result or {}).get("raw_data") or {}

    reverse_passed = bool(data.get("reverse_found")) and bool(data.get("hostnames"))
    convention_passed = reverse_passed and bool(data.get("matched_hostname"))

    compliance = StandardsCompliance(
        reverse_hostname=CheckStatus.of(reverse_passed),
        naming_convention=CheckStatus.of(convention_passed),
    )

    logger.debug(f"Normalized reverse DNS result for {(raw_result or {}).get('ip', 'Unknown')}: {compliance.to_dict()}")
    return {"standardsCompliance": compliance}
