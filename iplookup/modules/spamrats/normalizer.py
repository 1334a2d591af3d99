"""
SpamRATS normalizer - maps response codes to list statuses
"""
import logging
from typing import Dict, Any, Optional, Tuple

from iplookup.config import LIST_CATEGORIES
from iplookup.models import ListStatus, MembershipStatus

logger = logging.getLogger(__name__)


def normalize_spamrats_result(raw_result: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Normalize SpamRATS lookup data into one status per list category.

    Every category is reported, in table order; categories whose code is not
    in the answer are "Not on the list".

    Args:
        raw_result: Raw data from query_spamrats_async

    Returns:
        {"listStatuses": tuple of ListStatus}
    """
    data = (raw_result or {}).get("raw_data") or {}
    codes = set(data.get("codes", []))

    statuses: Tuple[ListStatus, ...] = tuple(
        ListStatus(list=name, status=MembershipStatus.of(code in codes))
        for code, name in LIST_CATEGORIES.items()
    )

    unknown = codes - set(LIST_CATEGORIES)
    if unknown:
        logger.warning(f"Unknown response codes for {(raw_result or {}).get('ip', 'Unknown')}: {sorted(unknown)}")

    listed = [status.list for status in statuses if status.status is MembershipStatus.ON_LIST]
    logger.debug(f"Normalized SpamRATS result for {(raw_result or {}).get('ip', 'Unknown')}: listed on {listed}")
    return {"listStatuses": statuses}
