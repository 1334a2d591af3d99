"""
SpamRATS module - DNS blocklist categories
Checks an address against the RATS-Dyna, RATS-NoPtr, RATS-Spam and RATS-Auth lists
"""
import logging
from typing import Dict, Any, Optional
from iplookup.config import Settings
from iplookup.modules.base import BaseModule
from .query import query_spamrats_async
from .normalizer import normalize_spamrats_result

logger = logging.getLogger(__name__)


class SpamRATSModule(BaseModule):
    """
    SpamRATS blocklist module.
    One DNSxL query per address; the answer's last octet names the list.
    """

    MODULE_NAME = "SpamRATS"
    DISPLAY_NAME = "SpamRATS"
    DESCRIPTION = "Check if an IP address is on the SpamRATS blocklists"
    DATA_KEY = "listStatuses"

    async def query(self, ip: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
        """Query SpamRATS"""
        return await query_spamrats_async(ip, settings)

    def normalize(self, raw_result: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize SpamRATS data"""
        return normalize_spamrats_result(raw_result)


# Module instance - automatically discovered
module = SpamRATSModule()

__all__ = ['module', 'query_spamrats_async', 'normalize_spamrats_result']
