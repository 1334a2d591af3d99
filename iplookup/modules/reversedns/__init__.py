"""
ReverseDNS module - reverse hostname and naming convention checks
"""
import logging
from typing import Dict, Any, Optional
from iplookup.config import Settings
from iplookup.modules.base import BaseModule
from .query import query_reversedns_async
from .normalizer import normalize_reversedns_result

logger = logging.getLogger(__name__)


class ReverseDNSModule(BaseModule):
    """
    ReverseDNS lookup module.
    Checks for a PTR record and that its hostname resolves back to the address.
    """

    MODULE_NAME = "ReverseDNS"
    DISPLAY_NAME = "Reverse DNS"
    DESCRIPTION = "Reverse hostname and forward-confirmed naming convention checks"
    DATA_KEY = "standardsCompliance"

    async def query(self, ip: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
        """Query reverse and forward DNS"""
        return await query_reversedns_async(ip, settings)

    def normalize(self, raw_result: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize reverse DNS data"""
        return normalize_reversedns_result(raw_result)


# Module instance - automatically discovered
module = ReverseDNSModule()

__all__ = ['module', 'query_reversedns_async', 'normalize_reversedns_result']
