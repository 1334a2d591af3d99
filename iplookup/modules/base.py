"""
Base module class for all lookup checks.
Each module defines its metadata and implements the query/normalize pattern.
"""
from typing import Dict, Any, Optional
from abc import ABC, abstractmethod
import logging

from iplookup.config import Settings

logger = logging.getLogger(__name__)


class BaseModule(ABC):
    """
    Base class for all lookup modules.
    Each module should inherit from this and define its metadata.

    Modules are self-contained packages under iplookup/modules/:
    - Query logic in query.py
    - Normalization in normalizer.py
    - Module class and instance in __init__.py
    """

    # Module metadata - must be defined by subclasses
    MODULE_NAME: str = ""
    DISPLAY_NAME: str = ""
    DESCRIPTION: str = ""
    DATA_KEY: str = ""  # Key used in the result record (e.g., "standardsCompliance")

    @abstractmethod
    async def query(self, ip: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
        """
        Run the DNS queries for an address.

        DNS failures must be handled here and reported as data, not raised.

        Args:
            ip: The address to check
            settings: Optional settings override

        Returns:
            Raw lookup data (will be normalized later)
        """
        pass

    @abstractmethod
    def normalize(self, raw_result: Dict[str, Any]) -> Dict[str, Any]:
        """
        Normalize the raw lookup data into a result fragment.

        Args:
            raw_result: Raw data from query()

        Returns:
            Dict with a single key, DATA_KEY
        """
        pass

    def get_config(self) -> Dict[str, Any]:
        """Get module configuration"""
        return {
            "name": self.MODULE_NAME,
            "display_name": self.DISPLAY_NAME,
            "description": self.DESCRIPTION,
            "data_key": self.DATA_KEY,
        }
