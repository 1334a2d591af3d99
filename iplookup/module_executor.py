"""
Module executor - runs every lookup module for an address.
"""
import asyncio
import logging
from typing import Dict, List, Any, Optional
from iplookup.config import Settings
from iplookup.errors import AddressProcessingError
from iplookup.modules.base import BaseModule
from iplookup.module_discovery import discover_modules

logger = logging.getLogger(__name__)


class ModuleExecutor:
    """
    Executes lookup modules.
    Works with modules through the BaseModule interface.
    """

    def __init__(self, modules: Optional[Dict[str, BaseModule]] = None):
        """
        Initialize executor.

        Args:
            modules: Optional pre-discovered modules dict. If None, will auto-discover.
        """
        self.modules: Dict[str, BaseModule] = modules or {}
        if not self.modules:
            self._load_modules()

    def _load_modules(self):
        """Load all discovered modules"""
        self.modules = discover_modules()
        logger.info(f"Loaded {len(self.modules)} modules")

    def get_module(self, name: str) -> Optional[BaseModule]:
        """Get a module by name"""
        return self.modules.get(name)

    async def execute_module(
        self,
        module_name: str,
        ip: str,
        settings: Optional[Settings] = None
    ) -> Dict[str, Any]:
        """
        Execute a single module.

        Args:
            module_name: Name of the module to execute
            ip: The address to check
            settings: Optional settings override

        Returns:
            Normalized result fragment

        Raises:
            AddressProcessingError: If the module is unknown or fails unexpectedly
        """
        module = self.get_module(module_name)
        if not module:
            raise AddressProcessingError(ip, f"module {module_name} not found")

        logger.debug(f"Executing {module_name} for {ip}")

        try:
            raw_result = await module.query(ip, settings)
            normalized = module.normalize(raw_result)
        except AddressProcessingError:
            raise
        except Exception as e:
            logger.error(f"Error executing {module_name} for {ip}: {e}", exc_info=True)
            raise AddressProcessingError(ip, f"{module_name} failed: {e}") from e

        if not isinstance(normalized, dict) or module.DATA_KEY not in normalized:
            raise AddressProcessingError(ip, f"{module_name} returned no {module.DATA_KEY}")
        return normalized

    async def execute_modules(
        self,
        ip: str,
        settings: Optional[Settings] = None
    ) -> Dict[str, Any]:
        """
        Execute every loaded module concurrently for one address.

        Args:
            ip: The address to check
            settings: Optional settings override

        Returns:
            Combined results dictionary keyed by each module's DATA_KEY

        Raises:
            AddressProcessingError: If any module failed
        """
        module_names = list(self.modules)
        if not module_names:
            return {}

        tasks = [
            asyncio.create_task(self.execute_module(module_name, ip, settings))
            for module_name in module_names
        ]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        return self._combine_results(results, module_names, ip)

    def _combine_results(self, results: List[Any], module_names: List[str], ip: str) -> Dict[str, Any]:
        """Combine results from multiple modules; the first failure wins"""
        combined = {}
        for i, result in enumerate(results):
            if isinstance(result, AddressProcessingError):
                raise result
            if isinstance(result, BaseException):
                raise AddressProcessingError(ip, f"{module_names[i]} failed: {result}") from result
            combined.update(result)
        return combined


# Global executor instance (can be replaced with custom instance)
module_executor = ModuleExecutor()
