"""
Automatic module discovery and registration system.
Discovers all lookup modules in iplookup/modules/ and registers them automatically.
"""
import os
import importlib
import logging
from typing import Dict, Optional
from iplookup.modules.base import BaseModule

logger = logging.getLogger(__name__)


def discover_modules(modules_dir: Optional[str] = None) -> Dict[str, BaseModule]:
    """
    Automatically discover all modules in the modules directory.

    Args:
        modules_dir: Path to modules directory (default: iplookup/modules)

    Returns:
        Dictionary mapping module names to module instances, in directory name order
    """
    if modules_dir is None:
        modules_dir = os.path.join(os.path.dirname(__file__), 'modules')

    discovered_modules = {}

    if not os.path.exists(modules_dir):
        logger.warning(f"Modules directory not found: {modules_dir}")
        return discovered_modules

    for item in sorted(os.listdir(modules_dir)):
        module_path = os.path.join(modules_dir, item)

        # Skip if not a directory or if it's __pycache__
        if not os.path.isdir(module_path) or item.startswith('_'):
            continue

        try:
            module = importlib.import_module(f"iplookup.modules.{item}")

            if hasattr(module, 'module') and isinstance(module.module, BaseModule):
                module_instance = module.module
                discovered_modules[module_instance.MODULE_NAME] = module_instance
                logger.info(f"Discovered module: {module_instance.MODULE_NAME}")
            else:
                logger.warning(f"Module {item} does not have a valid module instance in __init__.py")
        except ImportError as e:
            logger.warning(f"Could not import module {item}: {e}")

    return discovered_modules
