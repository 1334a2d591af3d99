"""
Lookup engine - per-address pipeline and batch orchestration.
"""
import asyncio
import logging
from typing import List, Optional

from iplookup.config import Settings, get_settings
from iplookup.errors import AddressProcessingError, InternalError
from iplookup.models import LookupFailure, LookupOutcome, LookupResult
from iplookup.module_executor import ModuleExecutor, module_executor

logger = logging.getLogger(__name__)


async def lookup_ip(
    ip: str,
    settings: Optional[Settings] = None,
    executor: Optional[ModuleExecutor] = None,
) -> LookupResult:
    """
    Run every lookup module for one address and build its result.

    DNS misses are already folded into negative statuses by the modules, so an
    address with every check failed is still a successful lookup.

    Args:
        ip: A validated dotted-quad address
        settings: Optional settings override
        executor: Optional executor, defaults to the global one

    Returns:
        LookupResult

    Raises:
        AddressProcessingError: On any unexpected failure, including the per-address deadline
    """
    settings = settings or get_settings()
    executor = executor or module_executor

    try:
        if settings.address_timeout > 0:
            combined = await asyncio.wait_for(
                executor.execute_modules(ip, settings), timeout=settings.address_timeout
            )
        else:
            combined = await executor.execute_modules(ip, settings)
    except asyncio.TimeoutError:
        raise AddressProcessingError(ip, f"timed out after {settings.address_timeout}s")

    try:
        return LookupResult(
            ip=ip,
            standards_compliance=combined["standardsCompliance"],
            list_statuses=tuple(combined["listStatuses"]),
        )
    except KeyError as e:
        raise AddressProcessingError(ip, f"missing {e.args[0]} in lookup result")


async def lookup_ip_safe(
    ip: str,
    settings: Optional[Settings] = None,
    executor: Optional[ModuleExecutor] = None,
) -> LookupOutcome:
    """Like lookup_ip, but returns a LookupFailure instead of raising."""
    try:
        return await lookup_ip(ip, settings, executor)
    except AddressProcessingError as e:
        logger.error(f"Lookup failed for {ip}: {e.reason}")
        return LookupFailure(ip=ip)
    except Exception as e:
        logger.error(f"Unexpected error looking up {ip}: {e}", exc_info=True)
        return LookupFailure(ip=ip)


async def lookup_batch(
    ips: List[str],
    settings: Optional[Settings] = None,
    executor: Optional[ModuleExecutor] = None,
) -> List[LookupOutcome]:
    """
    Look up a validated batch concurrently.

    Args:
        ips: Validated addresses; duplicates are looked up separately
        settings: Optional settings override
        executor: Optional executor, defaults to the global one

    Returns:
        One LookupResult or LookupFailure per input address, in input order
    """
    settings = settings or get_settings()
    logger.info(f"Starting lookup of {len(ips)} addresses")

    try:
        outcomes = await asyncio.gather(*(lookup_ip_safe(ip, settings, executor) for ip in ips))
    except Exception as e:
        raise InternalError(f"batch lookup failed: {e}") from e

    failed = [outcome.ip for outcome in outcomes if outcome.failed]
    if failed:
        logger.warning(f"Lookup finished with {len(failed)} failed addresses: {', '.join(failed)}")
    else:
        logger.info(f"Lookup of {len(ips)} addresses completed")
    return list(outcomes)
