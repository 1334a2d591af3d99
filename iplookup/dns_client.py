"""
DNS helpers shared by the lookup modules.
Queries go through dnspython with explicit timeouts and run in the default executor.
"""
import asyncio
import logging
from typing import List, Optional

import dns.exception
import dns.resolver

from iplookup.config import Settings, get_settings
from iplookup.errors import DNSLookupFailure

logger = logging.getLogger(__name__)


def get_resolver(settings: Optional[Settings] = None) -> dns.resolver.Resolver:
    """
    Build a resolver with the configured timeouts and nameservers.

    Args:
        settings: Settings to use, defaults to the process-wide settings

    Returns:
        dns.resolver.Resolver
    """
    settings = settings or get_settings()
    # System configuration is only read when no nameservers are configured
    resolver = dns.resolver.Resolver(configure=not settings.nameservers)
    if settings.nameservers:
        resolver.nameservers = list(settings.nameservers)
    resolver.timeout = settings.dns_timeout
    resolver.lifetime = settings.dns_lifetime
    return resolver


def _reverse_sync(ip: str, settings: Optional[Settings]) -> List[str]:
    """Synchronous PTR lookup"""
    try:
        resolver = get_resolver(settings)
        answers = resolver.resolve_address(ip)
    except dns.resolver.NXDOMAIN:
        raise DNSLookupFailure(ip, "PTR", "NXDOMAIN")
    except dns.resolver.NoAnswer:
        raise DNSLookupFailure(ip, "PTR", "no answer")
    except dns.resolver.NoNameservers:
        raise DNSLookupFailure(ip, "PTR", "no nameservers")
    except dns.exception.Timeout:
        raise DNSLookupFailure(ip, "PTR", "timeout")
    except dns.exception.DNSException as e:
        raise DNSLookupFailure(ip, "PTR", str(e))

    hostnames = []
    for rdata in answers:
        hostname = str(rdata).rstrip(".")
        if hostname and hostname not in hostnames:
            hostnames.append(hostname)
    return hostnames


def _resolve_a_sync(name: str, settings: Optional[Settings]) -> List[str]:
    """Synchronous A record lookup"""
    try:
        resolver = get_resolver(settings)
        answers = resolver.resolve(name, "A")
    except dns.resolver.NXDOMAIN:
        raise DNSLookupFailure(name, "A", "NXDOMAIN")
    except dns.resolver.NoAnswer:
        raise DNSLookupFailure(name, "A", "no answer")
    except dns.resolver.NoNameservers:
        raise DNSLookupFailure(name, "A", "no nameservers")
    except dns.exception.Timeout:
        raise DNSLookupFailure(name, "A", "timeout")
    except dns.exception.DNSException as e:
        raise DNSLookupFailure(name, "A", str(e))

    return [str(rdata) for rdata in answers]


async def reverse_lookup(ip: str, settings: Optional[Settings] = None) -> List[str]:
    """
    Resolve an IPv4 address to its PTR hostnames.

    Args:
        ip: Dotted-quad address
        settings: Optional settings override

    Returns:
        Hostnames in answer order, without the trailing dot

    Raises:
        DNSLookupFailure: If the lookup produced no answer
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, _reverse_sync, ip, settings)


async def resolve_ipv4(name: str, settings: Optional[Settings] = None) -> List[str]:
    """
    Resolve a hostname to its IPv4 addresses.

    Raises:
        DNSLookupFailure: If the lookup produced no answer
    """
    loop = asyncio.get_event_loop()
    return await loop.run_in_executor(None, _resolve_a_sync, name, settings)
