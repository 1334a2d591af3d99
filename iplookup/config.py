"""
Central configuration: blocklist categories, status labels and runtime settings.
Runtime settings are read from environment variables.
"""
import os
from typing import Dict, List, Optional

from iplookup.ip_validator import is_valid_ip

# SpamRATS response codes (last octet of the A answer) and the list each one means.
# Order here is the order list statuses are reported in.
LIST_CATEGORIES = {
    36: 'RATS-Dyna',
    37: 'RATS-NoPtr',
    38: 'RATS-Spam',
    43: 'RATS-Auth',
}

DEFAULT_BLOCKLIST_ZONE = 'all.spamrats.com'

# Labels used in API responses
CHECK_PASSED = 'Passed!'
CHECK_FAILED = 'Failed!'
ON_LIST = 'On the list'
NOT_ON_LIST = 'Not on the list'

CSV_HEADERS = ['IP', 'Reverse Hostname', 'Naming Convention', 'List Status']


def get_list_names() -> List[str]:
    """Get the category names in reporting order"""
    return list(LIST_CATEGORIES.values())


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name, '').strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def _get_list(name: str) -> List[str]:
    value = os.getenv(name, '')
    return [item.strip() for item in value.split(',') if item.strip()]


def _get_nameservers(name: str) -> List[str]:
    nameservers = _get_list(name)
    invalid = [ns for ns in nameservers if not is_valid_ip(ns)]
    if invalid:
        raise ValueError(f"{name} must list IPv4 addresses, got {', '.join(invalid)}")
    return nameservers


class Settings:
    """
    Runtime settings for DNS lookups.

    Attributes:
        blocklist_zone: DNSxL zone queried for list membership
        dns_timeout: Seconds to wait for a single nameserver
        dns_lifetime: Total seconds allowed for one query
        nameservers: Resolver IPs to use instead of the system configuration
        address_timeout: Deadline in seconds for one address, 0 disables it
        log_level: Logging level name
    """

    def __init__(
        self,
        blocklist_zone: str = DEFAULT_BLOCKLIST_ZONE,
        dns_timeout: float = 3.0,
        dns_lifetime: float = 5.0,
        nameservers: Optional[List[str]] = None,
        address_timeout: float = 0.0,
        log_level: str = 'INFO',
    ):
        self.blocklist_zone = blocklist_zone.strip('.')
        self.dns_timeout = dns_timeout
        self.dns_lifetime = dns_lifetime
        self.nameservers = nameservers or []
        self.address_timeout = address_timeout
        self.log_level = log_level.upper()

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from environment variables."""
        return cls(
            blocklist_zone=os.getenv('IPLOOKUP_BLOCKLIST_ZONE', DEFAULT_BLOCKLIST_ZONE) or DEFAULT_BLOCKLIST_ZONE,
            dns_timeout=_get_float('IPLOOKUP_DNS_TIMEOUT', 3.0),
            dns_lifetime=_get_float('IPLOOKUP_DNS_LIFETIME', 5.0),
            nameservers=_get_nameservers('IPLOOKUP_NAMESERVERS'),
            address_timeout=_get_float('IPLOOKUP_ADDRESS_TIMEOUT', 0.0),
            log_level=os.getenv('IPLOOKUP_LOG_LEVEL', 'INFO'),
        )

    def as_dict(self) -> Dict[str, object]:
        return {
            'blocklist_zone': self.blocklist_zone,
            'dns_timeout': self.dns_timeout,
            'dns_lifetime': self.dns_lifetime,
            'nameservers': list(self.nameservers),
            'address_timeout': self.address_timeout,
        }


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the process-wide settings, loading them from the environment on first use"""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the process-wide settings. Passing None reloads from the environment on next use."""
    global _settings
    _settings = settings
