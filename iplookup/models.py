"""
Result records returned by the lookup pipeline.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from iplookup.config import (
    CHECK_FAILED,
    CHECK_PASSED,
    NOT_ON_LIST,
    ON_LIST,
)


class CheckStatus(Enum):
    """Outcome of a standards compliance check"""
    PASSED = CHECK_PASSED
    FAILED = CHECK_FAILED

    @classmethod
    def of(cls, passed: bool) -> 'CheckStatus':
        return cls.PASSED if passed else cls.FAILED


class MembershipStatus(Enum):
    """Whether an address is on a blocklist category"""
    ON_LIST = ON_LIST
    NOT_ON_LIST = NOT_ON_LIST

    @classmethod
    def of(cls, listed: bool) -> 'MembershipStatus':
        return cls.ON_LIST if listed else cls.NOT_ON_LIST


@dataclass(frozen=True)
class StandardsCompliance:
    reverse_hostname: CheckStatus
    naming_convention: CheckStatus

    def to_dict(self) -> Dict[str, str]:
        return {
            "reverseHostname": self.reverse_hostname.value,
            "namingConvention": self.naming_convention.value,
        }


@dataclass(frozen=True)
class ListStatus:
    list: str
    status: MembershipStatus

    def to_dict(self) -> Dict[str, str]:
        return {"list": self.list, "status": self.status.value}


@dataclass(frozen=True)
class LookupResult:
    """Reputation result for one address."""

    ip: str
    standards_compliance: StandardsCompliance
    list_statuses: Tuple[ListStatus, ...]

    @property
    def failed(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ip": self.ip,
            "standardsCompliance": self.standards_compliance.to_dict(),
            "listStatuses": [status.to_dict() for status in self.list_statuses],
        }


@dataclass(frozen=True)
class LookupFailure:
    """An address whose lookup raised an unexpected error. It can be resubmitted on its own."""

    ip: str
    error: str = "Lookup failed"

    @property
    def failed(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {"ip": self.ip, "error": self.error}


LookupOutcome = Union[LookupResult, LookupFailure]
