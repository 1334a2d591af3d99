"""Shared fixtures: an in-memory DNS resolver and a Flask test client."""

import dns.resolver
import pytest

from iplookup import dns_client
from iplookup.config import Settings, set_settings


class FakeResolver:
    """Stands in for dns.resolver.Resolver, answering from dicts.

    Names missing from the tables raise NXDOMAIN; names in ``errors`` raise
    the given exception instead.
    """

    def __init__(self):
        self.ptr = {}
        self.a = {}
        self.errors = {}
        self.queries = []

    def resolve_address(self, ip):
        self.queries.append(("PTR", ip))
        if ip in self.errors:
            raise self.errors[ip]
        if ip not in self.ptr:
            raise dns.resolver.NXDOMAIN()
        return [f"{hostname}." for hostname in self.ptr[ip]]

    def resolve(self, name, rdtype="A"):
        self.queries.append((rdtype, name))
        if name in self.errors:
            raise self.errors[name]
        if name not in self.a:
            raise dns.resolver.NXDOMAIN()
        return list(self.a[name])


@pytest.fixture(autouse=True)
def settings():
    current = Settings()
    set_settings(current)
    yield current
    set_settings(None)


@pytest.fixture
def fake_dns(monkeypatch):
    resolver = FakeResolver()
    monkeypatch.setattr(dns_client, "get_resolver", lambda settings=None: resolver)
    return resolver


@pytest.fixture
def client(fake_dns):
    from app import app

    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
