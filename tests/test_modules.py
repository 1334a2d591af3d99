"""ReverseDNS and SpamRATS lookup modules."""

import asyncio

import dns.exception

from iplookup.config import Settings
from iplookup.models import CheckStatus, MembershipStatus
from iplookup.modules.reversedns import module as reversedns
from iplookup.modules.spamrats import module as spamrats
from iplookup.modules.spamrats.query import build_query_name, extract_codes, reverse_ip


def run_module(module, ip, settings=None):
    raw = asyncio.run(module.query(ip, settings))
    return module.normalize(raw)[module.DATA_KEY]


# ReverseDNS


def test_no_ptr_record_fails_both_checks(fake_dns):
    compliance = run_module(reversedns, "10.0.0.1")
    assert compliance.reverse_hostname is CheckStatus.FAILED
    assert compliance.naming_convention is CheckStatus.FAILED


def test_empty_ptr_answer_fails_both_checks(fake_dns):
    fake_dns.ptr["1.2.3.4"] = []
    compliance = run_module(reversedns, "1.2.3.4")
    assert compliance.reverse_hostname is CheckStatus.FAILED
    assert compliance.naming_convention is CheckStatus.FAILED


def test_ptr_timeout_is_not_an_error(fake_dns):
    fake_dns.errors["10.0.0.1"] = dns.exception.Timeout()
    compliance = run_module(reversedns, "10.0.0.1")
    assert compliance.to_dict() == {"reverseHostname": "Failed!", "namingConvention": "Failed!"}


def test_ptr_without_matching_forward_record(fake_dns):
    fake_dns.ptr["1.2.3.4"] = ["host.example.com"]
    fake_dns.a["host.example.com"] = ["5.6.7.8"]
    compliance = run_module(reversedns, "1.2.3.4")
    assert compliance.reverse_hostname is CheckStatus.PASSED
    assert compliance.naming_convention is CheckStatus.FAILED


def test_forward_confirmed_hostname_passes(fake_dns):
    fake_dns.ptr["1.2.3.4"] = ["host.example.com"]
    fake_dns.a["host.example.com"] = ["1.2.3.4"]
    compliance = run_module(reversedns, "1.2.3.4")
    assert compliance.to_dict() == {"reverseHostname": "Passed!", "namingConvention": "Passed!"}


def test_unresolvable_hostnames_are_skipped(fake_dns):
    fake_dns.ptr["1.2.3.4"] = ["broken.example.com", "other.example.com", "good.example.com"]
    fake_dns.a["other.example.com"] = ["9.9.9.9"]
    fake_dns.a["good.example.com"] = ["5.5.5.5", "1.2.3.4"]
    compliance = run_module(reversedns, "1.2.3.4")
    assert compliance.naming_convention is CheckStatus.PASSED


def test_first_matching_hostname_stops_the_search(fake_dns):
    fake_dns.ptr["1.2.3.4"] = ["first.example.com", "second.example.com"]
    fake_dns.a["first.example.com"] = ["1.2.3.4"]
    fake_dns.a["second.example.com"] = ["1.2.3.4"]
    raw = asyncio.run(reversedns.query("1.2.3.4"))
    assert raw["raw_data"]["matched_hostname"] == "first.example.com"
    assert ("A", "second.example.com") not in fake_dns.queries


# SpamRATS


def test_query_name_reverses_octets():
    assert reverse_ip("1.2.3.4") == "4.3.2.1"
    assert build_query_name("1.2.3.4", "all.spamrats.com.") == "4.3.2.1.all.spamrats.com"


def test_extract_codes_uses_last_octet():
    assert extract_codes(["127.0.0.38", "127.0.0.36", "127.0.0.38", "garbage."]) == [38, 36]


def test_unlisted_address_reports_all_four_lists(fake_dns):
    statuses = run_module(spamrats, "1.2.3.4")
    assert [s.list for s in statuses] == ["RATS-Dyna", "RATS-NoPtr", "RATS-Spam", "RATS-Auth"]
    assert all(s.status is MembershipStatus.NOT_ON_LIST for s in statuses)
    assert ("A", "4.3.2.1.all.spamrats.com") in fake_dns.queries


def test_spam_code_marks_only_spam_list(fake_dns):
    fake_dns.a["4.3.2.1.all.spamrats.com"] = ["127.0.0.38"]
    statuses = run_module(spamrats, "1.2.3.4")
    assert [s.to_dict() for s in statuses] == [
        {"list": "RATS-Dyna", "status": "Not on the list"},
        {"list": "RATS-NoPtr", "status": "Not on the list"},
        {"list": "RATS-Spam", "status": "On the list"},
        {"list": "RATS-Auth", "status": "Not on the list"},
    ]


def test_multiple_codes_and_unknown_codes(fake_dns):
    fake_dns.a["4.3.2.1.all.spamrats.com"] = ["127.0.0.36", "127.0.0.43", "127.0.0.99"]
    statuses = run_module(spamrats, "1.2.3.4")
    listed = [s.list for s in statuses if s.status is MembershipStatus.ON_LIST]
    assert listed == ["RATS-Dyna", "RATS-Auth"]
    assert len(statuses) == 4


def test_configured_zone_is_used(fake_dns):
    fake_dns.a["4.3.2.1.rats.example.org"] = ["127.0.0.37"]
    statuses = run_module(spamrats, "1.2.3.4", Settings(blocklist_zone="rats.example.org"))
    assert statuses[1].status is MembershipStatus.ON_LIST


def test_module_metadata():
    assert reversedns.get_config()["data_key"] == "standardsCompliance"
    assert spamrats.get_config()["data_key"] == "listStatuses"
