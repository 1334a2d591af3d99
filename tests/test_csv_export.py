"""CSV export of lookup results."""

import asyncio

import pytest

from iplookup.csv_export import flatten_list_statuses, results_to_csv
from iplookup.lookup import lookup_batch
from iplookup.models import LookupFailure

HEADER = "IP,Reverse Hostname,Naming Convention,List Status"


def test_flatten_list_statuses():
    statuses = [
        {"list": "RATS-Dyna", "status": "Not on the list"},
        {"list": "RATS-Spam", "status": "On the list"},
    ]
    assert flatten_list_statuses(statuses) == "RATS-Dyna:Not on the list|RATS-Spam:On the list"


def test_csv_from_records_skips_failures(fake_dns):
    fake_dns.a["1.2.0.192.all.spamrats.com"] = ["127.0.0.36"]
    outcomes = asyncio.run(lookup_batch(["192.0.2.1"]))
    outcomes.append(LookupFailure(ip="192.0.2.9"))

    lines = results_to_csv(outcomes).splitlines()

    assert lines == [
        HEADER,
        '"192.0.2.1","Failed!","Failed!","RATS-Dyna:On the list|RATS-NoPtr:Not on the list|'
        'RATS-Spam:Not on the list|RATS-Auth:Not on the list"',
    ]


def test_csv_from_json_dicts():
    results = [
        {
            "ip": "198.51.100.7",
            "standardsCompliance": {"reverseHostname": "Passed!", "namingConvention": "Failed!"},
            "listStatuses": [{"list": "RATS-Auth", "status": "Not on the list"}],
        },
        {"ip": "198.51.100.8", "error": "Lookup failed"},
        "not a result",
    ]
    assert results_to_csv(results) == (
        HEADER + "\n" + '"198.51.100.7","Passed!","Failed!","RATS-Auth:Not on the list"\n'
    )


def test_csv_with_no_rows_is_just_the_header():
    assert results_to_csv([]) == HEADER + "\n"


def test_csv_rejects_non_list_statuses():
    results = [{
        "ip": "198.51.100.7",
        "standardsCompliance": {"reverseHostname": "Passed!", "namingConvention": "Passed!"},
        "listStatuses": 5,
    }]
    with pytest.raises(ValueError, match="listStatuses"):
        results_to_csv(results)
