"""
CSV export of lookup results.
"""
import csv
import io
import logging
from typing import Any, Dict, Iterable, List, Union

from iplookup.config import CSV_HEADERS
from iplookup.models import LookupFailure, LookupOutcome, LookupResult

logger = logging.getLogger(__name__)


def _as_dict(result: Union[LookupOutcome, Dict[str, Any]]) -> Dict[str, Any]:
    if isinstance(result, dict):
        return result
    return result.to_dict()


def flatten_list_statuses(list_statuses: List[Dict[str, str]]) -> str:
    """Join list statuses as name:status pairs separated by |"""
    return "|".join(
        f"{status.get('list', '')}:{status.get('status', '')}"
        for status in list_statuses
        if isinstance(status, dict)
    )


def results_to_csv(results: Iterable[Union[LookupOutcome, Dict[str, Any]]]) -> str:
    """
    Render lookup results as CSV.

    Accepts result records or their JSON dicts. Failed addresses (entries
    without standards compliance data) are skipped.

    Returns:
        str: CSV text with a header row, every field quoted

    Raises:
        ValueError: If an entry carries list statuses that are not a list
    """
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")
    output.write(",".join(CSV_HEADERS) + "\n")

    skipped = 0
    for result in results:
        data = _as_dict(result) if isinstance(result, (dict, LookupResult, LookupFailure)) else {}
        compliance = data.get("standardsCompliance")
        if not isinstance(compliance, dict):
            skipped += 1
            continue
        list_statuses = data.get("listStatuses")
        if list_statuses is None:
            list_statuses = []
        if not isinstance(list_statuses, list):
            raise ValueError(f"listStatuses for {data.get('ip', '')} must be a list")
        writer.writerow([
            data.get("ip", ""),
            compliance.get("reverseHostname", ""),
            compliance.get("namingConvention", ""),
            flatten_list_statuses(list_statuses),
        ])

    if skipped:
        logger.info(f"Skipped {skipped} failed entries in CSV export")
    return output.getvalue()
