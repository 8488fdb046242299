"""
Query Builder
=============
Builds the issue search expression used to find an earlier report of the
same error.

Clause order (empty clauses dropped, joined with single spaces):
    1. sort:updated-desc  — most recently touched match comes first
    2. is:open            — omitted when options.reopen is True so closed
                            issues can be found and reopened
    3. label:<name>       — one per configured label
    4. <fingerprint>      — always last
"""
from typing import List

from lifeguard.core.constants import SORT_CLAUSE, OPEN_CLAUSE, LABEL_QUALIFIER
from lifeguard.models.report_options import ReportOptions


def _label_clause(label: str) -> str:
    if any(ch.isspace() for ch in label):
        label = '"' + label.replace('"', "") + '"'
    return LABEL_QUALIFIER + label


def search_clauses(error_code: str, options: ReportOptions) -> List[str]:
    """Return the non-empty search clauses in their fixed order."""
    clauses = [
        SORT_CLAUSE,
        "" if options.reopen else OPEN_CLAUSE,
        *(_label_clause(label) for label in options.labels),
        error_code,
    ]
    return [clause for clause in clauses if clause]


def build_search_query(error_code: str, options: ReportOptions) -> str:
    """
    Build the search query for an error code.

    Parameters
    ----------
    error_code : str
        8-char fingerprint of the error.
    options : ReportOptions
        Reporting options; ``reopen`` and ``labels`` shape the query.

    Returns
    -------
    str
        e.g. ``"sort:updated-desc is:open 85d8ae40"``
    """
    return " ".join(search_clauses(error_code, options))
