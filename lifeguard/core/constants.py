"""
Constants
Centralised storage for report defaults, search clauses and body markers.
"""
DEFAULT_TITLE = "Probot integration problem"
DEFAULT_BODY = "An error occurred"
UNKNOWN_ERROR = "Unknown error"

FINGERPRINT_LENGTH = 8

SORT_CLAUSE = "sort:updated-desc"
OPEN_CLAUSE = "is:open"
LABEL_QUALIFIER = "label:"

OCCURRENCES_LABEL = "Occurrences:"
