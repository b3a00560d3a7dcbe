"""Failures of the search service round trip.

Both kinds end in the same error display; the split only matters for logging.
"""
from __future__ import annotations


class SearchServiceError(Exception):
    """Base class for anything that prevents a response from being rendered."""


class TransportError(SearchServiceError):
    """The request failed, returned a non-success status or an unparsable body."""


class MalformedResponse(SearchServiceError):
    """The body parsed as JSON but does not carry a ``results`` sequence."""
