"""
Response Normalizer - Guarantees a page body is a list of records.

WordPress plugins and misconfigured hosts sometimes answer a REST request
with an HTML error page and a 200 status, or with a JSON body sent as
text/html. This module turns whatever came back into a list of record dicts,
or fails loudly with a preview of the body.
"""

import json
from typing import Any, Dict, List

import requests

from .errors import MalformedResponseError


def response_body(response: requests.Response) -> Any:
    """Decode a response as JSON when possible, falling back to its text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def normalize(source: str, body: Any) -> List[Dict[str, Any]]:
    """Return the records contained in a page body.

    Args:
        source: URL the body was fetched from (used in the error message).
        body: A decoded JSON value or raw response text.

    Returns:
        The list of records, unchanged if body already was a list.

    Raises:
        MalformedResponseError: If body is not JSON text or does not decode
            to a list.
    """
    if isinstance(body, list):
        return body

    if isinstance(body, bytes):
        body = body.decode("utf-8", "replace")

    if isinstance(body, str):
        try:
            data = json.loads(body)
        except ValueError:
            raise MalformedResponseError(source, body)
        if isinstance(data, list):
            return data

    raise MalformedResponseError(source, body)
