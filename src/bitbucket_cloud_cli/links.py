"""Lookups on repository responses that carry Bitbucket ``links``."""

from collections.abc import Mapping
from typing import Any

import httpx

from bitbucket_cloud_cli.errors import MissingLinkError

FORKS_LINK = ("links", "forks", "href")
PARENT_LINK = ("parent", "links", "self", "href")


def extract_response_body(response: Any) -> Any:
    """Return the decoded body of ``response``.

    Accepts an ``httpx.Response``, a mapping wrapping the payload under
    ``body``, or the payload itself.
    """
    if isinstance(response, httpx.Response):
        return response.json()
    if isinstance(response, Mapping) and isinstance(response.get("body"), Mapping):
        return response["body"]
    return response


def _lookup(body: Any, path: tuple[str, ...]) -> Any:
    node = body
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def repository_has_parent(response: Any) -> bool:
    """True if the repository in ``response`` is a fork (has a ``parent``)."""
    body = extract_response_body(response)
    return isinstance(body, Mapping) and bool(body.get("parent"))


def extract_forks_link(response: Any) -> str:
    href = _lookup(extract_response_body(response), FORKS_LINK)
    if not isinstance(href, str) or not href:
        raise MissingLinkError("Response has no 'forks' url.", FORKS_LINK)
    return href


def extract_parent_link(response: Any) -> str:
    """Return the self link of the parent repository.

    Guard calls with :func:`repository_has_parent`; a response without a
    parent raises ``MissingLinkError``.
    """
    href = _lookup(extract_response_body(response), PARENT_LINK)
    if not isinstance(href, str) or not href:
        raise MissingLinkError(
            "Response has no 'parent' info. Check repository_has_parent() first.", PARENT_LINK
        )
    return href
