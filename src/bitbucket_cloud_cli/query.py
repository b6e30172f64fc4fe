"""Query parameter and path building for the repositories endpoints."""

from collections.abc import Sequence
from urllib.parse import quote


from bitbucket_cloud_cli.errors import InvalidArgumentError
from bitbucket_cloud_cli.logging_config import get_logger
from bitbucket_cloud_cli.models import PullRequestState, StateFilter

log = get_logger(__name__)

DEFAULT_STATES: tuple[str, ...] = (PullRequestState.OPEN.value,)
_VALID_STATES = frozenset(state.value for state in PullRequestState)


def normalize_states(state: StateFilter = None, *, strict: bool = False) -> list[str]:
    """Turn a pull request state filter into the list of tokens to send.

    ``None`` (or an empty sequence) means OPEN. A lone token is wrapped in a
    list. If any token is unknown to Bitbucket the whole filter is replaced
    by OPEN, not just the offending token; pass ``strict=True`` to get an
    ``InvalidArgumentError`` instead.
    """
    if state is None:
        return list(DEFAULT_STATES)

    states = [state] if isinstance(state, str) else list(state)
    if not states:
        return list(DEFAULT_STATES)

    invalid = [token for token in states if not (isinstance(token, str) and token in _VALID_STATES)]
    if invalid:
        if strict:
            raise InvalidArgumentError(f"Unknown pull request state(s): {', '.join(map(str, invalid))}")
        log.warning("pull_request_state_fallback", requested=states, invalid=invalid)
        return list(DEFAULT_STATES)

    return [str(token) for token in states]


def encode_field_selectors(fields: Sequence[str]) -> str:
    """Encode field paths for Bitbucket's partial response ``fields`` parameter.

    Each path is prefixed with ``+`` (include in addition to the defaults).
    """
    if isinstance(fields, str) or not fields:
        raise InvalidArgumentError("'fields' must be a non-empty list of field paths")
    return ",".join(f"+{field}" for field in fields)


def encode_segment(identifier: str) -> str:
    """Percent-encode a caller supplied identifier for use as one path segment."""
    return quote(str(identifier), safe="")


def repository_path(workspace: str, repo_slug: str | None = None) -> str:
    """Build `repositories/{workspace}` or `repositories/{workspace}/{repo_slug}`."""
    path = f"repositories/{encode_segment(workspace)}"
    if repo_slug is not None:
        path = f"{path}/{encode_segment(repo_slug)}"
    return path
