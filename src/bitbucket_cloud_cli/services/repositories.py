"""Bindings for the Bitbucket Cloud ``repositories`` endpoints.

API docs: https://developer.atlassian.com/cloud/bitbucket/rest/api-group-repositories/
"""

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from bitbucket_cloud_cli.errors import InvalidArgumentError
from bitbucket_cloud_cli.links import extract_forks_link, extract_parent_link, repository_has_parent
from bitbucket_cloud_cli.logging_config import get_logger
from bitbucket_cloud_cli.models import RepositoryDescriptor, StateFilter
from bitbucket_cloud_cli.query import encode_field_selectors, encode_segment, normalize_states, repository_path
from bitbucket_cloud_cli.services.transport import Transport
from bitbucket_cloud_cli.slug import derive_slug

log = get_logger(__name__)


class RepositoriesApi:
    """Translate repository operations into calls on ``transport``.

    ``workspace`` arguments accept a workspace slug or UUID. Every method
    returns the transport's result as is and lets its errors propagate.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def create(self, workspace: str, repo: Mapping[str, Any]) -> Any:
        """Create a repository.

        Unlike the raw API, ``repo`` MUST contain a string ``name`` and a
        boolean ``is_private``: the slug in the URL is derived from the name
        (see :mod:`bitbucket_cloud_cli.slug`). ``repo`` is posted unchanged.
        """
        if not isinstance(repo, Mapping):
            raise InvalidArgumentError("Repo must be a mapping with a boolean 'is_private' and a string 'name'")
        try:
            descriptor = RepositoryDescriptor.model_validate(repo)
        except ValidationError as e:
            raise InvalidArgumentError(
                f"Repo must be initialized with a boolean privacy setting and a string name: {e}"
            ) from e

        repo_slug = derive_slug(descriptor.name)
        return self._post(repository_path(workspace, repo_slug), repo)

    def create_pull_request(self, workspace: str, repo_slug: str, pull_request: Mapping[str, Any]) -> Any:
        return self._post(f"{repository_path(workspace, repo_slug)}/pullrequests", pull_request)

    def get(self, workspace: str, repo_slug: str) -> Any:
        return self._get(repository_path(workspace, repo_slug))

    def get_branches(self, workspace: str, repo_slug: str) -> Any:
        return self._get(f"{repository_path(workspace, repo_slug)}/refs/branches")

    def get_commit(self, workspace: str, repo_slug: str, sha: str) -> Any:
        return self._get(f"{repository_path(workspace, repo_slug)}/commit/{encode_segment(sha)}")

    def get_pull_requests(
        self, workspace: str, repo_slug: str, state: StateFilter = None, *, strict: bool = False
    ) -> Any:
        """List pull requests in ``state`` (a token or list of tokens).

        A missing or unknown state falls back to OPEN unless ``strict``.
        """
        params = {"state": ",".join(normalize_states(state, strict=strict))}
        return self._get(f"{repository_path(workspace, repo_slug)}/pullrequests", params)

    def get_pull_requests_with_fields(
        self,
        workspace: str,
        repo_slug: str,
        *,
        fields: Sequence[str],
        state: StateFilter = None,
        strict: bool = False,
    ) -> Any:
        """List pull requests with extra ``fields`` populated.

        e.g. ``fields=["values.source.repository.links"]`` to get the full
        source repository on every pull request.
        """
        selectors = encode_field_selectors(fields)
        params = {"state": ",".join(normalize_states(state, strict=strict)), "fields": selectors}
        return self._get(f"{repository_path(workspace, repo_slug)}/pullrequests", params)

    def get_by_workspace(self, workspace: str) -> Any:
        return self._get(repository_path(workspace))

    def get_forks(self, workspace: str, repo_slug: str) -> Any:
        return self._get(f"{repository_path(workspace, repo_slug)}/forks")

    def get_forks_from_response(self, response: Any) -> Any:
        """Follow the ``forks`` link of a previously fetched repository."""
        url = extract_forks_link(response)
        log.debug("bitbucket_request", method="GET", url=url)
        return self.transport.send_prebuilt(url)

    def get_parent_from_response(self, response: Any) -> Any:
        """Fetch the parent of a fork. Guard with :meth:`has_parent`."""
        url = extract_parent_link(response)
        log.debug("bitbucket_request", method="GET", url=url)
        return self.transport.send_prebuilt(url)

    def has_parent(self, response: Any) -> bool:
        return repository_has_parent(response)

    def _get(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        log.debug("bitbucket_request", method="GET", path=path, params=params)
        if params is None:
            return self.transport.get(path)
        return self.transport.get(path, params)

    def _post(self, path: str, body: Mapping[str, Any]) -> Any:
        log.debug("bitbucket_request", method="POST", path=path)
        return self.transport.post(path, body)
