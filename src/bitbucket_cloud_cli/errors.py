"""Exceptions raised by the Bitbucket Cloud repositories binding.

Exception Hierarchy:
    BitbucketCliError (base)
    ├── InvalidArgumentError
    └── MissingLinkError

Failures raised by the transport (for example ``httpx.HTTPStatusError``) are
never wrapped in these types; they reach the caller unchanged.
"""


class BitbucketCliError(Exception):
    """Base exception for all bitbucket-cloud-cli errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidArgumentError(BitbucketCliError):
    """A required argument is missing or malformed.

    Raised before any request is handed to the transport.

    Examples:
        - Repository payload without a string ``name``
        - Repository payload without a boolean ``is_private``
        - Empty ``fields`` list for a partial response
    """


class MissingLinkError(BitbucketCliError):
    """An expected link is absent from a response body."""

    def __init__(self, message: str, path: tuple[str, ...]) -> None:
        self.path = path
        super().__init__(message)
