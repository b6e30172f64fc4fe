from collections.abc import Sequence
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr


class PullRequestState(StrEnum):
    OPEN = "OPEN"
    MERGED = "MERGED"
    DECLINED = "DECLINED"
    SUPERSEDED = "SUPERSEDED"


# A single token or an ordered sequence of them; None means "use the default".
StateFilter = str | Sequence[str] | None


class RepositoryDescriptor(BaseModel):
    """Minimum a repository creation payload must carry.

    Anything else in the payload (description, project, fork_policy...) is
    accepted as is and forwarded to Bitbucket.
    """

    model_config = ConfigDict(extra="allow")

    name: StrictStr = Field(min_length=1)
    is_private: StrictBool
