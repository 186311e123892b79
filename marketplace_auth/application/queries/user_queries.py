"""User queries (CQRS read operations).

Queries are immutable dataclasses with question-like names. They never
change state.
"""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class GetUserProfile:
    """Get the profile of the authenticated caller.

    Attributes:
        user_id: Identity taken from a valid access token.
    """

    user_id: UUID
