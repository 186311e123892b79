"""Get user profile query handler."""

from marketplace_auth.application.dtos import UserSummary, to_user_summary
from marketplace_auth.application.queries.user_queries import GetUserProfile
from marketplace_auth.core.enums import ErrorCode
from marketplace_auth.core.errors import DomainError, NotFoundError
from marketplace_auth.core.result import Failure, Result, Success
from marketplace_auth.domain.protocols import UserRepository


class GetUserProfileHandler:
    """Handler for GetUserProfile query."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: GetUserProfile) -> Result[UserSummary, DomainError]:
        """Handle get user profile query.

        Returns:
            Success(UserSummary) for an existing account.
            Failure(NotFoundError) if the account was removed after the
            access token was issued.
        """
        user = await self._user_repo.find_by_id(query.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                )
            )
        return Success(value=to_user_summary(user))
