"""Errors raised at the content and authorization boundaries of a vote."""

from __future__ import annotations

from uuid import UUID

from tabcoin.domain.exceptions import TabCoinError


class ContentNotFoundError(TabCoinError):
    """Raised when the content directory cannot resolve a content owner.

    Attributes:
        content_id: UUID of the missing content.
    """

    kind = "ContentNotFound"
    action = "Check that the content exists and is published."

    def __init__(self, content_id: UUID) -> None:
        self.content_id = content_id
        super().__init__(f"Content {content_id} was not found.")


class VoteNotAuthorizedError(TabCoinError):
    """Raised when the authorization collaborator refuses the vote.

    Attributes:
        principal_id: The principal that attempted the vote.
        required_action: Feature the principal is missing.
    """

    kind = "NotAuthorized"

    def __init__(self, principal_id: UUID | None, required_action: str) -> None:
        self.principal_id = principal_id
        self.required_action = required_action
        self.action = (
            f'Check that this user has the "{required_action}" feature.'
        )
        super().__init__(
            f"User {principal_id} cannot perform this operation."
        )
