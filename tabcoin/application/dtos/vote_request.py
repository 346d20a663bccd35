"""TabCoin vote request DTO.

Validates the body of a vote before it reaches VoteTransactionService.

Rules:
- transaction_type is "credit" or "debit"
- debit votes need a reason of 5 to 255 characters after trimming
- credit votes may carry a reason; it is accepted and trimmed
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

MIN_REASON_LENGTH = 5
MAX_REASON_LENGTH = 255


class TabCoinVoteRequest(BaseModel):
    """Request to credit or debit TabCoins on a content item.

    Attributes:
        transaction_type: "credit" or "debit".
        reason: Justification, required for debit.
    """

    transaction_type: Literal["credit", "debit"] = Field(
        ...,
        description="Direction of the vote",
        examples=["credit"],
    )
    reason: str | None = Field(
        default=None,
        description="Justification for the vote, required for debit",
        examples=["Conteúdo sem fontes verificáveis"],
    )

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str | None) -> str | None:
        """Trim surrounding whitespace; blank reasons become None."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @model_validator(mode="after")
    def validate_debit_reason(self) -> "TabCoinVoteRequest":
        """Require a reason of allowed length for debit votes."""
        if self.reason is not None and len(self.reason) > MAX_REASON_LENGTH:
            raise ValueError(
                f"reason must have at most {MAX_REASON_LENGTH} characters"
            )
        if self.transaction_type == "debit":
            if self.reason is None:
                raise ValueError("reason is required for debit transactions")
            if len(self.reason) < MIN_REASON_LENGTH:
                raise ValueError(
                    f"reason must have at least {MIN_REASON_LENGTH} characters"
                )
        return self
