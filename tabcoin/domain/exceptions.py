"""Base exception classes for the TabCoin domain layer."""


class TabCoinError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class.
    This enables consistent error handling across the application.

    Subclasses set ``kind`` to the stable, caller-visible error kind
    (for example ``"InsufficientFunds"``) and provide an ``action`` hint
    telling the caller what to do next. Mapping kinds to transport status
    codes is the responsibility of the outer API layer.
    """

    kind: str = "TabCoinError"
    action: str = ""

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)
