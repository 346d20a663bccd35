"""Base service logging mixin.

Usage:
    from tabcoin.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, ledger: BalanceLedgerProtocol) -> None:
            self._ledger = ledger
            self._init_logger()

        async def do_something(self) -> None:
            log = self._log_operation("do_something", voter_id="123")
            log.info("operation_started")
"""

import structlog

from tabcoin.infrastructure.observability.correlation import get_correlation_id


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "ledger")

    Each operation gets:
    - operation: The name of the operation being performed
    - correlation_id: From context
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "ledger") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create an operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )
