"""
Service state and the execution state machine

States:
    PENDING → SUCCEEDED
    PENDING → FAILED

FAILED and SUCCEEDED are terminal. The important rule is the fail-lock: once
a service is FAILED nothing can make it succeed - not the logic passed to
execute(), and not a direct mark_success() call from an overriding subclass.

A service whose logic ran without reporting success stays PENDING, which is
observed as failed: ``succeeded`` is True only in SUCCEEDED.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from validated_services.kernel.logging import get_logger

logger = get_logger(__name__)


class ServiceStatus(str, Enum):
    """Lifecycle status of a single service instance"""

    PENDING = "PENDING"  # Input valid, success not yet reported
    FAILED = "FAILED"  # Input invalid or explicitly failed (terminal)
    SUCCEEDED = "SUCCEEDED"  # Logic reported success (terminal)

    @property
    def is_terminal(self) -> bool:
        return self is not ServiceStatus.PENDING


class ServiceState(BaseModel):
    """
    Mutable state owned by one service instance

    Only the ExecutionController changes status; inputs are set once at
    construction; errors grow through merge_errors().
    """

    status: ServiceStatus = ServiceStatus.PENDING
    inputs: dict[str, Any] | None = None
    errors: dict[str, Any] = Field(default_factory=dict)


TransitionListener = Callable[[ServiceStatus], None]


class ExecutionController:
    """
    Enforces the service state machine over a ServiceState

    Args:
        state: State to drive
        on_transition: Called with the new status after each real transition
    """

    def __init__(
        self,
        state: ServiceState,
        on_transition: TransitionListener | None = None,
    ) -> None:
        self._state = state
        self._on_transition = on_transition

    @property
    def status(self) -> ServiceStatus:
        return self._state.status

    @property
    def succeeded(self) -> bool:
        return self._state.status is ServiceStatus.SUCCEEDED

    @property
    def failed(self) -> bool:
        return not self.succeeded

    def _transition(self, status: ServiceStatus) -> None:
        previous = self._state.status
        self._state.status = status
        logger.debug("Service status changed", previous=previous.value, status=status.value)
        if self._on_transition is not None:
            self._on_transition(status)

    def mark_success(self) -> bool:
        """
        PENDING → SUCCEEDED

        Returns:
            True if the transition happened, False if the state was terminal
        """
        if self._state.status is not ServiceStatus.PENDING:
            if self._state.status is ServiceStatus.FAILED:
                logger.debug("Success ignored - service already failed")
            return False
        self._transition(ServiceStatus.SUCCEEDED)
        return True

    def mark_failed(self) -> bool:
        """
        PENDING → FAILED

        Returns:
            True if the transition happened, False if the state was terminal
        """
        if self._state.status is not ServiceStatus.PENDING:
            return False
        self._transition(ServiceStatus.FAILED)
        return True

    def run(self, logic: Callable[[], Any] | None) -> bool:
        """
        Invoke logic if the service is still PENDING

        A truthy result marks success. A falsy result (or no logic) leaves the
        state PENDING. If logic raises, the service is marked FAILED and the
        exception propagates.

        Returns:
            True if logic was invoked, False if it was skipped
        """
        if self._state.status is not ServiceStatus.PENDING:
            logger.debug("Execution skipped", status=self._state.status.value)
            return False
        if logic is None:
            return True

        try:
            outcome = logic()
        except Exception:
            self.mark_failed()
            raise

        if outcome:
            self.mark_success()
        return True
