"""
Action result state

Short-lived outcome of a user-triggered mutation (join, leave, kick, close,
cancel, send). The holder publishes LOADING while the operation runs, then
SUCCESS or ERROR, and clears back to IDLE after a fixed display duration.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from core.errors import CampusSportsError, ErrorKind, OperationTimeoutError, StoreError
from core.observable import Observable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ActionStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class ActionState:
    """Tagged action state; ``kind``/``code`` are set only for ERROR"""
    status: ActionStatus = ActionStatus.IDLE
    message: Optional[str] = None
    kind: Optional[ErrorKind] = None
    code: Optional[str] = None

    @classmethod
    def idle(cls) -> "ActionState":
        return cls()

    @classmethod
    def loading(cls) -> "ActionState":
        return cls(status=ActionStatus.LOADING)

    @classmethod
    def success(cls, message: str) -> "ActionState":
        return cls(status=ActionStatus.SUCCESS, message=message)

    @classmethod
    def error(cls, error: CampusSportsError) -> "ActionState":
        return cls(status=ActionStatus.ERROR, message=error.message, kind=error.kind, code=error.code)

    @property
    def is_loading(self) -> bool:
        return self.status == ActionStatus.LOADING


class ActionStateHolder:
    """
    Runs one action at a time against an observable ActionState.

    A new action cancels any pending auto-clear; the clear never delays the
    caller. Errors are recorded on the state and re-raised.
    """

    def __init__(self, result_ttl_seconds: float = 3.0, name: str = "action_state"):
        self.result_ttl_seconds = result_ttl_seconds
        self.state: Observable[ActionState] = Observable(ActionState.idle(), name=name)
        self._clear_task: Optional[asyncio.Task] = None

    @property
    def current(self) -> ActionState:
        return self.state.value

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        success_message: str,
    ) -> T:
        self._cancel_pending_clear()
        self.state.set(ActionState.loading())
        try:
            result = await operation()
        except CampusSportsError as e:
            self.state.set(ActionState.error(e))
            self._schedule_clear()
            raise
        except asyncio.TimeoutError:
            error = OperationTimeoutError("The operation timed out")
            self.state.set(ActionState.error(error))
            self._schedule_clear()
            raise error
        except Exception as e:
            logger.error(f"Action failed unexpectedly: {e!r}")
            error = StoreError(str(e) or e.__class__.__name__, code="unexpected_error")
            self.state.set(ActionState.error(error))
            self._schedule_clear()
            raise error from e
        self.state.set(ActionState.success(success_message))
        self._schedule_clear()
        return result

    def clear(self) -> None:
        self._cancel_pending_clear()
        self.state.set(ActionState.idle())

    def _schedule_clear(self) -> None:
        self._clear_task = asyncio.ensure_future(self._clear_after_ttl())

    def _cancel_pending_clear(self) -> None:
        if self._clear_task is not None and not self._clear_task.done():
            self._clear_task.cancel()
        self._clear_task = None

    async def _clear_after_ttl(self) -> None:
        await asyncio.sleep(self.result_ttl_seconds)
        self.state.set(ActionState.idle())

    def close(self) -> None:
        """Cancel the pending clear without touching the state"""
        self._cancel_pending_clear()


__all__ = ["ActionStatus", "ActionState", "ActionStateHolder"]
