import asyncio
import logging
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from enums.sync_strategy import SyncStrategy
from exceptions.base import RentalShopException
from models.sync import SyncResult

logger = logging.getLogger(__name__)

S = TypeVar("S")

ErrorHandler = Callable[[S, S, RentalShopException], tuple[S, Optional[RentalShopException]]]


class SyncOperation(Generic[S]):
    """
    One mutation of a SyncedCollection.

    Args:
        name: Used in log lines only
        remote: Zero-argument coroutine function issuing the request, or None
                for a local-only change
        strategy: OPTIMISTIC applies apply_local before the request and rolls
                  back on failure; PESSIMISTIC touches the snapshot only after
                  the request succeeded
        apply_local: Pure snapshot → snapshot change
        reconcile: async (snapshot, response) → snapshot, builds the next
                   snapshot from the response (may re-fetch). Defaults to
                   apply_local for pessimistic operations and to the current
                   snapshot for optimistic ones.
        on_error: (before, current, error) → (snapshot, error to report).
                  Defaults to restoring `before` and reporting the error.
    """

    def __init__(
        self,
        name: str,
        remote: Callable[[], Awaitable[Any]] | None,
        strategy: SyncStrategy = SyncStrategy.PESSIMISTIC,
        apply_local: Callable[[S], S] | None = None,
        reconcile: Callable[[S, Any], Awaitable[S]] | None = None,
        on_error: ErrorHandler | None = None,
    ):
        self.name = name
        self.remote = remote
        self.strategy = strategy
        self.apply_local = apply_local
        self.reconcile = reconcile
        self.on_error = on_error


class SyncedCollection(Generic[S]):
    """
    An immutable snapshot mirrored against the server.

    mutate() runs one SyncOperation at a time: a second call waits until the
    first has reconciled, so two quick submissions never interleave their
    request and re-fetch. Only RentalShopException is turned into a failed
    SyncResult; anything else restores the snapshot taken before the
    mutation and propagates.
    """

    def __init__(self, name: str, initial: S):
        self.name = name
        self._snapshot = initial
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> S:
        return self._snapshot

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    def replace(self, snapshot: S) -> S:
        """Swap the snapshot without talking to the server."""
        self._snapshot = snapshot
        return snapshot

    async def mutate(self, operation: SyncOperation[S]) -> SyncResult[S]:
        async with self._lock:
            before = self._snapshot

            if operation.remote is None:
                if operation.apply_local is not None:
                    self._snapshot = operation.apply_local(before)
                return SyncResult(snapshot=self._snapshot)

            if operation.strategy == SyncStrategy.OPTIMISTIC and operation.apply_local is not None:
                self._snapshot = operation.apply_local(before)

            try:
                response = await operation.remote()
                if operation.reconcile is not None:
                    next_snapshot = await operation.reconcile(self._snapshot, response)
                elif operation.strategy == SyncStrategy.PESSIMISTIC and operation.apply_local is not None:
                    next_snapshot = operation.apply_local(self._snapshot)
                else:
                    next_snapshot = self._snapshot
            except RentalShopException as e:
                logger.warning(f"{self.name}.{operation.name} failed: {e.__class__.__name__}: {e}")
                if operation.on_error is not None:
                    snapshot, error = operation.on_error(before, self._snapshot, e)
                else:
                    snapshot, error = before, e
                self._snapshot = snapshot
                return SyncResult(snapshot=snapshot, error=error)
            except BaseException:
                # cancellation or a bug: undo the unconfirmed change and let it propagate
                self._snapshot = before
                raise

            self._snapshot = next_snapshot
            logger.debug(f"{self.name}.{operation.name} synced")
            return SyncResult(snapshot=next_snapshot)
