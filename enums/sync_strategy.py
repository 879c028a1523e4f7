from enum import Enum


class SyncStrategy(str, Enum):
    """
    How a mutation reaches the server.

    OPTIMISTIC: Local snapshot changes first, restored on failure
    PESSIMISTIC: Local snapshot changes only after the server confirms
    """
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"
