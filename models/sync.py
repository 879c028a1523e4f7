from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from exceptions.base import RentalShopException

S = TypeVar("S")


class SyncResult(BaseModel, Generic[S]):
    """Outcome of one synced mutation: the snapshot now in effect and the error, if any."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    snapshot: S
    error: RentalShopException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
