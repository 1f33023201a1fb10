from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    """Repository interface for Worker.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def get_by_phone(self, phone: str) -> Optional[Worker]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Worker]:
        """All workers ordered by name."""

        raise NotImplementedError

    def create_worker(
        self,
        *,
        name: str,
        address: Optional[str],
        phone: Optional[str],
        opening_balance: Decimal,
    ) -> int:
        raise NotImplementedError

    def update_worker(
        self,
        *,
        worker_id: int,
        name: str,
        address: Optional[str],
        phone: Optional[str],
        opening_balance: Decimal,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, worker_id: int) -> bool:
        """Delete a worker; the store cascades to attendance, payments and audit rows."""

        raise NotImplementedError
