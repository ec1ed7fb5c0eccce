"""
Per-request log of stored files that must be removed if the request fails.

Each successful storage write is pushed here; the log is cleared once the
database transaction has committed. Running it deletes every pending file
and reports the ones that could not be removed without raising.
"""

import logging
from typing import List

from infrastructure.storage import StorageInterface, StoredFile

from catalog.infra.observability.metrics import cleanup_failures_total, compensations_total

logger = logging.getLogger(__name__)


class CompensationLog:
    def __init__(self, storage: StorageInterface):
        self.storage = storage
        self._pending: List[StoredFile] = []

    def __len__(self):
        return len(self._pending)

    @property
    def pending(self) -> List[StoredFile]:
        return list(self._pending)

    def push(self, stored: StoredFile) -> None:
        self._pending.append(stored)

    def clear(self) -> None:
        """Forget pending files; called once they are owned by committed rows."""
        self._pending.clear()

    def run(self, reason: str) -> List[str]:
        """
        Delete every pending file.

        Args:
            reason: Error code that triggered the compensation (for logs/metrics)

        Returns:
            Keys that could not be deleted (empty when cleanup fully succeeded)
        """
        if not self._pending:
            return []

        compensations_total.labels(reason=reason).inc()
        leftovers = []

        for stored in self._pending:
            try:
                deleted = self.storage.delete(stored.key)
            except Exception as e:
                # delete() must not raise; a misbehaving backend must not mask the original error
                logger.warning(f"Cleanup of {stored.key} raised after {reason}: {e}")
                deleted = False

            if not deleted:
                cleanup_failures_total.inc()
                leftovers.append(stored.key)

        if leftovers:
            logger.warning(f"Cleanup after {reason} left {len(leftovers)} orphaned file(s): {leftovers}")
        else:
            logger.info(f"Cleanup after {reason} removed {len(self._pending)} file(s)")

        self._pending.clear()
        return leftovers
