"""Background task that periodically snapshots the owner directory."""

import asyncio
import logging

from filestore.config import SNAPSHOT_INTERVAL_SECONDS
from filestore.exceptions import SnapshotError
from filestore.owner_directory import OwnerDirectory
from filestore.snapshot import SnapshotStore

logger = logging.getLogger(__name__)


class PeriodicSnapshotter:
    """
    Background task that writes a snapshot every interval_seconds.
    """

    def __init__(
        self,
        directory: OwnerDirectory,
        store: SnapshotStore,
        interval_seconds: int = SNAPSHOT_INTERVAL_SECONDS,
    ):
        """
        Initialize snapshot task.

        Args:
            directory: Owner directory to persist
            store: Snapshot store to write to
            interval_seconds: Time between snapshots (0 disables the task)
        """
        self.directory = directory
        self.store = store
        self.interval_seconds = interval_seconds
        self._running = False
        self._task = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start the background snapshot task."""
        if self.interval_seconds <= 0:
            logger.info("Periodic snapshots disabled")
            return

        if self._running:
            logger.warning("Snapshot task already running")
            return

        self._running = True
        self._task = asyncio.create_task(self._run())
        logger.info(f"Started periodic snapshot task (interval: {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Stop the background snapshot task."""
        if not self._running:
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass

        logger.info("Stopped periodic snapshot task")

    async def _run(self) -> None:
        while self._running:
            try:
                await asyncio.sleep(self.interval_seconds)

                if not self._running:
                    break

                await self.snapshot_once()

            except asyncio.CancelledError:
                break
            except SnapshotError as e:
                logger.error(f"Periodic snapshot failed: {e}")

    async def snapshot_once(self) -> None:
        """Write one snapshot off the event loop thread."""
        await asyncio.to_thread(self.store.save, self.directory)
