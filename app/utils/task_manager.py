"""
Background task manager for Tenant RBAC
Runs the periodic subscription expiry sweep
"""
import asyncio
from typing import Optional

from app.config import settings
from app.core.logging_config import get_logger
from app.database.session import SessionLocal
from app.services.subscription_service import subscription_service

logger = get_logger(__name__)


def run_subscription_sweep() -> int:
    """One sweep in its own session; returns the number of subscriptions expired."""
    db = SessionLocal()
    try:
        return subscription_service.sweep_expired(db)
    finally:
        db.close()


class TaskManager:
    """Owns the periodic sweep task started with the app"""

    def __init__(self, interval_seconds: int = settings.SUBSCRIPTION_SWEEP_INTERVAL_SECONDS):
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._loop())
        logger.info(f"Subscription sweep scheduled every {self.interval_seconds}s")

    async def stop(self):
        if not self.running:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Subscription sweep stopped")

    async def _loop(self):
        while True:
            try:
                await asyncio.to_thread(run_subscription_sweep)
            except Exception as e:
                # A failed run is retried on the next tick
                logger.exception(f"Subscription sweep failed: {e}")
            await asyncio.sleep(self.interval_seconds)


task_manager = TaskManager()
