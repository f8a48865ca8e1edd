import asyncio

from app.utils import task_manager as task_manager_module
from app.utils.task_manager import TaskManager


def test_start_runs_a_sweep_and_stop_cancels(monkeypatch):
    calls = []
    monkeypatch.setattr(task_manager_module, "run_subscription_sweep", lambda: calls.append(1) or 0)

    async def scenario():
        manager = TaskManager(interval_seconds=3600)
        manager.start()
        assert manager.running
        await asyncio.sleep(0.1)
        await manager.stop()
        assert not manager.running

    asyncio.run(scenario())

    assert calls == [1]


def test_failed_sweep_does_not_kill_the_loop(monkeypatch):
    def boom():
        raise RuntimeError("db down")

    monkeypatch.setattr(task_manager_module, "run_subscription_sweep", boom)

    async def scenario():
        manager = TaskManager(interval_seconds=3600)
        manager.start()
        await asyncio.sleep(0.1)
        assert manager.running
        await manager.stop()

    asyncio.run(scenario())
