import asyncio

import pytest

from common.db.context import (
    is_readonly_forced,
    get_current_session,
    set_current_session,
    reset_current_session,
    in_transaction,
    readonly,
)


class TestContextVariables:
    """Test context variable behavior."""

    def test_default_state(self):
        assert is_readonly_forced() is False
        assert get_current_session(readonly=False) is None
        assert get_current_session(readonly=True) is None

    def test_in_transaction_false_by_default(self):
        assert in_transaction(readonly=False) is False
        assert in_transaction(readonly=True) is False


class TestContextIsolation:
    """Context variables are isolated between concurrent async tasks."""

    async def test_concurrent_tasks_have_isolated_contexts(self, test_db):
        results = {}

        async def task_with_session(task_id: str, delay: float, bind: bool):
            token = set_current_session(test_db) if bind else None
            await asyncio.sleep(delay)
            results[task_id] = get_current_session()
            if token is not None:
                reset_current_session(token)

        await asyncio.gather(
            task_with_session("bound", 0.01, True),
            task_with_session("unbound", 0.02, False),
        )

        assert results["bound"] is test_db
        assert results["unbound"] is None


class TestReadonlyDecorator:
    async def test_forces_readonly_inside_call(self):
        @readonly
        async def probe():
            return is_readonly_forced()

        assert await probe() is True
        assert is_readonly_forced() is False

    async def test_resets_after_exception(self):
        @readonly
        async def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await boom()

        assert is_readonly_forced() is False
