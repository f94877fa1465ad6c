"""Unit tests for transient store error handling."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from port42.domain.error import TransientStoreError
from port42.persistence.retry import WRITES_FLAG, idempotent_read, mutation


def transient() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection reset"))


class FakeSession:
    def __init__(self) -> None:
        self.info: dict = {}
        self.rollbacks = 0

    async def rollback(self) -> None:
        self.rollbacks += 1


class FlakyRepository:
    """Fails the first ``failures`` calls of each method."""

    def __init__(self, failures: int, error_factory=transient) -> None:
        self.session = FakeSession()
        self.failures = failures
        self.error_factory = error_factory
        self.calls = 0

    def _maybe_fail(self) -> None:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error_factory()

    @idempotent_read
    async def find(self) -> str:
        self._maybe_fail()
        return "row"

    @mutation
    async def write(self) -> str:
        self._maybe_fail()
        return "written"


class TestIdempotentRead:
    """Tests for the read retry decorator."""

    @pytest.mark.asyncio
    async def test_single_transient_failure_is_retried(self):
        """One transient failure is absorbed after a rollback."""
        repository = FlakyRepository(failures=1)

        assert await repository.find() == "row"
        assert repository.calls == 2
        assert repository.session.rollbacks == 1

    @pytest.mark.asyncio
    async def test_second_failure_raises_transient_error(self):
        """Only one retry is attempted."""
        repository = FlakyRepository(failures=2)

        with pytest.raises(TransientStoreError):
            await repository.find()
        assert repository.calls == 2

    @pytest.mark.asyncio
    async def test_no_retry_after_writes(self):
        """A read in a transaction that already wrote is not retried."""
        repository = FlakyRepository(failures=1)
        repository.session.info[WRITES_FLAG] = True

        with pytest.raises(TransientStoreError):
            await repository.find()
        assert repository.calls == 1
        assert repository.session.rollbacks == 0

    @pytest.mark.asyncio
    async def test_data_errors_propagate_unchanged(self):
        """Constraint violations are not transient."""
        repository = FlakyRepository(
            failures=1,
            error_factory=lambda: IntegrityError("INSERT", {}, Exception("dup")),
        )

        with pytest.raises(IntegrityError):
            await repository.find()
        assert repository.calls == 1


class TestMutation:
    """Tests for the write decorator."""

    @pytest.mark.asyncio
    async def test_write_flags_session(self):
        repository = FlakyRepository(failures=0)

        assert await repository.write() == "written"
        assert repository.session.info[WRITES_FLAG] is True

    @pytest.mark.asyncio
    async def test_transient_write_failure_is_not_retried(self):
        """Writes fail fast with a transient store error."""
        repository = FlakyRepository(failures=1)

        with pytest.raises(TransientStoreError):
            await repository.write()
        assert repository.calls == 1
