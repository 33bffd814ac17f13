"""Employee Lock Registry — serializes promotions of the same employee within a process.

Invariants:
    - At most one holder per emp_no at a time; different employees never contend
    - An entry exists only while someone holds or waits for it (no unbounded growth)

Design Decisions:
    - In-process asyncio.Lock complements the database row lock (SELECT ... FOR
      UPDATE): the row lock covers multi-worker deployments, this one keeps
      same-process requests from queueing on a database connection
    - Reference counting over WeakValueDictionary: explicit and deterministic
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator


class EmployeeLockRegistry:
    """Hands out one asyncio.Lock per employee number."""

    def __init__(self):
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    @asynccontextmanager
    async def hold(self, emp_no: int) -> AsyncGenerator[None, None]:
        lock = self._locks.setdefault(emp_no, asyncio.Lock())
        self._users[emp_no] = self._users.get(emp_no, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[emp_no] -= 1
            if self._users[emp_no] == 0:
                del self._users[emp_no]
                del self._locks[emp_no]

    def is_locked(self, emp_no: int) -> bool:
        lock = self._locks.get(emp_no)
        return lock is not None and lock.locked()

    @property
    def size(self) -> int:
        """Employees currently held or waited on."""
        return len(self._locks)
