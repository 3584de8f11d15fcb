import threading


class ReadWriteLock:
    """
    A reader-writer lock implementation that allows multiple concurrent readers
    but exclusive writers. Getters run concurrently while writes stay exclusive.

    The writer holds the underlying RLock for the whole write section, so a
    writer may re-enter read or write sections on the same thread. A thread
    holding only a read section must not request a write section.
    """

    def __init__(self):
        self._read_ready = threading.Condition(threading.RLock())
        self._readers = 0

    def acquire_read(self):
        """Acquire a read lock (shared)."""
        self._read_ready.acquire()
        try:
            self._readers += 1
        finally:
            self._read_ready.release()

    def release_read(self):
        """Release a read lock."""
        self._read_ready.acquire()
        try:
            self._readers -= 1
            if self._readers == 0:
                self._read_ready.notify_all()
        finally:
            self._read_ready.release()

    def acquire_write(self):
        """Acquire a write lock (exclusive)."""
        self._read_ready.acquire()
        while self._readers > 0:
            self._read_ready.wait()

    def release_write(self):
        """Release a write lock."""
        self._read_ready.release()


class ReadLock:
    """Context manager for read locks."""

    def __init__(self, lock: ReadWriteLock):
        self.lock = lock

    def __enter__(self):
        self.lock.acquire_read()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.lock.release_read()


class WriteLock:
    """Context manager for write locks."""

    def __init__(self, lock: ReadWriteLock):
        self.lock = lock

    def __enter__(self):
        self.lock.acquire_write()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.lock.release_write()
