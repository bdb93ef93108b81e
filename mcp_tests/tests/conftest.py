import pytest


class DummyMCP:
    """Minimal FastMCP stand-in to capture tool registration."""

    def __init__(self) -> None:
        self.tools = {}

    def tool(self, *, name: str):
        def _decorator(fn):
            self.tools[name] = fn
            return fn
        return _decorator


class FakeReader:
    """Pull-stream reader that records lifecycle calls."""

    def __init__(self, chunks, *, async_read: bool = True) -> None:
        self._chunks = list(chunks)
        self._async_read = async_read
        self.reads = 0
        self.cancelled = False
        self.released = False

    def _next(self):
        self.reads += 1
        if not self._chunks:
            return {"done": True, "value": None}
        return {"done": False, "value": self._chunks.pop(0)}

    def read(self):
        if not self._async_read:
            return self._next()

        async def _read():
            return self._next()

        return _read()

    async def cancel(self):
        self.cancelled = True

    def release_lock(self):
        self.released = True


class FakePullStream:
    def __init__(self, chunks, *, async_read: bool = True) -> None:
        self.reader = FakeReader(chunks, async_read=async_read)

    def get_reader(self):
        return self.reader


@pytest.fixture
def dummy_mcp():
    return DummyMCP()


@pytest.fixture
def make_pull_stream():
    return FakePullStream


@pytest.fixture
def agen():
    """Build an async generator over the given items."""

    def _make(items):
        async def _gen():
            for item in items:
                yield item
        return _gen()

    return _make


@pytest.fixture
def collect():
    """Drain an async iterator into a list."""

    async def _collect(aiter):
        return [item async for item in aiter]

    return _collect
