"""In-process state store, for tests and throwaway runs."""

from src.core.interfaces.state_store import IStateStore


class InMemoryStateStore(IStateStore):
    """Dictionary-backed blob store. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))
