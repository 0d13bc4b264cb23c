"""In-memory slot storage, for ephemeral sessions and tests."""


class MemorySlotStorage:
    """Slot storage kept in a dict."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.slots: dict[str, str] = dict(initial or {})
        self.writes = 0

    def read(self, name: str) -> str | None:
        return self.slots.get(name)

    def write(self, name: str, value: str) -> None:
        self.slots[name] = value
        self.writes += 1

    def delete(self, name: str) -> None:
        self.slots.pop(name, None)
