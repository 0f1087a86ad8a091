from typing import Protocol


class ClipboardWriter(Protocol):
    async def write_text(self, text: str) -> None: ...
