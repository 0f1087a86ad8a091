from collections.abc import Sequence
from typing import Protocol

from defscope.core.document import TextDocument
from defscope.models import OutlineNode, SymbolInformation

OutlineResult = Sequence[OutlineNode] | Sequence[SymbolInformation] | None


class OutlineProvider(Protocol):
    async def get_outline(self, document: TextDocument) -> OutlineResult: ...
