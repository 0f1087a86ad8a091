"""User-facing copy operations.

Each operation resolves the outline, composes text and hands the formatted
result to a clipboard writer. "Nothing to copy" conditions never raise: they
come back as a ``CopyOutcome`` carrying an informational notice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from defscope.core.compose import (
    compose_definition_blocks,
    compose_function_with_parents_text,
    compose_qualified_name,
    compose_selection_with_parents_text,
    definition_envelope,
    get_copy_range_for_function,
    remove_root_indentation,
)
from defscope.core.config import CopySettings
from defscope.core.document import TextDocument
from defscope.core.locator import find_innermost_function
from defscope.core.outline import get_document_outline
from defscope.core.ports.clipboard import ClipboardWriter
from defscope.core.ports.outline import OutlineProvider
from defscope.core.templates import format_range, format_string
from defscope.models import FunctionMatch, Range, Selection

logger = logging.getLogger(__name__)

NO_EDITOR = "No editor is active"
NO_FUNCTION = "Unable to identify the current function"


@dataclass(frozen=True)
class EditorContext:
    document: TextDocument
    selection: Selection

    @property
    def relative_path(self) -> str:
        path = self.document.path
        if path is None:
            return ""
        try:
            return str(path.resolve().relative_to(Path.cwd().resolve()))
        except ValueError:
            return str(path)


@dataclass(frozen=True)
class CopyOutcome:
    copied: bool
    text: str | None = None
    notice: str | None = None


def _notice(message: str) -> CopyOutcome:
    logger.info(message)
    return CopyOutcome(copied=False, notice=message)


def _format_range(settings: CopySettings, span: Range) -> str | None:
    range_template = settings.get_template("rangeTemplate")
    if range_template is None:
        logger.info("No template found for rangeTemplate")
        return None
    return format_range(range_template, span.start.line, span.start.character, span.end.line, span.end.character)


async def _write_templated(
    context: EditorContext,
    clipboard: ClipboardWriter,
    settings: CopySettings,
    text: str,
    range_text: str | None,
) -> CopyOutcome:
    template = settings.get_template("template")
    if template is None:
        return _notice("No template found for template")

    formatted = format_string(
        template,
        {"filePath": context.relative_path, "range": range_text, "text": text},
    )
    await clipboard.write_text(formatted)
    return CopyOutcome(copied=True, text=formatted)


async def _match_at_active(context: EditorContext, provider: OutlineProvider) -> FunctionMatch | None:
    nodes = await get_document_outline(provider, context.document)
    return find_innermost_function(nodes, context.selection.active)


async def copy_selection(
    context: EditorContext | None,
    provider: OutlineProvider,
    clipboard: ClipboardWriter,
    settings: CopySettings,
) -> CopyOutcome:
    if context is None:
        return _notice(NO_EDITOR)

    document = context.document
    selection = context.selection.as_range()
    selected_text = document.get_text(selection)

    match = await _match_at_active(context, provider)
    if match is None:
        # No headers to line up with.
        text = remove_root_indentation(selected_text) if settings.remove_root_indentation else selected_text
    else:
        text = compose_selection_with_parents_text(document, match, selected_text, selection)

    return await _write_templated(context, clipboard, settings, text, _format_range(settings, selection))


async def copy_file(
    context: EditorContext | None,
    clipboard: ClipboardWriter,
    settings: CopySettings,
) -> CopyOutcome:
    if context is None:
        return _notice(NO_EDITOR)
    return await _write_templated(context, clipboard, settings, context.document.get_text(), "")


async def copy_function_with_parents(
    context: EditorContext | None,
    provider: OutlineProvider,
    clipboard: ClipboardWriter,
    settings: CopySettings,
) -> CopyOutcome:
    if context is None:
        return _notice(NO_EDITOR)

    match = await _match_at_active(context, provider)
    if match is None:
        return _notice(NO_FUNCTION)

    text = compose_function_with_parents_text(context.document, match.ancestors, match.node)
    copy_range = get_copy_range_for_function(match.node)
    return await _write_templated(context, clipboard, settings, text, _format_range(settings, copy_range))


async def copy_function_definition_with_parents(
    context: EditorContext | None,
    provider: OutlineProvider,
    clipboard: ClipboardWriter,
    settings: CopySettings,
) -> CopyOutcome:
    if context is None:
        return _notice(NO_EDITOR)

    match = await _match_at_active(context, provider)
    if match is None:
        return _notice(NO_FUNCTION)

    blocks = compose_definition_blocks(context.document, match.ancestors, match.node)
    text = "\n".join(block.text for block in blocks)
    return await _write_templated(
        context, clipboard, settings, text, _format_range(settings, definition_envelope(blocks))
    )


async def copy_function_qualified_name(
    context: EditorContext | None,
    provider: OutlineProvider,
    clipboard: ClipboardWriter,
) -> CopyOutcome:
    if context is None:
        return _notice(NO_EDITOR)

    match = await _match_at_active(context, provider)
    if match is None:
        return _notice(NO_FUNCTION)

    qualified_name = compose_qualified_name(match)
    if not qualified_name:
        return _notice(NO_FUNCTION)

    text = f"`{qualified_name}`"
    await clipboard.write_text(text)
    return CopyOutcome(copied=True, text=text)
