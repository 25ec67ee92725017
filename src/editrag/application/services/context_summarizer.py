"""Human-readable summary of an enhanced context."""

from collections.abc import Sequence

from editrag.domain.entities import RelevantChunk

EMPTY_SUMMARY = "No additional context available"


def summarize_context(
    document_id: str | None,
    diagnostics_count: int,
    chunks: Sequence[RelevantChunk],
) -> str:
    parts: list[str] = []
    if document_id:
        parts.append(f"Current file: {document_id}")
    if chunks:
        parts.append(f"Found {len(chunks)} relevant code chunks")
        related = dict.fromkeys(c.source_id for c in chunks)
        parts.append(f"Related files: {', '.join(related)}")
    if diagnostics_count > 0:
        parts.append(f"Active diagnostics: {diagnostics_count}")
    return ". ".join(parts) if parts else EMPTY_SUMMARY
