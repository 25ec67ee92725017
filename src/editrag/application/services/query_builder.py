"""Default search query derivation from the suggestion context."""

from editrag.application.dto import SuggestionContext

MAX_QUERY_LENGTH = 500


def truncate_query(text: str, limit: int = MAX_QUERY_LENGTH) -> str:
    return text.strip()[:limit].strip()


def build_search_query(context: SuggestionContext, limit: int = MAX_QUERY_LENGTH) -> str:
    """Join user input, selection line, syntax node label and diagnostic messages."""
    parts: list[str] = []
    if context.user_input and context.user_input.strip():
        parts.append(context.user_input.strip())
    if context.selection_line and context.selection_line.strip():
        parts.append(context.selection_line.strip())
    if context.syntax_node_label:
        parts.append(context.syntax_node_label)
    if context.diagnostics:
        messages = " ".join(d.message for d in context.diagnostics if d.message)
        if messages:
            parts.append(messages)
    return truncate_query(" ".join(parts), limit)
