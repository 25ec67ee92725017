"""Suggestion context DTO - ambient edit context used to derive queries."""

from dataclasses import dataclass, field


@dataclass
class Diagnostic:
    """Editor diagnostic attached to the current document."""

    message: str
    severity: str | None = None


@dataclass
class SuggestionContext:
    """Edit context at the time a suggestion is requested. All fields optional."""

    current_document: str | None = None
    user_input: str | None = None
    selection_line: str | None = None
    syntax_node_label: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
