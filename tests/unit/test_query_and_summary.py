"""Unit tests for search query derivation and context summaries."""

from editrag.application.dto import Diagnostic, SuggestionContext
from editrag.application.services.context_summarizer import EMPTY_SUMMARY, summarize_context
from editrag.application.services.query_builder import (
    MAX_QUERY_LENGTH,
    build_search_query,
    truncate_query,
)
from editrag.domain.entities import RelevantChunk


class TestBuildSearchQuery:
    def test_joins_parts_in_order(self) -> None:
        context = SuggestionContext(
            user_input="validate input",
            selection_line="  if (x) {  ",
            syntax_node_label="IfStatement",
            diagnostics=[Diagnostic("x is undefined"), Diagnostic("missing semicolon")],
        )
        assert build_search_query(context) == (
            "validate input if (x) { IfStatement x is undefined missing semicolon"
        )

    def test_empty_context_gives_empty_query(self) -> None:
        assert build_search_query(SuggestionContext()) == ""
        assert build_search_query(SuggestionContext(user_input="   ", selection_line="")) == ""

    def test_query_truncated(self) -> None:
        context = SuggestionContext(user_input="a" * 800)
        assert len(build_search_query(context)) == MAX_QUERY_LENGTH

    def test_truncate_query_strips(self) -> None:
        assert truncate_query("  hello  ") == "hello"
        assert truncate_query("abc def", limit=4) == "abc"


class TestSummarizeContext:
    def test_full_summary(self) -> None:
        chunks = [
            RelevantChunk(content="x", source_id="/a.py", similarity=0.9),
            RelevantChunk(content="y", source_id="/b.py", similarity=0.8),
            RelevantChunk(content="z", source_id="/a.py", similarity=0.75),
        ]
        summary = summarize_context("/main.py", 2, chunks)
        assert summary == (
            "Current file: /main.py. Found 3 relevant code chunks. "
            "Related files: /a.py, /b.py. Active diagnostics: 2"
        )

    def test_current_file_only(self) -> None:
        assert summarize_context("/main.py", 0, []) == "Current file: /main.py"

    def test_nothing_to_report(self) -> None:
        assert summarize_context(None, 0, []) == EMPTY_SUMMARY
