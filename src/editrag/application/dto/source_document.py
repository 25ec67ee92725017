"""Source document DTO."""

from dataclasses import dataclass


@dataclass
class SourceDocument:
    """In-memory document handle, used by the HTTP surface and tests."""

    path: str
    text: str
    language_id: str = "plaintext"
    scheme: str = "file"

    def get_text(self) -> str:
        return self.text
