"""Document handle port - open documents supplied by the editor."""

from typing import Protocol


class DocumentHandle(Protocol):
    """Open document exposed by the editor integration."""

    @property
    def path(self) -> str: ...

    @property
    def scheme(self) -> str: ...

    @property
    def language_id(self) -> str: ...

    def get_text(self) -> str: ...
