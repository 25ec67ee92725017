"""EditRAG - semantic retrieval of workspace code for edit suggestions."""

__version__ = "0.1.0"
