"""Summarizer package for doc comment synopses."""

from .doc_summary import first_paragraph, first_sentence, synopsis

__all__ = [
    "first_paragraph",
    "first_sentence",
    "synopsis",
]
