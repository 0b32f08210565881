"""Textual host adapter."""

from .controller import TextAreaCommentAdapter, TextAreaLike, TextualUIHooks

__all__ = ["TextAreaCommentAdapter", "TextAreaLike", "TextualUIHooks"]
