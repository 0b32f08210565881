"""Comment-awareness capability injected into the toggle engine."""

from .markers import CommentSyntax, Direction, LineCommentSyntax

__all__ = ["CommentSyntax", "Direction", "LineCommentSyntax"]
