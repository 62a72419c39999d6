"""Documentation extraction exports."""

from .comment_extraction import CommentExtractionError, collect_doc_comments

__all__ = ["CommentExtractionError", "collect_doc_comments"]
