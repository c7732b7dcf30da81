from merge_conflict_analyzer.core.domain.review.review_comment import ReviewComment

__all__ = ["ReviewComment"]
