from dataclasses import dataclass


@dataclass(frozen=True)
class ReviewComment:
    """Inline review comment anchored to a file line of the PR diff."""

    path: str
    line: int
    body: str

    def __post_init__(self):
        if not self.path.strip(): raise ValueError("Comment path cannot be empty.")
        if not self.body.strip(): raise ValueError("Comment body cannot be empty.")
        if self.line < 1: raise ValueError("Comment line must be positive.")
