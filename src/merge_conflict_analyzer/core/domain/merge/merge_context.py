from dataclasses import dataclass, fields


@dataclass(frozen=True)
class MergeParents:
    """Left/right parents of a platform merge commit, in platform order."""

    left_sha: str
    right_sha: str

    def __post_init__(self) -> None:
        if not self.left_sha.strip() or not self.right_sha.strip():
            raise ValueError("Merge parents cannot be empty.")
        if self.left_sha == self.right_sha:
            raise ValueError("Left and right parents must be distinct commits.")


@dataclass(frozen=True)
class ReproducedMerge:
    merge_base_sha: str
    merge_sha: str
    diff_text: str
    checkout_dir: str


@dataclass(frozen=True)
class MergeContext:
    """Identifiers of one reproduced three-way merge for a single PR run."""

    owner: str
    repo: str
    pull_number: int
    left_sha: str
    right_sha: str
    merge_base_sha: str
    reproduced_merge_sha: str

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, str) and not value.strip():
                raise ValueError(f"MergeContext.{f.name} cannot be empty.")
        if self.left_sha == self.right_sha:
            raise ValueError("Left and right parents must be distinct commits.")

    @classmethod
    def from_parts(
        cls, owner: str, repo: str, pull_number: int, parents: MergeParents, merge: ReproducedMerge
    ) -> "MergeContext":
        return cls(
            owner=owner,
            repo=repo,
            pull_number=pull_number,
            left_sha=parents.left_sha,
            right_sha=parents.right_sha,
            merge_base_sha=merge.merge_base_sha,
            reproduced_merge_sha=merge.merge_sha,
        )
