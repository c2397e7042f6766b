"""Attribution of commits to the branches they were made on."""

from collections.abc import Sequence
from pathlib import Path

from git_reporter.core.logging import get_logger
from git_reporter.git.domain.entities import Commit
from git_reporter.git.domain.errors import AccessError
from git_reporter.git.repositories.interfaces import GitRepository

logger = get_logger(__name__)

TRUNK_BRANCHES: frozenset[str] = frozenset({"main", "master"})


class BranchAnnotationService:
    """Service for resolving which branch each commit belongs to."""

    def __init__(
        self,
        git_repository: GitRepository,
        repo_path: Path,
        history_limit: int = 100,
        max_containment_queries: int = 50,
    ) -> None:
        """
        Initialize BranchAnnotationService.

        Args:
            git_repository: Repository implementation for Git operations
            repo_path: Path to the git repository
            history_limit: Commits scanned per branch
            max_containment_queries: Most per-commit "branch --contains" lookups
                                     done for commits the branch scan missed
        """
        self._git_repository = git_repository
        self._repo_path = repo_path
        self._history_limit = history_limit
        self._max_containment_queries = max_containment_queries

    def annotate(self, commits: Sequence[Commit]) -> tuple[Commit, ...]:
        """
        Populate the branch of each commit where it can be resolved.

        Commits are neither removed nor reordered. A commit found on both a
        trunk branch and another branch is attributed to the other branch.

        Args:
            commits: Commits to annotate

        Returns:
            The same commits, with branch set where resolvable
        """
        if not commits:
            return tuple(commits)

        branch_map = self.map_branch_histories()
        unresolved = [c.hash for c in commits if c.hash not in branch_map]
        branch_map.update(self._resolve_by_containment(unresolved))

        logger.info(
            "branch_mapping_complete",
            commits=len(commits),
            resolved=sum(1 for c in commits if c.hash in branch_map),
        )
        return tuple(c.with_branch(branch_map.get(c.hash)) for c in commits)

    def map_branch_histories(self) -> dict[str, str]:
        """
        Scan the recent history of every local branch.

        Returns:
            Mapping of commit hash to branch name
        """
        try:
            branches = self._git_repository.list_branches(self._repo_path)
        except AccessError as e:
            logger.warning("branch_listing_failed", error=str(e))
            return {}

        branch_map: dict[str, str] = {}
        for branch in branches:
            try:
                history = self._git_repository.list_branch_history(
                    self._repo_path, branch, self._history_limit
                )
            except AccessError as e:
                logger.warning("branch_history_failed", branch=branch, error=str(e))
                continue

            for commit_hash in history:
                # Trunk never overwrites an existing attribution
                if commit_hash not in branch_map or branch not in TRUNK_BRANCHES:
                    branch_map[commit_hash] = branch
        return branch_map

    def _resolve_by_containment(self, commit_hashes: Sequence[str]) -> dict[str, str]:
        resolved: dict[str, str] = {}
        if len(commit_hashes) > self._max_containment_queries:
            logger.warning(
                "containment_queries_capped",
                unresolved=len(commit_hashes),
                cap=self._max_containment_queries,
            )

        for commit_hash in commit_hashes[: self._max_containment_queries]:
            try:
                branches = self._git_repository.list_branches_containing(
                    self._repo_path, commit_hash
                )
            except AccessError as e:
                logger.warning("branch_containment_failed", hash=commit_hash, error=str(e))
                continue
            if not branches:
                continue
            trunk = next((b for b in branches if b in TRUNK_BRANCHES), None)
            resolved[commit_hash] = trunk or branches[0]
        return resolved
