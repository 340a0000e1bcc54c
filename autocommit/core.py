"""The end-to-end autocommit pipeline."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .commit import CommitExecutor, CommitState
from .config import Config
from .git import GitRepo
from .llm import CompletionClient
from .schema import Commit, build_commit_schema, parse_commit
from .status import NullStatus, StatusReporter

logger = logging.getLogger(__name__)


class AutoCommitWorkflow:
    """Diff → structured completion → parsed ``Commit`` → confirm and commit.

    Control is strictly linear. Every failure surfaces as an
    ``AutoCommitError`` subclass and nothing is retried.
    """

    def __init__(
        self,
        config: Config,
        *,
        dry_run: bool = False,
        force: bool = False,
        review: bool = False,
        status: Optional[StatusReporter] = None,
        git_repo: Optional[GitRepo] = None,
        client_factory: Optional[Callable[[Config], CompletionClient]] = None,
        input_fn: Optional[Callable[[str], str]] = None,
        print_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.config = config
        self.dry_run = dry_run
        self.status = status or NullStatus()
        self.git_repo = git_repo or GitRepo(config.repo_path)
        self.client_factory = client_factory or CompletionClient
        self.executor = CommitExecutor(
            self.git_repo,
            dry_run=dry_run,
            force=force,
            review=review,
            input_fn=input_fn,
            print_fn=print_fn,
        )
        self.commit: Optional[Commit] = None

    def read_diff(self) -> str:
        self.git_repo.ensure_repository()
        staged = self.git_repo.get_staged_diff()
        if not staged.strip():
            logger.warning(
                "There are no staged files to commit.\n"
                "Try running `git add` to stage some files."
            )
        return self.git_repo.get_full_diff()

    async def generate(self, diff: str) -> Commit:
        client = self.client_factory(self.config)
        if not self.dry_run:
            logger.info("Loading Data...")
        self.status.start("Analyzing Codebase...")
        try:
            raw_arguments = await client.request_commit(diff, build_commit_schema())
        except BaseException:
            self.status.stop("Analysis failed.", success=False)
            raise
        self.status.stop("Finished Analyzing!")
        return parse_commit(raw_arguments)

    async def run(self) -> CommitState:
        diff = self.read_diff()
        self.commit = await self.generate(diff)
        return self.executor.execute(self.commit)
