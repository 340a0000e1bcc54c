"""Confirmation and commit of a proposed message."""

from __future__ import annotations

import enum
import logging
from typing import Callable, Optional

from .exceptions import AutoCommitError, CommitAbortedError
from .git import GitRepo
from .schema import Commit

logger = logging.getLogger(__name__)

RULE = "-" * 30
QUESTION = "Do you want to continue? (Y/n)"

_YES = {"y", "yes"}
_NO = {"n", "no"}


class CommitState(enum.Enum):
    PROPOSED = "proposed"
    CONFIRMED = "confirmed"
    COMMITTED = "committed"
    ABORTED = "aborted"


def ask_yes_no(
    question: str,
    default: bool = True,
    input_fn: Callable[[str], str] = input,
) -> bool:
    """Ask until the answer is yes, no, or empty (meaning ``default``)."""
    while True:
        try:
            answer = input_fn(f"{question} ").strip().lower()
        except EOFError as exc:
            raise AutoCommitError("Couldn't ask question.") from exc
        if not answer:
            return default
        if answer in _YES:
            return True
        if answer in _NO:
            return False


def format_proposal(message: str) -> str:
    return f"Proposed Commit:\n{RULE}\n{message}\n{RULE}"


class CommitExecutor:
    """Moves a proposed commit through confirmation to ``git commit``."""

    def __init__(
        self,
        git_repo: GitRepo,
        *,
        dry_run: bool = False,
        force: bool = False,
        review: bool = False,
        input_fn: Optional[Callable[[str], str]] = None,
        print_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.git_repo = git_repo
        self.dry_run = dry_run
        self.force = force
        self.review = review
        self.input_fn = input_fn or input
        self.print_fn = print_fn or print
        self.state = CommitState.PROPOSED
        self.output: Optional[str] = None

    def execute(self, commit: Commit) -> CommitState:
        message = str(commit)
        if self.dry_run:
            self.print_fn(message)
            return self.state

        if self.force:
            logger.info(format_proposal(message))
        else:
            # Shown regardless of log level; the user is about to be asked.
            self.print_fn(format_proposal(message))
            if not ask_yes_no(QUESTION, default=True, input_fn=self.input_fn):
                self.state = CommitState.ABORTED
                raise CommitAbortedError("Commit aborted by user.")
            logger.info("Committing Message...")
        self.state = CommitState.CONFIRMED

        self.output = self.git_repo.commit(message, review=self.review)
        self.state = CommitState.COMMITTED
        if self.output:
            logger.info(self.output.rstrip())
        return self.state
