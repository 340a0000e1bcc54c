"""autocommit - generate a git commit message from the staged diff."""

from importlib import import_module
from typing import TYPE_CHECKING

__version__ = "0.1.0"

# Public API (lazy-exported to avoid import-time side effects)
__all__ = [
    # Config
    "Config", "load_config",
    # Git
    "GitRepo",
    # Commit shape
    "Commit", "build_commit_schema", "parse_commit",
    # Completion
    "CompletionClient", "RequestSpec",
    # Confirmation and commit
    "CommitExecutor", "CommitState",
    # Pipeline
    "AutoCommitWorkflow",
    # Exceptions
    "AutoCommitError", "GitError", "NotARepositoryError", "ConfigError",
    "LLMError", "ValidationError", "CommitAbortedError",
]


def __getattr__(name: str):
    """Lazy attribute loader so ``import autocommit`` stays cheap.

    The OpenAI SDK and pydantic are only imported when a symbol that needs
    them is first accessed.
    """
    mapping = {
        "Config": ("autocommit.config", "Config"),
        "load_config": ("autocommit.config", "load_config"),
        "GitRepo": ("autocommit.git", "GitRepo"),
        "Commit": ("autocommit.schema", "Commit"),
        "build_commit_schema": ("autocommit.schema", "build_commit_schema"),
        "parse_commit": ("autocommit.schema", "parse_commit"),
        "CompletionClient": ("autocommit.llm", "CompletionClient"),
        "RequestSpec": ("autocommit.llm", "RequestSpec"),
        "CommitExecutor": ("autocommit.commit", "CommitExecutor"),
        "CommitState": ("autocommit.commit", "CommitState"),
        "AutoCommitWorkflow": ("autocommit.core", "AutoCommitWorkflow"),
        "AutoCommitError": ("autocommit.exceptions", "AutoCommitError"),
        "GitError": ("autocommit.exceptions", "GitError"),
        "NotARepositoryError": ("autocommit.exceptions", "NotARepositoryError"),
        "ConfigError": ("autocommit.exceptions", "ConfigError"),
        "LLMError": ("autocommit.exceptions", "LLMError"),
        "ValidationError": ("autocommit.exceptions", "ValidationError"),
        "CommitAbortedError": ("autocommit.exceptions", "CommitAbortedError"),
    }
    if name in mapping:
        mod_name, attr = mapping[name]
        mod = import_module(mod_name)
        value = getattr(mod, attr)
        globals()[name] = value  # cache for future access
        return value
    raise AttributeError(f"module 'autocommit' has no attribute {name!r}")


if TYPE_CHECKING:
    from .config import Config, load_config
    from .git import GitRepo
    from .schema import Commit, build_commit_schema, parse_commit
    from .llm import CompletionClient, RequestSpec
    from .commit import CommitExecutor, CommitState
    from .core import AutoCommitWorkflow
    from .exceptions import (
        AutoCommitError,
        GitError,
        NotARepositoryError,
        ConfigError,
        LLMError,
        ValidationError,
        CommitAbortedError,
    )
