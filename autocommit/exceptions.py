"""Exception hierarchy for autocommit."""


class AutoCommitError(Exception):
    """Base exception for every fatal autocommit condition."""


class GitError(AutoCommitError):
    """Raised when a git command cannot be run or fails."""


class NotARepositoryError(GitError):
    """Raised when the working directory is not inside a git work tree."""


class ConfigError(AutoCommitError):
    """Raised for missing or invalid configuration."""


class LLMError(AutoCommitError):
    """Raised when the completion endpoint fails or replies unusably."""


class ValidationError(AutoCommitError):
    """Raised when the structured reply does not describe a commit."""


class CommitAbortedError(AutoCommitError):
    """Raised when the user declines the proposed commit."""
