"""Git operations for autocommit."""

import logging
import subprocess
import threading
from pathlib import Path
from typing import Optional

from .exceptions import GitError, NotARepositoryError

logger = logging.getLogger(__name__)


class GitRepo:
    """Reads diffs from, and commits to, the repository at ``repo_path``."""

    def __init__(self, repo_path: Optional[str] = None) -> None:
        self.repo_path = Path(repo_path or ".")

    def _run_git_command(self, args: list[str]) -> str:
        """Run a Git command and return its output decoded as UTF-8."""
        try:
            result = subprocess.run(
                ["git"] + args,
                cwd=self.repo_path,
                capture_output=True,
                encoding="utf-8",
                errors="strict",
                check=True,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            cmd = " ".join(args)
            raise GitError(f"Git command failed: {cmd}\n{e.stderr}") from e
        except FileNotFoundError as exc:
            raise GitError("Git command not found. Please install Git.") from exc
        except UnicodeDecodeError as exc:
            cmd = " ".join(args)
            raise GitError(f"Output of 'git {cmd}' is not valid UTF-8") from exc

    def verify_repository(self) -> bool:
        """Return True when ``repo_path`` is inside a Git work tree.

        A missing ``git`` executable is an environment error and raises
        ``GitError`` rather than returning False.
        """
        try:
            out = self._run_git_command(["rev-parse", "--is-inside-work-tree"])
        except GitError as exc:
            if isinstance(exc.__cause__, subprocess.CalledProcessError):
                return False
            raise
        return out.strip() == "true"

    def ensure_repository(self) -> None:
        if not self.verify_repository():
            raise NotARepositoryError(
                "It looks like you are not in a git repository.\n"
                "Please run this command from the root of a git repository, "
                "or initialize one using `git init`."
            )

    def has_head(self) -> bool:
        """Return False for a repository whose HEAD is still unborn."""
        try:
            self._run_git_command(["rev-parse", "--verify", "--quiet", "HEAD"])
        except GitError as exc:
            if isinstance(exc.__cause__, subprocess.CalledProcessError):
                return False
            raise
        return True

    def get_staged_diff(self) -> str:
        """Get the diff of staged changes."""
        return self._run_git_command(["diff", "--staged"])

    def get_full_diff(self) -> str:
        """Get every change against HEAD, staged or not.

        Before the first commit there is no HEAD to compare against, so the
        staged diff is the whole story.
        """
        if not self.has_head():
            logger.debug("HEAD is unborn; using the staged diff")
            return self.get_staged_diff()
        return self._run_git_command(["diff", "HEAD"])

    def commit(self, message: str, review: bool = False) -> str:
        """Create a commit reading ``message`` from stdin.

        The message is written by a separate thread so a pipe buffer smaller
        than the message cannot deadlock against ``git`` draining it. With
        ``review`` git opens the configured editor, which needs the terminal,
        so stdout is only captured when not reviewing.
        """
        args = ["git", "commit"]
        if review:
            args.append("-e")
        args += ["-F", "-"]
        logger.debug("Running %s", " ".join(args))
        try:
            process = subprocess.Popen(
                args,
                cwd=self.repo_path,
                stdin=subprocess.PIPE,
                stdout=None if review else subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise GitError("Git command not found. Please install Git.") from exc

        write_errors: list[BaseException] = []

        def _write_message() -> None:
            stdin = process.stdin
            try:
                stdin.write(message.encode("utf-8"))
            except OSError as exc:
                write_errors.append(exc)
            finally:
                try:
                    stdin.close()
                except OSError:
                    pass

        writer = threading.Thread(target=_write_message, daemon=True)
        writer.start()

        output = b""
        if process.stdout is not None:
            output = process.stdout.read()
            process.stdout.close()
        returncode = process.wait()
        writer.join()

        text = output.decode("utf-8", errors="replace")
        if returncode != 0:
            raise GitError(
                f"There was an error when creating the commit "
                f"(git exited with {returncode})\n{text}".rstrip()
            )
        if write_errors:
            raise GitError(f"Failed to write to stdin: {write_errors[0]}")
        return text
