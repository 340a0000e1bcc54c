import asyncio
import logging

import pytest

from autocommit.commit import CommitState
from autocommit.config import Config
from autocommit.core import AutoCommitWorkflow
from autocommit.exceptions import (
    CommitAbortedError,
    LLMError,
    NotARepositoryError,
    ValidationError,
)

ARGS = '{"title":"Add hello print","description":"Adds a print statement."}'


class _FakeRepo:
    def __init__(self, staged="+print('hi')", full=None, is_repo=True):
        self.staged = staged
        self.full = staged if full is None else full
        self.is_repo = is_repo
        self.commits = []

    def ensure_repository(self):
        if not self.is_repo:
            raise NotARepositoryError("not a git repository")

    def get_staged_diff(self):
        return self.staged

    def get_full_diff(self):
        return self.full

    def commit(self, message, review=False):
        self.commits.append(message)
        return ""


class _FakeClient:
    def __init__(self, arguments=ARGS, error=None):
        self.arguments = arguments
        self.error = error
        self.requests = []

    async def request_commit(self, diff, schema):
        self.requests.append((diff, schema))
        if self.error is not None:
            raise self.error
        return self.arguments


class _RecordingStatus:
    def __init__(self):
        self.events = []

    def start(self, label):
        self.events.append(("start", label))

    def stop(self, message, success=True):
        self.events.append(("stop", message, success))


def _workflow(repo, client, **kwargs):
    built = []

    def factory(config):
        built.append(config)
        return client

    workflow = AutoCommitWorkflow(
        Config(), git_repo=repo, client_factory=factory, **kwargs
    )
    return workflow, built


def test_dry_run_prints_exact_message():
    repo = _FakeRepo()
    client = _FakeClient()
    printed = []
    workflow, _ = _workflow(repo, client, dry_run=True, print_fn=printed.append)

    state = asyncio.run(workflow.run())

    assert state is CommitState.PROPOSED
    assert printed == ["Add hello print\n\nAdds a print statement."]
    assert repo.commits == []
    diff, schema = client.requests[0]
    assert diff == "+print('hi')"
    assert set(schema["required"]) == {"title", "description"}


def test_force_commits_exact_message():
    repo = _FakeRepo()
    workflow, _ = _workflow(repo, _FakeClient(), force=True)

    assert asyncio.run(workflow.run()) is CommitState.COMMITTED
    assert repo.commits == ["Add hello print\n\nAdds a print statement."]


def test_not_a_repository_never_builds_client():
    repo = _FakeRepo(is_repo=False)
    workflow, built = _workflow(repo, _FakeClient(), force=True)

    with pytest.raises(NotARepositoryError):
        asyncio.run(workflow.run())
    assert built == []
    assert repo.commits == []


def test_empty_staged_diff_warns_and_uses_full_diff(caplog):
    repo = _FakeRepo(staged="", full="+unstaged change")
    client = _FakeClient()
    workflow, _ = _workflow(repo, client, force=True)

    with caplog.at_level(logging.WARNING, logger="autocommit"):
        state = asyncio.run(workflow.run())

    assert state is CommitState.COMMITTED
    assert "git add" in caplog.text
    assert client.requests[0][0] == "+unstaged change"


@pytest.mark.parametrize(
    "arguments",
    ["not json", '{"title": "only"}', '{"description": "only"}'],
)
def test_malformed_arguments_never_commit(arguments):
    repo = _FakeRepo()
    workflow, _ = _workflow(repo, _FakeClient(arguments=arguments), force=True)

    with pytest.raises(ValidationError):
        asyncio.run(workflow.run())
    assert repo.commits == []


def test_llm_failure_stops_status_and_never_commits():
    repo = _FakeRepo()
    status = _RecordingStatus()
    client = _FakeClient(error=LLMError("The model did not return a function call"))
    workflow, _ = _workflow(repo, client, force=True, status=status)

    with pytest.raises(LLMError):
        asyncio.run(workflow.run())
    assert repo.commits == []
    assert status.events == [
        ("start", "Analyzing Codebase..."),
        ("stop", "Analysis failed.", False),
    ]


def test_status_reports_progress():
    status = _RecordingStatus()
    workflow, _ = _workflow(_FakeRepo(), _FakeClient(), force=True, status=status)

    asyncio.run(workflow.run())

    assert status.events == [
        ("start", "Analyzing Codebase..."),
        ("stop", "Finished Analyzing!", True),
    ]


def test_declined_confirmation_keeps_commit_for_inspection():
    repo = _FakeRepo()
    workflow, _ = _workflow(repo, _FakeClient(), input_fn=lambda prompt: "n")

    with pytest.raises(CommitAbortedError):
        asyncio.run(workflow.run())
    assert repo.commits == []
    assert str(workflow.commit) == "Add hello print\n\nAdds a print statement."
    assert workflow.executor.state is CommitState.ABORTED
