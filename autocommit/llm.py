"""Structured chat-completion request for commit messages.

The conversation is seeded as if the model had already called ``get_diff``:
an assistant turn carrying an empty ``get_diff`` call is followed by a
function turn whose content is the diff. ``get_diff`` is declared only so
that conversation is self-consistent; nothing ever executes it. The model is
then forced to call ``commit`` whose parameters are the ``Commit`` schema.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx
import openai

from .config import Config
from .exceptions import LLMError

logger = logging.getLogger(__name__)

DIFF_FUNCTION = "get_diff"
COMMIT_FUNCTION = "commit"

SYSTEM_PROMPT = (
    "You are an experienced programmer who writes great commit messages. "
    "Write every commit message in {language}."
)


@dataclass(frozen=True)
class RequestSpec:
    """A fully assembled completion request, built once and sent once."""

    model: str
    messages: List[Dict[str, Any]]
    functions: List[Dict[str, Any]]
    function_call: Dict[str, str] = field(
        default_factory=lambda: {"name": COMMIT_FUNCTION}
    )
    temperature: float = 0.1
    max_tokens: int = 2000

    def to_kwargs(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": self.messages,
            "functions": self.functions,
            "function_call": self.function_call,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


def build_messages(diff: str, language: str) -> List[Dict[str, Any]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT.format(language=language)},
        {
            "role": "assistant",
            "content": "",
            "function_call": {"name": DIFF_FUNCTION, "arguments": "{}"},
        },
        {"role": "function", "name": DIFF_FUNCTION, "content": diff},
    ]


def build_functions(schema: Dict[str, Any], language: str) -> List[Dict[str, Any]]:
    return [
        {
            "name": DIFF_FUNCTION,
            "description": "Returns the output of `git diff HEAD` as a string.",
            "parameters": {"type": "object", "properties": {}},
        },
        {
            "name": COMMIT_FUNCTION,
            "description": (
                "Creates a commit with the given title and a description, "
                f"written in {language}."
            ),
            "parameters": schema,
        },
    ]


def build_request(diff: str, schema: Dict[str, Any], config: Config) -> RequestSpec:
    return RequestSpec(
        model=config.model,
        messages=build_messages(diff, config.language),
        functions=build_functions(schema, config.language),
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )


def extract_function_arguments(completion: Any) -> str:
    """Return the ``commit`` call arguments from a chat completion.

    Raises:
        LLMError: If the reply has no choices, no function call, or calls a
            function other than ``commit``.
    """
    try:
        message = completion.choices[0].message
    except (AttributeError, IndexError, TypeError):
        raise LLMError("Missing choices in completion response") from None
    call = getattr(message, "function_call", None)
    if call is None:
        raise LLMError("The model did not return a function call")
    if call.name != COMMIT_FUNCTION:
        raise LLMError(f"The model called unexpected function {call.name!r}")
    return call.arguments or ""


class CompletionClient:
    """Sends the single structured commit request to an OpenAI-compatible API."""

    def __init__(
        self,
        config: Config,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        # Missing credentials fail here, before any request is attempted.
        api_key = config.require_api_key()
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            base_url=config.llm_endpoint,
            max_retries=0,
            http_client=http_client,
        )

    async def request_commit(self, diff: str, schema: Dict[str, Any]) -> str:
        """Send the request and return the raw ``commit`` arguments string.

        The client is single-shot: its connection pool, including an injected
        ``http_client``, is closed once the request completes or fails.
        """
        spec = build_request(diff, schema, self.config)
        logger.debug(
            "Requesting commit: model=%s messages=%d diff_len=%d",
            spec.model,
            len(spec.messages),
            len(diff),
        )
        try:
            completion = await self._client.chat.completions.create(
                **spec.to_kwargs()
            )
        except openai.APIError as exc:
            raise LLMError(f"Couldn't complete prompt: {exc}") from exc
        finally:
            await self._client.close()
        arguments = extract_function_arguments(completion)
        logger.debug("Received commit arguments (%d chars)", len(arguments))
        return arguments
