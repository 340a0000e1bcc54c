"""The commit message shape and its JSON schema."""

from __future__ import annotations

from typing import Any, Dict

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from .exceptions import ValidationError


class Commit(BaseModel):
    """A commit message proposed by the model."""

    model_config = ConfigDict(frozen=True, strict=True)

    title: str = Field(description="The title of the commit.")
    description: str = Field(
        description="An exhaustive description of the changes."
    )

    def __str__(self) -> str:
        return f"{self.title}\n\n{self.description}"


def build_commit_schema() -> Dict[str, Any]:
    """Return the JSON schema used as the ``commit`` function parameters.

    ``Commit`` has no nested models, so the schema is self-contained and
    carries no ``$ref``/``$defs`` entries.
    """
    schema = Commit.model_json_schema()
    schema.pop("title", None)
    return schema


def parse_commit(raw_arguments: str) -> Commit:
    """Deserialize function-call arguments into a ``Commit``.

    Raises:
        ValidationError: If the arguments are not a JSON object holding
            string ``title`` and ``description`` fields.
    """
    try:
        return Commit.model_validate_json(raw_arguments)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Couldn't parse model response: {exc}") from exc
