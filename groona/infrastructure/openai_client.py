"""OpenAI backed generation of task descriptions and breakdowns."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from openai import OpenAI, OpenAIError

from groona.config import get_settings
from groona.domain.entities import TASK_PRIORITIES, TaskDetails

logger = logging.getLogger(__name__)

TASK_DETAILS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "description": {"type": "string"},
        "acceptance_criteria": {"type": "array", "items": {"type": "string"}},
        "subtasks": {"type": "array", "items": {"type": "string"}},
        "estimated_hours": {"type": "number"},
        "priority": {"type": "string", "enum": list(TASK_PRIORITIES)},
    },
    "required": [
        "description",
        "acceptance_criteria",
        "subtasks",
        "estimated_hours",
        "priority",
    ],
}

_SYSTEM_PROMPT = (
    "You are a project management assistant for the Groona platform. "
    "Given a task title and optional context, write a concise description, "
    "testable acceptance criteria, a short list of subtasks, a realistic "
    "estimate in hours and a priority. Answer only with JSON matching the schema."
)


def _strip_code_fences(text: str) -> str:
    """Return JSON text without Markdown code fences."""

    s = text.strip()
    if not s.startswith("```"):
        return text

    cleaned = s.strip("`")
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start == -1 or end == -1:
        return text
    return cleaned[start : end + 1]


def _remove_trailing_commas(text: str) -> str:
    """Remove trailing commas that break strict JSON decoding."""

    # Only drops a comma when the next non-whitespace character closes the
    # object or array.
    return re.sub(r",(\s*[}\]])", r"\1", text)


def _decode_payload(text: str) -> Any:
    json_text = text
    try:
        return json.loads(json_text)
    except json.JSONDecodeError:
        json_text = _strip_code_fences(json_text)
    try:
        return json.loads(json_text)
    except json.JSONDecodeError:
        json_text = _remove_trailing_commas(json_text)
    try:
        return json.loads(json_text)
    except json.JSONDecodeError as exc:
        logger.error("Could not decode the OpenAI answer: %s", json_text)
        raise OpenAIServiceError("The OpenAI answer is not valid JSON.") from exc


def _string_list(payload: dict[str, Any], field: str) -> list[str]:
    value = payload.get(field)
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise OpenAIServiceError(f"'{field}' must be a list of strings.")
    return [item.strip() for item in value if item.strip()]


def parse_task_details(payload: Any) -> TaskDetails:
    """Validate a decoded model answer and build :class:`TaskDetails`."""

    if not isinstance(payload, dict):
        raise OpenAIServiceError("The OpenAI answer must be a JSON object.")

    description = payload.get("description")
    if not isinstance(description, str) or not description.strip():
        raise OpenAIServiceError("'description' must be a non-empty string.")

    estimated_hours = payload.get("estimated_hours")
    if isinstance(estimated_hours, bool) or not isinstance(estimated_hours, (int, float)):
        raise OpenAIServiceError("'estimated_hours' must be a number.")
    if estimated_hours <= 0:
        raise OpenAIServiceError("'estimated_hours' must be positive.")

    priority = payload.get("priority")
    if not isinstance(priority, str) or priority.strip().lower() not in TASK_PRIORITIES:
        raise OpenAIServiceError(
            f"'priority' must be one of: {', '.join(TASK_PRIORITIES)}."
        )

    return TaskDetails(
        description=description.strip(),
        acceptance_criteria=_string_list(payload, "acceptance_criteria"),
        subtasks=_string_list(payload, "subtasks"),
        estimated_hours=float(estimated_hours),
        priority=priority.strip().lower(),
    )


class OpenAIConfigurationError(RuntimeError):
    """Raised when the OpenAI credentials are missing."""


class OpenAIServiceError(RuntimeError):
    """Raised when the OpenAI API does not answer as expected."""


class TaskDetailService:
    """Ask the model for task details using a strict JSON schema."""

    def __init__(self, client: Any | None = None) -> None:
        settings = get_settings()

        model = (settings.openai_model or "gpt-4.1-mini").strip() or "gpt-4.1-mini"
        max_output_tokens = settings.openai_max_output_tokens
        if max_output_tokens is not None and max_output_tokens <= 0:
            max_output_tokens = None

        if client is None:
            api_key = (settings.openai_api_key or "").strip()
            if not api_key:
                raise OpenAIConfigurationError(
                    "OPENAI_API_KEY is not defined in the environment.",
                )
            client_kwargs: dict[str, Any] = {"api_key": api_key}
            base_url = (settings.openai_base_url or "").strip()
            if base_url:
                client_kwargs["base_url"] = base_url
            client = OpenAI(**client_kwargs)

        self._client = client
        self._model = model
        self._temperature = float(settings.openai_temperature)
        self._max_output_tokens = max_output_tokens

    def generate(
        self, title: str, *, project_name: str | None = None, notes: str | None = None
    ) -> TaskDetails:
        lines = [f"Task title: {title.strip()}"]
        if project_name:
            lines.append(f"Project: {project_name.strip()}")
        if notes:
            lines.append(f"Notes: {notes.strip()}")

        request_kwargs: dict[str, Any] = {
            "model": self._model,
            "input": [
                {"role": "system", "content": [{"type": "input_text", "text": _SYSTEM_PROMPT}]},
                {"role": "user", "content": [{"type": "input_text", "text": "\n".join(lines)}]},
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "task_details",
                    "strict": True,
                    "schema": TASK_DETAILS_SCHEMA,
                }
            },
            "temperature": self._temperature,
        }
        if self._max_output_tokens is not None:
            request_kwargs["max_output_tokens"] = self._max_output_tokens

        try:
            resp = self._client.responses.create(**request_kwargs)
        except OpenAIError as exc:
            raise OpenAIServiceError("The request to OpenAI failed.") from exc

        text = getattr(resp, "output_text", None)
        if not text:
            try:
                text = resp.output[0].content[0].text
            except (AttributeError, IndexError, TypeError) as exc:
                raise OpenAIServiceError("The OpenAI answer contains no usable text.") from exc

        logger.debug("Raw model answer: %s", text)
        return parse_task_details(_decode_payload(text))


__all__ = [
    "OpenAIConfigurationError",
    "OpenAIServiceError",
    "TASK_DETAILS_SCHEMA",
    "TaskDetailService",
    "parse_task_details",
]
