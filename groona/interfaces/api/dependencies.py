"""FastAPI dependency utilities."""

from fastapi import HTTPException, status

from groona.infrastructure.openai_client import (
    OpenAIConfigurationError,
    TaskDetailService,
)


def get_task_detail_service() -> TaskDetailService:
    """Return a configured instance of :class:`TaskDetailService`."""

    try:
        return TaskDetailService()
    except OpenAIConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(exc),
        ) from exc
