"""Routes backed by the OpenAI task details assistant."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from groona.application.use_cases.tasks import generate_task_details
from groona.infrastructure.openai_client import OpenAIServiceError, TaskDetailService
from groona.interfaces.api.dependencies import get_task_detail_service
from groona.interfaces.api.schemas import TaskDetailsRequest, TaskDetailsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/details", response_model=TaskDetailsResponse)
def suggest_task_details(
    payload: TaskDetailsRequest,
    service: TaskDetailService = Depends(get_task_detail_service),
) -> TaskDetailsResponse:
    """Ask the assistant for a description and breakdown of a task."""

    try:
        details = generate_task_details(
            service,
            title=payload.title,
            project_name=payload.project_name,
            notes=payload.notes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except OpenAIServiceError as exc:
        logger.warning("Task details generation failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        ) from exc

    return TaskDetailsResponse(
        description=details.description,
        acceptance_criteria=list(details.acceptance_criteria),
        subtasks=list(details.subtasks),
        estimated_hours=details.estimated_hours,
        priority=details.priority,
    )
