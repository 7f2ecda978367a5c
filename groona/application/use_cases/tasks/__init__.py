from .generate_task_details import TaskDetailGenerator, generate_task_details

__all__ = ["TaskDetailGenerator", "generate_task_details"]
