from models.application import Application, format_application_id
from models.broker import Broker
from models.enums import ApplicationStatus, TaskStatus
from models.task import Task

__all__ = [
    "Application",
    "ApplicationStatus",
    "Broker",
    "Task",
    "TaskStatus",
    "format_application_id",
]
