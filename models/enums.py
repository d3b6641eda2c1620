"""
Status enumerations shared by the ORM models and the API schemas.
"""
import enum


class ApplicationStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    ON_HOLD = "OnHold"
    COMPLETED = "Completed"
    REJECTED = "Rejected"


class TaskStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values (e.g. 'OnHold') rather than member names."""
    return [member.value for member in enum_cls]
