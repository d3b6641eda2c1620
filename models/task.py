from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from database import Base
from models.enums import TaskStatus, enum_values


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        Integer, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    description = Column(String(255), nullable=False)
    status = Column(
        Enum(TaskStatus, name="enum_task_status", values_callable=enum_values),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    application = relationship("Application", back_populates="tasks")

    def __repr__(self):
        return f"<Task(id={self.id}, application_id={self.application_id}, status='{self.status}')>"
