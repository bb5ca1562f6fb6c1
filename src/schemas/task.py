"""Task schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskCreate(BaseModel):
    """Create a new task."""

    title: str = Field(..., min_length=1, max_length=500)
    completed: bool = False


class TaskUpdate(BaseModel):
    """Replace a task's title and completion state."""

    title: str = Field(..., min_length=1, max_length=500)
    completed: bool


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str
    completed: bool
    user_id: int
