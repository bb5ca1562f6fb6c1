"""Task API endpoints.

Every query is filtered by the caller's user id, so a task owned by someone
else is indistinguishable from one that does not exist.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.api.dependencies import AuthenticatedRoute, Identity, get_current_identity
from src.database import get_db
from src.models.task import Task
from src.schemas.task import TaskCreate, TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"], route_class=AuthenticatedRoute)


def get_user_task(db: Session, task_id: int, identity: Identity) -> Task:
    """Get a task owned by the authenticated user."""
    task = db.query(Task).filter(Task.id == task_id, Task.user_id == identity.user_id).first()
    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return task


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get all tasks of the current user."""
    return db.query(Task).filter(Task.user_id == identity.user_id).order_by(Task.id).all()


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new task owned by the current user."""
    task = Task(title=task_data.title, completed=task_data.completed, user_id=identity.user_id)
    try:
        db.add(task)
        db.commit()
    except SQLAlchemyError:
        # The token subject is not re-checked, so the owner row may be missing
        db.rollback()
        logger.exception(f"Database error creating task for user {identity.user_id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task",
        ) from None
    db.refresh(task)
    return task


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific task."""
    return get_user_task(db, task_id, identity)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Replace a task's title and completion state."""
    task = get_user_task(db, task_id, identity)
    task.title = task_data.title
    task.completed = task_data.completed
    db.commit()
    db.refresh(task)
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a task."""
    task = get_user_task(db, task_id, identity)
    db.delete(task)
    db.commit()
