"""Holiday plan models: profile, tasks, days, and the persisted snapshot."""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


PLAN_DAYS = 15
TASKS_PER_DAY = 4
MAX_IMAGES = 2


class EducationLevel(str, Enum):
    """School stage; values are the labels sent to the model and persisted."""
    PRIMARY = "ابتدائي"
    MIDDLE = "متوسط"
    HIGH = "ثانوي"


class TaskType(str, Enum):
    """Daily activity slot."""
    QURAN_MORNING = "quran_morning"
    LANGUAGE = "language"
    QURAN_EVENING = "quran_evening"
    FUN = "fun"


# Order tasks appear in within a day
TASK_TYPE_ORDER: tuple[TaskType, ...] = (
    TaskType.QURAN_MORNING,
    TaskType.LANGUAGE,
    TaskType.QURAN_EVENING,
    TaskType.FUN,
)


class Profile(BaseModel):
    """Child's intake data used to generate the plan."""
    model_config = ConfigDict(frozen=True)

    name: str
    age: int = Field(..., gt=0)
    level: EducationLevel
    languages: list[str] = Field(default_factory=list)  # target languages, may be empty

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure name is non-empty after trimming."""
        v = v.strip()
        if not v:
            raise ValueError('name must not be empty')
        return v

    @field_validator('languages')
    @classmethod
    def normalize_languages(cls, v: list[str]) -> list[str]:
        """Trim entries and drop empty ones, keeping order."""
        return [lang.strip() for lang in v if lang.strip()]


class Task(BaseModel):
    """Single activity within a day. Only is_completed changes after creation."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str
    description: str
    is_completed: bool = Field(default=False, alias="isCompleted")
    type: TaskType


class DayPlan(BaseModel):
    """One day of the plan: exactly one task per type, in fixed order."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    day_number: int = Field(..., ge=1, le=PLAN_DAYS, alias="dayNumber")
    tasks: list[Task]

    @field_validator('tasks')
    @classmethod
    def validate_tasks(cls, v: list[Task]) -> list[Task]:
        """Ensure one task of each type in TASK_TYPE_ORDER order."""
        types = tuple(task.type for task in v)
        if types != TASK_TYPE_ORDER:
            raise ValueError(
                f'day must have {TASKS_PER_DAY} tasks typed '
                f'{[t.value for t in TASK_TYPE_ORDER]}, got {[t.value for t in types]}'
            )
        return v

    @property
    def is_complete(self) -> bool:
        return all(task.is_completed for task in self.tasks)


class AppData(BaseModel):
    """Complete persisted snapshot of one child's holiday plan."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    profile: Optional[Profile] = None
    plan: list[DayPlan]
    start_date: str = Field(..., alias="startDate")  # ISO timestamp
    generated_images: Optional[list[str]] = Field(default=None, alias="generatedImages")  # data URIs

    @field_validator('start_date')
    @classmethod
    def validate_start_date(cls, v: str) -> str:
        """Ensure start_date is an ISO-8601 timestamp; a trailing Z becomes +00:00."""
        if v.endswith('Z'):
            v = v[:-1] + '+00:00'
        try:
            datetime.fromisoformat(v)
        except ValueError:
            raise ValueError(f'startDate must be an ISO-8601 timestamp, got {v!r}')
        return v

    @model_validator(mode='after')
    def validate_plan_shape(self) -> "AppData":
        """Check day numbering, task id uniqueness and image count."""
        validate_plan(self.plan)
        if self.generated_images is not None and len(self.generated_images) > MAX_IMAGES:
            raise ValueError(f'at most {MAX_IMAGES} generated images allowed')
        return self


def validate_plan(plan: list[DayPlan]) -> None:
    """
    Validate the cross-day invariants of a plan.

    Raises ValueError if the plan does not have PLAN_DAYS days numbered
    1..PLAN_DAYS in order, or if any task id appears more than once.
    """
    if len(plan) != PLAN_DAYS:
        raise ValueError(f'plan must have {PLAN_DAYS} days, got {len(plan)}')

    numbers = [day.day_number for day in plan]
    if numbers != list(range(1, PLAN_DAYS + 1)):
        raise ValueError(f'plan days must be numbered 1..{PLAN_DAYS} in order, got {numbers}')

    seen: set[str] = set()
    for day in plan:
        for task in day.tasks:
            if task.id in seen:
                raise ValueError(f'duplicate task id: {task.id}')
            seen.add(task.id)
