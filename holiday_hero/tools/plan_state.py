"""Snapshot transitions and derived progress views.

Every transition is a pure function from an old snapshot to a new one.
Callers persist the result themselves (see holiday_hero.tools.session).
"""
import logging
import math
from datetime import date, datetime, timezone
from typing import Optional

from holiday_hero.errors import InvalidPlanError
from holiday_hero.models.plan import PLAN_DAYS, AppData, DayPlan, Profile, Task, validate_plan
from holiday_hero.tools.storage_io import PersistenceGateway

logger = logging.getLogger(__name__)


def initialize(
    profile: Profile,
    plan: list[DayPlan],
    images: Optional[list[str]] = None,
    now: Optional[datetime] = None,
) -> AppData:
    """
    Build a fresh snapshot from a generated plan.

    Args:
        profile: Profile the plan was generated from
        plan: Exactly PLAN_DAYS days, each with one task per type
        images: Zero to two generated image data URIs
        now: Creation time (defaults to current UTC time)

    Returns:
        New AppData with startDate set to the creation time

    Raises:
        InvalidPlanError: if the plan breaks the day/task invariants
    """
    try:
        validate_plan(plan)
    except ValueError as e:
        raise InvalidPlanError(str(e)) from e

    start = now or datetime.now(timezone.utc)
    try:
        return AppData(
            profile=profile,
            plan=list(plan),
            start_date=start.isoformat(),
            generated_images=list(images or []),
        )
    except ValueError as e:
        raise InvalidPlanError(str(e)) from e


def set_task_completion(snapshot: AppData, day_index: int, task_id: str, completed: bool) -> AppData:
    """
    Return a copy of snapshot with one task's completion flag set.

    Unknown day_index or task_id leaves the snapshot untouched (the same
    object is returned). So does setting a flag to the value it already has.
    """
    if not 0 <= day_index < len(snapshot.plan):
        logger.warning(f"Ignoring task update: day index {day_index} out of range")
        return snapshot

    day = snapshot.plan[day_index]
    task_index = next((i for i, t in enumerate(day.tasks) if t.id == task_id), None)
    if task_index is None:
        logger.warning(f"Ignoring task update: no task {task_id!r} on day {day.day_number}")
        return snapshot

    task = day.tasks[task_index]
    if task.is_completed == completed:
        return snapshot

    tasks = list(day.tasks)
    tasks[task_index] = task.model_copy(update={"is_completed": completed})

    plan = list(snapshot.plan)
    plan[day_index] = day.model_copy(update={"tasks": tasks})

    logger.debug(f"Task {task_id} on day {day.day_number} set to completed={completed}")
    return snapshot.model_copy(update={"plan": plan})


def reset(gateway: PersistenceGateway) -> None:
    """Erase the durable slot. The caller drops its in-memory snapshot."""
    gateway.clear()
    logger.info("Plan data cleared")


def total_tasks(snapshot: AppData) -> int:
    return sum(len(day.tasks) for day in snapshot.plan)


def completed_tasks(snapshot: AppData) -> int:
    return sum(1 for day in snapshot.plan for task in day.tasks if task.is_completed)


def progress_percent(snapshot: AppData) -> int:
    """Completed share of all tasks, 0-100, halves rounded up."""
    total = total_tasks(snapshot)
    if total == 0:
        return 0
    return int(math.floor(completed_tasks(snapshot) * 100 / total + 0.5))


def is_day_complete(day: DayPlan) -> bool:
    return day.is_complete


def completed_days(snapshot: AppData) -> list[int]:
    """Day numbers whose tasks are all done."""
    return [day.day_number for day in snapshot.plan if day.is_complete]


def find_task(snapshot: AppData, task_id: str) -> Optional[tuple[int, Task]]:
    """Locate a task anywhere in the plan. Returns (day_index, task) or None."""
    for day_index, day in enumerate(snapshot.plan):
        for task in day.tasks:
            if task.id == task_id:
                return day_index, task
    return None


def plan_day_for_date(snapshot: AppData, today: Optional[date] = None) -> int:
    """0-based day index for today, counted from startDate and clamped to the plan."""
    start = datetime.fromisoformat(snapshot.start_date).date()
    today = today or datetime.now(timezone.utc).date()
    elapsed = (today - start).days
    return max(0, min(elapsed, PLAN_DAYS - 1))
