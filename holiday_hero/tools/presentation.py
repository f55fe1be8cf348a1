"""Display metadata for task types and dashboard text."""
from dataclasses import dataclass

from holiday_hero.models.plan import PLAN_DAYS, AppData, TaskType
from holiday_hero.tools import plan_state


@dataclass(frozen=True)
class TaskTypeStyle:
    """How a task type is shown in the terminal."""
    label: str
    icon: str
    color: str  # rich color name


# Covers every TaskType; no fallback entry
TASK_TYPE_STYLES: dict[TaskType, TaskTypeStyle] = {
    TaskType.QURAN_MORNING: TaskTypeStyle(label="حفظ الصباح", icon="☀", color="yellow"),
    TaskType.LANGUAGE: TaskTypeStyle(label="تعلم اللغات", icon="📖", color="blue"),
    TaskType.QURAN_EVENING: TaskTypeStyle(label="ورد المساء", icon="☾", color="magenta"),
    TaskType.FUN: TaskTypeStyle(label="نشاط ممتع", icon="🎨", color="purple"),
}


def style_for(task_type: TaskType) -> TaskTypeStyle:
    return TASK_TYPE_STYLES[task_type]


def day_label(day_index: int) -> str:
    """e.g. 'اليوم 3 من 15' for index 2."""
    return f"اليوم {day_index + 1} من {PLAN_DAYS}"


def greeting(snapshot: AppData) -> str:
    name = snapshot.profile.name if snapshot.profile else ""
    return f"مرحباً {name} 👋"


def progress_message(snapshot: AppData) -> str:
    """Motivation line shown above the day strip."""
    return f"لقد أنجزت {plan_state.completed_tasks(snapshot)} مهمة. استمر يا بطل!"


def progress_bar(percent: int, width: int = 30) -> str:
    filled = round(width * percent / 100)
    return "█" * filled + "░" * (width - filled)
