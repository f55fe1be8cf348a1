"""Application root: owns the current snapshot and persists each transition."""
import logging
from typing import Awaitable, Callable, Optional

from holiday_hero.errors import ONBOARDING_FAILED_MESSAGE, SessionBusyError
from holiday_hero.models.plan import AppData, DayPlan, Profile
from holiday_hero.tools import plan_state
from holiday_hero.tools.plan_generation import generate_plan_and_images
from holiday_hero.tools.storage_io import PersistenceGateway

logger = logging.getLogger(__name__)


PlanGenerator = Callable[[Profile], Awaitable[tuple[list[DayPlan], list[str]]]]


class HolidaySession:
    """
    Holds the snapshot for one installation.

    The snapshot is None until onboarding succeeds. Every state change goes
    through plan_state and is then handed to the gateway; a failed save
    never undoes the in-memory change.
    """

    def __init__(self, gateway: PersistenceGateway, generator: PlanGenerator = generate_plan_and_images):
        self.gateway = gateway
        self.generator = generator
        self._data: Optional[AppData] = None
        self._generating = False
        self._error: Optional[str] = None

    @property
    def data(self) -> Optional[AppData]:
        return self._data

    @property
    def is_onboarded(self) -> bool:
        return self._data is not None

    @property
    def generating(self) -> bool:
        return self._generating

    @property
    def error(self) -> Optional[str]:
        return self._error

    def start(self) -> Optional[AppData]:
        """Load whatever is in the durable slot."""
        self._data = self.gateway.load()
        if self._data is None:
            logger.info("No stored plan, onboarding required")
        else:
            logger.info(f"Loaded plan for {self._data.profile.name if self._data.profile else 'unknown'}")
        return self._data

    async def complete_onboarding(self, profile: Profile) -> Optional[AppData]:
        """
        Generate a plan for profile and commit it.

        Returns the new snapshot, or None on failure (error is then set and
        the session stays in the pre-onboarding state).

        Raises:
            SessionBusyError: if a generation is already running
        """
        if self._generating:
            raise SessionBusyError("plan generation already in progress")

        self._generating = True
        self._error = None
        try:
            plan, images = await self.generator(profile)
            snapshot = plan_state.initialize(profile, plan, images)
        except Exception as e:
            logger.error(f"Onboarding failed: {e}")
            self._error = ONBOARDING_FAILED_MESSAGE
            return None
        finally:
            self._generating = False

        self._data = snapshot
        self.gateway.save(snapshot)
        return snapshot

    def update_task(self, day_index: int, task_id: str, completed: bool) -> Optional[AppData]:
        """Set one task's completion and persist if anything changed."""
        if self._data is None:
            return None

        updated = plan_state.set_task_completion(self._data, day_index, task_id, completed)
        if updated is not self._data:
            self._data = updated
            self.gateway.save(updated)
        return self._data

    def toggle_task(self, day_index: int, task_id: str) -> Optional[AppData]:
        """Flip a task's completion. Unknown references are ignored."""
        if self._data is None or not 0 <= day_index < len(self._data.plan):
            return self.update_task(day_index, task_id, True)

        task = next((t for t in self._data.plan[day_index].tasks if t.id == task_id), None)
        completed = not task.is_completed if task is not None else True
        return self.update_task(day_index, task_id, completed)

    def reset(self) -> None:
        """Clear the durable slot and the in-memory snapshot."""
        plan_state.reset(self.gateway)
        self._data = None

    def dismiss_error(self) -> None:
        self._error = None
