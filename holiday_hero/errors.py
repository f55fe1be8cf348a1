"""Exception types raised across the holiday planner."""
from typing import Optional


# User-facing messages, shown verbatim by the front end
PLAN_GENERATION_FAILED_MESSAGE = "فشل في إنشاء الخطة، يرجى المحاولة مرة أخرى."
ONBOARDING_FAILED_MESSAGE = "حدث خطأ أثناء إنشاء الخطة، تأكد من الاتصال بالإنترنت."


class HolidayHeroError(Exception):
    """Base class for planner errors."""


class PlanGenerationError(HolidayHeroError):
    """Plan generation failed; no partial plan is ever returned."""

    def __init__(self, message: str = PLAN_GENERATION_FAILED_MESSAGE, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidPlanError(HolidayHeroError, ValueError):
    """Plan does not satisfy the 15-day / 4-task invariants."""


class SessionBusyError(HolidayHeroError):
    """Onboarding was submitted again while a plan is still being generated."""
