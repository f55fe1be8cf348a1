"""Shared fixtures: profiles, plans and a fake Gemini client."""
import json
from types import SimpleNamespace
from typing import Optional

import pytest

from holiday_hero.models.plan import PLAN_DAYS, DayPlan, EducationLevel, Profile
from holiday_hero.tools.plan_generation import structure_plan
from holiday_hero.tools.storage_io import MemoryKeyValueStore, PersistenceGateway


def raw_day(day_number: int) -> dict:
    return {
        "dayNumber": day_number,
        "morningTask": {"title": f"حفظ {day_number}", "description": "سورة قصيرة"},
        "afternoonTask": {"title": f"لغة {day_number}", "description": "عشر كلمات جديدة"},
        "eveningTask": {"title": f"ورد {day_number}", "description": "قراءة وقصة"},
        "funTask": {"title": f"نشاط {day_number}", "description": "رسم حر"},
    }


def raw_plan(days: int = PLAN_DAYS) -> list[dict]:
    return [raw_day(n) for n in range(1, days + 1)]


class FakeModels:
    """Stands in for client.aio.models; routes by model name."""

    def __init__(self, plan_text: Optional[str], image_results: list, plan_error: Optional[Exception] = None):
        self.plan_text = plan_text
        self.plan_error = plan_error
        self.image_results = list(image_results)
        self.calls: list[dict] = []

    async def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if "image" in model:
            result = self.image_results.pop(0)
            if isinstance(result, Exception):
                raise result
            return result
        if self.plan_error is not None:
            raise self.plan_error
        return SimpleNamespace(text=self.plan_text)


class FakeClient:
    def __init__(self, plan_text=None, image_results=None, plan_error=None):
        if plan_text is None and plan_error is None:
            plan_text = json.dumps(raw_plan(), ensure_ascii=False)
        if image_results is None:
            image_results = [image_response(b"one"), image_response(b"two")]
        self.aio = SimpleNamespace(models=FakeModels(plan_text, image_results, plan_error))

    @property
    def calls(self):
        return self.aio.models.calls


def image_response(data: bytes, mime_type: str = "image/png"):
    part = SimpleNamespace(inline_data=SimpleNamespace(mime_type=mime_type, data=data), text=None)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


def text_only_response():
    part = SimpleNamespace(inline_data=None, text="no image today")
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


@pytest.fixture
def profile() -> Profile:
    return Profile(name="Sara", age=9, level=EducationLevel.PRIMARY, languages=["English"])


@pytest.fixture
def plan() -> list[DayPlan]:
    return structure_plan(raw_plan())


@pytest.fixture
def memory_gateway() -> PersistenceGateway:
    return PersistenceGateway(MemoryKeyValueStore())
