"""Tests for holiday_hero.tools.plan_generation (Gemini mocked)."""
import asyncio
import json
import random
from types import SimpleNamespace

import pytest

from conftest import FakeClient, image_response, raw_day, raw_plan, text_only_response
from holiday_hero.errors import PLAN_GENERATION_FAILED_MESSAGE, PlanGenerationError
from holiday_hero.models.plan import TASK_TYPE_ORDER, TaskType
from holiday_hero.tools import plan_generation
from holiday_hero.tools.plan_generation import (
    IMAGE_PROMPTS,
    build_plan_prompt,
    generate_holiday_plan,
    generate_inspirational_images,
    generate_plan_and_images,
    generate_single_image,
    structure_plan,
)


def test_structure_plan_synthesizes_ids_and_types() -> None:
    plan = structure_plan(raw_plan())
    assert len(plan) == 15
    day3 = plan[2]
    assert [t.id for t in day3.tasks] == [
        "day-3-morningTask", "day-3-afternoonTask", "day-3-eveningTask", "day-3-funTask",
    ]
    assert tuple(t.type for t in day3.tasks) == TASK_TYPE_ORDER
    assert day3.tasks[3].type is TaskType.FUN
    assert not any(t.is_completed for d in plan for t in d.tasks)


def test_structure_plan_ids_unique_across_plan() -> None:
    ids = [t.id for d in structure_plan(raw_plan()) for t in d.tasks]
    assert len(ids) == len(set(ids)) == 60


def test_structure_plan_sorts_days() -> None:
    days = raw_plan()
    random.Random(7).shuffle(days)
    assert [d.day_number for d in structure_plan(days)] == list(range(1, 16))


@pytest.mark.parametrize("raw", [
    raw_plan(14),
    raw_plan() + [raw_day(16)],
    raw_plan(14) + [raw_day(14)],
    {"days": raw_plan()},
])
def test_structure_plan_rejects_wrong_shape(raw) -> None:
    with pytest.raises(ValueError):
        structure_plan(raw)


def test_structure_plan_rejects_missing_task() -> None:
    days = raw_plan()
    del days[5]["funTask"]
    with pytest.raises(ValueError):
        structure_plan(days)


def test_build_plan_prompt_mentions_profile(profile) -> None:
    prompt = build_plan_prompt(profile)
    assert "Sara" in prompt
    assert "Age: 9" in prompt
    assert "ابتدائي" in prompt
    assert "English" in prompt
    assert "ARABIC" in prompt


def test_generate_holiday_plan_success(profile) -> None:
    client = FakeClient()
    plan = asyncio.run(generate_holiday_plan(profile, client))

    assert len(plan) == 15
    call = client.calls[0]
    assert call["config"].response_mime_type == "application/json"
    assert call["contents"] == build_plan_prompt(profile)


@pytest.mark.parametrize("client", [
    FakeClient(plan_text="not json"),
    FakeClient(plan_text=json.dumps(raw_plan(3))),
    FakeClient(plan_text=""),
    FakeClient(plan_error=ConnectionError("offline")),
])
def test_generate_holiday_plan_failures_are_opaque(profile, client) -> None:
    with pytest.raises(PlanGenerationError) as exc_info:
        asyncio.run(generate_holiday_plan(profile, client))
    assert exc_info.value.message == PLAN_GENERATION_FAILED_MESSAGE
    assert exc_info.value.cause is not None


def test_missing_api_key_fails_generation(profile, monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(PlanGenerationError):
        asyncio.run(generate_holiday_plan(profile))


def test_single_image_returns_data_uri() -> None:
    client = FakeClient(image_results=[image_response(b"\x89PNG")])
    image = asyncio.run(generate_single_image("a desk", client))
    assert image == "data:image/png;base64,iVBORw=="


def test_single_image_accepts_base64_text() -> None:
    client = FakeClient(image_results=[image_response("QUJD", mime_type="image/jpeg")])
    assert asyncio.run(generate_single_image("a desk", client)) == "data:image/jpeg;base64,QUJD"


def test_single_image_without_inline_data_is_none() -> None:
    client = FakeClient(image_results=[text_only_response()])
    assert asyncio.run(generate_single_image("a desk", client)) is None


def test_single_image_error_is_swallowed() -> None:
    client = FakeClient(image_results=[RuntimeError("quota")])
    assert asyncio.run(generate_single_image("a desk", client)) is None


def test_inspirational_images_uses_fixed_prompts() -> None:
    client = FakeClient()
    images = asyncio.run(generate_inspirational_images(client))
    assert len(images) == 2
    assert sorted(c["contents"] for c in client.calls) == sorted(IMAGE_PROMPTS)


def test_inspirational_images_drop_failures() -> None:
    client = FakeClient(image_results=[RuntimeError("boom"), image_response(b"ok")])
    assert len(asyncio.run(generate_inspirational_images(client))) == 1


def test_plan_and_images_survive_image_failures(profile) -> None:
    client = FakeClient(image_results=[RuntimeError("boom"), RuntimeError("boom")])
    plan, images = asyncio.run(generate_plan_and_images(profile, client))
    assert len(plan) == 15
    assert images == []


def test_plan_failure_aborts_everything(profile) -> None:
    client = FakeClient(plan_error=TimeoutError("slow"))
    with pytest.raises(PlanGenerationError):
        asyncio.run(generate_plan_and_images(profile, client))


def test_plan_model_can_be_overridden(profile, monkeypatch) -> None:
    monkeypatch.setenv("HOLIDAY_HERO_PLAN_MODEL", "gemini-test")
    client = FakeClient()
    asyncio.run(plan_generation.generate_holiday_plan(profile, client))
    assert client.calls[0]["model"] == "gemini-test"


class HangingImageModels:
    """Image calls never finish; the plan call fails after they start."""

    def __init__(self):
        self.images_started = 0
        self.images_cancelled = 0

    async def generate_content(self, model, contents, config=None):
        if "image" in model:
            self.images_started += 1
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.images_cancelled += 1
                raise
        for _ in range(5):
            await asyncio.sleep(0)
        raise ConnectionError("offline")


def test_plan_failure_cancels_pending_images(profile) -> None:
    models = HangingImageModels()
    client = SimpleNamespace(aio=SimpleNamespace(models=models))

    async def scenario():
        with pytest.raises(PlanGenerationError):
            await generate_plan_and_images(profile, client)
        for _ in range(5):
            await asyncio.sleep(0)

    asyncio.run(scenario())
    assert models.images_started == len(IMAGE_PROMPTS)
    assert models.images_cancelled == len(IMAGE_PROMPTS)
