"""Generate the 15-day holiday plan and inspirational images with Gemini."""
import asyncio
import base64
import json
import logging
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, ValidationError

from holiday_hero import config
from holiday_hero.errors import PlanGenerationError
from holiday_hero.models.plan import PLAN_DAYS, DayPlan, Profile, Task, TaskType

logger = logging.getLogger(__name__)


SYSTEM_INSTRUCTION = (
    "You are an expert Islamic educator and child development specialist. "
    "You create engaging, balanced plans for Muslim children."
)

# Fixed scenes, independent of the profile
IMAGE_PROMPTS = [
    "A bright and cheerful illustration of a clean study desk for a child with colorful books, "
    "pencils, a small plant, and sunlight streaming through a window with Islamic geometric "
    "patterns. No humans, no faces. 3D cartoon style, high quality, vibrant colors.",
    "A cozy evening scene with a glowing lantern, an open book, and a cup of tea on a wooden "
    "table. Background of a dark blue starry sky through a window. Islamic art style. "
    "No humans, no faces. Magical atmosphere.",
]


class RawTask(BaseModel):
    """Task stub as returned by the model."""
    title: str
    description: str


class RawDayPlan(BaseModel):
    """Day object as returned by the model (wire field names)."""
    dayNumber: int
    morningTask: RawTask
    afternoonTask: RawTask
    eveningTask: RawTask
    funTask: RawTask


# Wire field -> task type, in daily order. The field name doubles as the id tag.
RAW_TASK_FIELDS: list[tuple[str, TaskType]] = [
    ("morningTask", TaskType.QURAN_MORNING),
    ("afternoonTask", TaskType.LANGUAGE),
    ("eveningTask", TaskType.QURAN_EVENING),
    ("funTask", TaskType.FUN),
]


def make_client() -> genai.Client:
    """Create a Gemini client from GOOGLE_API_KEY / GEMINI_API_KEY."""
    api_key = config.get_api_key()
    if not api_key:
        raise PlanGenerationError(cause=RuntimeError("GOOGLE_API_KEY not found"))
    return genai.Client(api_key=api_key)


def build_plan_prompt(profile: Profile) -> str:
    """Prompt asking for a 15-day Arabic plan tailored to the profile."""
    languages = ", ".join(profile.languages)
    return f"""Create a {PLAN_DAYS}-day holiday plan for a student with the following profile:
Name: {profile.name}
Age: {profile.age}
Education Level: {profile.level.value}
Target Languages to learn: {languages}.

The output MUST be in ARABIC language.

For each day, provide 4 distinct activities:
1. Morning Task: Quran memorization (adjust amount based on age/level. e.g., small Surahs for young kids, pages for older).
2. Afternoon Task: Language learning activity (interactive, games, vocab) based on target languages.
3. Evening Task: Quran reading (Wird) + Islamic/Moral Story reading.
4. Fun Task: A creative, physical, or family activity (drawing, puzzle, challenge, discussion).

Number the days dayNumber 1 to {PLAN_DAYS}.
Ensure the tone is encouraging and suitable for a {profile.age} year old."""


def task_id_for(day_number: int, tag: str) -> str:
    """Plan-wide unique task id, e.g. day-3-funTask."""
    return f"day-{day_number}-{tag}"


def structure_plan(raw_days: list[Any]) -> list[DayPlan]:
    """
    Validate the raw model output and turn it into DayPlans.

    Raises:
        ValueError: wrong day count or numbering
        ValidationError: a day object is missing fields
    """
    if not isinstance(raw_days, list):
        raise ValueError(f"expected a JSON array of days, got {type(raw_days).__name__}")

    days = sorted((RawDayPlan.model_validate(d) for d in raw_days), key=lambda d: d.dayNumber)

    numbers = [d.dayNumber for d in days]
    if numbers != list(range(1, PLAN_DAYS + 1)):
        raise ValueError(f"expected days 1..{PLAN_DAYS}, got {numbers}")

    plan = []
    for raw in days:
        tasks = []
        for field, task_type in RAW_TASK_FIELDS:
            stub: RawTask = getattr(raw, field)
            tasks.append(Task(
                id=task_id_for(raw.dayNumber, field),
                title=stub.title,
                description=stub.description,
                is_completed=False,
                type=task_type,
            ))
        plan.append(DayPlan(day_number=raw.dayNumber, tasks=tasks))
    return plan


async def generate_holiday_plan(profile: Profile, client: Optional[genai.Client] = None) -> list[DayPlan]:
    """
    Ask Gemini for the plan and validate it.

    All or nothing: any failure (network, bad JSON, wrong shape) raises
    PlanGenerationError and no partial plan is returned.
    """
    try:
        client = client or make_client()
        logger.info(f"Requesting {PLAN_DAYS}-day plan for {profile.name} (age {profile.age})")

        response = await client.aio.models.generate_content(
            model=config.get_plan_model(),
            contents=build_plan_prompt(profile),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=list[RawDayPlan],
                system_instruction=SYSTEM_INSTRUCTION,
            )
        )
        logger.debug(f"Raw plan response: {response.text}")

        raw_days = json.loads(response.text or "[]")
        plan = structure_plan(raw_days)

    except PlanGenerationError:
        raise
    except ValidationError as e:
        logger.error(f"Plan response failed validation: {e}")
        raise PlanGenerationError(cause=e) from e
    except Exception as e:
        logger.error(f"Gemini generation error: {e}")
        raise PlanGenerationError(cause=e) from e

    logger.info(f"Plan generated: {len(plan)} days")
    return plan


def _image_data_uri(response: Any) -> Optional[str]:
    """First inline image in the response as a data URI, or None."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates or candidates[0].content is None:
        return None

    for part in candidates[0].content.parts or []:
        inline = getattr(part, "inline_data", None)
        if inline is None or not inline.data:
            continue
        data = inline.data
        if isinstance(data, bytes):
            data = base64.b64encode(data).decode("ascii")
        return f"data:{inline.mime_type};base64,{data}"
    return None


async def generate_single_image(prompt: str, client: Optional[genai.Client] = None) -> Optional[str]:
    """Generate one image. Failures are logged and yield None."""
    try:
        client = client or make_client()
        response = await client.aio.models.generate_content(
            model=config.get_image_model(),
            contents=prompt,
        )
        image = _image_data_uri(response)
        if image is None:
            logger.warning("Image response contained no inline image")
        return image
    except Exception as e:
        logger.warning(f"Image generation failed: {e}")
        return None


async def generate_inspirational_images(client: Optional[genai.Client] = None) -> list[str]:
    """Generate the fixed scenes in parallel, keeping only the ones that worked."""
    results = await asyncio.gather(*(generate_single_image(p, client) for p in IMAGE_PROMPTS))
    images = [img for img in results if img is not None]
    logger.info(f"Generated {len(images)}/{len(IMAGE_PROMPTS)} images")
    return images


async def generate_plan_and_images(
    profile: Profile,
    client: Optional[genai.Client] = None
) -> tuple[list[DayPlan], list[str]]:
    """
    Run plan and image generation concurrently.

    Plan failure raises PlanGenerationError. Image failures only shrink the
    image list. Pending image calls are cancelled when the plan fails.
    """
    client = client or make_client()
    images_task = asyncio.ensure_future(generate_inspirational_images(client))
    try:
        plan = await generate_holiday_plan(profile, client)
    except PlanGenerationError:
        images_task.cancel()
        logger.info("Plan failed, cancelled pending image generation")
        raise
    images = await images_task
    return plan, images
