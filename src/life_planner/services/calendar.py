"""iCalendar export for planned time blocks and meals."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from icalendar import Calendar, Event

from life_planner.domain.meals import MealRecord
from life_planner.domain.time_blocks import TimeBlockRecord
from life_planner.services.planner import PlannerServices
from life_planner.services.time_blocks import MEAL_CATEGORY, meal_slot_start

PRODUCT_ID = "-//Life Planner//EN"
UID_DOMAIN = "lifeplanner"
MEAL_EVENT_DURATION = timedelta(hours=1)


def build_calendar(
    time_blocks: Iterable[TimeBlockRecord],
    meals: Iterable[MealRecord] = (),
    timezone_name: str = "UTC",
) -> bytes:
    """Return an iCalendar document for the given records."""
    calendar = Calendar()
    calendar.add("prodid", PRODUCT_ID)
    calendar.add("version", "2.0")
    calendar.add("calscale", "GREGORIAN")
    calendar.add("method", "PUBLISH")
    stamp = datetime.now(tz=UTC)
    booked_meal_slots = set()
    for block in time_blocks:
        calendar.add_component(_time_block_event(block, stamp))
        if block.category == MEAL_CATEGORY:
            booked_meal_slots.add(_as_utc(block.start_time))
    for meal in meals:
        if meal.planned_date is None:
            continue
        start = meal_slot_start(meal.meal_type, meal.planned_date, timezone_name)
        # Meals scheduled through the assistant already have a meal block.
        if _as_utc(start) in booked_meal_slots:
            continue
        calendar.add_component(_meal_event(meal, start, stamp))
    return calendar.to_ical()


def _time_block_event(block: TimeBlockRecord, stamp: datetime) -> Event:
    category = block.category or "general"
    description = f"Category: {block.category or 'General'}"
    if block.linked_task_id:
        description += "\nLinked to task"
    event = Event()
    event.add("uid", f"timeblock-{block.id}@{UID_DOMAIN}")
    event.add("dtstamp", stamp)
    event.add("dtstart", _as_utc(block.start_time))
    event.add("dtend", _as_utc(block.end_time))
    event.add("summary", block.title or "Time Block")
    event.add("description", description)
    event.add("categories", [category])
    event.add("status", "CONFIRMED")
    return event


def _meal_event(meal: MealRecord, start: datetime, stamp: datetime) -> Event:
    lines = []
    if meal.instructions:
        lines.append(f"Instructions: {meal.instructions}")
    if meal.calories:
        lines.append(f"Calories: {meal.calories}")
    if meal.ingredients:
        lines.append(f"Ingredients: {', '.join(meal.ingredients)}")
    event = Event()
    event.add("uid", f"meal-{meal.id}@{UID_DOMAIN}")
    event.add("dtstamp", stamp)
    event.add("dtstart", _as_utc(start))
    event.add("dtend", _as_utc(start + MEAL_EVENT_DURATION))
    event.add("summary", f"{meal.meal_type or 'Meal'}: {meal.name}")
    if lines:
        event.add("description", "\n".join(lines))
    event.add("categories", ["nutrition"])
    event.add("status", "CONFIRMED")
    return event


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass
class CalendarService:
    """Builds calendar exports for one owner."""

    services: PlannerServices

    def export(self, include_meals: bool = False) -> bytes:
        """Return the owner's schedule as an iCalendar document."""
        blocks = self.services.time_blocks.get_all()
        meals = self.services.meals.get_all() if include_meals else []
        return build_calendar(blocks, meals, self.services.timezone)
