from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from src.domain.entities.animal import AnimalCycleProfile, Litter, Sex
from src.domain.entities.reminder import ReminderCategory, ReminderPriority
from src.domain.services.reminder_rules import (
    birthday_reminders,
    deworming_reminders,
    heat_reminders,
    next_heat_date,
    next_vaccination_date,
    vaccination_reminders,
    vet_visit_reminders,
    weighing_reminders,
)

BELLA = AnimalCycleProfile(
    id="dog-bella",
    name="Bella",
    sex=Sex.FEMALE,
    birth_date=date(2020, 5, 10),
    heat_dates=[date(2023, 9, 3), date(2024, 3, 1)],
    heat_interval_days=180,
    vaccination_date=date(2023, 6, 5),
)
NEXT_HEAT = date(2024, 8, 28)
LITTER = Litter(id="litter-a", name="A-Litter", birth_date=date(2024, 5, 11))


def _litter_day(age: int) -> date:
    return LITTER.birth_date + timedelta(days=age)


def test_next_heat_date_adds_interval_to_last_heat() -> None:
    assert next_heat_date(BELLA) == NEXT_HEAT
    assert next_heat_date(replace(BELLA, heat_dates=[])) is None
    assert next_heat_date(
        replace(BELLA, heat_interval_days=None), default_interval_days=100
    ) == date(2024, 6, 9)


@pytest.mark.parametrize(
    ("today", "title", "description", "priority"),
    [
        (
            date(2024, 8, 25),
            "Bella's Heat Approaching",
            "Expected heat cycle in 3 days",
            ReminderPriority.HIGH,
        ),
        (
            date(2024, 8, 8),
            "Bella's Heat Approaching",
            "Expected heat cycle in 20 days",
            ReminderPriority.MEDIUM,
        ),
        (
            date(2024, 8, 29),
            "Bella's Heat Started",
            "Heat started 1 day ago",
            ReminderPriority.HIGH,
        ),
    ],
)
def test_heat_reminder_window_and_priority(today, title, description, priority):
    reminders = heat_reminders(BELLA, today)

    assert len(reminders) == 1
    reminder = reminders[0]
    assert reminder.title == title
    assert reminder.description == description
    assert reminder.priority is priority
    assert reminder.category is ReminderCategory.HEAT
    assert reminder.due_date == NEXT_HEAT
    assert reminder.related_id == "dog-bella"
    assert reminder.completed is False


@pytest.mark.parametrize(
    "today", [date(2024, 7, 28), date(2024, 9, 3), date(2024, 6, 1)]
)
def test_heat_reminder_outside_window(today) -> None:
    assert heat_reminders(BELLA, today) == []


def test_heat_reminder_window_edges() -> None:
    assert heat_reminders(BELLA, NEXT_HEAT - timedelta(days=30))
    assert heat_reminders(BELLA, NEXT_HEAT + timedelta(days=5))


def test_heat_reminder_skips_males_sterilized_and_unknown_history() -> None:
    today = date(2024, 8, 25)

    assert heat_reminders(replace(BELLA, sex=Sex.MALE), today) == []
    assert (
        heat_reminders(replace(BELLA, sterilization_date=date(2024, 1, 1)), today)
        == []
    )
    assert heat_reminders(replace(BELLA, heat_dates=[]), today) == []


def test_heat_reminder_accepts_precomputed_next_heat() -> None:
    reminders = heat_reminders(BELLA, date(2024, 6, 1), next_heat=date(2024, 6, 4))

    assert reminders[0].due_date == date(2024, 6, 4)


def test_reminders_are_deterministic_for_the_same_day() -> None:
    today = date(2024, 8, 25)

    first = heat_reminders(BELLA, today)
    second = heat_reminders(BELLA, today)

    assert first == second
    assert first[0].generated_at == datetime(2024, 8, 25)
    stamp = int(datetime(2024, 8, 25).timestamp() * 1000)
    assert first[0].id == f"heat-dog-bella-{stamp}"


def test_explicit_generation_instant_drives_the_id() -> None:
    generated_at = datetime(2024, 8, 25, 5, 0)

    reminder = heat_reminders(BELLA, date(2024, 8, 25), generated_at=generated_at)[0]

    assert reminder.generated_at == generated_at
    assert reminder.id.endswith(str(int(generated_at.timestamp() * 1000)))


def test_next_vaccination_date_picks_nearest_non_past_anniversary() -> None:
    profile = replace(BELLA, vaccination_date=date(2023, 3, 10))

    assert next_vaccination_date(profile, date(2024, 3, 5)) == date(2024, 3, 10)
    assert next_vaccination_date(profile, date(2024, 3, 10)) == date(2024, 3, 10)
    assert next_vaccination_date(profile, date(2024, 4, 1)) == date(2025, 3, 10)
    unvaccinated = replace(BELLA, vaccination_date=None)
    assert next_vaccination_date(unvaccinated, date(2024, 1, 1)) is None


def test_vaccination_reminder_priorities() -> None:
    soon = vaccination_reminders(BELLA, date(2024, 6, 1))[0]
    today = vaccination_reminders(BELLA, date(2024, 6, 5))[0]
    later = vaccination_reminders(BELLA, date(2024, 4, 10))[0]

    assert soon.priority is ReminderPriority.HIGH
    assert soon.description == "Vaccination due in 4 days"
    assert soon.title == "Vaccination for Bella"
    assert today.description == "Vaccination due today"
    assert later.priority is ReminderPriority.MEDIUM
    assert later.due_date == date(2024, 6, 5)


def test_vaccination_reminder_outside_window() -> None:
    assert vaccination_reminders(BELLA, date(2024, 3, 1)) == []
    unvaccinated = replace(BELLA, vaccination_date=None)
    assert vaccination_reminders(unvaccinated, date(2024, 6, 1)) == []


def test_birthday_reminder() -> None:
    upcoming = birthday_reminders(BELLA, date(2024, 5, 8))[0]
    on_the_day = birthday_reminders(BELLA, date(2024, 5, 10))[0]

    assert upcoming.description == "Bella turns 4 in 2 days"
    assert upcoming.priority is ReminderPriority.LOW
    assert upcoming.title == "Bella's Birthday"
    assert on_the_day.description == "Bella turns 4 today!"
    assert birthday_reminders(BELLA, date(2024, 5, 2)) == []
    assert birthday_reminders(replace(BELLA, birth_date=None), date(2024, 5, 10)) == []


def test_birthday_on_leap_day_falls_back_to_feb_28() -> None:
    leap = replace(BELLA, birth_date=date(2020, 2, 29))

    reminder = birthday_reminders(leap, date(2023, 2, 27))[0]

    assert reminder.due_date == date(2023, 2, 28)


@pytest.mark.parametrize(
    ("age", "label", "due_age"),
    [
        (19, "3w", 21),
        (21, "3w", 21),
        (22, "3w", 21),
        (35, "5w", 35),
        (50, "7w", 49),
    ],
)
def test_deworming_reminders(age, label, due_age) -> None:
    reminders = deworming_reminders(LITTER, _litter_day(age))

    assert len(reminders) == 1
    assert reminders[0].id.startswith(f"deworming-{label}-litter-a-")
    assert reminders[0].due_date == _litter_day(due_age)
    assert reminders[0].priority is ReminderPriority.HIGH
    assert reminders[0].category is ReminderCategory.DEWORMING


@pytest.mark.parametrize("age", [18, 23, 28, 52])
def test_deworming_outside_window(age) -> None:
    assert deworming_reminders(LITTER, _litter_day(age)) == []


def test_vet_visit_reminder_at_six_weeks() -> None:
    reminders = vet_visit_reminders(LITTER, _litter_day(42))

    assert reminders[0].title == "Schedule Vet Visit for A-Litter"
    assert reminders[0].due_date == _litter_day(42)
    assert vet_visit_reminders(LITTER, _litter_day(44)) == []


@pytest.mark.parametrize(
    ("age", "expected"), [(0, 1), (3, 1), (21, 1), (22, 0), (24, 0)]
)
def test_weighing_every_third_day(age, expected) -> None:
    reminders = weighing_reminders(LITTER, _litter_day(age))

    assert len(reminders) == expected
    if reminders:
        assert reminders[0].id.startswith(f"weighing-{age}d-litter-a-")
        assert reminders[0].due_date == _litter_day(age)


def test_archived_or_unborn_litters_have_no_tasks() -> None:
    archived = replace(LITTER, archived=True)

    for rule in (deworming_reminders, vet_visit_reminders, weighing_reminders):
        assert rule(archived, _litter_day(21)) == []
        assert rule(LITTER, _litter_day(-3)) == []
