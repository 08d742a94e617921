"""
Reminder derivation rules.

Each rule maps one animal or litter record plus "today" to zero or more
reminders. Rules are pure: the generation instant is passed in (defaulting
to midnight of ``today``) so repeated runs over the same inputs produce the
same reminders.

Visibility windows, in days from today (inclusive):

============  ===========  ===============================
category      window       priority
============  ===========  ===============================
heat          -5 .. +30    high if <= 7 days, else medium
vaccination   -30 .. +60   high if overdue or <= 7, medium
birthday      -2 .. +7     low
deworming     -1 .. +2     high (21, 35 and 49 days old)
vet-visit     -1 .. +2     high (42 days old)
weighing      0            medium (every 3 days up to 21)
============  ===========  ===============================
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Callable, List, Optional, Tuple

from src.domain.entities.animal import AnimalCycleProfile, Litter
from src.domain.entities.reminder import (
    ReminderCategory,
    ReminderPriority,
    ReminderRecord,
    reminder_id,
)
from src.domain.services.interval_estimator import (
    DEFAULT_HEAT_INTERVAL_DAYS,
    estimate_interval,
)
from src.shared.dates import days_between, next_anniversary

HEAT_WINDOW = (-5, 30)
VACCINATION_WINDOW = (-30, 60)
BIRTHDAY_WINDOW = (-2, 7)
URGENT_DAYS = 7

# Days of age at which puppies are dewormed, with the label used in ids.
DEWORMING_AGES: Tuple[Tuple[int, str], ...] = ((21, "3w"), (35, "5w"), (49, "7w"))
VET_VISIT_AGE = 42
# Age range, relative to the target age, during which a litter task shows.
LITTER_TASK_WINDOW = (-2, 1)
WEIGHING_EVERY_DAYS = 3
WEIGHING_UNTIL_DAYS = 21

AnimalRule = Callable[..., List[ReminderRecord]]
LitterRule = Callable[..., List[ReminderRecord]]


def _within(days: int, window: Tuple[int, int]) -> bool:
    return window[0] <= days <= window[1]


def _generated_at(today: date, generated_at: Optional[datetime]) -> datetime:
    return generated_at or datetime.combine(today, time.min)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def next_heat_date(
    profile: AnimalCycleProfile,
    default_interval_days: int = DEFAULT_HEAT_INTERVAL_DAYS,
) -> Optional[date]:
    """Last recorded heat plus the estimated interval."""
    last_heat = profile.last_heat_date()
    if last_heat is None:
        return None
    interval = estimate_interval(profile, default_interval_days)
    return last_heat + timedelta(days=interval.days)


def next_vaccination_date(profile: AnimalCycleProfile, today: date) -> Optional[date]:
    """Nearest non-past anniversary of the last vaccination."""
    if profile.vaccination_date is None:
        return None
    return next_anniversary(profile.vaccination_date, today)


def heat_reminders(
    profile: AnimalCycleProfile,
    today: date,
    *,
    generated_at: Optional[datetime] = None,
    next_heat: Optional[date] = None,
    default_interval_days: int = DEFAULT_HEAT_INTERVAL_DAYS,
) -> List[ReminderRecord]:
    """Upcoming or just started heat of a non-sterilized female."""
    if not profile.is_female or profile.is_sterilized:
        return []

    due = next_heat or next_heat_date(profile, default_interval_days)
    if due is None:
        return []

    days_until = days_between(today, due)
    if not _within(days_until, HEAT_WINDOW):
        return []

    stamp = _generated_at(today, generated_at)
    if days_until < 0:
        title = f"{profile.name}'s Heat Started"
        description = f"Heat started {_plural(-days_until, 'day')} ago"
    else:
        title = f"{profile.name}'s Heat Approaching"
        description = f"Expected heat cycle in {_plural(days_until, 'day')}"

    return [
        ReminderRecord(
            id=reminder_id(ReminderCategory.HEAT.value, profile.id, stamp),
            title=title,
            description=description,
            category=ReminderCategory.HEAT,
            due_date=due,
            priority=(
                ReminderPriority.HIGH
                if days_until <= URGENT_DAYS
                else ReminderPriority.MEDIUM
            ),
            related_id=profile.id,
            generated_at=stamp,
        )
    ]


def vaccination_reminders(
    profile: AnimalCycleProfile,
    today: date,
    *,
    generated_at: Optional[datetime] = None,
) -> List[ReminderRecord]:
    """Yearly booster on the anniversary of the last vaccination."""
    due = next_vaccination_date(profile, today)
    if due is None:
        return []

    days_until = days_between(today, due)
    if not _within(days_until, VACCINATION_WINDOW):
        return []

    if days_until < 0:
        description = f"Vaccination overdue by {_plural(-days_until, 'day')}"
    elif days_until == 0:
        description = "Vaccination due today"
    else:
        description = f"Vaccination due in {_plural(days_until, 'day')}"

    stamp = _generated_at(today, generated_at)
    return [
        ReminderRecord(
            id=reminder_id(ReminderCategory.VACCINATION.value, profile.id, stamp),
            title=f"Vaccination for {profile.name}",
            description=description,
            category=ReminderCategory.VACCINATION,
            due_date=due,
            priority=(
                ReminderPriority.HIGH
                if days_until <= URGENT_DAYS
                else ReminderPriority.MEDIUM
            ),
            related_id=profile.id,
            generated_at=stamp,
        )
    ]


def birthday_reminders(
    profile: AnimalCycleProfile,
    today: date,
    *,
    generated_at: Optional[datetime] = None,
) -> List[ReminderRecord]:
    """Birthday shortly before and after the anniversary."""
    if profile.birth_date is None:
        return []

    birthday = next_anniversary(profile.birth_date, today)
    days_until = days_between(today, birthday)
    if not _within(days_until, BIRTHDAY_WINDOW):
        return []

    age = birthday.year - profile.birth_date.year
    if days_until == 0:
        description = f"{profile.name} turns {age} today!"
    elif days_until > 0:
        description = f"{profile.name} turns {age} in {_plural(days_until, 'day')}"
    else:
        description = (
            f"{profile.name} turned {age} {_plural(-days_until, 'day')} ago"
        )

    stamp = _generated_at(today, generated_at)
    return [
        ReminderRecord(
            id=reminder_id(ReminderCategory.BIRTHDAY.value, profile.id, stamp),
            title=f"{profile.name}'s Birthday",
            description=description,
            category=ReminderCategory.BIRTHDAY,
            due_date=birthday,
            priority=ReminderPriority.LOW,
            related_id=profile.id,
            generated_at=stamp,
        )
    ]


def _litter_age(litter: Litter, today: date) -> Optional[int]:
    if litter.archived:
        return None
    age = days_between(litter.birth_date, today)
    return age if age >= 0 else None


def _litter_task_due(age: int, target_age: int) -> bool:
    return _within(age - target_age, LITTER_TASK_WINDOW)


def deworming_reminders(
    litter: Litter,
    today: date,
    *,
    generated_at: Optional[datetime] = None,
) -> List[ReminderRecord]:
    """Deworming at three, five and seven weeks."""
    age = _litter_age(litter, today)
    if age is None:
        return []

    stamp = _generated_at(today, generated_at)
    ordinals = ("First", "Second", "Third")
    reminders: List[ReminderRecord] = []
    for (target_age, label), ordinal in zip(DEWORMING_AGES, ordinals):
        if not _litter_task_due(age, target_age):
            continue
        reminders.append(
            ReminderRecord(
                id=reminder_id(f"deworming-{label}", litter.id, stamp),
                title=f"Deworm {litter.name} Puppies",
                description=(
                    f"{ordinal} deworming for puppies at {target_age // 7} weeks old"
                ),
                category=ReminderCategory.DEWORMING,
                due_date=litter.birth_date + timedelta(days=target_age),
                priority=ReminderPriority.HIGH,
                related_id=litter.id,
                generated_at=stamp,
            )
        )
    return reminders


def vet_visit_reminders(
    litter: Litter,
    today: date,
    *,
    generated_at: Optional[datetime] = None,
) -> List[ReminderRecord]:
    """Final vet check at six weeks, before puppies leave."""
    age = _litter_age(litter, today)
    if age is None or not _litter_task_due(age, VET_VISIT_AGE):
        return []

    stamp = _generated_at(today, generated_at)
    return [
        ReminderRecord(
            id=reminder_id(ReminderCategory.VET_VISIT.value, litter.id, stamp),
            title=f"Schedule Vet Visit for {litter.name}",
            description=(
                "Book vet appointment for final check before puppies go to new homes"
            ),
            category=ReminderCategory.VET_VISIT,
            due_date=litter.birth_date + timedelta(days=VET_VISIT_AGE),
            priority=ReminderPriority.HIGH,
            related_id=litter.id,
            generated_at=stamp,
        )
    ]


def weighing_reminders(
    litter: Litter,
    today: date,
    *,
    generated_at: Optional[datetime] = None,
) -> List[ReminderRecord]:
    """Weigh-in every third day during the first three weeks."""
    age = _litter_age(litter, today)
    if age is None or age > WEIGHING_UNTIL_DAYS or age % WEIGHING_EVERY_DAYS:
        return []

    stamp = _generated_at(today, generated_at)
    return [
        ReminderRecord(
            id=reminder_id(f"weighing-{age}d", litter.id, stamp),
            title=f"Weigh {litter.name} Puppies",
            description=f"Regular weight tracking at {age} days old",
            category=ReminderCategory.WEIGHING,
            due_date=today,
            priority=ReminderPriority.MEDIUM,
            related_id=litter.id,
            generated_at=stamp,
        )
    ]


ANIMAL_RULES: Tuple[AnimalRule, ...] = (
    heat_reminders,
    vaccination_reminders,
    birthday_reminders,
)

LITTER_RULES: Tuple[LitterRule, ...] = (
    deworming_reminders,
    vet_visit_reminders,
    weighing_reminders,
)
