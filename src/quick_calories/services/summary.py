"""Daily, weekly and monthly progress against targets."""

import calendar
from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import TypeVar
from zoneinfo import ZoneInfo

from quick_calories.domain.entries import FoodEntry, WorkoutEntry
from quick_calories.domain.stats import DailySummary, DailyTotals, DayHistory
from quick_calories.services.entries import EntryRepository
from quick_calories.services.user_settings import UserSettingsService

DAYS_PER_WEEK = 7

_Logged = TypeVar("_Logged", FoodEntry, WorkoutEntry)


@dataclass
class SummaryService:
    """Aggregates logged entries per local calendar day."""

    repository: EntryRepository
    settings_service: UserSettingsService
    timezone_name: str | None = None

    def today(self) -> date:
        return self._local_date(datetime.now(tz=UTC))

    def get_day(self, day: date | None = None) -> DailySummary:
        """Return intake, workouts and targets for a day (default today)."""
        day = day or self.today()
        start, end = self._bounds(day)
        entries = self.repository.list_food_entries(start, end)
        workouts = self.repository.list_workouts(start, end)
        return DailySummary(
            totals=_aggregate_day(day, entries),
            workout_calories=sum(workout.calories_burned for workout in workouts),
            targets=self.settings_service.get_targets(),
        )

    def get_week(self, end_day: date | None = None) -> list[DailyTotals]:
        """Return seven days of totals ending at ``end_day``, oldest first."""
        end_day = end_day or self.today()
        first_day = end_day - timedelta(days=DAYS_PER_WEEK - 1)
        start, _ = self._bounds(first_day)
        _, end = self._bounds(end_day)
        by_day = self._group_by_day(self.repository.list_food_entries(start, end))
        return [
            _aggregate_day(day, by_day.get(day, []))
            for day in (first_day + timedelta(days=i) for i in range(DAYS_PER_WEEK))
        ]

    def get_month(self, year: int, month: int) -> list[DayHistory]:
        """Return every day of a month with net calories and the goal flag.

        The current calorie target applies to every day, past ones included.
        """
        days_in_month = calendar.monthrange(year, month)[1]
        first_day = date(year, month, 1)
        last_day = date(year, month, days_in_month)
        start, _ = self._bounds(first_day)
        _, end = self._bounds(last_day)
        entries = self.repository.list_food_entries(start, end)
        workouts = self.repository.list_workouts(start, end)
        entries_by_day = self._group_by_day(entries)
        workouts_by_day = self._group_by_day(workouts)
        target = self.settings_service.get_targets().calories

        history: list[DayHistory] = []
        for offset in range(days_in_month):
            day = first_day + timedelta(days=offset)
            day_entries = entries_by_day.get(day, [])
            day_workouts = workouts_by_day.get(day, [])
            history.append(
                DayHistory(
                    totals=_aggregate_day(day, day_entries),
                    workout_calories=sum(w.calories_burned for w in day_workouts),
                    calorie_target=target,
                    entry_count=len(day_entries),
                )
            )
        return history

    def _group_by_day(self, items: list[_Logged]) -> dict[date, list[_Logged]]:
        by_day: dict[date, list[_Logged]] = {}
        for item in items:
            by_day.setdefault(self._local_date(item.logged_at), []).append(item)
        return by_day

    def _bounds(self, day: date) -> tuple[datetime, datetime]:
        return self._midnight(day), self._midnight(day + timedelta(days=1))

    def _midnight(self, day: date) -> datetime:
        # Each midnight takes the UTC offset in effect on that day.
        if self.timezone_name:
            local = datetime.combine(day, time.min, tzinfo=ZoneInfo(self.timezone_name))
        else:
            local = datetime.combine(day, time.min).astimezone()
        return local.astimezone(UTC)

    def _local_date(self, moment: datetime) -> date:
        if self.timezone_name:
            return moment.astimezone(ZoneInfo(self.timezone_name)).date()
        return moment.astimezone().date()


def _aggregate_day(day: date, entries: list[FoodEntry]) -> DailyTotals:
    return DailyTotals(
        day=day,
        calories=sum(entry.calories for entry in entries),
        protein=sum(entry.protein for entry in entries),
        carbs=sum(entry.carbs for entry in entries),
        fat=sum(entry.fat for entry in entries),
    )
