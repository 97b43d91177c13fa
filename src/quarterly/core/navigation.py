"""Quarter/year navigation state machine."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import date

from .dates import check_quarter, format_quarter, quarter_info
from .period import QuarterView, View, ViewMode, YearView

logger = logging.getLogger(__name__)

NavigateCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class NavigationBounds:
    """Inclusive year range navigation may not leave."""

    min_year: int
    max_year: int

    def __post_init__(self) -> None:
        if self.min_year > self.max_year:
            raise ValueError(f"min_year {self.min_year} is after max_year {self.max_year}")

    def contains(self, year: int) -> bool:
        return self.min_year <= year <= self.max_year


@dataclass(frozen=True)
class NavigationState:
    year: int
    quarter: int
    mode: ViewMode = ViewMode.QUARTER

    @property
    def view(self) -> View:
        if self.mode is ViewMode.YEAR:
            return YearView(self.year)
        return QuarterView(self.year, self.quarter)

    @property
    def label(self) -> str:
        if self.mode is ViewMode.YEAR:
            return str(self.year)
        return format_quarter(self.year, self.quarter)


def step(state: NavigationState, delta: int) -> NavigationState:
    """
    Move one period forward (delta=1) or back (delta=-1).

    Quarter mode wraps Q4 -> Q1 of the next year and Q1 -> Q4 of the
    previous one. Year mode moves the year and keeps the quarter.
    """
    if state.mode is ViewMode.YEAR:
        return replace(state, year=state.year + delta)

    quarter = state.quarter + delta
    year = state.year
    if quarter < 1:
        quarter, year = 4, year - 1
    elif quarter > 4:
        quarter, year = 1, year + 1
    return replace(state, year=year, quarter=quarter)


class QuarterNavigator:
    """
    Holds the current (year, quarter, mode) and moves it on user action.

    Transitions that would leave `bounds` are no-ops. Every transition that
    changes state calls `on_navigate(year, quarter)`.
    """

    def __init__(
        self,
        year: int | None = None,
        quarter: int | None = None,
        mode: ViewMode = ViewMode.QUARTER,
        *,
        today: Callable[[], date] = date.today,
        bounds: NavigationBounds | None = None,
        on_navigate: NavigateCallback | None = None,
    ):
        self._today = today
        self.bounds = bounds
        self.on_navigate = on_navigate

        now_year, now_quarter = quarter_info(today())
        quarter = quarter if quarter is not None else now_quarter
        check_quarter(quarter)
        self._state = NavigationState(
            year=year if year is not None else now_year,
            quarter=quarter,
            mode=ViewMode(mode),
        )

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def year(self) -> int:
        return self._state.year

    @property
    def quarter(self) -> int:
        return self._state.quarter

    @property
    def mode(self) -> ViewMode:
        return self._state.mode

    @property
    def view(self) -> View:
        return self._state.view

    @property
    def label(self) -> str:
        return self._state.label

    def _move_to(self, target: NavigationState) -> bool:
        if self.bounds and not self.bounds.contains(target.year):
            logger.debug(f"Navigation to {target.label} blocked by bounds {self.bounds}")
            return False
        if target == self._state:
            return False
        self._state = target
        logger.debug(f"Navigated to {target.label}")
        if self.on_navigate:
            self.on_navigate(target.year, target.quarter)
        return True

    def previous(self) -> bool:
        return self._move_to(step(self._state, -1))

    def next(self) -> bool:
        return self._move_to(step(self._state, 1))

    def go_to_quarter(self, year: int, quarter: int) -> bool:
        check_quarter(quarter)
        return self._move_to(replace(self._state, year=year, quarter=quarter))

    def go_to_today(self) -> bool:
        year, quarter = quarter_info(self._today())
        return self.go_to_quarter(year, quarter)

    def set_mode(self, mode: ViewMode | str) -> None:
        """Switch between quarter and year view; year and quarter are kept."""
        self._state = replace(self._state, mode=ViewMode(mode))

    @property
    def can_go_back(self) -> bool:
        if not self.bounds:
            return True
        if self.mode is ViewMode.YEAR:
            return self.year > self.bounds.min_year
        return self.year > self.bounds.min_year or (
            self.year == self.bounds.min_year and self.quarter > 1
        )

    @property
    def can_go_forward(self) -> bool:
        if not self.bounds:
            return True
        if self.mode is ViewMode.YEAR:
            return self.year < self.bounds.max_year
        return self.year < self.bounds.max_year or (
            self.year == self.bounds.max_year and self.quarter < 4
        )
