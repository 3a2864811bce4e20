"""
Classroom Enrollment Forecaster.

Covers:
- Age-band placement of every child at an arbitrary target date
- Per-classroom rosters, graduation countdowns and capacity alerts
- +/- 12 month enrollment trend per classroom
- Upcoming classroom transitions and children no band accepts

Classrooms are ordered by age band before use. The "next" classroom of a
band is the following one only when the bands are contiguous
(next.min_age_months == this.max_age_months).
"""
import math
import logging
from datetime import date
from typing import Dict, Any, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from enum import Enum

from app.utils.date_utils import months_between, add_months, month_label, format_age_months

logger = logging.getLogger(__name__)


class AlertType(Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    OPPORTUNITY = "opportunity"


class CapacityStatus(Enum):
    OVER = "over"
    NEAR = "near"
    NORMAL = "normal"
    PLENTY = "plenty"


class UnplacedReason(Enum):
    NOT_BORN = "not_born"
    TOO_YOUNG = "too_young"
    AGED_OUT = "aged_out"
    GAP = "gap"


def _spots(n: int) -> str:
    return f"{n} spot{'s' if n != 1 else ''}"


def order_classrooms(classrooms: Sequence[Any]) -> List[Any]:
    """Sort classrooms by age band (then id) so adjacency never depends on insertion order."""
    return sorted(classrooms, key=lambda c: (c.min_age_months, c.max_age_months, c.id))


@dataclass
class RosterEntry:
    """A child placed in a classroom at the target date."""
    child_id: int
    name: str
    birth_date: date
    age_months: int
    months_until_graduation: int
    graduating_soon: bool
    graduating_next_month: bool
    next_classroom_id: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "childId": self.child_id,
            "name": self.name,
            "birthDate": self.birth_date.isoformat(),
            "ageMonths": self.age_months,
            "ageLabel": format_age_months(self.age_months),
            "monthsUntilGraduation": self.months_until_graduation,
            "graduatingSoon": self.graduating_soon,
            "graduatingNextMonth": self.graduating_next_month,
            "nextClassroomId": self.next_classroom_id
        }


@dataclass
class CapacityAlert:
    """Qualitative capacity alert for one classroom."""
    classroom_id: int
    type: AlertType
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classroomId": self.classroom_id,
            "type": self.type.value,
            "message": self.message
        }


@dataclass
class TrendPoint:
    """Enrollment of one classroom at a month offset from the target date."""
    offset: int
    date: date
    enrolled: int
    capacity: int

    @property
    def month(self) -> str:
        return month_label(self.date)

    @property
    def is_forecast(self) -> bool:
        return self.offset > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offset": self.offset,
            "month": self.month,
            "date": self.date.isoformat(),
            "enrolled": self.enrolled,
            "capacity": self.capacity,
            "isForecast": self.is_forecast
        }


@dataclass
class ClassroomForecast:
    """Rollup for a single classroom at the target date."""
    classroom_id: int
    name: str
    color: str
    ratio: str
    min_age_months: int
    max_age_months: int
    capacity: int
    next_classroom_id: Optional[int]
    enrolled: List[RosterEntry]
    alert: Optional[CapacityAlert] = None
    trend: List[TrendPoint] = field(default_factory=list)

    # Display threshold for "lots of space"
    PLENTY_RATIO = 0.5
    # Seats-left wording switches to "Only N left" at or below this
    FEW_SEATS = 2

    @property
    def enrolled_count(self) -> int:
        return len(self.enrolled)

    @property
    def vacancies(self) -> int:
        return self.capacity - self.enrolled_count

    @property
    def capacity_ratio(self) -> float:
        return self.enrolled_count / self.capacity

    @property
    def graduating_soon(self) -> List[RosterEntry]:
        return [entry for entry in self.enrolled if entry.graduating_soon]

    @property
    def graduating_next_month(self) -> int:
        return sum(1 for entry in self.enrolled if entry.graduating_next_month)

    def capacity_status(self, near_ratio: float) -> CapacityStatus:
        ratio = self.capacity_ratio
        if ratio > 1:
            return CapacityStatus.OVER
        if ratio >= near_ratio:
            return CapacityStatus.NEAR
        if ratio <= self.PLENTY_RATIO:
            return CapacityStatus.PLENTY
        return CapacityStatus.NORMAL

    @property
    def seats_label(self) -> str:
        if self.vacancies < 0:
            return f"Over capacity by {-self.vacancies}"
        if self.vacancies <= self.FEW_SEATS:
            return f"Only {_spots(self.vacancies)} left"
        return f"{self.vacancies} vacancies available"

    def to_dict(self, near_ratio: float) -> Dict[str, Any]:
        return {
            "id": self.classroom_id,
            "name": self.name,
            "color": self.color,
            "ratio": self.ratio,
            "minAgeMonths": self.min_age_months,
            "maxAgeMonths": self.max_age_months,
            "capacity": self.capacity,
            "nextClassroomId": self.next_classroom_id,
            "enrolledCount": self.enrolled_count,
            "vacancies": self.vacancies,
            "capacityRatio": round(self.capacity_ratio, 4),
            "capacityStatus": self.capacity_status(near_ratio).value,
            "seatsLabel": self.seats_label,
            "graduatingNextMonth": self.graduating_next_month,
            "enrolled": [entry.to_dict() for entry in self.enrolled],
            "graduatingSoon": [entry.to_dict() for entry in self.graduating_soon],
            "alert": self.alert.to_dict() if self.alert else None,
            "trend": [point.to_dict() for point in self.trend]
        }


@dataclass
class Transition:
    """A child about to move up to the next classroom."""
    child_id: int
    name: str
    from_classroom_id: int
    from_classroom: str
    to_classroom_id: int
    to_classroom: str
    months_until_move: int

    @property
    def message(self) -> str:
        unit = "month" if self.months_until_move == 1 else "months"
        return f"Moves to {self.to_classroom} in {self.months_until_move} {unit}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "childId": self.child_id,
            "name": self.name,
            "fromClassroomId": self.from_classroom_id,
            "fromClassroom": self.from_classroom,
            "toClassroomId": self.to_classroom_id,
            "toClassroom": self.to_classroom,
            "monthsUntilMove": self.months_until_move,
            "message": self.message
        }


@dataclass
class UnplacedChild:
    """A child whose age matches no classroom band at the target date."""
    child_id: int
    name: str
    age_months: int
    reason: UnplacedReason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "childId": self.child_id,
            "name": self.name,
            "ageMonths": self.age_months,
            "reason": self.reason.value
        }


@dataclass
class ForecastTotals:
    """Centre-wide totals at the target date."""
    total_capacity: int
    total_enrolled: int

    CRITICAL_OCCUPANCY = 95
    WARNING_OCCUPANCY = 85

    @property
    def total_vacancies(self) -> int:
        return self.total_capacity - self.total_enrolled

    @property
    def occupancy_percent(self) -> int:
        if self.total_capacity <= 0:
            return 0
        # Half rounds up
        return int(math.floor(100 * self.total_enrolled / self.total_capacity + 0.5))

    @property
    def occupancy_level(self) -> str:
        pct = self.occupancy_percent
        if pct >= self.CRITICAL_OCCUPANCY:
            return "critical"
        if pct >= self.WARNING_OCCUPANCY:
            return "warning"
        return "normal"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCapacity": self.total_capacity,
            "totalEnrolled": self.total_enrolled,
            "totalVacancies": self.total_vacancies,
            "occupancyPercent": self.occupancy_percent,
            "occupancyLevel": self.occupancy_level
        }


@dataclass
class EnrollmentForecast:
    """Full forecast result for one target date."""
    target_date: date
    classrooms: List[ClassroomForecast]
    totals: ForecastTotals
    transitions: List[Transition]
    unplaced: List[UnplacedChild]
    near_capacity_ratio: float

    @property
    def alerts(self) -> List[CapacityAlert]:
        return [c.alert for c in self.classrooms if c.alert is not None]

    def classroom(self, classroom_id: int) -> Optional[ClassroomForecast]:
        for rollup in self.classrooms:
            if rollup.classroom_id == classroom_id:
                return rollup
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetDate": self.target_date.isoformat(),
            "targetMonth": self.target_date.strftime("%b %Y"),
            "totals": self.totals.to_dict(),
            "classrooms": [c.to_dict(self.near_capacity_ratio) for c in self.classrooms],
            "alerts": [alert.to_dict() for alert in self.alerts],
            "transitions": [t.to_dict() for t in self.transitions],
            "unplaced": [u.to_dict() for u in self.unplaced]
        }


class EnrollmentForecaster:
    """
    Age-band enrollment forecaster.

    Works on any objects exposing the classroom attributes (id, name, color,
    ratio, min_age_months, max_age_months, capacity) and child attributes
    (id, name, birth_date). Overlapping bands are not detected; the first
    band in age order wins.
    """

    DEFAULT_TREND_WINDOW = 12  # months either side of the target date
    DEFAULT_GRADUATING_SOON = 3
    DEFAULT_GRADUATING_NEXT_MONTH = 1
    DEFAULT_NEAR_CAPACITY = 0.9
    DEFAULT_HIGH_AVAILABILITY = 0.6

    def __init__(self,
                 classrooms: Sequence[Any],
                 children: Sequence[Any],
                 trend_window: int = DEFAULT_TREND_WINDOW,
                 graduating_soon_months: int = DEFAULT_GRADUATING_SOON,
                 graduating_next_month: int = DEFAULT_GRADUATING_NEXT_MONTH,
                 near_capacity_ratio: float = DEFAULT_NEAR_CAPACITY,
                 high_availability_ratio: float = DEFAULT_HIGH_AVAILABILITY):
        """
        Args:
            classrooms: Classroom records, any order
            children: Child records
            trend_window: Months before and after the target date in trend series
            graduating_soon_months: Countdown at or below which a child is "graduating soon"
            graduating_next_month: Countdown at or below which a child moves next month
            near_capacity_ratio: Enrolled/capacity ratio that triggers a warning
            high_availability_ratio: Enrolled/capacity ratio at or below which to suggest marketing
        """
        self.classrooms = order_classrooms(classrooms)
        self.children = list(children)
        self.trend_window = trend_window
        self.graduating_soon_months = graduating_soon_months
        self.graduating_next_month = graduating_next_month
        self.near_capacity_ratio = near_capacity_ratio
        self.high_availability_ratio = high_availability_ratio
        self._next_classroom = self._build_adjacency()

    def _build_adjacency(self) -> Dict[int, Any]:
        adjacency = {}
        for current, following in zip(self.classrooms, self.classrooms[1:]):
            if following.min_age_months == current.max_age_months:
                adjacency[current.id] = following
        return adjacency

    def next_classroom(self, classroom) -> Optional[Any]:
        """Classroom a child moves to after aging out of this one, if contiguous."""
        return self._next_classroom.get(classroom.id)

    def classroom_for_age(self, age_months: int) -> Optional[Any]:
        for classroom in self.classrooms:
            if classroom.min_age_months <= age_months < classroom.max_age_months:
                return classroom
        return None

    def assign(self, child, on: date) -> Tuple[int, Optional[Any]]:
        """Return (age in months, classroom or None) for a child at a date."""
        age = months_between(child.birth_date, on)
        return age, self.classroom_for_age(age)

    def enrollment_counts(self, on: date) -> Dict[int, int]:
        """Number of children in each classroom at a date."""
        counts = {c.id: 0 for c in self.classrooms}
        for child in self.children:
            _, classroom = self.assign(child, on)
            if classroom is not None:
                counts[classroom.id] += 1
        return counts

    def capacity_alert(self, classroom, enrolled: int) -> Optional[CapacityAlert]:
        """
        At most one alert per classroom, first matching rule wins:
        over capacity, nearing capacity, high availability.
        """
        ratio = enrolled / classroom.capacity
        vacancies = classroom.capacity - enrolled

        if enrolled > classroom.capacity:
            return CapacityAlert(
                classroom.id, AlertType.CRITICAL,
                f"{classroom.name} is over capacity by {_spots(-vacancies)}."
            )
        if ratio >= self.near_capacity_ratio:
            return CapacityAlert(
                classroom.id, AlertType.WARNING,
                f"{classroom.name} is nearing capacity ({_spots(vacancies)} left)."
            )
        if ratio <= self.high_availability_ratio:
            return CapacityAlert(
                classroom.id, AlertType.OPPORTUNITY,
                f"{classroom.name} has high availability ({vacancies} vacancies). Consider marketing."
            )
        return None

    def trend(self, target_date: date) -> Dict[int, List[TrendPoint]]:
        """Month-by-month enrollment per classroom, offsets -window..+window."""
        series = {c.id: [] for c in self.classrooms}
        for offset in range(-self.trend_window, self.trend_window + 1):
            on = add_months(target_date, offset)
            counts = self.enrollment_counts(on)
            for classroom in self.classrooms:
                series[classroom.id].append(
                    TrendPoint(offset, on, counts[classroom.id], classroom.capacity)
                )
        return series

    def _unplaced_reason(self, age_months: int) -> UnplacedReason:
        if age_months < 0:
            return UnplacedReason.NOT_BORN
        if not self.classrooms:
            return UnplacedReason.GAP
        if age_months < self.classrooms[0].min_age_months:
            return UnplacedReason.TOO_YOUNG
        if age_months >= max(c.max_age_months for c in self.classrooms):
            return UnplacedReason.AGED_OUT
        return UnplacedReason.GAP

    def _roster_entry(self, child, age: int, classroom) -> RosterEntry:
        remaining = classroom.max_age_months - age
        following = self.next_classroom(classroom)
        return RosterEntry(
            child_id=child.id,
            name=child.name,
            birth_date=child.birth_date,
            age_months=age,
            months_until_graduation=remaining,
            graduating_soon=remaining <= self.graduating_soon_months,
            graduating_next_month=remaining <= self.graduating_next_month,
            next_classroom_id=following.id if following is not None else None
        )

    def forecast(self, target_date: date, include_trend: bool = True) -> EnrollmentForecast:
        """
        Compute the complete forecast at a target date.

        Args:
            target_date: Date to evaluate (past, present or future)
            include_trend: Skip the 25-point trend recomputation when False

        Returns:
            EnrollmentForecast with rollups, alerts, totals, transitions and unplaced children
        """
        rosters: Dict[int, List[RosterEntry]] = {c.id: [] for c in self.classrooms}
        unplaced: List[UnplacedChild] = []

        for child in self.children:
            age, classroom = self.assign(child, target_date)
            if classroom is None:
                unplaced.append(UnplacedChild(child.id, child.name, age, self._unplaced_reason(age)))
                continue
            rosters[classroom.id].append(self._roster_entry(child, age, classroom))

        for entries in rosters.values():
            # Oldest first; order is independent of input order
            entries.sort(key=lambda e: (-e.age_months, e.birth_date, e.child_id))

        series = self.trend(target_date) if include_trend else {}

        rollups = []
        transitions = []
        for classroom in self.classrooms:
            entries = rosters[classroom.id]
            rollups.append(ClassroomForecast(
                classroom_id=classroom.id,
                name=classroom.name,
                color=classroom.color,
                ratio=classroom.ratio,
                min_age_months=classroom.min_age_months,
                max_age_months=classroom.max_age_months,
                capacity=classroom.capacity,
                next_classroom_id=getattr(self.next_classroom(classroom), "id", None),
                enrolled=entries,
                alert=self.capacity_alert(classroom, len(entries)),
                trend=series.get(classroom.id, [])
            ))

            following = self.next_classroom(classroom)
            if following is None:
                continue
            for entry in entries:
                if entry.graduating_soon:
                    transitions.append(Transition(
                        child_id=entry.child_id,
                        name=entry.name,
                        from_classroom_id=classroom.id,
                        from_classroom=classroom.name,
                        to_classroom_id=following.id,
                        to_classroom=following.name,
                        months_until_move=entry.months_until_graduation
                    ))

        transitions.sort(key=lambda t: (t.months_until_move, t.name, t.child_id))
        unplaced.sort(key=lambda u: (u.reason.value, -u.age_months, u.child_id))

        totals = ForecastTotals(
            total_capacity=sum(c.capacity for c in self.classrooms),
            total_enrolled=sum(len(entries) for entries in rosters.values())
        )

        logger.debug(
            "Forecast for %s: %d classrooms, %d enrolled, %d unplaced",
            target_date, len(rollups), totals.total_enrolled, len(unplaced)
        )

        return EnrollmentForecast(
            target_date=target_date,
            classrooms=rollups,
            totals=totals,
            transitions=transitions,
            unplaced=unplaced,
            near_capacity_ratio=self.near_capacity_ratio
        )
