"""Tests for classroom placement, rollups, alerts and trends."""

import random
from datetime import timedelta

import pytest

from app.forecasting import (
    AlertType,
    CapacityStatus,
    EnrollmentForecaster,
    UnplacedReason,
)
from tests.conftest import TARGET_DATE, make_child, make_classroom


def roster_ids(result, classroom_id):
    return [entry.child_id for entry in result.classroom(classroom_id).enrolled]


class TestPlacement:
    """Children land in the band containing their age in months."""

    def test_infant_graduating_next_month(self, classrooms):
        child = make_child(1, 11)
        result = EnrollmentForecaster(classrooms, [child]).forecast(TARGET_DATE)

        infants = result.classroom(1)
        assert roster_ids(result, 1) == [1]
        entry = infants.enrolled[0]
        assert entry.age_months == 11
        assert entry.months_until_graduation == 1
        assert entry.graduating_soon
        assert entry.graduating_next_month
        assert infants.graduating_next_month == 1
        assert [e.child_id for e in infants.graduating_soon] == [1]

    def test_band_upper_bound_is_exclusive(self, classrooms):
        child = make_child(1, 12)
        result = EnrollmentForecaster(classrooms, [child]).forecast(TARGET_DATE)

        assert roster_ids(result, 1) == []
        assert roster_ids(result, 2) == [1]

    def test_each_child_in_exactly_one_band(self, classrooms):
        children = [make_child(i, age) for i, age in enumerate(range(0, 48, 5), start=1)]
        result = EnrollmentForecaster(classrooms, children).forecast(TARGET_DATE)

        placed = [cid for c in result.classrooms for cid in (e.child_id for e in c.enrolled)]
        assert sorted(placed) == [c.id for c in children]
        for rollup in result.classrooms:
            for entry in rollup.enrolled:
                assert rollup.min_age_months <= entry.age_months < rollup.max_age_months

    def test_graduating_soon_window(self, classrooms):
        children = [make_child(1, 8), make_child(2, 9), make_child(3, 10)]
        result = EnrollmentForecaster(classrooms, children).forecast(TARGET_DATE)

        infants = result.classroom(1)
        flags = {e.child_id: (e.graduating_soon, e.graduating_next_month) for e in infants.enrolled}
        assert flags == {1: (False, False), 2: (True, False), 3: (True, False)}
        assert infants.graduating_next_month == 0


class TestUnplaced:
    """Children no band accepts are reported, never rostered."""

    def test_aged_out_and_not_born(self, classrooms):
        old = make_child(1, 60)
        unborn = make_child(2, 0, target=TARGET_DATE + timedelta(days=40))
        result = EnrollmentForecaster(classrooms, [old, unborn]).forecast(TARGET_DATE)

        assert result.totals.total_enrolled == 0
        reasons = {u.child_id: u.reason for u in result.unplaced}
        assert reasons == {1: UnplacedReason.AGED_OUT, 2: UnplacedReason.NOT_BORN}

    def test_gap_and_too_young(self):
        rooms = [
            make_classroom(1, "Crawlers", 6, 12, 8),
            make_classroom(2, "Preschool", 36, 48, 20),
        ]
        children = [make_child(1, 2), make_child(2, 20)]
        result = EnrollmentForecaster(rooms, children).forecast(TARGET_DATE)

        reasons = {u.child_id: u.reason for u in result.unplaced}
        assert reasons == {1: UnplacedReason.TOO_YOUNG, 2: UnplacedReason.GAP}
        assert all(not c.enrolled for c in result.classrooms)

    def test_no_classrooms(self):
        result = EnrollmentForecaster([], [make_child(1, 5)]).forecast(TARGET_DATE)

        assert result.classrooms == []
        assert result.totals.total_capacity == 0
        assert result.totals.occupancy_percent == 0
        assert [u.reason for u in result.unplaced] == [UnplacedReason.GAP]


class TestRosterOrder:

    def test_oldest_first(self, classrooms):
        children = [make_child(1, 25), make_child(2, 35), make_child(3, 30)]
        result = EnrollmentForecaster(classrooms, children).forecast(TARGET_DATE)

        assert roster_ids(result, 3) == [2, 3, 1]

    def test_independent_of_child_order(self, classrooms):
        children = [make_child(i, (i * 7) % 48) for i in range(1, 30)]
        expected = EnrollmentForecaster(classrooms, children).forecast(TARGET_DATE)

        shuffled = list(children)
        random.Random(7).shuffle(shuffled)
        actual = EnrollmentForecaster(classrooms, shuffled).forecast(TARGET_DATE)

        for rollup in expected.classrooms:
            assert roster_ids(actual, rollup.classroom_id) == roster_ids(expected, rollup.classroom_id)


class TestCapacityAlerts:
    """At most one alert per classroom, by priority."""

    def _alert(self, capacity, enrolled):
        room = make_classroom(1, "Toddlers", 24, 36, capacity)
        children = [make_child(i, 30) for i in range(1, enrolled + 1)]
        result = EnrollmentForecaster([room], children).forecast(TARGET_DATE, include_trend=False)
        assert len(result.alerts) <= 1
        return result.classroom(1).alert

    def test_full_classroom_is_warning_not_critical(self):
        alert = self._alert(10, 10)
        assert alert.type is AlertType.WARNING
        assert alert.message == "Toddlers is nearing capacity (0 spots left)."

    def test_over_capacity_is_critical(self):
        alert = self._alert(20, 21)
        assert alert.type is AlertType.CRITICAL
        assert alert.message == "Toddlers is over capacity by 1 spot."

    def test_nearing_capacity(self):
        alert = self._alert(10, 9)
        assert alert.type is AlertType.WARNING
        assert "1 spot left" in alert.message

    def test_high_availability_inclusive_threshold(self):
        alert = self._alert(10, 6)
        assert alert.type is AlertType.OPPORTUNITY
        assert alert.message == "Toddlers has high availability (4 vacancies). Consider marketing."

    def test_middle_band_has_no_alert(self):
        assert self._alert(10, 7) is None

    def test_empty_classroom_is_opportunity(self):
        assert self._alert(10, 0).type is AlertType.OPPORTUNITY


class TestTrend:

    def test_twenty_five_points(self, classrooms):
        result = EnrollmentForecaster(classrooms, [make_child(1, 11)]).forecast(TARGET_DATE)

        for rollup in result.classrooms:
            assert [p.offset for p in rollup.trend] == list(range(-12, 13))
            dates = [p.date for p in rollup.trend]
            assert dates == sorted(dates) and len(set(dates)) == 25
            assert [p.is_forecast for p in rollup.trend] == [o > 0 for o in range(-12, 13)]
            assert all(p.capacity == rollup.capacity for p in rollup.trend)
            assert rollup.trend[12].date == TARGET_DATE
            assert rollup.trend[12].enrolled == rollup.enrolled_count

    def test_child_moves_between_rooms_over_time(self, classrooms):
        result = EnrollmentForecaster(classrooms, [make_child(1, 11)]).forecast(TARGET_DATE)

        infants = result.classroom(1).trend
        wobblers = result.classroom(2).trend
        assert infants[12].enrolled == 1 and infants[13].enrolled == 0
        assert wobblers[12].enrolled == 0 and wobblers[13].enrolled == 1
        # Not yet born a year earlier
        assert infants[0].enrolled == 0

    def test_trend_can_be_skipped(self, classrooms):
        result = EnrollmentForecaster(classrooms, [make_child(1, 11)]).forecast(
            TARGET_DATE, include_trend=False
        )
        assert all(rollup.trend == [] for rollup in result.classrooms)


class TestTransitions:

    def test_adjacency_ignores_insertion_order(self, classrooms):
        forecaster = EnrollmentForecaster(list(reversed(classrooms)), [])

        assert [c.id for c in forecaster.classrooms] == [1, 2, 3, 4]
        assert forecaster.next_classroom(classrooms[0]).name == "Wobblers"
        assert forecaster.next_classroom(classrooms[3]) is None

    def test_gap_breaks_adjacency(self):
        rooms = [make_classroom(1, "Infants", 0, 12, 8), make_classroom(2, "Preschool", 36, 48, 20)]
        forecaster = EnrollmentForecaster(rooms, [make_child(1, 11)])
        result = forecaster.forecast(TARGET_DATE)

        assert forecaster.next_classroom(rooms[0]) is None
        assert result.transitions == []
        assert result.classroom(1).enrolled[0].next_classroom_id is None

    def test_graduating_children_listed(self, classrooms):
        children = [make_child(1, 11, name="Emma S."), make_child(2, 46, name="Liam J."),
                    make_child(3, 21, name="Ava B."), make_child(4, 5)]
        result = EnrollmentForecaster(classrooms, children).forecast(TARGET_DATE)

        # Preschool is the last room, so Liam has nowhere to move
        assert [(t.child_id, t.to_classroom, t.months_until_move) for t in result.transitions] == [
            (1, "Wobblers", 1),
            (3, "Toddlers", 3),
        ]
        assert result.transitions[0].message == "Moves to Wobblers in 1 month"
        assert result.transitions[1].message == "Moves to Toddlers in 3 months"


class TestTotals:

    def test_totals_and_rounding(self, classrooms):
        result = EnrollmentForecaster(classrooms, [make_child(1, 11)]).forecast(TARGET_DATE)
        totals = result.totals

        assert totals.total_capacity == 52
        assert totals.total_enrolled == 1
        assert totals.total_vacancies == 51
        assert totals.occupancy_percent == 2

    def test_half_rounds_up(self):
        room = make_classroom(1, "Infants", 0, 12, 8)
        result = EnrollmentForecaster([room], [make_child(1, 3)]).forecast(TARGET_DATE)
        # 1 / 8 = 12.5%
        assert result.totals.occupancy_percent == 13

    def test_negative_vacancies(self):
        room = make_classroom(1, "Infants", 0, 12, 2)
        children = [make_child(i, 4) for i in range(1, 4)]
        result = EnrollmentForecaster([room], children).forecast(TARGET_DATE)

        assert result.totals.total_vacancies == -1
        assert result.totals.occupancy_percent == 150
        assert result.totals.occupancy_level == "critical"
        assert result.classroom(1).capacity_status(0.9) is CapacityStatus.OVER
        assert result.classroom(1).seats_label == "Over capacity by 1"


class TestSerialization:

    def test_to_dict_shape(self, classrooms):
        result = EnrollmentForecaster(classrooms, [make_child(1, 11, name="Emma S.")]).forecast(TARGET_DATE)
        payload = result.to_dict()

        assert payload["targetDate"] == "2025-06-15"
        assert payload["totals"]["totalEnrolled"] == 1
        infants = payload["classrooms"][0]
        assert infants["name"] == "Infants"
        assert infants["nextClassroomId"] == 2
        assert infants["enrolledCount"] == 1
        assert infants["seatsLabel"] == "7 vacancies available"
        assert infants["enrolled"][0]["ageLabel"] == "11 mos"
        assert infants["alert"]["type"] == "opportunity"
        assert len(infants["trend"]) == 25
        assert payload["transitions"][0]["toClassroom"] == "Wobblers"


@pytest.mark.parametrize("enrolled,status", [
    (0, CapacityStatus.PLENTY),
    (5, CapacityStatus.PLENTY),
    (7, CapacityStatus.NORMAL),
    (9, CapacityStatus.NEAR),
    (10, CapacityStatus.NEAR),
    (11, CapacityStatus.OVER),
])
def test_capacity_status(enrolled, status):
    room = make_classroom(1, "Wobblers", 12, 24, 10)
    children = [make_child(i, 18) for i in range(1, enrolled + 1)]
    rollup = EnrollmentForecaster([room], children).forecast(TARGET_DATE, include_trend=False).classroom(1)
    assert rollup.capacity_status(0.9) is status


class TestBirthAfterTarget:

    def test_birth_days_after_target_is_not_born(self, classrooms):
        unborn = make_child(1, 0)
        unborn.birth_date = TARGET_DATE + timedelta(days=10)
        result = EnrollmentForecaster(classrooms, [unborn]).forecast(TARGET_DATE)

        assert roster_ids(result, 1) == []
        assert result.totals.total_enrolled == 0
        assert [(u.child_id, u.reason) for u in result.unplaced] == [(1, UnplacedReason.NOT_BORN)]
        assert result.unplaced[0].age_months == -1
        assert result.classroom(1).trend[12].enrolled == 0
        assert result.classroom(1).trend[13].enrolled == 1


class TestOverlappingBands:

    def test_first_band_in_age_order_wins(self):
        rooms = [
            make_classroom(1, "Older Toddlers", 18, 36, 10),
            make_classroom(2, "Wobblers", 12, 24, 10),
        ]
        children = [make_child(1, 20), make_child(2, 30), make_child(3, 14)]
        result = EnrollmentForecaster(rooms, children).forecast(TARGET_DATE)

        assert [c.classroom_id for c in result.classrooms] == [2, 1]
        assert sorted(roster_ids(result, 2)) == [1, 3]
        assert roster_ids(result, 1) == [2]
        assert result.unplaced == []
        assert result.totals.total_enrolled == 3
