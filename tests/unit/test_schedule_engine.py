"""Unit tests for activity ordering, conflicts, compaction and breaks."""

from datetime import datetime

import pytest

from backend.app.models.activity import Activity
from backend.app.models.common import ActivityType
from backend.app.scheduling.engine import (
    compact_schedule,
    current_activity,
    find_conflict,
    group_by_type,
    insert_breaks,
    prepare_bulk_replace,
    renumber,
    reorder_activities,
    sort_by_time,
    total_duration,
)


def make_activity(
    activity_id: str,
    start_time: str,
    duration: int = 60,
    order: int = 0,
    **kwargs: object,
) -> Activity:
    """Build a minimal activity for tests."""
    return Activity(
        id=activity_id,
        title=f"Activity {activity_id}",
        start_time=start_time,
        duration=duration,
        order=order,
        **kwargs,
    )


class TestSortByTime:
    """Test sort_by_time."""

    def test_sorts_ascending_by_start(self) -> None:
        """Test activities are ordered by minutes of day."""
        activities = [
            make_activity("c", "14:00"),
            make_activity("a", "08:00"),
            make_activity("b", "09:30"),
        ]

        assert [a.id for a in sort_by_time(activities)] == ["a", "b", "c"]

    def test_equal_start_times_keep_input_order(self) -> None:
        """Test the sort is stable for ties."""
        activities = [
            make_activity("first", "10:00"),
            make_activity("early", "09:00"),
            make_activity("second", "10:00"),
        ]

        assert [a.id for a in sort_by_time(activities)] == ["early", "first", "second"]

    def test_sort_is_idempotent_and_does_not_mutate(self) -> None:
        """Test sorting twice equals sorting once and the input is untouched."""
        activities = [make_activity("b", "11:00"), make_activity("a", "07:00")]

        once = sort_by_time(activities)

        assert sort_by_time(once) == once
        assert [a.id for a in activities] == ["b", "a"]


class TestReorder:
    """Test reorder_activities."""

    def test_move_and_renumber(self) -> None:
        """Test the moved element lands at to_index and orders are positions."""
        activities = renumber(
            [make_activity("a", "08:00"), make_activity("b", "09:00"), make_activity("c", "10:00")]
        )

        result = reorder_activities(activities, 0, 2)

        assert [a.id for a in result] == ["b", "c", "a"]
        assert [a.order for a in result] == [0, 1, 2]
        # Start times are not touched by reorder
        assert result[2].start_time == "08:00"

    def test_reverse_move_restores_original(self) -> None:
        """Test reorder(j, i) undoes reorder(i, j)."""
        activities = renumber([make_activity(str(i), f"{8 + i:02d}:00") for i in range(5)])

        moved = reorder_activities(activities, 1, 3)
        restored = reorder_activities(moved, 3, 1)

        assert restored == activities

    @pytest.mark.parametrize(("from_index", "to_index"), [(-1, 0), (0, 3), (3, 0)])
    def test_out_of_range_index_raises(self, from_index: int, to_index: int) -> None:
        """Test indices outside [0, len) are rejected."""
        activities = [make_activity("a", "08:00"), make_activity("b", "09:00"), make_activity("c", "10:00")]

        with pytest.raises(ValueError, match="out of range"):
            reorder_activities(activities, from_index, to_index)


class TestFindConflict:
    """Test find_conflict."""

    def test_overlap_with_existing(self) -> None:
        """Test a candidate starting inside an existing activity conflicts."""
        existing = [make_activity("a", "09:00", 60)]

        conflict = find_conflict("09:30", 60, existing)

        assert conflict is not None
        assert conflict.id == "a"

    def test_back_to_back_does_not_conflict(self) -> None:
        """Test touching intervals do not overlap."""
        existing = [make_activity("a", "09:00", 60)]

        assert find_conflict("10:00", 30, existing) is None
        assert find_conflict("08:00", 60, existing) is None

    def test_candidate_enclosing_existing_conflicts(self) -> None:
        """Test the check is symmetric: a wider candidate conflicts too."""
        existing = [make_activity("a", "10:00", 30)]

        conflict = find_conflict("09:00", 180, existing)

        assert conflict is not None
        assert conflict.id == "a"

    def test_exclude_id_skips_self(self) -> None:
        """Test the activity being edited is not reported against itself."""
        existing = [make_activity("a", "09:00", 60)]

        assert find_conflict("09:15", 30, existing, exclude_id="a") is None

    def test_returns_first_conflict_in_list_order(self) -> None:
        """Test only the first overlapping activity is reported."""
        existing = [make_activity("a", "09:00", 120), make_activity("b", "09:30", 30)]

        conflict = find_conflict("09:45", 10, existing)

        assert conflict is not None
        assert conflict.id == "a"


class TestCompactSchedule:
    """Test compact_schedule."""

    def test_removes_gaps_following_order(self) -> None:
        """Test activities run back to back from day_start in order."""
        activities = [
            make_activity("b", "15:00", 30, order=1),
            make_activity("a", "09:00", 60, order=0),
            make_activity("c", "18:00", 45, order=2),
        ]

        result = compact_schedule(activities, "08:00")

        assert [(a.id, a.start_time) for a in result] == [
            ("a", "08:00"),
            ("b", "09:00"),
            ("c", "09:30"),
        ]
        assert [a.duration for a in result] == [60, 30, 45]
        assert [a.order for a in result] == [0, 1, 2]

    def test_empty_day(self) -> None:
        """Test compacting nothing yields nothing."""
        assert compact_schedule([], "08:00") == []


class TestInsertBreaks:
    """Test insert_breaks."""

    def test_break_inserted_once_frequency_reached(self) -> None:
        """Test a break precedes the activity that follows 120 accumulated minutes."""
        activities = renumber(
            [
                make_activity("a", "09:00", 60),
                make_activity("b", "10:00", 60),
                make_activity("c", "11:00", 60),
            ]
        )

        result = insert_breaks(activities, break_frequency=120, break_duration=15)

        assert len(result) == 4
        assert [a.id for a in result][:2] == ["a", "b"]
        assert result[3].id == "c"

        pause = result[2]
        assert pause.is_break
        assert pause.ai_suggested
        assert pause.type == ActivityType.rest
        assert pause.title == "Break"
        assert pause.duration == 15
        assert pause.start_time == "11:00"
        assert pause.id.startswith("break-")
        assert [a.order for a in result] == [0, 1, 2, 3]

    def test_no_break_below_frequency(self) -> None:
        """Test short days get no breaks."""
        activities = [make_activity("a", "09:00", 30), make_activity("b", "10:00", 30)]

        result = insert_breaks(activities, break_frequency=120, break_duration=15)

        assert not any(a.is_break for a in result)

    def test_existing_break_not_preceded_by_another(self) -> None:
        """Test an existing break gets no break before it and does not reset the count."""
        activities = [
            make_activity("a", "09:00", 150),
            make_activity("rest", "11:30", 15, is_break=True),
            make_activity("b", "11:45", 30),
        ]

        result = insert_breaks(activities, break_frequency=120, break_duration=15)

        assert result[0].id == "a"
        assert result[1].id == "rest"
        assert result[2].is_break and result[2].id.startswith("break-")
        assert result[3].id == "b"


class TestHelpers:
    """Test bulk-replace preparation and small aggregates."""

    def test_prepare_bulk_replace_orders_by_submission_then_sorts(self) -> None:
        """Test order follows submitted position while storage is time-sorted."""
        submitted = [make_activity("late", "15:00", order=9), make_activity("early", "08:00", order=9)]

        result = prepare_bulk_replace(submitted)

        assert [(a.id, a.order) for a in result] == [("early", 1), ("late", 0)]

    def test_total_duration_and_group_by_type(self) -> None:
        """Test duration sum and type grouping."""
        activities = [
            make_activity("a", "08:00", 30, type=ActivityType.meal),
            make_activity("b", "09:00", 90),
            make_activity("c", "12:00", 45, type=ActivityType.meal),
        ]

        groups = group_by_type(activities)

        assert total_duration(activities) == 165
        assert [a.id for a in groups[ActivityType.meal]] == ["a", "c"]
        assert [a.id for a in groups[ActivityType.activity]] == ["b"]

    def test_current_activity(self) -> None:
        """Test the activity covering the wall-clock time is found."""
        activities = [make_activity("a", "08:00", 60), make_activity("b", "09:00", 60)]

        assert current_activity(activities, datetime(2026, 3, 1, 9, 15)).id == "b"
        assert current_activity(activities, datetime(2026, 3, 1, 10, 0)) is None
