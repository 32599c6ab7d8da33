"""Tests for the attempt lifecycle and trainee history."""

import threading

import pytest

from liftcore.errors import AttemptClosedError, InvalidInputError, NotFound
from liftcore.models import Placement, Point

TRAINEE = "trainee-1"

ALL_CHECKS = dict(
    capacity_checked=True,
    radius_verified=True,
    ground_bearing_checked=True,
    obstacles_reviewed=True,
)


def _make_completed(manager, scenario_id="scenario-test", trainee=TRAINEE, **fields):
    attempt = manager.start(scenario_id, trainee)
    if fields:
        manager.update(attempt.id, trainee, **fields)
    return manager.complete(attempt.id, trainee)


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_start_creates_open_attempt(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        assert attempt.id.startswith("attempt-")
        assert attempt.completed_at is None
        assert attempt.score == 0
        assert manager.history(TRAINEE) == [attempt]

    def test_start_unknown_scenario(self, manager):
        result = manager.start("scenario-missing", TRAINEE)
        assert isinstance(result, NotFound)
        assert result.kind == "scenario"
        assert manager.history(TRAINEE) == []

    def test_full_attempt(self, manager):
        attempt = _make_completed(
            manager,
            equipment_id="crane-test-25t",
            placement=Point(50.0, 50.0),
            risks_identified=["obstruction:building-east"],
            **ALL_CHECKS,
        )
        assert attempt.is_completed
        assert attempt.score == 90
        assert attempt.passed
        assert attempt.category_scores["Positioning & Safety"] == 20
        assert attempt.mistakes == []
        assert attempt.feedback.startswith("Outstanding performance!")
        assert attempt.next_steps[0] == "Try a more challenging scenario"

    def test_completed_after_started(self, manager):
        attempt = _make_completed(manager)
        assert attempt.completed_at >= attempt.started_at

    def test_complete_without_placement(self, manager):
        attempt = _make_completed(manager, equipment_id="crane-test-25t")
        assert attempt.category_scores["Positioning & Safety"] == 0
        assert "No crane position recorded" in attempt.feedback
        assert not attempt.passed

    def test_small_crane_out_of_reach(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        manager.update(
            attempt.id, TRAINEE, equipment_id="crane-test-small", placement=Point(50.0, 50.0)
        )
        done = manager.complete(attempt.id, TRAINEE)
        # 2t load is within 3.5t max capacity, but 25m is beyond a 10m boom
        assert done.category_scores["Equipment Selection"] == 20
        assert any(m.startswith("Radius exceeded") for m in done.mistakes)
        assert "Test Crane 3.5T is not available for this scenario" in done.mistakes


class TestUpdate:
    def test_partial_update_merges(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        manager.update(attempt.id, TRAINEE, capacity_checked=True)
        updated = manager.update(attempt.id, TRAINEE, equipment_id="crane-test-25t")
        assert updated.capacity_checked
        assert updated.equipment_id == "crane-test-25t"
        assert not updated.radius_verified

    def test_point_is_wrapped_in_placement(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        updated = manager.update(attempt.id, TRAINEE, placement=Point(40.0, 40.0))
        assert updated.placement == Placement(Point(40.0, 40.0))

    def test_off_site_placement_rejected(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        with pytest.raises(InvalidInputError, match="outside"):
            manager.update(attempt.id, TRAINEE, placement=Point(-5.0, 10.0))
        assert manager.get(attempt.id, TRAINEE).placement is None

    def test_invalid_update_changes_nothing(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        with pytest.raises(InvalidInputError):
            manager.update(
                attempt.id, TRAINEE, equipment_id="crane-test-25t", placement=Point(500.0, 0.0)
            )
        assert manager.get(attempt.id, TRAINEE).equipment_id is None

    def test_unknown_field_rejected(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        with pytest.raises(InvalidInputError, match="score"):
            manager.update(attempt.id, TRAINEE, score=100)

    def test_unknown_equipment(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        result = manager.update(attempt.id, TRAINEE, equipment_id="crane-missing")
        assert isinstance(result, NotFound)
        assert result.kind == "equipment"

    def test_update_after_complete_is_rejected(self, manager):
        attempt = _make_completed(manager, equipment_id="crane-test-25t", placement=Point(50.0, 50.0))
        score = attempt.score
        with pytest.raises(AttemptClosedError):
            manager.update(attempt.id, TRAINEE, placement=Point(10.0, 10.0))
        stored = manager.get(attempt.id, TRAINEE)
        assert stored.score == score
        assert stored.placement.position == Point(50.0, 50.0)


class TestRecomplete:
    def test_second_complete_keeps_timestamp(self, manager):
        attempt = _make_completed(manager, equipment_id="crane-test-25t", placement=Point(50.0, 50.0))
        first_time, first_score = attempt.completed_at, attempt.score
        again = manager.complete(attempt.id, TRAINEE)
        assert again.completed_at == first_time
        assert again.score == first_score


# ---------------------------------------------------------------------------
# Lookup failures
# ---------------------------------------------------------------------------


class TestNotFound:
    def test_unknown_trainee(self, manager):
        result = manager.complete("attempt-x", "nobody")
        assert isinstance(result, NotFound)
        assert result.kind == "trainee"

    def test_unknown_attempt(self, manager):
        manager.start("scenario-test", TRAINEE)
        result = manager.update("attempt-x", TRAINEE, capacity_checked=True)
        assert isinstance(result, NotFound)
        assert result.kind == "attempt"

    def test_attempt_of_another_trainee(self, manager):
        theirs = manager.start("scenario-test", "trainee-2")
        manager.start("scenario-test", TRAINEE)
        result = manager.complete(theirs.id, TRAINEE)
        assert isinstance(result, NotFound)
        assert result.kind == "attempt"
        assert not manager.get(theirs.id, "trainee-2").is_completed


# ---------------------------------------------------------------------------
# History and progress
# ---------------------------------------------------------------------------


class TestHistory:
    def test_history_in_start_order(self, manager):
        first = manager.start("scenario-test", TRAINEE)
        second = manager.start("scenario-test-2", TRAINEE)
        assert [a.id for a in manager.history(TRAINEE)] == [first.id, second.id]

    def test_scenario_progress(self, manager):
        manager.start("scenario-test", TRAINEE)
        other = manager.start("scenario-test-2", TRAINEE)
        assert [a.id for a in manager.scenario_progress(TRAINEE, "scenario-test-2")] == [other.id]

    def test_progress_summary(self, manager):
        _make_completed(
            manager, equipment_id="crane-test-25t", placement=Point(50.0, 50.0), **ALL_CHECKS
        )  # 90
        _make_completed(manager, "scenario-test-2")  # nothing chosen: 0
        manager.start("scenario-test", TRAINEE)

        summary = manager.progress_summary(TRAINEE)
        assert summary.total_attempts == 3
        assert summary.completed_attempts == 2
        assert summary.passed_attempts == 1
        assert summary.average_score == pytest.approx(45.0)
        assert summary.best_score == 90
        assert summary.by_difficulty == {"beginner": 1, "intermediate": 1, "advanced": 0}
        assert summary.recent[0].scenario_id == "scenario-test-2"

    def test_progress_summary_for_new_trainee(self, manager):
        summary = manager.progress_summary("nobody")
        assert summary.total_attempts == 0
        assert summary.average_score == 0.0
        assert summary.best_score == 0


class TestConcurrency:
    def test_concurrent_updates_to_separate_attempts(self, manager):
        attempts = [manager.start("scenario-test", f"trainee-{i}") for i in range(8)]
        errors = []

        def work(attempt):
            try:
                manager.update(attempt.id, attempt.trainee_id, equipment_id="crane-test-25t",
                               placement=Point(50.0, 50.0), **ALL_CHECKS)
                manager.complete(attempt.id, attempt.trainee_id)
            except Exception as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [threading.Thread(target=work, args=(a,)) for a in attempts]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert all(manager.get(a.id, a.trainee_id).score == 90 for a in attempts)

    def test_complete_never_interleaves_with_update(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        manager.update(attempt.id, TRAINEE, equipment_id="crane-test-25t", placement=Point(50.0, 50.0))
        spots = [Point(50.0, 50.0), Point(52.0, 50.0), Point(40.0, 50.0), Point(60.0, 30.0)]
        barrier = threading.Barrier(17)
        outcomes = []

        def move(spot):
            barrier.wait()
            try:
                manager.update(attempt.id, TRAINEE, placement=spot)
                outcomes.append("updated")
            except AttemptClosedError:
                outcomes.append("closed")

        def finish():
            barrier.wait()
            manager.complete(attempt.id, TRAINEE)

        threads = [threading.Thread(target=move, args=(spots[i % 4],)) for i in range(16)]
        threads.append(threading.Thread(target=finish))
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(set(outcomes)) <= ["closed", "updated"]
        assert len(outcomes) == 16
        stored = manager.get(attempt.id, TRAINEE)
        assert stored.is_completed
        assert stored.placement.position in spots
        fresh = manager.evaluate(manager.scenarios.get("scenario-test"), stored)
        assert stored.score == fresh.score.total_score
        assert stored.category_scores == fresh.score.by_category()


# ---------------------------------------------------------------------------
# Stored state isolation
# ---------------------------------------------------------------------------


class TestStoredState:
    def test_returned_attempt_cannot_reopen_record(self, manager):
        done = _make_completed(manager, equipment_id="crane-test-25t", placement=Point(50.0, 50.0))
        score, completed_at = done.score, done.completed_at
        done.score = 0
        done.completed_at = None

        stored = manager.get(done.id, TRAINEE)
        assert stored.score == score
        assert stored.completed_at == completed_at
        with pytest.raises(AttemptClosedError):
            manager.update(done.id, TRAINEE, capacity_checked=True)

    def test_history_entries_are_copies(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        manager.history(TRAINEE)[0].equipment_id = "crane-test-small"
        assert manager.get(attempt.id, TRAINEE).equipment_id is None

    def test_unknown_ids_leave_no_locks(self, manager):
        manager.start("scenario-test", TRAINEE)
        for i in range(100):
            assert isinstance(manager.update(f"bogus-{i}", TRAINEE, capacity_checked=True), NotFound)
            assert isinstance(manager.complete(f"bogus-{i}", "nobody"), NotFound)
        assert len(manager._locks) == 0

    def test_lock_released_after_complete(self, manager):
        done = _make_completed(manager, equipment_id="crane-test-25t")
        assert done.id not in manager._locks


class TestUpdateValidation:
    def test_bare_string_hazard_list_rejected(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        with pytest.raises(InvalidInputError, match="risks_identified"):
            manager.update(attempt.id, TRAINEE, risks_identified="obstruction:building-east")
        assert manager.get(attempt.id, TRAINEE).risks_identified == []

    def test_hazard_tuple_accepted(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        updated = manager.update(attempt.id, TRAINEE, risks_identified=("obstruction:building-east",))
        assert updated.risks_identified == ["obstruction:building-east"]

    @pytest.mark.parametrize("value", ["false", 1, None])
    def test_flags_must_be_booleans(self, manager, value):
        attempt = manager.start("scenario-test", TRAINEE)
        with pytest.raises(InvalidInputError, match="capacity_checked"):
            manager.update(attempt.id, TRAINEE, capacity_checked=value)
        assert not manager.get(attempt.id, TRAINEE).capacity_checked

    def test_bad_flag_blocks_other_changes(self, manager):
        attempt = manager.start("scenario-test", TRAINEE)
        with pytest.raises(InvalidInputError):
            manager.update(attempt.id, TRAINEE, equipment_id="crane-test-25t", radius_verified="yes")
        assert manager.get(attempt.id, TRAINEE).equipment_id is None
