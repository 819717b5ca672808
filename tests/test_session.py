"""
Tests for the Visualizer controller and the run recorder.
"""

import random

import pytest

from grid import GridConfig, InvalidConfiguration
from engine import PlaybackInProgress, Recorder, Visualizer

SMALL = GridConfig(rows=5, cols=5, source=(0, 0), target=(0, 4), wall_density=0.3, speed="normal")


@pytest.fixture
def viz(clock):
    return Visualizer(SMALL, clock=clock, rng=random.Random(7))


def finish(viz, clock):
    clock.advance(1_000_000)
    return viz.poll(0)


# =============================================================================
# Recorder
# =============================================================================


def test_recorder_metrics(detour_grid) -> None:
    rec = Recorder()
    metrics = rec.run(detour_grid)

    assert metrics.path_found
    assert metrics.path_length == 8
    assert metrics.visited_count == len(rec.result.visited_order)
    assert metrics.wall_time_ms >= 0
    assert metrics.to_dict()["source"] == [0, 0]


def test_recorder_unreachable(make_grid) -> None:
    grid = make_grid(3, 3, (0, 0), (2, 2), walls=[(1, 2), (2, 1)])
    metrics = Recorder().run(grid)
    assert not metrics.path_found
    assert metrics.path_length is None


# =============================================================================
# Run / poll
# =============================================================================


class TestRun:

    def test_run_schedules_and_returns(self, viz) -> None:
        handle = viz.run()
        assert handle.is_playing
        assert viz.is_running
        assert viz.last_metrics is None

    def test_second_run_rejected_while_playing(self, viz) -> None:
        viz.run()
        with pytest.raises(PlaybackInProgress):
            viz.run()

    def test_metrics_published_when_finished(self, viz, clock) -> None:
        viz.run()
        state = finish(viz, clock)

        assert state["finished"] is True
        assert state["running"] is False
        assert state["metrics"]["path_length"] == 4
        assert state["metrics"]["path_found"] is True
        assert viz.last_metrics.visited_count == len(
            [e for e in state["events"] if e["kind"] == "visited"]
        )

    def test_run_again_after_finish(self, viz, clock) -> None:
        first = viz.run()
        finish(viz, clock)
        second = viz.run()
        assert second.epoch == first.epoch + 1

    def test_poll_cursor(self, viz, clock) -> None:
        viz.run()
        clock.advance(25)
        state = viz.poll(0)
        assert [e["kind"] for e in state["events"]] == ["visited"] * 3
        assert state["cursor"] == 3

        clock.advance(10)
        state = viz.poll(state["cursor"])
        assert len(state["events"]) == 1
        assert state["events"][0]["at"] == 30

    def test_poll_before_any_run(self, viz) -> None:
        state = viz.poll()
        assert state == {
            "epoch": 0, "cursor": 0, "events": [],
            "running": False, "finished": False, "metrics": None,
        }


# =============================================================================
# Edits during playback
# =============================================================================


class TestEdits:

    def test_reset_cancels_playback(self, viz, clock) -> None:
        handle = viz.run()
        clock.advance(20)
        viz.poll()

        viz.reset()
        assert handle.is_cancelled
        assert not viz.is_running
        clock.advance(1_000_000)
        state = viz.poll(0)
        assert state["events"] == []
        assert state["metrics"] is None

    def test_randomize_cancels_playback(self, viz) -> None:
        handle = viz.run()
        grid = viz.randomize(0.0)
        assert handle.is_cancelled
        assert grid.obstacles() == []

    def test_randomize_uses_config_density_by_default(self, clock) -> None:
        viz = Visualizer(GridConfig(rows=5, cols=5, source=(0, 0), target=(4, 4), wall_density=1.0),
                         clock=clock)
        assert len(viz.randomize().obstacles()) == 23

    def test_toggle_during_playback_does_not_disturb_it(self, viz, clock) -> None:
        handle = viz.run()
        before = viz.grid
        viz.toggle(0, 2)

        assert viz.grid is not before
        assert not before.cell(0, 2).is_obstacle
        state = finish(viz, clock)
        on_path = [(e["row"], e["col"]) for e in state["events"] if e["kind"] == "on_path"]
        assert on_path == [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]
        assert handle.is_finished

    def test_toggle_endpoint_ignored(self, viz) -> None:
        grid = viz.toggle(0, 0)
        assert not grid.cell(0, 0).is_obstacle

    def test_set_speed(self, viz) -> None:
        assert viz.set_speed("slow") == "slow"
        handle = viz.run()
        assert handle.delay == 20

    def test_set_speed_rejected_while_running(self, viz) -> None:
        viz.run()
        with pytest.raises(PlaybackInProgress):
            viz.set_speed("fast")

    def test_set_unknown_speed(self, viz) -> None:
        with pytest.raises(InvalidConfiguration):
            viz.set_speed("warp")

    def test_bad_config_speed(self, clock) -> None:
        with pytest.raises(InvalidConfiguration):
            Visualizer(GridConfig(speed="warp"), clock=clock)
