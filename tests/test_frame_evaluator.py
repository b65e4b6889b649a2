"""Tests for the Frame Evaluator - kinematics, visibility and frame-order independence."""

import math

import pytest

from fallscene.modules.config import AssetKind, SimulationConfig
from fallscene.modules.frame_evaluator import (
    HIDDEN, evaluate_frame, evaluate_record, exit_frame, visible_items,
)
from fallscene.modules.spawn_planner import SpawnRecord, plan_spawns
from fallscene.modules.viewport import compute_geometry
from fallscene.shared.errors import DegenerateViewport

FPS = 30


class TestEvaluateRecord:

    def setup_method(self):
        self.record = SpawnRecord(spawn_frame=10, x0=1.0, rotation_speed=math.pi, drift=0.1)

    def test_hidden_before_spawn(self):
        assert evaluate_record(self.record, 9, FPS, 1.5, 5.0) is HIDDEN

    def test_spawn_frame_starts_at_top(self):
        state = evaluate_record(self.record, 10, FPS, 1.5, 5.0)
        assert state.visible
        assert state.y == 5.0
        assert state.x == 1.0
        assert state.rotation == 0.0

    def test_linear_motion(self):
        state = evaluate_record(self.record, 40, FPS, 1.5, 5.0)   # one second later
        assert state.y == pytest.approx(5.0 - 1.5 * 2.5)
        assert state.x == pytest.approx(1.1)
        assert state.rotation == pytest.approx(math.pi * 0.5)

    def test_hidden_after_falling_off_screen(self):
        assert not evaluate_record(self.record, 10 + 10 * FPS, FPS, 1.5, 5.0).visible

    def test_x_clamped_to_range(self):
        record = SpawnRecord(spawn_frame=0, x0=4.9, rotation_speed=0.0, drift=50.0)
        for frame in range(0, 60):
            state = evaluate_record(record, frame, FPS, 0.01, 5.0)
            assert -5.0 <= state.x <= 5.0
        assert evaluate_record(record, 59, FPS, 0.01, 5.0).x == 5.0

    def test_negative_drift_clamped(self):
        record = SpawnRecord(spawn_frame=0, x0=-4.9, rotation_speed=0.0, drift=-50.0)
        assert evaluate_record(record, 30, FPS, 0.01, 5.0).x == -5.0

    def test_zero_x_range_pins_to_centre(self):
        state = evaluate_record(self.record, 40, FPS, 1.5, 0.0)
        assert state.x == 0.0


class TestVisibilityWindow:
    """spawn_frame=0, fall_speed=1.4, fps=30: y(t) = 5 - 3.5 t leaves at t = 3 s."""

    def setup_method(self):
        self.record = SpawnRecord(spawn_frame=0, x0=0.0, rotation_speed=0.0, drift=0.0)

    def test_visible_inside_window(self):
        for frame in range(0, 90):
            assert evaluate_record(self.record, frame, FPS, 1.4, 5.0).visible

    def test_invisible_after_exit(self):
        for frame in range(91, 200):
            assert not evaluate_record(self.record, frame, FPS, 1.4, 5.0).visible

    def test_exit_frame_matches_predicate(self):
        last = exit_frame(self.record, FPS, 1.4)
        assert last in (89, 90)
        assert evaluate_record(self.record, last, FPS, 1.4, 5.0).visible
        assert not evaluate_record(self.record, last + 1, FPS, 1.4, 5.0).visible

    def test_exit_frame_offsets_by_spawn(self):
        later = SpawnRecord(spawn_frame=25, x0=0.0, rotation_speed=0.0, drift=0.0)
        assert exit_frame(later, FPS, 1.4) == exit_frame(self.record, FPS, 1.4) + 25

    def test_exit_frame_none_when_not_falling(self):
        assert exit_frame(self.record, FPS, 0.0) is None

    @pytest.mark.parametrize("fall_speed", [1e-320, float("nan")])
    def test_exit_frame_none_when_exit_is_unrepresentable(self, fall_speed):
        assert exit_frame(self.record, FPS, fall_speed) is None


class TestEvaluateFrame:

    def setup_method(self):
        self.x_range = compute_geometry(1280, 720, 1.2).x_range
        self.plan = plan_spawns(42, 80, 300, self.x_range)

    def test_one_state_per_record(self):
        assert len(evaluate_frame(self.plan, 100, FPS, 1.4, self.x_range)) == 80

    def test_nothing_visible_before_first_spawn(self):
        first = self.plan[0].spawn_frame
        states = evaluate_frame(self.plan, first - 1, FPS, 1.4, self.x_range)
        assert not any(s.visible for s in states)

    def test_direct_evaluation_matches_sequential(self):
        sequential = None
        for frame in range(0, 251):
            sequential = evaluate_frame(self.plan, frame, FPS, 1.4, self.x_range)
        direct = evaluate_frame(self.plan, 250, FPS, 1.4, self.x_range)
        assert direct == sequential

    def test_order_of_evaluation_is_irrelevant(self):
        frames = [299, 0, 150, 42, 150]
        first = {f: evaluate_frame(self.plan, f, FPS, 1.4, self.x_range) for f in frames}
        for f in reversed(frames):
            assert evaluate_frame(self.plan, f, FPS, 1.4, self.x_range) == first[f]

    def test_all_visible_positions_in_bounds(self):
        for frame in range(0, 300, 7):
            for s in evaluate_frame(self.plan, frame, FPS, 1.4, self.x_range):
                if s.visible:
                    assert abs(s.x) <= self.x_range
                    assert -5.5 <= s.y <= 5.0

    def test_zero_fps_raises(self):
        with pytest.raises(DegenerateViewport):
            evaluate_frame(self.plan, 10, 0, 1.4, self.x_range)


class TestVisibleItems:

    def setup_method(self):
        self.config = SimulationConfig(asset_kind=AssetKind.MODEL, asset_source="star.glb",
                                       spawn_count=40, item_scale=0.7)
        self.geometry = compute_geometry(640, 360, self.config.item_scale)
        self.plan = plan_spawns(self.config.seed, 40, 120, self.geometry.x_range)

    def test_only_visible_records(self):
        items = visible_items(self.plan, 60, FPS, self.config, self.geometry)
        states = evaluate_frame(self.plan, 60, FPS, self.config.fall_speed, self.geometry.x_range)
        assert len(items) == sum(s.visible for s in states)

    def test_items_carry_asset_and_scale(self):
        items = visible_items(self.plan, 60, FPS, self.config, self.geometry)
        assert items
        for item in items:
            assert item.asset.kind == AssetKind.MODEL
            assert item.asset.source == "star.glb"
            assert item.scale == 0.7
            assert item.position[2] == 0.0

    def test_indices_follow_plan_order(self):
        items = visible_items(self.plan, 60, FPS, self.config, self.geometry)
        indices = [i.index for i in items]
        assert indices == sorted(indices)
