"""
Scene builder tests: colour mapping, legend entries, fixed framing and the
Plotly figure adapter.
"""

import plotly.graph_objects as go
import pytest

from config_types import AxisSpec, ColorPolicy, SceneConfig, ThresholdConfig
from deviation import DeviationResult, analyze
from scene3d import BEYOND_LABEL, WITHIN_LABEL, build_scene, scene_to_figure, vertex_colors
from wellpath import DEMO_ACTUAL, DEMO_PLANNED, ShapeMismatchError


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def palette():
    return ColorPolicy(within="yellow", beyond="red", planned="green")


@pytest.fixture
def demo_deviations():
    return analyze(DEMO_PLANNED, DEMO_ACTUAL, ThresholdConfig())


@pytest.fixture
def demo_scene(demo_deviations, palette):
    return build_scene(DEMO_PLANNED, DEMO_ACTUAL, demo_deviations, palette)


def _result(i, exceeds):
    return DeviationResult(index=i, lateral_deviation_cm=20.0 if exceeds else 1.0,
                           angular_deviation_deg=None, exceeds_threshold=exceeds)


# ============================================================================
# SCENE CONSTRUCTION
# ============================================================================


class TestBuildScene:

    def test_colors_follow_exceedance(self, demo_scene, demo_deviations, palette):
        for color, d in zip(demo_scene.actual.colors, demo_deviations):
            assert (color == palette.beyond) == d.exceeds_threshold

    @pytest.mark.parametrize("flags", [
        [False],
        [True],
        [True, False, True, True],
        [False, False, False],
    ])
    def test_colors_come_from_results_not_geometry(self, flags, palette):
        # geometry is identical for every sample; only the flags differ
        n = len(flags)
        path = [(0.0, 0.0, -float(i)) for i in range(n)]
        deviations = [_result(i, f) for i, f in enumerate(flags)]
        scene = build_scene(path, path, deviations, palette)
        assert list(scene.actual.colors) == ["red" if f else "yellow" for f in flags]

    def test_vertex_order_and_counts(self, demo_scene):
        assert list(demo_scene.planned.vertices) == list(DEMO_PLANNED)
        assert list(demo_scene.actual.vertices) == list(DEMO_ACTUAL)
        assert len(demo_scene.actual.colors) == len(DEMO_ACTUAL)
        assert set(demo_scene.planned.colors) == {"green"}

    def test_legend_entries(self, palette):
        path = [(0.0, 0.0, 0.0), (0.0, 0.0, -1.0)]
        scene = build_scene(path, path, [_result(0, False), _result(1, False)], palette)
        assert [(e.name, e.color) for e in scene.legend] == [
            (WITHIN_LABEL, "yellow"), (BEYOND_LABEL, "red")]
        assert len(scene.actual.vertices) == 2

    def test_framing_independent_of_data(self, palette):
        small = [(0.0, 0.0, 0.0)]
        large = [(500.0, -300.0, -2000.0)]
        s1 = build_scene(small, small, [_result(0, False)], palette)
        s2 = build_scene(large, large, [_result(0, True)], palette)
        assert (s1.x_axis, s1.y_axis, s1.z_axis, s1.camera_eye) == \
            (s2.x_axis, s2.y_axis, s2.z_axis, s2.camera_eye)
        assert s1.x_axis.range == (-8.0, 1.0)
        assert s1.camera_eye == (1.2, 1.2, 0.8)

    def test_custom_scene_config(self, demo_deviations, palette):
        cfg = SceneConfig(x_axis=AxisSpec("East (m)", (-2.0, 2.0)), camera_eye=(2.0, 0.0, 1.0))
        scene = build_scene(DEMO_PLANNED, DEMO_ACTUAL, demo_deviations, palette, cfg)
        assert scene.x_axis.title == "East (m)"
        assert scene.camera_eye == (2.0, 0.0, 1.0)

    def test_deviation_count_mismatch(self, demo_deviations, palette):
        with pytest.raises(ShapeMismatchError):
            build_scene(DEMO_PLANNED, DEMO_ACTUAL, demo_deviations[:-1], palette)

    def test_path_length_mismatch(self, demo_deviations, palette):
        with pytest.raises(ShapeMismatchError):
            build_scene(DEMO_PLANNED[:-1], DEMO_ACTUAL, demo_deviations, palette)

    def test_vertex_colors_helper(self, palette):
        assert vertex_colors([_result(0, True), _result(1, False)], palette) == ("red", "yellow")


# ============================================================================
# PLOTLY FIGURE
# ============================================================================


class TestSceneToFigure:

    def test_traces(self, demo_scene):
        fig = scene_to_figure(demo_scene)
        assert isinstance(fig, go.Figure)
        names = [t.name for t in fig.data]
        assert names == ["Planned Path", "Actual Path", WITHIN_LABEL, BEYOND_LABEL]
        assert len(fig.data[1].x) == len(DEMO_ACTUAL)
        assert list(fig.data[1].marker.color) == list(demo_scene.actual.colors)
        assert list(fig.data[2].x) == [None]

    def test_layout_uses_fixed_ranges(self, demo_scene):
        fig = scene_to_figure(demo_scene)
        assert tuple(fig.layout.scene.xaxis.range) == (-8.0, 1.0)
        assert tuple(fig.layout.scene.zaxis.range) == (-8.0, 0.5)
        assert fig.layout.scene.camera.eye.x == 1.2
        assert fig.layout.scene.zaxis.title.text == "Depth (meters)"
