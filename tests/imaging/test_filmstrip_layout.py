import pytest

from imaging.filmstrip_errors import ConfigurationError
from imaging.filmstrip_layout import (
    DEFAULT_CANVAS,
    Canvas,
    LayoutParameters,
    Rect,
    plan,
)

CANVAS = Canvas(width=1155, height=1726, resolution=309)


def test_default_canvas_is_scaled_physical_size():
    assert DEFAULT_CANVAS.width == round(3.879 * 0.95 * 309)
    assert DEFAULT_CANVAS.height == round(5.819 * 0.95 * 309)
    assert DEFAULT_CANVAS.resolution == 309


def test_rect_to_box_rounds_to_pixels():
    assert Rect(10.4, 20.6, 100.2, 50.5).to_box() == (10, 21, 111, 71)


def test_two_strips_are_centred_with_equal_margins():
    strips = plan(CANVAS, LayoutParameters())

    assert len(strips) == 2
    left, right = strips[0].rect, strips[1].rect

    assert left.width == pytest.approx(519.75)
    assert left.height == pytest.approx(1553.4)
    assert right.x - left.right == pytest.approx(57.75)

    left_margin = left.x
    right_margin = CANVAS.width - right.right
    assert left_margin == pytest.approx(right_margin)
    assert left_margin == pytest.approx(28.875)


@pytest.mark.parametrize("strip_count", [1, 2, 3])
def test_strip_group_is_horizontally_centred(strip_count):
    params = LayoutParameters(
        strip_count=strip_count,
        strip_width_fraction=0.25,
        spacing_fraction=0.05,
    )
    strips = plan(CANVAS, params)

    start_x = strips[0].rect.x
    total_w = strips[-1].rect.right - start_x
    assert start_x + total_w / 2 == pytest.approx(CANVAS.width / 2)


def test_strips_share_vertical_position():
    strips = plan(CANVAS, LayoutParameters())
    expected_y = (CANVAS.height - CANVAS.height * 0.90) / 2
    for strip in strips:
        assert strip.rect.y == pytest.approx(expected_y)


def test_default_frames_split_strip_evenly_and_touch():
    strip = plan(CANVAS, LayoutParameters())[0]
    frames = strip.frames

    assert [f.slot for f in frames] == [0, 1, 2]
    for frame in frames:
        assert frame.rect.height == pytest.approx(strip.rect.height / 3)
        assert frame.rect.x == strip.rect.x
        assert frame.rect.width == strip.rect.width

    assert frames[0].rect.y == pytest.approx(strip.rect.y)
    assert frames[1].rect.y == pytest.approx(frames[0].rect.bottom)
    assert frames[2].rect.bottom == pytest.approx(strip.rect.bottom)


def test_frame_height_fraction_leaves_equal_gaps():
    params = LayoutParameters(frame_height_fraction=0.3)
    strip = plan(CANVAS, params)[1]
    f0, f1, f2 = (f.rect for f in strip.frames)

    gaps = [
        f0.y - strip.rect.y,
        f1.y - f0.bottom,
        f2.y - f1.bottom,
        strip.rect.bottom - f2.bottom,
    ]
    assert gaps[0] > 0
    for gap in gaps:
        assert gap == pytest.approx(gaps[0])

    assert sum(gaps) + 3 * f0.height == pytest.approx(strip.rect.height)


def test_frames_know_their_strip():
    for strip in plan(CANVAS, LayoutParameters()):
        assert all(f.strip_index == strip.index for f in strip.frames)


def test_plan_is_repeatable():
    params = LayoutParameters(frame_height_fraction=0.28)
    assert plan(CANVAS, params) == plan(CANVAS, params)


def test_required_image_count():
    assert LayoutParameters().required_image_count == 3
    assert LayoutParameters(duplicate_across_strips=False).required_image_count == 6


def test_default_parameters_are_valid():
    LayoutParameters().validate()  # should not raise


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"strip_count": 0}, "strip_count"),
        ({"frames_per_strip": 0}, "frames_per_strip"),
        ({"strip_width_fraction": 0}, "strip_width_fraction"),
        ({"strip_height_fraction": 1.2}, "strip_height_fraction"),
        ({"spacing_fraction": -0.1}, "spacing_fraction"),
        ({"strip_width_fraction": 0.5}, "canvas width"),
        ({"frame_height_fraction": 0.4}, "do not fit"),
        ({"background_color": (0, 0, 300)}, "RGB"),
    ],
)
def test_invalid_parameters_raise(overrides, message):
    with pytest.raises(ConfigurationError, match=message):
        LayoutParameters(**overrides).validate()


def test_single_strip_ignores_spacing():
    LayoutParameters(strip_count=1, spacing_fraction=0).validate()
