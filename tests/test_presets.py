import pytest

from dummy_image.presets import (
    ASPECT_RATIOS,
    CUSTOM,
    PRESET_RESOLUTIONS,
    classify_aspect_ratio,
    find_gradient,
    find_resolution,
    gcd,
    get_resolution_options,
)


def test_gcd():
    assert gcd(1920, 1080) == 120
    assert gcd(7, 0) == 7
    assert gcd(0, 5) == 5
    assert gcd(17, 13) == 1


@pytest.mark.parametrize("width,height,label", [
    (1920, 1080, "16:9"),
    (800, 600, "4:3"),
    (1080, 1080, "1:1"),
    (600, 800, "3:4"),
    (1080, 1920, "9:16"),
    (500, 300, "5:3"),
    (1080, 1350, "4:5"),
    (1, 1, "1:1"),
])
def test_classify_aspect_ratio(width, height, label):
    assert classify_aspect_ratio(width, height) == label


def test_classify_matches_within_tolerance():
    # 1366/768 = 1.7786, within 0.01 of 16:9
    assert classify_aspect_ratio(1366, 768) == "16:9"
    # 1280/1024 = 1.25, not canonical
    assert classify_aspect_ratio(1280, 1024) == "5:4"


def test_find_resolution():
    preset = find_resolution("Full HD (1920×1080)")
    assert preset.size == (1920, 1080)
    assert find_resolution("Nope") is None


def test_find_gradient_is_case_insensitive():
    assert find_gradient("sunset").colors == ("#ff7e5f", "#feb47b")
    assert find_gradient("unknown") is None


def test_option_tables():
    assert PRESET_RESOLUTIONS[-1].label == CUSTOM
    assert ASPECT_RATIOS[-1].ratio is None

    options = get_resolution_options()
    assert len(options) == len(PRESET_RESOLUTIONS)
    full_hd = next(o for o in options if o["label"].startswith("Full HD"))
    assert full_hd["dimensions"] == "1920x1080"
    assert full_hd["aspect_ratio"] == "16:9"
