import io
import random

import pytest
from PIL import Image

from dummy_image.generator import ImageGenerator, encode_image, export_filename, preview_scale
from dummy_image.resolver import Edit
from dummy_image.spec import EditorState, RenderSpec


@pytest.fixture
def generator():
    return ImageGenerator(rng=random.Random(5))


def test_preview_scale():
    assert preview_scale(RenderSpec(width=800, height=600)) == 0.5
    assert preview_scale(RenderSpec(width=1080, height=1920)) == pytest.approx(400 / 1920)
    assert preview_scale(RenderSpec(width=200, height=100)) == 1.0
    assert preview_scale(RenderSpec(width=800, height=600), max_size=200) == 0.25


def test_export_filename():
    assert export_filename(RenderSpec(width=1920, height=1080)) == "image_1920_1080.png"
    assert export_filename(RenderSpec(width=10, height=20), "jpg") == "image_10_20.jpg"


def test_apply_repaints_preview(generator):
    frames = []
    generator.subscribe(lambda state, image: frames.append((state, image.size)))

    generator.apply(Edit("resolution", "HD (1280×720)"))
    assert generator.spec.size == (1280, 720)
    assert frames[-1][1] == (400, 225)

    generator.apply(Edit("overlay_text", "Hello"))
    assert len(frames) == 2
    assert frames[-1][0].spec.overlay_text == "Hello"


def test_unchanged_spec_does_not_repaint(generator):
    frames = []
    generator.subscribe(lambda state, image: frames.append(image))

    generator.apply(Edit("primary_color", "#123456"))
    generator.apply(Edit("primary_color", "#123456"))
    generator.apply(Edit("primary_color", "bogus"))
    assert len(frames) == 1


def test_latest_spec_wins(generator):
    for width in (300, 500, 700):
        generator.apply(Edit("width", width))
    # 700x600 fits the 400px preview at scale 4/7
    assert generator.spec.size == (700, 600)
    assert generator.preview_image().size == (400, 343)


def test_export_is_full_size_after_preview(generator):
    generator.refresh_preview()
    assert generator.preview_image().size == (400, 300)

    result = generator.export()
    assert result.filename == "image_800_600.png"
    assert result.media_type == "image/png"
    assert (result.width, result.height) == (800, 600)

    image = Image.open(io.BytesIO(result.data))
    assert image.size == (800, 600)
    assert image.format == "PNG"


def test_export_jpeg(generator):
    result = generator.export(format="jpg")
    assert result.filename == "image_800_600.jpg"
    assert result.media_type == "image/jpeg"
    assert Image.open(io.BytesIO(result.data)).format == "JPEG"


def test_export_to_directory(generator, tmp_path):
    generator.apply(Edit("resolution", "Square (1080×1080)"))
    result = generator.export(output_dir=tmp_path)

    assert result.path == str(tmp_path / "image_1080_1080.png")
    with Image.open(result.path) as image:
        assert image.size == (1080, 1080)


def test_export_rejects_unknown_format(generator):
    with pytest.raises(ValueError):
        generator.export(format="gif")


def test_starting_state_is_kept():
    state = EditorState(spec=RenderSpec(width=320, height=200))
    generator = ImageGenerator(state=state)
    assert generator.preview_scale == 1.0
    assert generator.preview_image().size == (320, 200)


def test_jpeg_flattens_transparency_onto_white():
    image = Image.new("RGBA", (4, 4), (255, 0, 0, 0))
    data = encode_image(image, format="JPEG")

    flat = Image.open(io.BytesIO(data))
    assert flat.mode == "RGB"
    r, g, b = flat.getpixel((1, 1))
    assert min(r, g, b) > 245
