import random
from dataclasses import dataclass, field
from typing import List

import pytest

from dummy_image.spec import RenderSpec
from dummy_image.surface import Surface


@dataclass
class Call:
    name: str
    args: dict = field(default_factory=dict)


class RecordingSurface(Surface):
    """Surface that records drawing calls instead of painting."""

    def __init__(self, sizable=True):
        self.sizable = sizable
        self._width = 0
        self._height = 0
        self.calls: List[Call] = []

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    def resize(self, width, height):
        if not self.sizable:
            return False
        self._width, self._height = width, height
        self.calls.append(Call("resize", {"width": width, "height": height}))
        return True

    def fill_rect(self, x, y, width, height, paint):
        self.calls.append(Call("fill_rect", dict(x=x, y=y, width=width, height=height, paint=paint)))

    def fill_circle(self, cx, cy, radius, color):
        self.calls.append(Call("fill_circle", dict(cx=cx, cy=cy, radius=radius, color=color)))

    def stroke_line(self, points, color, line_width):
        self.calls.append(Call("stroke_line", dict(points=list(points), color=color, line_width=line_width)))

    def draw_text(self, text, x, y, *, font_family, font_size, color,
                  align="left", bold=False, shadow=None):
        self.calls.append(Call("draw_text", dict(
            text=text, x=x, y=y, font_family=font_family, font_size=font_size,
            color=color, align=align, bold=bold, shadow=shadow,
        )))

    def named(self, name):
        return [c for c in self.calls if c.name == name]


@pytest.fixture
def recorder():
    return RecordingSurface()


@pytest.fixture
def spec():
    return RenderSpec()


@pytest.fixture
def rng():
    return random.Random(1234)
