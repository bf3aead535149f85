"""SVG serialization of rendered primitives."""

from __future__ import annotations

from typing import Sequence

import svgwrite
from svgwrite.base import BaseElement

from .models import CharacterAttributes
from .render import Circle, Group, Line, Path, Primitive, batch_size, render_batch


def build_element(dwg: svgwrite.Drawing, primitive: Primitive) -> BaseElement:
    """Create the svgwrite element for one primitive using ``dwg`` as factory."""
    if isinstance(primitive, Circle):
        return dwg.circle(
            center=(primitive.cx, primitive.cy),
            r=primitive.r,
            fill=primitive.fill,
            stroke=primitive.stroke,
        )
    if isinstance(primitive, Path):
        return dwg.path(
            d=primitive.d,
            fill=primitive.fill,
            stroke=primitive.stroke,
            stroke_width=primitive.stroke_width,
        )
    if isinstance(primitive, Line):
        return dwg.line(
            start=(primitive.x1, primitive.y1),
            end=(primitive.x2, primitive.y2),
            stroke=primitive.stroke,
            stroke_width=primitive.stroke_width,
            stroke_linecap="round",
        )
    if isinstance(primitive, Group):
        group = dwg.g()
        if primitive.translate != (0.0, 0.0):
            group.translate(*primitive.translate)
        if primitive.rotate:
            group.rotate(primitive.rotate)
        for child in primitive.children:
            group.add(build_element(dwg, child))
        return group
    raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")


def primitive_to_svg(primitive: Primitive) -> str:
    return build_element(svgwrite.Drawing(), primitive).tostring()


def to_svg(samples: Sequence[CharacterAttributes], columns: int = 6) -> str:
    """Render a batch of figures as a standalone SVG document."""
    width, height = batch_size(len(samples), columns)
    dwg = svgwrite.Drawing(size=(width, height), viewBox=f"0 0 {width} {height}")
    dwg.add(build_element(dwg, render_batch(samples, columns=columns)))
    return dwg.tostring()
