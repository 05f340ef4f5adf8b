"""
Procedural renderer: token hash in, PNG bytes out.

The artwork is a 50x50 grid of filled circles on a 1600x1600 canvas.
Circle diameters follow a noise field seeded from the hash, the fill
colour and outline weight come from fixed byte-pairs of the hash.
"""

import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .noise import NoiseField
from .token_hash import DerivedParameters, map_range

log = logging.getLogger(__name__)

CANVAS_SIZE = 1600
NUM_CIRCLES = 50
PADDING = CANVAS_SIZE / 25
GRID_AREA = CANVAS_SIZE - PADDING
CELL_SIZE = GRID_AREA / (NUM_CIRCLES + 1)
NOISE_STEP = 0.1
# drawing happens at this multiple of the canvas size, then LANCZOS-downsampled
SUPERSAMPLE = 2

BACKGROUND = (0, 0, 0, 0)
BORDER_FILL = (255, 255, 255, 255)
STROKE = (0, 0, 0, 255)
BORDER_STROKE_WEIGHT = 1.0

Box = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Transform:
    dx: float = 0.0
    dy: float = 0.0

    def apply(self, x: float, y: float) -> Tuple[float, float]:
        return x + self.dx, y + self.dy

    def translate(self, dx: float, dy: float) -> "Transform":
        return Transform(self.dx + dx, self.dy + dy)


IDENTITY = Transform()
GRID_TRANSFORM = IDENTITY.translate(PADDING / 2, PADDING / 2)


@dataclass(frozen=True)
class Ellipse:
    cx: float
    cy: float
    diameter: float

    def bbox(self, stroke_weight: float = 0.0) -> Box:
        # stroke straddles the edge, half of it outside the shape
        r = (self.diameter + stroke_weight) / 2
        return (self.cx - r, self.cy - r, self.cx + r, self.cy + r)

    def scaled(self, k: float) -> "Ellipse":
        return Ellipse(self.cx * k, self.cy * k, self.diameter * k)


def stroke_ink(stroke_px: float) -> Tuple[int, Optional[Tuple[int, int, int, int]]]:
    """Outline width and colour for a stroke of stroke_px supersampled pixels.

    Strokes thinner than one pixel are drawn one pixel wide with alpha scaled
    to their coverage, so every non-zero weight leaves a mark.
    """
    if stroke_px <= 0:
        return 0, None
    if stroke_px < 1:
        return 1, STROKE[:3] + (max(1, int(round(255 * stroke_px))),)
    return int(round(stroke_px)), STROKE


def centered_square(transform: Transform, x: float, y: float, side: float, stroke_weight: float) -> Box:
    cx, cy = transform.apply(x, y)
    r = (side + stroke_weight) / 2
    return (cx - r, cy - r, cx + r, cy + r)


def plan_grid(params: DerivedParameters, transform: Transform = GRID_TRANSFORM) -> List[Ellipse]:
    """Every circle of the grid, column by column, in canvas coordinates."""
    offsets = np.arange(NUM_CIRCLES) * NOISE_STEP
    field = NoiseField(params.seed).grid(offsets, offsets)
    ellipses = []
    for x in range(NUM_CIRCLES):
        for y in range(NUM_CIRCLES):
            size = map_range(float(field[x][y]), 0, 1, 0, CELL_SIZE)
            cx, cy = transform.apply(CELL_SIZE * (x + 1), CELL_SIZE * (y + 1))
            ellipses.append(Ellipse(cx, cy, size))
    return ellipses


def draw_border(draw: ImageDraw.ImageDraw, scale: int = SUPERSAMPLE, transform: Transform = IDENTITY):
    weight = BORDER_STROKE_WEIGHT * scale
    box = centered_square(
        transform, scale * CANVAS_SIZE / 2, scale * CANVAS_SIZE / 2, scale * (CANVAS_SIZE - PADDING / 2), weight
    )
    width, outline = stroke_ink(weight)
    draw.rectangle(box, fill=BORDER_FILL, outline=outline, width=width)


def draw_grid(draw: ImageDraw.ImageDraw, params: DerivedParameters, ellipses: List[Ellipse],
              scale: int = SUPERSAMPLE):
    weight = params.stroke_weight * scale
    width, outline = stroke_ink(weight)
    fill = params.fill + (255,)
    for e in ellipses:
        draw.ellipse(e.scaled(scale).bbox(weight if width else 0.0), fill=fill, outline=outline, width=width)


def draw_params(params: DerivedParameters, scale: int = SUPERSAMPLE) -> Image.Image:
    """Draw at scale x the canvas size, then downsample to the canvas."""
    ellipses = plan_grid(params)
    size = CANVAS_SIZE * scale
    img = Image.new("RGBA", (size, size), BACKGROUND)
    # "RGBA" mode blends translucent strokes over the fill
    draw = ImageDraw.Draw(img, "RGBA")
    draw_border(draw, scale)
    draw_grid(draw, params, ellipses, scale)
    if scale != 1:
        img = img.resize((CANVAS_SIZE, CANVAS_SIZE), Image.Resampling.LANCZOS)
    log.debug(
        "rendered seed=%x thickness=%d fill=%s (%d circles)",
        params.seed, params.line_thickness, params.fill, len(ellipses),
    )
    return img


def render_image(token_hash: str) -> Image.Image:
    return draw_params(DerivedParameters.from_hash(token_hash))


def encode_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render(token_hash: str) -> bytes:
    return encode_png(render_image(token_hash))
