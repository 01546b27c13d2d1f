"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from iconforge.models.shapes import Bounds, Shape

_NUMBER_TOKEN_RE = re.compile(r"[\d.]+")


def numeric_tokens(path_data: str) -> NDArray[np.float64]:
    """Every unsigned numeric token in path data, in order.

    Signs and command letters are ignored, so relative and arc commands are
    only approximated. Tokens that are not valid floats (e.g. "..") are dropped.
    """
    values: list[float] = []
    for token in _NUMBER_TOKEN_RE.findall(path_data or ""):
        try:
            values.append(float(token))
        except ValueError:
            continue
    return np.array(values, dtype=np.float64)


def path_bounds(path_data: str) -> Bounds:
    """Estimate a path's bounding box from its numeric tokens.

    Even-index tokens are read as x, odd-index as y.
    """
    tokens = numeric_tokens(path_data)
    if len(tokens) == 0:
        return Bounds()
    xs = tokens[0::2]
    ys = tokens[1::2] if len(tokens) > 1 else np.array([0.0])
    x_min, x_max = float(np.min(xs)), float(np.max(xs))
    y_min, y_max = float(np.min(ys)), float(np.max(ys))
    return Bounds(x=x_min, y=y_min, width=x_max - x_min, height=y_max - y_min)


def line_angle(x1: float, y1: float, x2: float, y2: float) -> int:
    """Direction of a segment in whole degrees, normalized to [0, 180)."""
    degrees = math.degrees(math.atan2(y2 - y1, x2 - x1))
    return js_round(degrees) % 180


def js_round(value: float) -> int:
    """Round half up (2.5 -> 3, -2.5 -> -2), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))


def aabb_overlap(a: Bounds, b: Bounds) -> bool:
    """Strict AABB intersection. Boxes that only touch do not overlap."""
    return a.x < b.x2 and a.x2 > b.x and a.y < b.y2 and a.y2 > b.y


def find_overlaps(shapes: Sequence[Shape]) -> list[tuple[Shape, Shape]]:
    """Every unordered overlapping pair, each reported once in index order."""
    pairs: list[tuple[Shape, Shape]] = []
    for i in range(len(shapes)):
        for j in range(i + 1, len(shapes)):
            if aabb_overlap(shapes[i].bounds, shapes[j].bounds):
                pairs.append((shapes[i], shapes[j]))
    return pairs


def overlap_area(a: Bounds, b: Bounds) -> float:
    x_overlap = max(0.0, min(a.x2, b.x2) - max(a.x, b.x))
    y_overlap = max(0.0, min(a.y2, b.y2) - max(a.y, b.y))
    return x_overlap * y_overlap


def areas(shapes: Sequence[Shape]) -> NDArray[np.float64]:
    return np.array([s.bounds.area for s in shapes], dtype=np.float64)


def whitespace_ratio(shapes: Sequence[Shape], canvas: float = 24.0) -> float:
    """Fraction of the canvas not covered by shape bounding boxes.

    Box areas are summed without removing overlap, so dense icons can go
    negative; the result is clamped to [0, 1].
    """
    canvas_area = canvas * canvas
    if canvas_area <= 0:
        return 0.0
    covered = float(np.sum(areas(shapes))) if shapes else 0.0
    return float(np.clip(1.0 - covered / canvas_area, 0.0, 1.0))


def value_range(values: Sequence[float]) -> tuple[float, float, float]:
    """(min, max, mean) of a sample, all zero when empty."""
    if not values:
        return (0.0, 0.0, 0.0)
    arr = np.asarray(values, dtype=np.float64)
    return (float(np.min(arr)), float(np.max(arr)), float(np.mean(arr)))
