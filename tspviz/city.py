"""Cities and loading them from JSON files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Union

PathType = Union[str, PathLike]

_SCALE = 1.95
_OFFSET = 0.975


@dataclass
class City:
    """A city with display coordinates and its original coordinates."""

    x: float
    y: float
    orig_x: float
    orig_y: float
    name: str = ""


def normalize_cities(raw: Iterable[tuple[float, float]]) -> list[City]:
    """Map raw points into the square [-0.975, 0.975], keeping the originals."""
    points = [(float(px), float(py)) for px, py in raw]
    if not points:
        return []
    xs = [px for px, _ in points]
    ys = [py for _, py in points]
    min_x, min_y = min(xs), min(ys)
    dx = (max(xs) - min_x) or 1.0
    dy = (max(ys) - min_y) or 1.0
    return [
        City(
            x=(px - min_x) / dx * _SCALE - _OFFSET,
            y=(py - min_y) / dy * _SCALE - _OFFSET,
            orig_x=px,
            orig_y=py,
        )
        for px, py in points
    ]


def _read_json(filename: PathType):
    with open(filename, encoding="utf-8") as handle:
        return json.load(handle)


def load_normalized_cities(filename: PathType) -> list[City]:
    """Read an array of {"x": ..., "y": ...} objects and normalise them."""
    data = _read_json(filename)
    try:
        raw = [(float(item["x"]), float(item["y"])) for item in data]
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"invalid city data in {filename}: {exc}") from exc
    return normalize_cities(raw)


def load_cities(filename: PathType) -> list[City]:
    """Read cities from a JSON array or from an object with a "cities" key.

    Cities without a name are called ``City<index>``; display coordinates
    equal the original ones.
    """
    data = _read_json(filename)
    try:
        entries = data if isinstance(data, list) else data["cities"]
        cities = []
        for index, entry in enumerate(entries):
            x = float(entry["x"])
            y = float(entry["y"])
            name = str(entry["name"]) if "name" in entry else f"City{index}"
            cities.append(City(x=x, y=y, orig_x=x, orig_y=y, name=name))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"invalid city data in {filename}: {exc}") from exc
    return cities