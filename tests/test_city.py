import json

import pytest

from tspviz.city import City, load_cities, load_normalized_cities, normalize_cities


def test_normalize_empty():
    assert normalize_cities([]) == []


def test_normalize_bounds_and_originals():
    raw = [(10.0, 20.0), (30.0, 60.0), (20.0, 40.0)]
    cities = normalize_cities(raw)
    assert [(c.orig_x, c.orig_y) for c in cities] == raw
    assert cities[0].x == pytest.approx(-0.975)
    assert cities[0].y == pytest.approx(-0.975)
    assert cities[1].x == pytest.approx(0.975)
    assert cities[1].y == pytest.approx(0.975)
    assert cities[2].x == pytest.approx(0.0)
    assert cities[2].y == pytest.approx(0.0)


def test_normalize_single_point_degenerate_range():
    (city,) = normalize_cities([(5.0, 7.0)])
    assert city.x == pytest.approx(-0.975)
    assert city.y == pytest.approx(-0.975)
    assert (city.orig_x, city.orig_y) == (5.0, 7.0)


def test_normalize_preserves_order_within_range():
    raw = [(i * 3.0, -i * 2.0) for i in range(6)]
    cities = normalize_cities(raw)
    xs = [c.x for c in cities]
    assert xs == sorted(xs)
    assert all(-0.975 - 1e-9 <= c.y <= 0.975 + 1e-9 for c in cities)


def test_load_normalized_cities(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps([{"x": 0, "y": 0}, {"x": 10, "y": 10}]))
    cities = load_normalized_cities(path)
    assert [(c.orig_x, c.orig_y) for c in cities] == [(0.0, 0.0), (10.0, 10.0)]
    assert cities[1].x == pytest.approx(0.975)


def test_load_normalized_cities_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_normalized_cities(tmp_path / "absent.json")


def test_load_normalized_cities_bad_json(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        load_normalized_cities(path)


def test_load_normalized_cities_missing_key(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps([{"x": 1}]))
    with pytest.raises(ValueError):
        load_normalized_cities(path)


def test_load_cities_array_generates_names(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps([{"x": 100, "y": 200}, {"x": 300, "y": 50}]))
    cities = load_cities(path)
    assert [c.name for c in cities] == ["City0", "City1"]
    assert cities[0] == City(x=100.0, y=200.0, orig_x=100.0, orig_y=200.0, name="City0")


def test_load_cities_object_with_names(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(
        json.dumps({"cities": [{"name": "Alpha", "x": 1, "y": 2}, {"x": 3, "y": 4}]})
    )
    cities = load_cities(path)
    assert [c.name for c in cities] == ["Alpha", "City1"]
    assert all(c.x == c.orig_x and c.y == c.orig_y for c in cities)


def test_load_cities_object_without_key(tmp_path):
    path = tmp_path / "cities.json"
    path.write_text(json.dumps({"towns": []}))
    with pytest.raises(ValueError):
        load_cities(path)