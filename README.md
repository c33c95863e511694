# tspviz

An interactive viewer that solves the travelling salesman problem step by step.
It first solves an assignment problem with the Hungarian algorithm. If the
assignment splits into several closed subtours, it forbids the first edge of
each subtour and solves again. This repeats until one tour passes through every
city. Each iteration is kept as a step, so you can move back and forth through
the steps and watch the subtours merge.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Running

```
tspviz [CITIES] [--windowed]
```

- `CITIES` is a JSON file with the starting cities. The default is
  `cities.json` in the current directory. If the file cannot be opened, an
  error is logged and the viewer starts with no cities. If the file is not
  valid JSON or lacks coordinates, the program stops with an error.
- `--windowed` opens a resizable 800×600 window. Without it the viewer runs
  full screen.

The cities file may be a plain array:

```json
[{"x": 120, "y": 80}, {"x": 400, "y": 300, "name": "Depot"}]
```

It may also be an object with a `"cities"` key that holds such an array.
Coordinates are window pixels, with the origin at the top-left. A city with no
name is called `City<index>`.

### Controls

| Key       | Action                                                        |
|-----------|---------------------------------------------------------------|
| S         | Solve; needs at least two cities                              |
| N / P     | Next / previous step                                          |
| M         | Show or hide the assignment panel                             |
| A         | Start or stop the salesman animation (final tour only)        |
| F         | Switch between slow and fast animation while it runs          |
| Left click| Add a city at the mouse position; this clears the solution    |
| Q / Esc   | Quit                                                          |

The panel lists the subtours of the current step, showing the first eight
cities of each. It also lists up to twelve assignment edges with their lengths,
and the step's status.

## Using the solver from Python

```python
from tspviz.city import City
from tspviz.solver import solve_with_hungarian, tour_length

cities = [City(x, y, x, y, f"City{i}") for i, (x, y) in
          enumerate([(0, 0), (100, 0), (100, 100), (0, 100)])]
steps = solve_with_hungarian(cities)
final = steps[-1]
print(final.is_final_tour, final.subtours, tour_length(cities, final.assignment))
```

`solve_with_hungarian` raises `ValueError` when it gets fewer than two cities.
It stops after 100 iterations at most, and then the last step may not be a
complete tour. Each `TSPStep` has these fields:

- `assignment`: the edges as `(from, to)` pairs
- `subtours`: the cycles those edges form
- `description`: a short text for the step
- `iteration`: the iteration number
- `is_final_tour`: whether the step is one complete tour

`tspviz.solver` also exposes its building blocks:

- `build_distance_matrix`
- `solve_assignment`, which calls SciPy's `linear_sum_assignment`
- `find_subtours`, which raises `ValueError` on a broken chain
- `forbid_subtour_edges`

`tspviz.city` provides these loaders:

- `load_cities` reads the file format described above.
- `load_normalized_cities` reads an array of `{"x", "y"}` objects and passes
  them through `normalize_cities`.
- `normalize_cities` scales the coordinates into −0.975…0.975 and keeps the
  originals in `orig_x` and `orig_y`.

Both loaders raise `ValueError` when the city data is invalid.

`tspviz.panel` builds the panel text without drawing it. `subtour_label`,
`assignment_lines` and `panel_lines` return plain strings and `PanelLine`
records, which is useful for testing or other front ends.

## What it does not do

Cities added by clicking are not saved; nothing is ever written back to a file.
The `tspviz` command always opens a window. To solve without a window, use
`tspviz.solver` from Python.