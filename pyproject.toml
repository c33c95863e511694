[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tspviz"
version = "0.1.0"
description = "Interactive travelling salesman visualizer using the Hungarian algorithm with subtour patching"
requires-python = ">=3.10"
keywords = ["tsp", "travelling salesman", "hungarian algorithm", "assignment problem", "visualization"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Education",
]
dependencies = [
    "numpy",
    "scipy",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tspviz = "tspviz.app:main"

[tool.hatch.build.targets.wheel]
packages = ["tspviz"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
