[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "layerstate"
version = "0.1.0"
description = "Track files added and deleted per filesystem layer, choose whiteouts, and time the work done"
requires-python = ">=3.10"
dependencies = []
keywords = ["layers", "snapshot", "whiteout", "container", "filesystem", "timing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["layerstate"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
