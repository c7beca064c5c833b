[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orderbook"
version = "0.1.0"
description = "A price-time priority limit order book with market, fill-and-kill, fill-or-kill and good-for-day orders"
requires-python = ">=3.10"
keywords = ["orderbook", "matching engine", "trading", "limit order book"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]
dependencies = [
    "sortedcontainers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
orderbook = "orderbook.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["orderbook"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
