[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spanpaxos"
version = "0.1.0"
description = "Core of a Spanner-style Paxos group leader: leader state, TrueTime commit wait and quorum write replication on asyncio"
requires-python = ">=3.10"
dependencies = []
keywords = ["paxos", "consensus", "replication", "truetime", "spanner", "asyncio", "write-ahead-log"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: System :: Distributed Computing",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["spanpaxos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
