[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lxstd"
version = "0.1.0"
description = "Building blocks for agent workflows: JSON values, markdown, sagas, knowledge, memory and task stores, and an MCP client over stdio"
requires-python = ">=3.10"
dependencies = [
    "markdown-it-py",
]
keywords = ["agents", "mcp", "json-rpc", "markdown", "saga", "workflow", "memory", "tasks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lxstd"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
