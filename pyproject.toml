[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crashorm"
version = "0.1.0"
description = "An async query builder for PostgreSQL entities: columns, conditions, queries, batch statements and relations"
requires-python = ">=3.10"
dependencies = []
keywords = ["orm", "postgres", "postgresql", "sql", "query-builder", "async"]
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
    "Framework :: AsyncIO",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["crashorm"]

[tool.pytest.ini_options]
addopts = "-ra"
