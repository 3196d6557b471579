[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dealercms"
version = "0.1.0"
description = "A small HTTP service that stores per-dealer question and answer content, organised by product, group and topic."
requires-python = ">=3.10"
keywords = ["cms", "dealer", "faq", "question-answer", "flask", "sqlalchemy"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Content Management System",
]
dependencies = [
    "sqlalchemy>=2.0",
    "flask>=2.2",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
dealercms = "dealercms.app:main"

[tool.hatch.build.targets.wheel]
packages = ["dealercms"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
