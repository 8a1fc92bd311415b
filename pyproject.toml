[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oaiclient"
version = "0.1.0"
description = "A small, typed client for the model, moderation, speech, thread, run and vector store endpoints of an OpenAI-compatible API."
requires-python = ">=3.10"
keywords = ["openai", "api", "client", "assistants", "vector-store", "server-sent-events"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "httpx",
]

[tool.hatch.build.targets.wheel]
packages = ["oaiclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
