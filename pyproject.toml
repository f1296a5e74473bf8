[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commkit"
version = "0.1.0"
description = "Small communication toolkit: HTTP log shipping, a TCP/UDP chat, a position simulator, a reader/writer queue and a few data structures."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "logging",
    "http",
    "chat",
    "tcp",
    "udp",
    "simulation",
    "ring-buffer",
    "heap",
    "interval-map",
    "threading",
]
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
    "Topic :: Communications",
    "Topic :: Communications :: Chat",
    "Topic :: System :: Logging",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
commkit-logger = "commkit.logger:main"
commkit-log-server = "commkit.log_server:main"
commkit-chat-server = "commkit.chat_server:main"
commkit-positions = "commkit.positions:main"
commkit-reader-writer = "commkit.reader_writer:main"

[tool.hatch.build.targets.wheel]
packages = ["commkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
