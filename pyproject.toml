[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "imsgdb"
version = "0.1.0"
description = "Read the chat, handle and attachment tables of an iMessage chat.db database"
requires-python = ">=3.10"
dependencies = []
keywords = ["imessage", "sqlite", "messages", "attachments", "stickers", "chat.db"]
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
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["imsgdb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
