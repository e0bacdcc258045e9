[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vaultop"
version = "0.1.0"
description = "Building blocks for secret operations: in-memory providers, rotation, HMAC signing, rate limiting, redaction and more."
requires-python = ">=3.10"
dependencies = []
keywords = ["secrets", "rotation", "hmac", "rate-limiting", "redaction", "snapshot", "webhook"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["vaultop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
