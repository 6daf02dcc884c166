[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sslibev"
version = "0.1.0"
description = "Proxy building blocks: URL-safe Base64, SOCKS5 headers, an LRU cache, HTTP Host sniffing, ACLs and a JSON scanner"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "shadowsocks",
    "socks5",
    "proxy",
    "acl",
    "lru-cache",
    "json",
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
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sslibev"]

[tool.hatch.build.targets.sdist]
include = [
    "sslibev",
    "tests",
]

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
