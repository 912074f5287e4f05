[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpcxkit"
version = "0.1.0"
description = "RPC helpers: request contexts, buffer pools, gzip helpers, address utilities and a server stub generator"
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["rpc", "context", "buffer-pool", "gzip", "code-generation"]
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
    "Topic :: Software Development :: Libraries",
    "Topic :: Software Development :: Code Generators",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rpcx-xgen = "rpcxkit.xgen:main"

[tool.hatch.build.targets.wheel]
packages = ["rpcxkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
