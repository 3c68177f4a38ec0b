[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "onchainkit"
version = "0.1.0"
description = "Constant-product curve math, fixed-layout account views and AMM/escrow instruction processing over in-memory accounts"
requires-python = ">=3.10"
dependencies = []
keywords = ["amm", "constant-product", "escrow", "liquidity", "swap", "account-layout"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["onchainkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
