[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paydemo"
version = "0.1.0"
description = "Order, coupon and identity domain model for a small payment flow, with in-memory adapters and JSON request handlers"
requires-python = ">=3.10"
dependencies = []
keywords = ["payments", "orders", "coupons", "domain-driven design", "money"]
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
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["paydemo"]

[tool.pytest.ini_options]
addopts = "-ra"
