[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ojjudge"
version = "0.1.0"
description = "Judging worker for an online judge: runs submissions in a go-judge sandbox and scores them against test data"
requires-python = ">=3.10"
keywords = ["online-judge", "judge", "go-judge", "competitive-programming", "sandbox"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Testing",
]
dependencies = [
    "requests>=2.28",
    "pyyaml>=6.0",
    "psutil>=5.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
ojjudge = "ojjudge.worker:main"

[tool.hatch.build.targets.wheel]
packages = ["ojjudge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
