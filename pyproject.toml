[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "librarian"
version = "0.1.0"
description = "Command-line tool that verifies media files with ffmpeg and copies them with checksum validation"
requires-python = ">=3.10"
dependencies = []
keywords = ["media", "ffmpeg", "ffprobe", "checksum", "md5", "library", "copy", "integrity"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
librarian = "librarian.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["librarian"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
