[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "syslabs"
version = "0.1.0"
description = "Unix V6 disk image reader, an ARM simulator shell, a string-processing list and C type-limit helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["unix-v6", "filesystem", "disk-image", "inode", "sha1", "simulator", "arm", "limits"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
diskimageaccess = "syslabs.diskimageaccess:main"
arm-sim = "syslabs.armshell:main"
strproc-report = "syslabs.strproc_report:main"

[tool.hatch.build.targets.wheel]
packages = ["syslabs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
