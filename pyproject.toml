[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "settingspages"
version = "0.1.0"
description = "Page registry, searchable sections, wallpaper thumbnails and system information for a desktop settings panel"
requires-python = ">=3.10"
keywords = ["settings", "desktop", "wallpaper", "thumbnails", "system-info", "pages"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]
dependencies = [
    "pillow",
    "platformdirs",
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["settingspages"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
