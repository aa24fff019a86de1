[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvipc"
version = "1.0.0"
description = "Camera device support: sysfs and IIO/ADC access, thread-safe frame queues, stream configuration, performance monitoring and system/user settings"
requires-python = ">=3.10"
dependencies = []
keywords = ["camera", "ipc", "sysfs", "iio", "adc", "video", "performance", "monitoring"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Capture",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rvipc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
