[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sockdrills"
version = "0.1.0"
description = "Small networking and filesystem drills: multicast chat, a two-client TCP relay and a symlink depth probe"
requires-python = ">=3.10"
dependencies = []
keywords = ["socket", "multicast", "udp", "tcp", "relay", "symlink"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sockdrills-multicast-receive = "sockdrills.multicast:receiver_main"
sockdrills-multicast-send = "sockdrills.multicast:sender_main"
sockdrills-symlink-depth = "sockdrills.symlink_depth:main"
sockdrills-relay-server = "sockdrills.relay_server:main"
sockdrills-relay-send = "sockdrills.relay_clients:sender_main"
sockdrills-relay-receive = "sockdrills.relay_clients:receiver_main"

[tool.hatch.build.targets.wheel]
packages = ["sockdrills"]

[tool.pytest.ini_options]
addopts = "-ra"
