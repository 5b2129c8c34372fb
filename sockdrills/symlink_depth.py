"""Find how long a chain of symbolic links the system will follow."""

from __future__ import annotations

import argparse
import errno
import os
import sys
import tempfile
from pathlib import Path

BASE_FILENAME = "a"
LINK_PREFIX = "link_"
TEMP_DIR_PREFIX = "symlink_test_"


def _link_name(index: int) -> str:
    return f"{LINK_PREFIX}{index}"


def measure_symlink_depth(directory: str | os.PathLike[str] | None = None) -> int:
    """Return the longest chain of symlinks that can still be opened.

    A scratch directory is created inside ``directory`` (the current
    directory when omitted) and removed again afterwards. Errors other
    than hitting the symlink limit are raised as OSError.
    """
    scratch = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX, dir=directory or "."))
    depth = 0
    try:
        (scratch / BASE_FILENAME).touch()
        os.symlink(BASE_FILENAME, scratch / _link_name(0))
        depth = 1
        while True:
            link = scratch / _link_name(depth)
            os.symlink(_link_name(depth - 1), link)
            try:
                fd = os.open(link, os.O_RDONLY)
            except OSError as exc:
                link.unlink()
                if exc.errno == errno.ELOOP:
                    break
                raise
            os.close(fd)
            depth += 1
    finally:
        for index in range(depth + 1):
            (scratch / _link_name(index)).unlink(missing_ok=True)
        (scratch / BASE_FILENAME).unlink(missing_ok=True)
        scratch.rmdir()
    return depth - 1


def main(argv: list[str] | None = None) -> int:
    """Measure the symlink depth in the current directory and print it."""
    argparse.ArgumentParser(
        prog="symlink-depth",
        description="Report the maximum symbolic link recursion depth.",
    ).parse_args(argv)

    try:
        depth = measure_symlink_depth()
    except OSError as exc:
        print(f"Error measuring symlink depth: {exc}", file=sys.stderr)
        return 1
    print("Reached max symlink recursion depth.")
    print(f"Symlink recursion depth: {depth}")
    return 0