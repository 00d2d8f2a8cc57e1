"""Local directory listing."""

import logging
import os
import re

logger = logging.getLogger(__name__)


def list_directory(path: str, filter_pattern: str = '') -> list[str]:
    """
    Return the entries of a directory whose names match a regex, directories
    first then files, each sorted. The regex is applied to the entry name
    without its leading path.
    """
    if not os.path.exists(path):
        logger.info(f'Path {path!r} does not exist locally; ignoring')
        return []

    if not os.path.isdir(path):
        logger.error(
            f'Path {path!r} is not a directory; unable to scan it for contents'
        )
        return []

    logger.debug(f'Finding items in {path!r} matching pattern {filter_pattern!r}')
    pattern = re.compile(filter_pattern)
    entries = [
        os.path.join(path, name) for name in os.listdir(path) if pattern.search(name)
    ]

    dirs = sorted(e for e in entries if os.path.isdir(e))
    files = sorted(e for e in entries if os.path.isfile(e))

    return dirs + files


def find_files(root: str, filter_pattern: str) -> list[str]:
    """Recursively find files below root whose names match a regex, sorted."""
    if not os.path.isdir(root):
        logger.info(f'Path {root!r} is not a local directory; ignoring')
        return []

    pattern = re.compile(filter_pattern)
    found = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        found.extend(
            os.path.join(dirpath, name)
            for name in sorted(filenames)
            if pattern.search(name)
        )

    return found
