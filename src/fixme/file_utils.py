"""File discovery for scanning"""

import logging
import os

from fixme.models import ScanConfig


logger = logging.getLogger(__name__)


class DiscoveryError(RuntimeError):
    """The tree could not be walked. Fatal for the whole run."""


def is_hidden(name: str) -> bool:
    return name.startswith('.')


def is_ignored_dir(name: str, config: ScanConfig) -> bool:
    return any(name.startswith(prefix) for prefix in config.effective_ignore_dirs)


def is_ignored_file(name: str, config: ScanConfig) -> bool:
    return any(name.endswith(suffix) for suffix in config.ignore_exts)


def _list_dir(dirpath: str) -> list[os.DirEntry]:
    try:
        with os.scandir(dirpath) as it:
            return sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise DiscoveryError(f'Cannot list directory {dirpath}: {e}') from e


def _walk(root: str, config: ScanConfig, files: list[str]) -> None:
    # One sorted entry iterator per open directory
    stack = [iter(_list_dir(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        if config.skip_hidden and is_hidden(entry.name):
            logger.debug(f'[DISCOVER] Skipping hidden entry: {entry.path}')
            continue

        try:
            is_dir = entry.is_dir(follow_symlinks=False)
            is_regular = entry.is_file(follow_symlinks=False)
        except OSError as e:
            raise DiscoveryError(f'Cannot stat {entry.path}: {e}') from e

        if is_dir:
            if is_ignored_dir(entry.name, config):
                logger.debug(f'[DISCOVER] Skipping ignored directory: {entry.path}')
                continue
            stack.append(iter(_list_dir(entry.path)))
            continue

        if entry.is_symlink():
            if not os.path.exists(entry.path):
                raise DiscoveryError(f'Broken symlink: {entry.path}')
        elif not is_regular:
            # FIFOs, sockets and device nodes would block or never end on open()
            logger.debug(f'[DISCOVER] Skipping special file: {entry.path}')
            continue

        # Only this file is excluded, its siblings are still visited
        if is_ignored_file(entry.name, config):
            logger.debug(f'[DISCOVER] Skipping ignored file: {entry.path}')
            continue

        files.append(entry.path)
        logger.debug(f'[DISCOVER] Found file: {entry.path}')


def discover_files(root: str, config: ScanConfig) -> list[str]:
    """
    Collect the files to scan under root.

    Walks depth-first, pre-order, visiting entries in name order so the
    result is stable across runs. Exclusion rules apply to entries below
    root, never to root itself.

    Args:
        root: File or directory to scan
        config: Exclusion settings

    Returns:
        Absolute file paths in traversal order

    Raises:
        DiscoveryError: root is missing or part of the tree cannot be walked
    """
    root = os.path.abspath(root)

    if not os.path.lexists(root):
        raise DiscoveryError(f'Path not found: {root}')

    if not os.path.isdir(root):
        if not os.path.exists(root):
            raise DiscoveryError(f'Broken symlink: {root}')
        if is_ignored_file(os.path.basename(root), config):
            logger.info(f'[DISCOVER] {root} matches an ignored extension, nothing to scan')
            return []
        return [root]

    logger.info(f'[DISCOVER] Walking directory: {root}')
    files: list[str] = []
    _walk(root, config, files)
    logger.info(f'[DISCOVER] Found {len(files)} file(s) under {root}')
    return files
