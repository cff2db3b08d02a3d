"""
File system traversal: walk directories and collect Go source files.

This module provides utilities for recursively traversing directories to find
Go source files (.go) for channel analysis. Directories that never hold code
worth checking (VCS metadata, editor folders, vendored dependencies, test
fixtures under testdata/) are skipped by default.

Typical usage:
    from pathlib import Path
    from chancheck.traversal import find_go_files

    # All .go files, including *_test.go
    go_files = find_go_files(Path("./my_module"))

    # Production code only
    sources = find_go_files(Path("./my_module"), include_tests=False)

    # Custom ignore patterns
    sources = find_go_files(Path("./my_module"), ignore_dirs={".git", "third_party"})
"""

import logging
from pathlib import Path
from typing import AbstractSet, Callable, Optional, Set

logger = logging.getLogger(__name__)

# Default directories to ignore during traversal
DEFAULT_IGNORE_DIRS: Set[str] = {
    # Vendored dependencies and go tool fixtures
    "vendor",
    "testdata",
    "node_modules",

    # Version control
    ".git",
    ".svn",
    ".hg",

    # IDE and editor directories
    ".vscode",
    ".idea",
    ".vs",

    # Cache directories
    ".cache",
}


def is_go_file(path: Path) -> bool:
    """
    Check if a file is a Go source file (.go extension).

    Examples:
        >>> is_go_file(Path("main.go"))
        True
        >>> is_go_file(Path("main.c"))
        False
    """
    return path.suffix == ".go"


def is_test_file(path: Path) -> bool:
    """
    Check if a file is a Go test file (name ends with _test.go).

    Examples:
        >>> is_test_file(Path("worker_test.go"))
        True
        >>> is_test_file(Path("worker.go"))
        False
    """
    return is_go_file(path) and path.name.endswith("_test.go")


def should_ignore_directory(dir_path: Path, ignore_dirs: AbstractSet[str]) -> bool:
    """
    Check if a directory should be ignored during traversal.

    Only the directory name is compared (case-sensitive), not the full path.
    """
    return dir_path.name in ignore_dirs


def find_go_files(
    root: Path,
    include_tests: bool = True,
    ignore_dirs: Optional[AbstractSet[str]] = None,
    follow_symlinks: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[Path]:
    """
    Recursively find all Go source files in a directory tree.

    Args:
        root: Root directory to start traversal from.
        include_tests: If False, skip *_test.go files.
        ignore_dirs: Set of directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
                         If False (default), symlinks are skipped.
        filter_fn: Optional additional filter; only files for which
                   filter_fn(path) returns True are included.

    Returns:
        Sorted list of paths of all matching .go files.

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If root is not a directory.

    Notes:
        - Permission errors on subdirectories are logged but do not stop traversal.
        - The root path is resolved to an absolute path before traversal.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: include_tests=%s, follow_symlinks=%s, ignore_dirs=%s",
        include_tests,
        follow_symlinks,
        sorted(ignore_dirs),
    )

    collected_files: list[Path] = []

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)

                elif entry.is_file() and is_go_file(entry):
                    if not include_tests and is_test_file(entry):
                        logger.debug("Skipping test file: %s", entry)
                        continue
                    if filter_fn is not None and not filter_fn(entry):
                        logger.debug("Filtered out by custom filter: %s", entry)
                        continue
                    logger.debug("Found source file: %s", entry)
                    collected_files.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    # Sort for deterministic ordering
    collected_files.sort()

    logger.info(
        "Traversal complete: found %d Go file(s) in %s",
        len(collected_files),
        root,
    )

    return collected_files
