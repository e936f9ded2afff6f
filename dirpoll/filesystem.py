"""Path string helpers and working-directory access."""

from __future__ import annotations

import os
import sys
import unicodedata


def os_slash() -> str:
    """Return the directory separator of this system."""
    return os.sep


def is_directory(path: str) -> bool:
    """Return whether ``path`` names a directory."""
    return os.path.isdir(path)


def slash_at_end(path: str) -> bool:
    """Return whether ``path`` ends with the directory separator."""
    return path.endswith(os_slash())


def dir_add_slash_at_end(path: str) -> str:
    """Append the separator unless ``path`` already ends with it or is one character or less."""
    if len(path) > 1 and not path.endswith(os_slash()):
        return path + os_slash()
    return path


def dir_remove_slash_at_end(path: str) -> str:
    """Drop one trailing separator unless ``path`` is one character or less."""
    if len(path) > 1 and path.endswith(os_slash()):
        return path[:-1]
    return path


def file_name_from_path(path: str) -> str:
    """Return the last component of ``path``."""
    path = dir_remove_slash_at_end(path)
    pos = path.rfind(os_slash())
    return path[pos + 1:] if pos != -1 else path


def path_remove_file_name(path: str) -> str:
    """Return ``path`` without its last component, keeping the separator."""
    path = dir_remove_slash_at_end(path)
    pos = path.rfind(os_slash())
    return path[:pos + 1] if pos != -1 else path


def precompose_file_name(name: str) -> str:
    """Return ``name`` in composed Unicode form on macOS, unchanged elsewhere."""
    if sys.platform == "darwin":
        return unicodedata.normalize("NFC", name)
    return name


def change_working_directory(path: str) -> None:
    """Change the current working directory; raises OSError on failure."""
    os.chdir(path)


def get_current_working_directory() -> str:
    """Return the current working directory."""
    return os.getcwd()