# cli/path_utils.py

import os


def expand_path(path: str) -> str:
    """
    Expands `~` and makes a path absolute.

    Args:
        path (str): The input path, possibly relative or containing `~`.

    Returns:
        The absolute path with surrounding whitespace removed.
    """
    return os.path.abspath(os.path.expanduser(path.strip()))


def resolve_data_file(path: str) -> str:
    """
    Produces an absolute path for the roster snapshot file and ensures its directory exists.

    Args:
        path (str): The configured data file path.

    Returns:
        The fully resolved file path.

    Notes:
        - Creates the parent directory (including intermediate directories) if it does not exist.
        - The file itself is not created; the roster writes it on the first change.
    """
    data_file = expand_path(path)

    os.makedirs(os.path.dirname(data_file), exist_ok=True)

    return data_file
