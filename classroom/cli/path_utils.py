# classroom/cli/path_utils.py

import os


def resolve_dir(dir_input: str) -> str:
    """
    Expands `~` and relative segments of a user-entered directory path.

    Returns:
        The absolute path string. The directory itself is not created.
    """
    return os.path.abspath(os.path.expanduser(dir_input.strip()))


def dir_has_snapshot(dir_path: str, file_names: list[str]) -> bool:
    """
    Checks whether a directory holds at least one of the expected snapshot files.

    Args:
        dir_path (str): The directory to inspect.
        file_names (list[str]): Snapshot file names without the `.json` suffix.

    Returns:
        True if the directory exists and contains any `<name>.json` file. False otherwise.
    """
    return os.path.isdir(dir_path) and any(
        os.path.isfile(os.path.join(dir_path, f"{name}.json")) for name in file_names
    )
