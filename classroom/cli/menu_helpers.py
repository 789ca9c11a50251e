# classroom/cli/menu_helpers.py

"""
Terminal interaction shared by the start menu and the dashboard.

Numbered menus, numbered pick lists, blank-aware prompts, and the save-before-leaving check all live
here so every screen reads input the same way.
"""

from enum import Enum
from typing import Any, Callable, Iterable, TypeVar

import classroom.core.formatters as formatters
from classroom.cli.path_utils import resolve_dir
from classroom.core import settings
from classroom.core.response import Response
from classroom.models.repository import ClassroomRepository

T = TypeVar("T")

INVALID_CHOICE = "That is not one of the listed numbers. Please try again."


class MenuSignal(Enum):
    CANCEL = "CANCEL"
    DEFAULT = "DEFAULT"
    EXIT = "EXIT"


def _pick_by_number(choice: str, items: list[T]) -> T | None:
    # menu numbering starts at 1; "0" is handled by the callers
    if not choice.isdigit() or not 1 <= int(choice) <= len(items):
        return None

    return items[int(choice) - 1]


# === display methods ===


def display_menu(
    title: str,
    options: list[tuple[str, Callable[..., Any]]],
    zero_option: str = "Return",
) -> MenuSignal | Callable[..., Any]:
    """
    Shows a numbered menu until the user picks a listed entry.

    Args:
        title (str): Banner text printed above the entries.
        options (list[tuple[str, Callable[..., Any]]]): `(label, action)` pairs, numbered from 1.
        zero_option (str, optional): Label printed next to `0`. Defaults to "Return".

    Returns:
        MenuSignal | Callable[..., Any]: `MenuSignal.EXIT` for `0`, otherwise the chosen action,
            uncalled.
    """
    actions = [action for _, action in options]

    while True:
        print(f"\n{title}")
        display_results((label for label, _ in options), show_index=True)
        print(f" 0. {zero_option}")

        choice = prompt_user_input("Select an option:")

        if choice == "0":
            return MenuSignal.EXIT

        action = _pick_by_number(choice, actions)

        if action is not None:
            return action

        print(INVALID_CHOICE)


def display_results(
    results: Iterable[Any],
    show_index: bool = False,
    formatter: Callable[[Any], str] = str,
) -> None:
    for i, result in enumerate(results, 1):
        line = formatter(result)
        print(f"{i:>2}. {line}" if show_index else line)


def display_response_failure(response: Response) -> None:
    """Prints a failed `Response` as `[ERROR: <code>] <detail>`; successful responses print nothing."""
    if response.success:
        return

    print(f"\n[ERROR: {response.error_name}] {response.detail}")


def returning_to(destination: str) -> None:
    print(f"\nReturning to {destination}.")


# === prompt user input methods ===

# a blank answer maps to a per-helper value: CANCEL, DEFAULT or None


def prompt_user_input(prompt: str) -> str:
    return input(f"\n{prompt}\n  >> ").strip()


def _prompt_or(prompt: str, blank_value: Any) -> Any:
    answer = prompt_user_input(prompt)

    return answer if answer else blank_value


def prompt_user_input_or_cancel(prompt: str) -> str | MenuSignal:
    return _prompt_or(prompt, MenuSignal.CANCEL)


def prompt_user_input_or_default(prompt: str) -> str | MenuSignal:
    return _prompt_or(prompt, MenuSignal.DEFAULT)


def prompt_user_input_or_none(prompt: str) -> str | None:
    return _prompt_or(prompt, None)


def confirm_action(prompt: str) -> bool:
    answers = {"y": True, "yes": True, "n": False, "no": False}

    while True:
        answer = prompt_user_input(f"{prompt} (y/n):").lower()

        if answer in answers:
            return answers[answer]

        print("Please answer y or n.")


# === snapshot methods ===


def prompt_if_dirty(repository: ClassroomRepository) -> None:
    if repository.has_unsaved_changes and confirm_action(
        "The classroom data has changes that are not saved yet. Save a snapshot now?"
    ):
        save_repository(repository)


def save_repository(repository: ClassroomRepository) -> None:
    """
    Saves the repository, asking for a directory if it has never been saved.

    Notes:
        - A blank directory answer falls back to `settings.DATA_DIR`.
        - Failures are printed and the repository stays dirty.
    """
    dir_path = repository.dir_path

    if dir_path is None:
        dir_input = prompt_user_input_or_none(
            f"Enter directory to save the snapshot (leave blank to use {settings.DATA_DIR}):"
        )
        dir_path = resolve_dir(dir_input) if dir_input else settings.DATA_DIR

    response = repository.save(dir_path)

    if response.success:
        print(f"\nSnapshot saved to {repository.dir_path}.")
    else:
        display_response_failure(response)


# === selection methods ===


def prompt_selection_from_list(
    list_data: list[T],
    list_description: str,
    sort_key: Callable[[T], Any] = lambda x: x,
    formatter: Callable[[T], str] = str,
) -> T | None:
    """
    Lists items under a banner and lets the user pick one by number.

    Args:
        list_data (list[T]): Candidates; shown sorted by `sort_key`.
        list_description (str): Banner text, also used in the empty-list message.
        sort_key (Callable[[T], Any], optional): Display order. Defaults to the items themselves.
        formatter (Callable[[T], str], optional): One line per item. Defaults to `str`.

    Returns:
        T | None: The chosen item, or None when the list is empty or the user enters `0`.
    """
    if not list_data:
        print(f"\nNothing to show: no {list_description.lower()} yet.")
        return None

    ordered = sorted(list_data, key=sort_key)
    banner = formatters.format_banner_text(list_description)

    while True:
        print(f"\n{banner}")
        display_results(ordered, show_index=True, formatter=formatter)

        choice = prompt_user_input("Select an entry (0 to cancel):")

        if choice == "0":
            return None

        selected = _pick_by_number(choice, ordered)

        if selected is not None:
            return selected

        print(INVALID_CHOICE)
