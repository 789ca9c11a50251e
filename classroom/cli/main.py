# classroom/cli/main.py

"""
Start Menu for the classroom dashboard CLI.

Provides functions for loading a saved snapshot or generating sample data.
"""

import logging
from typing import cast

import classroom.cli.menu_helpers as helpers
import classroom.core.formatters as formatters
from classroom.cli.menu_helpers import MenuSignal
from classroom.cli.menus import dashboard_menu
from classroom.cli.path_utils import dir_has_snapshot, resolve_dir
from classroom.core import settings
from classroom.core.sample_data import build_sample_repository
from classroom.models.repository import ClassroomRepository


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_cli() -> None:
    """
    Top-level loop with dispatch for the Start menu.

    Raises:
        RuntimeError: If the menu response is unrecognized.
    """
    configure_logging()

    title = formatters.format_banner_text("CLASSROOM STATS")
    options = [
        ("Load a saved snapshot", load_repository),
        ("Explore sample data", generate_sample_repository),
    ]
    zero_option = "Exit Program"

    while True:
        menu_response = helpers.display_menu(title, options, zero_option)

        if menu_response is MenuSignal.EXIT:
            exit_program()

        elif callable(menu_response):
            repository = menu_response()

            if repository is not None:
                dashboard_menu.run(repository)

        else:
            raise RuntimeError(f"Unexpected MenuResponse received: {menu_response}")


def load_repository() -> ClassroomRepository | None:
    """
    Prompts the user to load a `ClassroomRepository` from a snapshot directory.

    Returns:
        ClassroomRepository: The loaded repository if loading succeeds.
        None: If the user cancels.

    Notes:
        - A blank entry falls back to the configured data directory when it holds a snapshot,
          otherwise it cancels.
        - The target directory must contain at least one snapshot file; otherwise the user is prompted again.
        - Deserialization and validation are handled by `ClassroomRepository.load()`.
    """
    while True:
        dir_input = helpers.prompt_user_input_or_default(
            f"Enter path to snapshot directory (leave blank for {settings.DATA_DIR}):"
        )

        if dir_input is MenuSignal.DEFAULT:
            if not dir_has_snapshot(settings.DATA_DIR, ClassroomRepository.snapshot_names()):
                print(f"\nNo snapshot found in {settings.DATA_DIR}.")
                return None
            dir_path = settings.DATA_DIR

        else:
            dir_path = resolve_dir(cast(str, dir_input))

        if not dir_has_snapshot(dir_path, ClassroomRepository.snapshot_names()):
            print(f"\nNo snapshot found in {dir_path}. Please try again.")
            continue

        print("\nLoading snapshot ...")

        response = ClassroomRepository.load(dir_path)

        if not response.success:
            helpers.display_response_failure(response)
            continue

        print("... Snapshot loaded successfully.")

        return response.data["repository"]


def generate_sample_repository() -> ClassroomRepository:
    print("\nGenerating sample data ...")

    repository = build_sample_repository()

    print(f"... Generated {len(repository)} records.")

    return repository


def exit_program():
    """
    Displays an exit banner and terminates the CLI program.

    Raises:
        SystemExit: Always raised to immediately terminate execution.
    """
    exit_banner = formatters.format_banner_text("Exiting Program")
    print(f"\n{exit_banner}\n")

    raise SystemExit


if __name__ == "__main__":
    run_cli()
