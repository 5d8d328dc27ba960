"""
================================================================================
Project Scaffolding
================================================================================

Materializes a ready-to-run e2e project: the e2e.yaml configuration, a
root conftest.py, example tests under e2e_tests/ and an example data builder
under databuilders/. Existing files are never overwritten, so running it
twice is harmless.

================================================================================
"""

from __future__ import annotations

import shutil
from importlib import resources
from pathlib import Path
from typing import List, Tuple

from loguru import logger

from e2e_kit.common import CONFIG_FILE_NAME

TESTS_DIR_NAME = "e2e_tests"
DATABUILDERS_DIR_NAME = "databuilders"

DIRECTORIES: Tuple[str, ...] = (TESTS_DIR_NAME, DATABUILDERS_DIR_NAME)

# Template files, relative to e2e_kit/templates and to the project root
TEMPLATE_FILES: Tuple[str, ...] = (
    CONFIG_FILE_NAME,
    "conftest.py",
    f"{TESTS_DIR_NAME}/test_example_login_success_e2e.py",
    f"{TESTS_DIR_NAME}/test_example_login_invalid_e2e.py",
    f"{TESTS_DIR_NAME}/test_example_form_validation_e2e.py",
    f"{DATABUILDERS_DIR_NAME}/__init__.py",
    f"{DATABUILDERS_DIR_NAME}/agent_test_data_builder.py",
)


def is_initialized(root: Path) -> bool:
    """A project counts as initialized once it has a tests dir or config file."""
    return (root / TESTS_DIR_NAME).is_dir() or (root / CONFIG_FILE_NAME).exists()


def scaffold_project(root: Path) -> List[Path]:
    """
    Create the project skeleton under ``root``.

    Args:
        root: Project root directory

    Returns:
        Paths of the directories and files that were created
    """
    created: List[Path] = []

    for directory in DIRECTORIES:
        target_dir = root / directory
        if not target_dir.exists():
            target_dir.mkdir(parents=True)
            created.append(target_dir)
            logger.info(f"📁 Created directory: {directory}/")

    templates = resources.files("e2e_kit") / "templates"
    for relative in TEMPLATE_FILES:
        target = root / relative
        if target.exists():
            logger.debug(f"Skipped existing file: {relative}")
            continue
        template = templates
        for part in relative.split("/"):
            template = template.joinpath(part)
        with resources.as_file(template) as source:
            shutil.copyfile(source, target)
        created.append(target)
        logger.info(f"📄 Copied: {relative}")

    return created


__all__ = [
    "DATABUILDERS_DIR_NAME",
    "TEMPLATE_FILES",
    "TESTS_DIR_NAME",
    "is_initialized",
    "scaffold_project",
]
