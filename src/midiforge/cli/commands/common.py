"""Helpers shared by the project commands."""

import logging
from pathlib import Path

import click

from midiforge.models import ControllerProject, ToolConfig
from midiforge.utils import PydanticPersistence

logger = logging.getLogger(__name__)

project_argument = click.argument(
    "project", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)


def load_project(path: Path) -> ControllerProject:
    """
    Read a project file.

    Raises:
        ConfigFileInvalidError: If the file is not valid JSON
        ConfigValidationError: If the project content is invalid
    """
    project = PydanticPersistence.load_json(path, ControllerProject)
    logger.info(f"Loaded project {project.config.controller_name} from {path}")
    return project


def load_tool_config() -> ToolConfig:
    return ToolConfig.load_or_default()
