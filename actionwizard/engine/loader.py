"""WorkflowLoader - loads and validates YAML/JSON action documents."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from .errors import WorkflowError
from .schema import Workflow

logger = logging.getLogger(__name__)


def parse_workflow(data: Any) -> Workflow:
    """
    Validate already-parsed data as a workflow.

    Args:
        data: Either a list of actions or a mapping with 'actions',
              and optionally 'vars' and 'policy'

    Returns:
        Validated Workflow instance

    Raises:
        WorkflowError: If data doesn't match the schema
    """
    if data is None:
        data = []
    if isinstance(data, list):
        data = {'actions': data}
    if not isinstance(data, dict):
        raise WorkflowError(f"workflow must be a list of actions or a mapping, got {type(data).__name__}")

    try:
        return Workflow.model_validate(data)
    except ValidationError as e:
        raise WorkflowError(f"invalid workflow:\n{e}") from e


class WorkflowLoader:
    """
    Loads workflow documents from YAML files.

    JSON documents load as well since JSON is a subset of YAML.
    """

    def __init__(self, base_path: Optional[Path] = None):
        """
        Initialize loader.

        Args:
            base_path: Directory relative paths are resolved against (default: cwd)
        """
        if base_path is None:
            base_path = Path.cwd()
        self.base_path = Path(base_path)

    def resolve_path(self, name: Union[str, Path]) -> Path:
        """Resolve a workflow file; names without suffix get '.yaml' appended."""
        path = Path(name)
        if not path.suffix:
            path = path.with_suffix('.yaml')
        if not path.is_absolute():
            path = self.base_path / path
        return path

    def load(self, name: Union[str, Path]) -> Workflow:
        """
        Load a workflow from a file.

        Args:
            name: Path or name of the workflow file

        Returns:
            Validated Workflow instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            WorkflowError: If the file isn't valid YAML or doesn't match the schema
        """
        path = self.resolve_path(name)
        if not path.exists():
            raise FileNotFoundError(f"Workflow not found: {path}")

        logger.debug("Loading workflow from %s", path)
        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise WorkflowError(f"cannot parse {path}: {e}") from e

        workflow = parse_workflow(data)
        logger.debug("Loaded %d actions from %s", len(workflow.actions), path)
        return workflow
