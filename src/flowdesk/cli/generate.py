"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models import FlowdeskConfig
from ..services.config_service import ConfigService
from .output import error, info, success

logger = logging.getLogger(__name__)

CONFIG_HEADER = """\
# flowdesk Board Configuration
#
# Columns are the task statuses, in workflow order. The last column counts
# as finished work for project progress.
#
# Column constraints:
#   - Minimum 2 columns, maximum 8 columns
#   - Column IDs must be lowercase with underscores only
#
# Status Aliases:
#   - Alternative status values (e.g. from the backend) mapping to a column ID
#   - Column titles are matched too, so "In Progress" resolves to in_progress
#
# Priorities are listed lowest first.

"""


def generate_config_yaml() -> str:
    """Generate YAML config from the default FlowdeskConfig model."""
    config_dict = FlowdeskConfig.default().model_dump()

    for col in config_dict["board"]["columns"]:
        if not col["status_alias"]:
            del col["status_alias"]
    for priority in config_dict["board"]["priorities"]:
        if not priority["priority_alias"]:
            del priority["priority_alias"]

    yaml_content = yaml.dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path) -> int:
    """Write a default flowdesk.yml; returns the process exit code."""
    config_path = project_root / ConfigService.CONFIG_FILE
    if config_path.exists():
        error(f"{config_path} already exists, not overwriting")
        return 1

    try:
        project_root.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_yaml())
    except OSError as e:
        logger.error("Could not write %s: %s", config_path, e)
        error(f"Could not write {config_path}: {e}")
        return 1

    success(f"Created {config_path}")
    info("Edit the columns to match your workflow")
    return 0
