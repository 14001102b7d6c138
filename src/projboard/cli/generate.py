"""Generate command for creating default config."""

import logging
from pathlib import Path

import yaml

from ..models import ProjboardConfig
from ..services.config_service import ConfigService
from .output import info, success

logger = logging.getLogger(__name__)

CONFIG_FILE = ConfigService.CONFIG_FILE

# Header comments for generated file
CONFIG_HEADER = """\
# projboard Configuration
#
# backend: where projects live
#   - api:  the hosted projects REST API (see api.base_url)
#   - file: a local YAML data file (see data_file), no server needed
#
# api.base_url: API root, e.g. https://app.example.com/api
#   The bearer token is read from the PROJBOARD_API_TOKEN environment
#   variable and is never stored here.
#
# board.team: default team filter (team id), empty for all teams
#
# board.priority_colors: named color (green, red, etc.) or hex (#ff0000)
#   for each of low, medium, high, urgent
#
# Pipeline stages come from the backend. When they cannot be loaded the
# board falls back to: ideation, planning, in_progress, review, complete.

"""


def generate_config_yaml(backend: str = "api") -> str:
    """Generate YAML config from the default ProjboardConfig model.

    Uses ProjboardConfig.default() as the single source of truth,
    ensuring generated config always matches internal defaults.

    Args:
        backend: The backend to write into the config
    """
    config = ProjboardConfig.default()
    config_dict = config.model_dump(mode="json")
    config_dict["backend"] = backend

    if config_dict["board"].get("team") is None:
        config_dict["board"]["team"] = ""

    yaml_content = yaml.safe_dump(config_dict, default_flow_style=False, sort_keys=False)
    return CONFIG_HEADER + yaml_content


def run_generate(project_root: Path, backend: str = "api") -> int:
    """
    Generate default configuration.

    Args:
        project_root: Path where projboard.yml will be created
        backend: Backend to configure

    Returns:
        Exit code (0 = success, 1 = nothing to do)
    """
    config_path = project_root / CONFIG_FILE

    if config_path.exists():
        info(f"Config exists: {config_path}")
        print("Nothing to generate.")
        return 1

    if not project_root.exists():
        project_root.mkdir(parents=True)

    config_path.write_text(generate_config_yaml(backend))
    logger.info("Generated %s", config_path)
    success(f"Generated config: {config_path}")
    return 0
