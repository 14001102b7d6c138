"""Tests for generate command."""

from pathlib import Path

import yaml

from projboard.cli.generate import CONFIG_FILE, generate_config_yaml, run_generate
from projboard.models import ProjboardConfig
from projboard.services import ConfigService


class TestGenerateConfigYaml:
    """Tests for generate_config_yaml function."""

    def test_generates_valid_yaml(self):
        """Generated YAML is valid and parseable."""
        parsed = yaml.safe_load(generate_config_yaml())

        assert parsed["version"] == 1
        assert parsed["backend"] == "api"
        assert parsed["board"]["team"] == ""
        assert "priority_colors" in parsed["board"]

    def test_generates_with_file_backend(self):
        parsed = yaml.safe_load(generate_config_yaml("file"))
        assert parsed["backend"] == "file"

    def test_includes_header_comments(self):
        content = generate_config_yaml()
        assert content.startswith("# projboard Configuration")
        assert "PROJBOARD_API_TOKEN" in content

    def test_matches_default_config(self):
        """Generated config round-trips to ProjboardConfig.default()."""
        parsed = yaml.safe_load(generate_config_yaml())
        assert ProjboardConfig(**parsed) == ProjboardConfig.default()


class TestRunGenerate:
    """Tests for run_generate function."""

    def test_creates_config(self, tmp_path: Path):
        assert run_generate(tmp_path) == 0

        config_path = tmp_path / CONFIG_FILE
        assert config_path.exists()
        service = ConfigService(tmp_path)
        assert service.get_config().backend == "api"
        assert not service.has_config_error

    def test_existing_config_untouched(self, tmp_path: Path):
        config_path = tmp_path / CONFIG_FILE
        config_path.write_text("backend: file\n")

        assert run_generate(tmp_path) == 1
        assert config_path.read_text() == "backend: file\n"

    def test_creates_missing_project_root(self, tmp_path: Path):
        project_root = tmp_path / "new" / "project"
        assert run_generate(project_root) == 0
        assert (project_root / CONFIG_FILE).exists()
