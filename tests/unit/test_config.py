"""Unit tests for stylebuild.config."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
import pytest

from stylebuild.config import (
    CONFIG_FILENAME,
    DEFAULT_DEST_DIR,
    DEFAULT_SOURCE_GLOB,
    BuildConfig,
    load_config,
)
from stylebuild.errors import ConfigurationError


class TestBuildConfigDefaults:
    """Tests for default configuration values."""

    def test_directory_convention(self) -> None:
        """Test sources under src/scss and outputs under assets/css."""
        config = BuildConfig()
        assert config.source_glob == DEFAULT_SOURCE_GLOB == "src/scss/*.scss"
        assert config.dest_dir == DEFAULT_DEST_DIR == "assets/css"
        assert config.include_paths == []

    def test_frozen(self) -> None:
        """Test configuration is immutable."""
        config = BuildConfig()
        with pytest.raises(PydanticValidationError):
            config.dest_dir = "public"  # type: ignore[misc]

    def test_rejects_unknown_fields(self) -> None:
        """Test extra fields are rejected."""
        with pytest.raises(PydanticValidationError):
            BuildConfig.model_validate({"output_style": "compressed"})

    def test_rejects_empty_glob(self) -> None:
        """Test an empty source glob is rejected."""
        with pytest.raises(PydanticValidationError):
            BuildConfig(source_glob="")


class TestBuildConfigFromYaml:
    """Tests for BuildConfig.from_yaml()."""

    def test_loads_values(self, tmp_path: Path) -> None:
        """Test values are read from YAML."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text(
            "source_glob: scss/**/*.scss\ndest_dir: public/css\ninclude_paths:\n  - node_modules\n"
        )

        config = BuildConfig.from_yaml(path)

        assert config.source_glob == "scss/**/*.scss"
        assert config.dest_dir == "public/css"
        assert config.include_paths == ["node_modules"]

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """Test an empty file yields the defaults."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("")

        assert BuildConfig.from_yaml(path) == BuildConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            BuildConfig.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML raises ConfigurationError."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("source_glob: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            BuildConfig.from_yaml(path)

        assert exc_info.value.file_path == str(path)
        assert "Invalid YAML" in str(exc_info.value)

    def test_not_utf8(self, tmp_path: Path) -> None:
        """Test undecodable bytes raise ConfigurationError."""
        path = tmp_path / CONFIG_FILENAME
        path.write_bytes(b"source_glob: \xff\xfe\n")

        with pytest.raises(ConfigurationError) as exc_info:
            BuildConfig.from_yaml(path)

        assert exc_info.value.file_path == str(path)
        assert "Cannot read configuration file" in str(exc_info.value)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """Test a path that cannot be opened raises ConfigurationError."""
        path = tmp_path / CONFIG_FILENAME
        path.mkdir()

        with pytest.raises(ConfigurationError) as exc_info:
            BuildConfig.from_yaml(path)

        assert isinstance(exc_info.value.__cause__, OSError)

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Test a YAML list is rejected."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("- src/scss/*.scss\n")

        with pytest.raises(ConfigurationError):
            BuildConfig.from_yaml(path)

    def test_schema_violation(self, tmp_path: Path) -> None:
        """Test schema errors propagate as pydantic ValidationError."""
        path = tmp_path / CONFIG_FILENAME
        path.write_text("dest_dir: ''\n")

        with pytest.raises(PydanticValidationError):
            BuildConfig.from_yaml(path)


class TestMerged:
    """Tests for BuildConfig.merged()."""

    def test_overrides_values(self) -> None:
        """Test non-None overrides replace values."""
        config = BuildConfig().merged(source_glob="scss/*.scss", include_paths=["vendor"])
        assert config.source_glob == "scss/*.scss"
        assert config.dest_dir == DEFAULT_DEST_DIR
        assert config.include_paths == ["vendor"]

    def test_ignores_none(self) -> None:
        """Test None overrides leave values unchanged."""
        base = BuildConfig(dest_dir="public/css")
        assert base.merged(dest_dir=None, source_glob=None) is base

    def test_validates_overrides(self) -> None:
        """Test overrides are validated."""
        with pytest.raises(PydanticValidationError):
            BuildConfig().merged(dest_dir="")


class TestLoadConfig:
    """Tests for load_config()."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Test defaults when no stylebuild.yaml exists."""
        assert load_config(root=tmp_path) == BuildConfig()

    def test_discovers_file_in_root(self, tmp_path: Path) -> None:
        """Test stylebuild.yaml in the root is used."""
        (tmp_path / CONFIG_FILENAME).write_text("dest_dir: static/css\n")
        assert load_config(root=tmp_path).dest_dir == "static/css"

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Test an explicit path is loaded."""
        path = tmp_path / "custom.yaml"
        path.write_text("source_glob: styles/*.scss\n")
        assert load_config(path).source_glob == "styles/*.scss"

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        """Test an explicit missing path raises."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")
