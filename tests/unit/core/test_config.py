"""Unit tests for ScrubConfig and the config file functions."""

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from scrub.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    ScrubConfig,
    load_config,
    save_config,
)
from scrub.core.paths import get_config_path


class TestScrubConfig:
    """Tests for the ScrubConfig model."""

    def test_default_values(self) -> None:
        config = ScrubConfig()

        assert config.verbose is False
        assert config.simulate is False
        assert config.preserve_hidden is False
        assert config.preserve_special is False
        assert config.clobber_extensions == frozenset()
        assert config.clobber_names == frozenset()

    def test_lists_become_frozensets(self) -> None:
        config = ScrubConfig.model_validate({"clobber_extensions": ["tmp", "tmp", "bak"]})

        assert config.clobber_extensions == frozenset({"tmp", "bak"})

    def test_frozen(self) -> None:
        config = ScrubConfig()
        with pytest.raises(ValidationError):
            config.simulate = True  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            ScrubConfig(recursive=True)  # type: ignore[call-arg]

    @pytest.mark.parametrize("entry", ["a/b", "bad\0name"])
    def test_rejects_path_separators(self, entry: str) -> None:
        with pytest.raises(ValidationError, match="path separator"):
            ScrubConfig(clobber_names=frozenset({entry}))


class TestMergedWith:
    """Tests for layering command-line values on a loaded config."""

    def test_lists_are_unioned(self) -> None:
        base = ScrubConfig(clobber_extensions=frozenset({"tmp"}))

        merged = base.merged_with(clobber_extensions=["bak"], clobber_names=["core"])

        assert merged.clobber_extensions == frozenset({"tmp", "bak"})
        assert merged.clobber_names == frozenset({"core"})

    def test_flags_only_switch_on(self) -> None:
        base = ScrubConfig(preserve_hidden=True)

        merged = base.merged_with(simulate=True)

        assert merged.preserve_hidden is True
        assert merged.simulate is True
        assert merged.verbose is False

    def test_invalid_value_raises_config_error(self) -> None:
        with pytest.raises(ConfigError, match="Invalid option value"):
            ScrubConfig().merged_with(clobber_names=["dir/name"])

    def test_original_is_unchanged(self) -> None:
        base = ScrubConfig()
        base.merged_with(clobber_extensions=["tmp"])

        assert base.clobber_extensions == frozenset()


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_default_file_gives_defaults(self) -> None:
        assert not get_config_path().exists()

        assert load_config() == ScrubConfig()

    def test_missing_explicit_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_loads_valid_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            'clobber_extensions = ["tmp", "bak"]\n'
            'clobber_names = ["Thumbs.db"]\n'
            "preserve_hidden = true\n"
        )

        config = load_config(config_file)

        assert config.clobber_extensions == frozenset({"tmp", "bak"})
        assert config.clobber_names == frozenset({"Thumbs.db"})
        assert config.preserve_hidden is True
        assert config.preserve_special is False

    def test_loads_default_location(self) -> None:
        path = get_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('clobber_names = ["core"]\n')

        assert load_config().clobber_names == frozenset({"core"})

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text("clobber_names = [unclosed\n")

        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(config_file)

    def test_unknown_key(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text("recursive = true\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(config_file)

    def test_wrong_type(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.toml"
        config_file.write_text('clobber_extensions = "tmp"\n')

        with pytest.raises(ConfigError):
            load_config(config_file)


class TestSaveConfig:
    """Tests for save_config."""

    def test_round_trip_of_persistent_fields(self, tmp_path: Path) -> None:
        config = ScrubConfig(
            clobber_extensions=frozenset({"tmp", "bak"}),
            clobber_names=frozenset({"core"}),
            preserve_special=True,
        )
        path = tmp_path / "nested" / "config.toml"

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_runtime_flags_not_written(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"

        save_config(ScrubConfig(simulate=True, verbose=True), path)

        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert "simulate" not in data
        assert "verbose" not in data

    def test_lists_are_sorted(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"

        save_config(ScrubConfig(clobber_extensions=frozenset({"zip", "bak", "tmp"})), path)

        with open(path, "rb") as f:
            assert tomllib.load(f)["clobber_extensions"] == ["bak", "tmp", "zip"]

    def test_defaults_to_config_path(self) -> None:
        saved = save_config(ScrubConfig(clobber_names=frozenset({"core"})))

        assert saved == get_config_path()
        assert saved.exists()

    def test_default_location_unavailable(self) -> None:
        """A config directory that cannot be created is a ConfigError, not a crash."""
        denied = PermissionError(13, "Permission denied")
        with (
            patch.object(Path, "mkdir", side_effect=denied),
            pytest.raises(ConfigError, match="Cannot create config directory"),
        ):
            save_config(ScrubConfig())

        assert not get_config_path().exists()

    def test_write_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"

        with (
            patch("scrub.core.config.os.replace", side_effect=OSError("disk full")),
            pytest.raises(ConfigError, match="Failed to write config"),
        ):
            save_config(ScrubConfig(), path)

        assert not path.exists()
        assert list(tmp_path.glob("*.tmp")) == []
