"""Tests for configuration management system."""

import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf

from toy_planning.config import (
    ConfigManager, load_config, get_config, get_parameter, validate_config, ConfigValidationError
)
from toy_planning.config.config_manager import ConfigContext, default_config_dir
from toy_planning.config.validators import check_config_consistency
from toy_planning.search import SearchConfig


CONFIG_CONTENT = """
search:
  strategy: bfs
  max_nodes_expanded: 500
  max_computation_time: null

output:
  color: false
  show_stats: true

puzzles:
  humans_and_zombies:
    humans: 3
    zombies: 3
    boat: 2
  bridge_and_torch:
    people: [1, 2, 5, 8]
    fuel: 15
    capacity: 2
"""


@pytest.fixture
def temp_config_dir():
    """Create temporary configuration directory."""
    temp_dir = tempfile.mkdtemp()
    config_dir = Path(temp_dir) / "conf"
    config_dir.mkdir()

    with open(config_dir / "config.yaml", 'w') as f:
        f.write(CONFIG_CONTENT)

    yield config_dir

    # Cleanup
    shutil.rmtree(temp_dir)


class TestConfigManager:
    """Test ConfigManager functionality."""

    def test_config_manager_initialization(self, temp_config_dir):
        """Test ConfigManager initialization."""
        manager = ConfigManager(temp_config_dir)
        assert manager.config_dir.resolve() == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_config_dir(self, tmp_path):
        """Test that a missing directory is reported early."""
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "does-not-exist")

    def test_load_config_basic(self, temp_config_dir):
        """Test basic configuration loading."""
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.search.strategy == "bfs"
        assert config.search.max_nodes_expanded == 500
        assert manager.config is config

    def test_load_config_with_overrides(self, temp_config_dir):
        """Test configuration loading with overrides."""
        manager = ConfigManager(temp_config_dir)
        overrides = [
            "search.strategy=dfs",
            "puzzles.bridge_and_torch.people=[1,2,3]"
        ]

        config = manager.load_config(overrides=overrides)

        assert config.search.strategy == "dfs"
        assert list(config.puzzles.bridge_and_torch.people) == [1, 2, 3]

    def test_invalid_override_fails_validation(self, temp_config_dir):
        """Test that overrides are validated too."""
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(ConfigValidationError, match="strategy"):
            manager.load_config(overrides=["search.strategy=astar"])

        # Validation can be skipped
        config = manager.load_config(overrides=["search.strategy=astar"], validate=False)
        assert config.search.strategy == "astar"

    def test_get_parameter(self, temp_config_dir):
        """Test parameter retrieval."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.get_parameter("search.strategy") == "bfs"
        assert manager.get_parameter("puzzles.humans_and_zombies.boat") == 2
        assert manager.get_parameter("nonexistent.param", "default") == "default"

    def test_set_parameter(self, temp_config_dir):
        """Test parameter setting."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.set_parameter("search.max_nodes_expanded", 10)
        assert manager.get_parameter("search.max_nodes_expanded") == 10

        manager.set_parameter("new.parameter", "test_value")
        assert manager.get_parameter("new.parameter") == "test_value"

    def test_update_config(self, temp_config_dir):
        """Test configuration updates."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        manager.update_config({
            "search.strategy": "dfs",
            "puzzles.humans_and_zombies.humans": 4
        })

        assert manager.get_parameter("search.strategy") == "dfs"
        assert manager.get_parameter("puzzles.humans_and_zombies.humans") == 4

    def test_save_config(self, temp_config_dir):
        """Test configuration saving."""
        manager = ConfigManager(temp_config_dir)
        manager.load_config()
        manager.set_parameter("search.strategy", "dfs")

        output_file = temp_config_dir / "saved_config.yaml"
        manager.save_config(output_file)

        assert output_file.exists()
        saved_config = OmegaConf.load(output_file)
        assert saved_config.search.strategy == "dfs"

    def test_config_without_loading(self, temp_config_dir):
        """Test operations without loading config first."""
        manager = ConfigManager(temp_config_dir)

        assert manager.get_config() is None

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.get_parameter("search.strategy")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.set_parameter("search.strategy", "dfs")

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.update_config({"search.strategy": "dfs"})

        with pytest.raises(RuntimeError, match="No configuration loaded"):
            manager.save_config("test.yaml")

    def test_print_config(self, temp_config_dir, capsys):
        """Test YAML printing."""
        manager = ConfigManager(temp_config_dir)
        manager.print_config()
        assert "No configuration loaded." in capsys.readouterr().out

        manager.load_config()
        manager.print_config()
        assert "strategy: bfs" in capsys.readouterr().out


class TestDefaultConfig:
    """Test the configuration shipped with the project."""

    def test_default_config_loads(self):
        """Test that conf/config.yaml is valid."""
        config = ConfigManager(default_config_dir()).load_config()

        assert config.search.strategy == "bfs"
        assert config.search.max_nodes_expanded is None
        assert config.puzzles.wolf_goat_cabbage.farmers == 1
        assert list(config.puzzles.bridge_and_torch.people) == [1, 2, 5, 8]
        assert check_config_consistency(config) == []

    def test_search_config_from_loaded_config(self):
        """Test building the searcher configuration from the search group."""
        config = load_config(overrides=["search.strategy=dfs", "search.max_computation_time=2.5"])
        search_config = SearchConfig.from_config(config)

        assert search_config.strategy == "dfs"
        assert search_config.max_computation_time == 2.5
        assert search_config.max_nodes_expanded is None


class TestGlobalConfigFunctions:
    """Test global configuration functions."""

    def test_load_config_global(self, temp_config_dir):
        """Test global load_config function."""
        config = load_config(config_dir=temp_config_dir)

        assert isinstance(config, DictConfig)
        assert get_config() is config
        assert get_parameter("output.color") is False
        assert get_parameter("output.missing", 42) == 42

    def test_load_config_with_overrides_global(self, temp_config_dir):
        """Test global load_config with overrides."""
        config = load_config(overrides=["search.max_nodes_expanded=7"], config_dir=temp_config_dir)

        assert config.search.max_nodes_expanded == 7


class TestConfigContext:
    """Test ConfigContext context manager."""

    def test_config_context(self, temp_config_dir):
        """Test temporary changes are restored."""
        config = load_config(config_dir=temp_config_dir)
        assert config.search.strategy == "bfs"

        with ConfigContext(**{
            "search.strategy": "dfs",
            "puzzles.humans_and_zombies.boat": 3
        }) as ctx_config:
            assert ctx_config.search.strategy == "dfs"
            assert ctx_config.puzzles.humans_and_zombies.boat == 3

        final_config = get_config()
        assert final_config.search.strategy == "bfs"
        assert final_config.puzzles.humans_and_zombies.boat == 2

    def test_config_context_removes_new_keys(self, temp_config_dir):
        """Test that keys added inside the context are removed afterwards."""
        load_config(config_dir=temp_config_dir)

        with ConfigContext(**{"search.verbose": True}) as ctx_config:
            assert ctx_config.search.verbose is True

        assert "verbose" not in get_config().search


class TestConfigValidation:
    """Test configuration validation."""

    def test_valid_config(self):
        """Test validation of valid configuration."""
        config = OmegaConf.create({
            "search": {"strategy": "dfs", "max_nodes_expanded": 1000, "max_computation_time": 1.5},
            "output": {"color": True, "show_stats": False},
            "puzzles": {
                "humans_and_zombies": {"humans": 4, "zombies": 4, "boat": 3},
                "wolf_goat_cabbage": {"farmers": 1, "wolves": 2, "goats": 1, "cabbages": 2, "boat": 3},
                "bridge_and_torch": {"people": [1, 2], "fuel": 2, "capacity": 2}
            }
        })

        # Should not raise exception
        validate_config(config)

    @pytest.mark.parametrize("search", [
        {"strategy": "best-first"},
        {"max_nodes_expanded": -100},
        {"max_nodes_expanded": 1.5},
        {"max_computation_time": 0},
    ])
    def test_invalid_search_config(self, search):
        """Test validation of invalid search configuration."""
        with pytest.raises(ConfigValidationError):
            validate_config(OmegaConf.create({"search": search}))

    def test_invalid_output_config(self):
        """Test validation of invalid output configuration."""
        with pytest.raises(ConfigValidationError, match="output.color"):
            validate_config(OmegaConf.create({"output": {"color": "yes"}}))

    @pytest.mark.parametrize("puzzles", [
        {"humans_and_zombies": {"humans": -1}},
        {"wolf_goat_cabbage": {"boat": "two"}},
        {"bridge_and_torch": {"fuel": -5}},
        {"bridge_and_torch": {"people": [1, 0, 3]}},
        {"bridge_and_torch": {"people": "1,2"}},
    ])
    def test_invalid_puzzles_config(self, puzzles):
        """Test validation of invalid puzzle parameters."""
        with pytest.raises(ConfigValidationError):
            validate_config(OmegaConf.create({"puzzles": puzzles}))

    def test_consistency_warnings(self, caplog):
        """Test that unsolvable settings are only warned about."""
        config = OmegaConf.create({
            "puzzles": {
                "humans_and_zombies": {"humans": 1, "zombies": 2, "boat": 0},
                "wolf_goat_cabbage": {"farmers": 0},
                "bridge_and_torch": {"capacity": 0}
            }
        })

        issues = check_config_consistency(config)
        assert len(issues) == 4

        with caplog.at_level('WARNING'):
            validate_config(config)
        assert "nobody to steer the boat" in caplog.text

    def test_empty_config_sections(self):
        """Test validation with empty configuration sections."""
        validate_config(OmegaConf.create({}))
