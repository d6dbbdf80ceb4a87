"""Tests for configuration management system."""

import pytest
import tempfile
import shutil
from pathlib import Path
from omegaconf import DictConfig, OmegaConf

from puzzle_solver.config import (
    ConfigManager, load_config, initial_state_from_config,
    validate_config, check_config_consistency, ConfigValidationError
)
from puzzle_solver.core.board import BoardState, GOAL_STATE
from puzzle_solver.search.greedy import SearchConfig


def _write_config(config_dir: Path, content: str) -> Path:
    config_dir.mkdir()
    with open(config_dir / "config.yaml", 'w') as f:
        f.write(content)
    return config_dir


class TestConfigManager:
    """Test ConfigManager functionality."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create temporary configuration directory."""
        temp_dir = tempfile.mkdtemp()

        config_content = """
puzzle:
  initial_state:
    - [1, 2, 3]
    - [8, 0, 4]
    - [7, 6, 5]

search:
  tie_break: lowest_moves
  log_interval: 500

output:
  solved_message: "solved in {moves}"
  unreachable_message: "unsolvable"
"""

        yield _write_config(Path(temp_dir) / "conf", config_content)

        shutil.rmtree(temp_dir)

    def test_config_manager_initialization(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        assert manager.config_dir.resolve() == temp_config_dir.resolve()
        assert manager.config is None

    def test_missing_config_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(tmp_path / "does-not-exist")

    def test_load_config_basic(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        config = manager.load_config()

        assert isinstance(config, DictConfig)
        assert config.search.tie_break == "lowest_moves"
        assert config.search.log_interval == 500
        assert manager.config is config

    def test_load_config_with_overrides(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        config = manager.load_config(overrides=["search.tie_break=lowest_heuristic"])

        assert config.search.tie_break == "lowest_heuristic"

    def test_invalid_override_fails_validation(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(ConfigValidationError):
            manager.load_config(overrides=["search.tie_break=random"])

    def test_sections_before_load(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)

        with pytest.raises(RuntimeError):
            manager.search_config()

    def test_search_config(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.search_config() == SearchConfig(tie_break='lowest_moves', log_interval=500)

    def test_output_templates(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.output_templates() == ("solved in {moves}", "unsolvable")

    def test_initial_state(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()

        assert manager.initial_state() == GOAL_STATE

    def test_set_initial_state_replaces_board(self, temp_config_dir):
        manager = ConfigManager(temp_config_dir)
        manager.load_config()
        board = BoardState.from_grid([[2, 8, 3], [1, 6, 0], [4, 7, 5]])

        manager.set_initial_state(board)

        assert manager.initial_state() == board
        assert manager.to_container()['puzzle']['initial_state'] == [[2, 8, 3], [1, 6, 0], [4, 7, 5]]

    def test_set_initial_state_adds_missing_section(self, tmp_path):
        """Test the composed struct config accepts a new puzzle section."""
        config_dir = _write_config(tmp_path / "conf", "search:\n  tie_break: insertion\n")
        manager = ConfigManager(config_dir)
        manager.load_config()

        manager.set_initial_state(GOAL_STATE)

        assert manager.initial_state() == GOAL_STATE
        assert manager.to_container()['search'] == {'tie_break': 'insertion'}

    def test_defaults_for_missing_sections(self, tmp_path):
        config_dir = _write_config(tmp_path / "conf", "search:\n  tie_break: insertion\n")
        manager = ConfigManager(config_dir)
        manager.load_config()

        assert manager.search_config() == SearchConfig()
        assert manager.output_templates() == ("goal state reached in {moves} moves",
                                              "goal state not reachable")

    def test_initial_state_from_config(self, temp_config_dir):
        config = load_config(config_dir=temp_config_dir)

        assert initial_state_from_config(config) == GOAL_STATE


class TestPackagedConfig:
    """Test the configuration shipped with the package."""

    def test_defaults(self):
        config = load_config()

        assert config.search.tie_break == "insertion"
        assert config.output.solved_message == "goal state reached in {moves} moves"
        assert config.output.unreachable_message == "goal state not reachable"
        assert initial_state_from_config(config) == BoardState.from_grid([[2, 8, 3], [1, 6, 0], [4, 7, 5]])

    def test_initial_state_override(self):
        config = load_config(overrides=["puzzle.initial_state=[[1,2,3],[8,0,4],[7,6,5]]"])

        assert initial_state_from_config(config) == GOAL_STATE


class TestValidators:
    """Test configuration validation."""

    def _config(self, **sections):
        base = {
            'puzzle': {'initial_state': [[2, 8, 3], [1, 6, 0], [4, 7, 5]]},
            'search': {'tie_break': 'insertion', 'log_interval': 100},
            'output': {
                'solved_message': "goal state reached in {moves} moves",
                'unreachable_message': "goal state not reachable"
            }
        }
        for name, values in sections.items():
            base[name].update(values)
        return OmegaConf.create(base)

    def test_valid_config(self):
        validate_config(self._config())

    def test_empty_sections_are_allowed(self):
        validate_config(OmegaConf.create({}))

    def test_duplicate_tiles(self):
        config = self._config(puzzle={'initial_state': [[1, 1, 3], [8, 0, 4], [7, 6, 5]]})

        with pytest.raises(ConfigValidationError, match="initial_state"):
            validate_config(config)

    def test_flat_initial_state(self):
        validate_config(self._config(puzzle={'initial_state': [1, 2, 3, 8, 0, 4, 7, 6, 5]}))

    def test_missing_initial_state(self):
        config = OmegaConf.create({'puzzle': {'name': 'x'}})

        with pytest.raises(ConfigValidationError):
            validate_config(config)

    def test_bad_tie_break(self):
        with pytest.raises(ConfigValidationError, match="tie_break"):
            validate_config(self._config(search={'tie_break': 'random'}))

    @pytest.mark.parametrize("interval", [0, -5, "often"])
    def test_bad_log_interval(self, interval):
        with pytest.raises(ConfigValidationError, match="log_interval"):
            validate_config(self._config(search={'log_interval': interval}))

    def test_solved_message_needs_placeholder(self):
        with pytest.raises(ConfigValidationError, match="solved_message"):
            validate_config(self._config(output={'solved_message': "done"}))

    @pytest.mark.parametrize("template", ["{moves} {x}", "{moves} {0}", "{moves} {"])
    def test_solved_message_must_render_with_moves_only(self, template):
        with pytest.raises(ConfigValidationError, match="solved_message"):
            validate_config(self._config(output={'solved_message': template}))

    def test_empty_unreachable_message(self):
        with pytest.raises(ConfigValidationError, match="unreachable_message"):
            validate_config(self._config(output={'unreachable_message': "  "}))

    def test_consistency_flags_odd_parity(self):
        config = self._config(puzzle={'initial_state': [[2, 1, 3], [8, 0, 4], [7, 6, 5]]})

        issues = check_config_consistency(config)

        assert len(issues) == 1
        assert "parity" in issues[0]

    def test_consistency_clean_for_solvable(self):
        assert check_config_consistency(self._config()) == []
