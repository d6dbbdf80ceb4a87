"""Hydra-backed configuration for the puzzle solver.

The packaged ``conf/config.yaml`` holds three sections: ``puzzle`` (the board
to solve), ``search`` (frontier ordering and progress logging) and ``output``
(the outcome line templates). ``ConfigManager`` composes it with command-line
overrides and turns each section into the object the solver consumes.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple, Union
from pathlib import Path
from omegaconf import DictConfig, OmegaConf, open_dict
from hydra import compose, initialize_config_dir
from hydra.core.global_hydra import GlobalHydra

from puzzle_solver.core.board import BoardState, parse_board
from puzzle_solver.search.greedy import SearchConfig
from puzzle_solver.search.reporting import DEFAULT_SOLVED_MESSAGE, DEFAULT_UNREACHABLE_MESSAGE
from .validators import validate_config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent.parent / "conf"


class ConfigManager:
    """Loads the solver configuration and exposes it section by section."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory. If None, uses the
                configuration shipped with the package.
        """
        if config_dir is None:
            config_dir = DEFAULT_CONFIG_DIR

        self.config_dir = Path(config_dir).resolve()
        self.config: Optional[DictConfig] = None

        if not self.config_dir.exists():
            raise FileNotFoundError(f"Configuration directory not found: {self.config_dir}")

        logger.debug(f"Configuration manager initialized with config_dir: {self.config_dir}")

    def load_config(self,
                    config_name: str = "config",
                    overrides: Optional[List[str]] = None,
                    validate: bool = True) -> DictConfig:
        """Compose the configuration with Hydra overrides.

        Args:
            config_name: Name of the main config file (without .yaml)
            overrides: Hydra override strings, e.g. ``search.tie_break=lowest_moves``
            validate: Whether to validate the composed configuration

        Returns:
            The composed configuration
        """
        GlobalHydra.instance().clear()

        try:
            with initialize_config_dir(config_dir=str(self.config_dir), version_base=None):
                cfg = compose(config_name=config_name, overrides=overrides or [])
        except Exception as e:
            logger.error(f"Failed to load configuration: {e}")
            raise

        if validate:
            validate_config(cfg)

        self.config = cfg
        logger.info(f"Configuration loaded: {config_name}")
        if overrides:
            logger.info(f"Applied overrides: {overrides}")
        return cfg

    def _require_config(self) -> DictConfig:
        if self.config is None:
            raise RuntimeError("No configuration loaded. Call load_config() first.")
        return self.config

    def initial_state(self) -> BoardState:
        """Board named by ``puzzle.initial_state``."""
        return initial_state_from_config(self._require_config())

    def set_initial_state(self, board: BoardState) -> None:
        """Record the board actually searched under ``puzzle.initial_state``.

        Hydra composes in struct mode, so the section is opened for writing in
        case the loaded file has no ``puzzle`` section.
        """
        config = self._require_config()
        with open_dict(config):
            OmegaConf.update(config, 'puzzle.initial_state', board.to_list(), merge=False)

    def search_config(self) -> SearchConfig:
        config = self._require_config()
        return SearchConfig(
            tie_break=OmegaConf.select(config, 'search.tie_break', default='insertion'),
            log_interval=OmegaConf.select(config, 'search.log_interval', default=10000)
        )

    def output_templates(self) -> Tuple[str, str]:
        """(solved_message, unreachable_message) for the outcome line."""
        config = self._require_config()
        return (
            OmegaConf.select(config, 'output.solved_message', default=DEFAULT_SOLVED_MESSAGE),
            OmegaConf.select(config, 'output.unreachable_message', default=DEFAULT_UNREACHABLE_MESSAGE)
        )

    def to_container(self) -> Dict[str, Any]:
        """Plain-dict snapshot of the loaded configuration."""
        return OmegaConf.to_container(self._require_config(), resolve=True)


def load_config(config_name: str = "config",
                overrides: Optional[List[str]] = None,
                config_dir: Optional[Union[str, Path]] = None,
                validate: bool = True) -> DictConfig:
    """Load configuration using a fresh config manager."""
    manager = ConfigManager(config_dir)
    return manager.load_config(config_name, overrides, validate)


def initial_state_from_config(config: DictConfig) -> BoardState:
    """Build the validated initial board from ``puzzle.initial_state``."""
    value = OmegaConf.select(config, 'puzzle.initial_state')
    if OmegaConf.is_config(value):
        value = OmegaConf.to_container(value, resolve=True)
    return parse_board(value)
