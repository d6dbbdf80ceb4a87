"""Command-line interface for puzzle-solver.

This module provides CLI commands for solving a board and inspecting configuration.
"""

from .main import main_cli
from .commands import solve_command, config_command
from .utils import setup_logging, save_results

__all__ = [
    'main_cli',
    'solve_command',
    'config_command',
    'setup_logging',
    'save_results'
]
