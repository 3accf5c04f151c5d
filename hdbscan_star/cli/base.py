"""Base classes and utilities for CLI commands."""

import argparse
from abc import ABC, abstractmethod
from pathlib import Path

from ..config.constants import LOG_LEVELS
from ..utils.io import ensure_directory
from ..utils.logging import get_logger


class BaseCommand(ABC):
    """Base class for CLI commands."""

    def __init__(self, args: argparse.Namespace):
        self.args = args
        self.logger = get_logger(
            f"{self.__class__.__module__}.{self.__class__.__name__}",
            getattr(args, 'log_level', 'INFO')
        )

    @abstractmethod
    def execute(self) -> None:
        """Execute the command."""
        pass

    def ensure_output_dir(self, path: str) -> Path:
        """Ensure output directory exists."""
        return ensure_directory(path)


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add common arguments to parser."""
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=LOG_LEVELS,
        help='Logging level'
    )
    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Only log errors'
    )
