"""CLI module for license-report.

This module provides the command-line interface. It supports both CLI
arguments and environment variables for configuration.
"""

from .main import (
    Config,
    build_config,
    cli,
    main,
    run_pipeline,
)

__all__ = [
    "cli",
    "main",
    "Config",
    "build_config",
    "run_pipeline",
]
