"""
CLI Configuration Module

Handles command-line argument parsing and environment configuration for the
demo entry point.
"""

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from clog.progress.animations.spinner import SPINNERS
from clog.progress.bar.presets import PRESETS

logger = logging.getLogger(__name__)

DEMOS = ['all', 'bar', 'spinner', 'pulse', 'shimmer', 'group']
COLOR_MODES = ['auto', 'always', 'never']
PROGRESS_MODES = ['auto', 'on', 'off']


def _env_choice(name: str, default: str, choices: List[str]) -> str:
    value = os.getenv(name, default).strip().lower()
    if value not in choices:
        logger.warning(f"Invalid {name} value '{value}', using default '{default}'")
        return default
    return value


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments and load environment configuration.

    Environment defaults (optionally from .env): CLOG_DEMO, CLOG_BAR_STYLE,
    CLOG_SPINNER, CLOG_COLOR, CLOG_PROGRESS, CLOG_DEMO_STEPS, CLOG_LOG_FILE.

    Returns:
        argparse.Namespace: Parsed arguments with additional attributes:
            - console_log_level: int
    """
    load_dotenv()

    env_demo = _env_choice('CLOG_DEMO', 'all', DEMOS)
    env_style = _env_choice('CLOG_BAR_STYLE', 'thin', list(PRESETS))
    env_spinner = _env_choice('CLOG_SPINNER', 'moon', list(SPINNERS))
    env_color = _env_choice('CLOG_COLOR', 'auto', COLOR_MODES)
    env_progress = _env_choice('CLOG_PROGRESS', 'auto', PROGRESS_MODES)
    env_log_file = os.getenv('CLOG_LOG_FILE')
    env_steps = os.getenv('CLOG_DEMO_STEPS', '40')

    # Validate and convert CLOG_DEMO_STEPS to int
    default_steps = 40
    try:
        default_steps = int(env_steps)
        if default_steps < 1:
            logger.warning(f"CLOG_DEMO_STEPS must be at least 1, got {default_steps}. Using default 40.")
            default_steps = 40
    except ValueError:
        logger.warning(f"Invalid CLOG_DEMO_STEPS value '{env_steps}', using default 40")

    parser = argparse.ArgumentParser(
        description='Show clog log lines and animations'
    )
    parser.add_argument(
        '--demo',
        type=str,
        choices=DEMOS,
        default=env_demo,
        help=f'Which demo to run (default: {env_demo})'
    )
    parser.add_argument(
        '--style',
        type=str,
        choices=sorted(PRESETS),
        default=env_style,
        help=f'Progress bar preset (default: {env_style})'
    )
    parser.add_argument(
        '--spinner',
        type=str,
        choices=sorted(SPINNERS),
        default=env_spinner,
        help=f'Spinner preset (default: {env_spinner})'
    )
    parser.add_argument(
        '--steps',
        type=int,
        default=default_steps,
        help=f'Number of progress steps in the bar demos (default: {default_steps})'
    )
    parser.add_argument(
        '--color',
        type=str,
        choices=COLOR_MODES,
        default=env_color,
        help=f'Colour mode (default: {env_color})'
    )
    parser.add_argument(
        '--progress',
        type=str,
        choices=PROGRESS_MODES,
        default=env_progress,
        help='Animation mode: auto (when colours are on), on, or off (static lines)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show debug messages from the library'
    )
    parser.add_argument(
        '--log-file',
        type=Path,
        default=Path(env_log_file) if env_log_file and env_log_file.strip() else None,
        help='Also write library log records to this file'
    )

    args = parser.parse_args(argv)
    args.console_log_level = logging.DEBUG if args.verbose else logging.INFO
    return args
