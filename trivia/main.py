#!/usr/bin/env python3
"""
Terminal Trivia - Main Entry Point

Runs the interactive trivia game against the Open Trivia DB provider.

Usage:
    trivia
    python -m trivia.main

Configuration (optional):
    config.json in the working directory, for example
    {"api": {"url": "https://opentdb.com", "timeout": 10},
     "logging": {"level": "INFO", "log_directory": "./logs/"}}

Environment Variables:
    TRIVIA_API_URL: Provider base URL (overrides config.json)
    TRIVIA_LOG_LEVEL: Logging level (overrides config.json)
"""
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from trivia.config_manager import ConfigManager
from trivia.errors import TriviaError
from trivia.game import TriviaGame
from trivia.quiz_engine import QuizEngine
from trivia.terminal import create_terminal_controller
from trivia.trivia_client import TriviaClient

CONFIG_PATH = Path("config.json")
CONFIG_SECTIONS = ('api', 'logging')

logger = logging.getLogger(__name__)


def load_config(config_path: Path = CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from a JSON file, or an empty configuration if there is none."""
    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        print(f"❌ Error: Invalid JSON in {config_path}: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"❌ Error loading {config_path}: {e}")
        sys.exit(1)

    if not isinstance(config, dict):
        print(f"❌ Error: {config_path} must contain a JSON object")
        sys.exit(1)

    for section in CONFIG_SECTIONS:
        # An explicit null means the section was left empty
        if config.get(section) is None:
            config.pop(section, None)
        elif not isinstance(config[section], dict):
            print(f"❌ Error: '{section}' in {config_path} must be a JSON object")
            sys.exit(1)
    return config


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return the named section, replacing a missing or non-object value with an empty one."""
    if not isinstance(config.get(name), dict):
        config[name] = {}
    return config[name]


def apply_environment(config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay environment variables on the loaded configuration."""
    # Environment variables take precedence
    api_url = os.getenv('TRIVIA_API_URL')
    if api_url:
        _section(config, 'api')['url'] = api_url

    log_level = os.getenv('TRIVIA_LOG_LEVEL')
    if log_level:
        _section(config, 'logging')['level'] = log_level

    return config


def setup_logging_from_config(config: Dict[str, Any]) -> None:
    """Set up logging based on configuration."""
    log_config = config.get('logging') or {}
    log_level = getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO)
    log_directory = Path(log_config.get('log_directory', './logs/'))

    # Create logs directory
    log_directory.mkdir(parents=True, exist_ok=True)

    # Only errors reach the console so the game screen stays readable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.ERROR)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            console_handler,
            logging.FileHandler(log_directory / "trivia.log", encoding='utf-8')
        ]
    )

    # Reduce HTTP client noise
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def build_game(config: Dict[str, Any]) -> TriviaGame:
    """Create the game and its collaborators from configuration."""
    config_manager = ConfigManager()
    result = config_manager.apply_config(config)
    if not result['success']:
        for error in result['errors']:
            logger.warning(f"Ignoring invalid configuration: {error}")

    logger.info(config_manager.get_settings_summary())

    return TriviaGame(
        client=TriviaClient(config_manager),
        terminal=create_terminal_controller(select_size=config_manager.SELECT_SIZE),
        config_manager=config_manager,
        quiz_engine=QuizEngine()
    )


def main() -> int:
    """Run the game and turn fatal errors into a non-zero exit code."""
    config = apply_environment(load_config())
    setup_logging_from_config(config)

    game = build_game(config)
    try:
        return game.run()
    except KeyboardInterrupt:
        print("\n👋 Game stopped by user")
        return 0
    except TriviaError as e:
        logger.critical(f"Fatal error, stopping trivia game: {e}", exc_info=True)
        return 1
    finally:
        game.client.close()


if __name__ == "__main__":
    sys.exit(main())
