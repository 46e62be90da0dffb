"""
Unit tests for the entry point: configuration loading and the fatal error policy.
"""
import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

from trivia import main as trivia_main
from trivia.errors import TriviaDecodeError
from trivia.game import TriviaGame
from trivia.terminal import PlainTerminalController


class TestLoadConfig(unittest.TestCase):
    """Test cases for config.json loading."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.config_path = Path(self.temp_dir.name) / "config.json"

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_missing_file_gives_empty_config(self):
        self.assertEqual(trivia_main.load_config(self.config_path), {})

    def test_valid_file(self):
        config = {"api": {"url": "http://localhost:8000"}, "logging": {"level": "DEBUG"}}
        self.config_path.write_text(json.dumps(config), encoding='utf-8')

        self.assertEqual(trivia_main.load_config(self.config_path), config)

    @patch('builtins.print')
    def test_invalid_json_exits(self, mock_print):
        self.config_path.write_text("{ invalid json }", encoding='utf-8')

        with self.assertRaises(SystemExit) as context:
            trivia_main.load_config(self.config_path)

        self.assertEqual(context.exception.code, 1)

    @patch('builtins.print')
    def test_non_object_exits(self, mock_print):
        self.config_path.write_text("[1, 2]", encoding='utf-8')

        with self.assertRaises(SystemExit):
            trivia_main.load_config(self.config_path)

    def test_null_sections_load_as_missing(self):
        self.config_path.write_text('{"api": null, "logging": null}', encoding='utf-8')

        self.assertEqual(trivia_main.load_config(self.config_path), {})

    @patch('builtins.print')
    def test_non_object_section_exits(self, mock_print):
        self.config_path.write_text('{"logging": "DEBUG"}', encoding='utf-8')

        with self.assertRaises(SystemExit) as context:
            trivia_main.load_config(self.config_path)

        self.assertEqual(context.exception.code, 1)
        self.assertIn("'logging'", mock_print.call_args[0][0])


class TestApplyEnvironment(unittest.TestCase):
    """Test cases for environment overrides."""

    @patch.dict(os.environ, {"TRIVIA_API_URL": "http://localhost:9999", "TRIVIA_LOG_LEVEL": "debug"})
    def test_environment_overrides_config(self):
        config = trivia_main.apply_environment({"api": {"url": "https://opentdb.com", "timeout": 3}})

        self.assertEqual(config["api"], {"url": "http://localhost:9999", "timeout": 3})
        self.assertEqual(config["logging"]["level"], "debug")

    @patch.dict(os.environ, {}, clear=True)
    def test_no_environment_keeps_config(self):
        self.assertEqual(trivia_main.apply_environment({}), {})

    @patch.dict(os.environ, {"TRIVIA_API_URL": "http://localhost:9999", "TRIVIA_LOG_LEVEL": "debug"})
    def test_environment_fills_null_sections(self):
        config = trivia_main.apply_environment({"api": None, "logging": None})

        self.assertEqual(config["api"], {"url": "http://localhost:9999"})
        self.assertEqual(config["logging"], {"level": "debug"})


class TestSetupLogging(unittest.TestCase):
    """Test cases for logging setup."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.temp_dir.cleanup()

    @patch('trivia.main.logging.basicConfig')
    def test_null_logging_section_uses_defaults(self, mock_basic_config):
        with patch('trivia.main.Path', return_value=Path(self.temp_dir.name)):
            trivia_main.setup_logging_from_config({"logging": None})

        self.assertEqual(mock_basic_config.call_args.kwargs['level'], logging.INFO)
        for handler in mock_basic_config.call_args.kwargs['handlers']:
            handler.close()

    @patch('trivia.main.logging.basicConfig')
    def test_level_and_directory_from_config(self, mock_basic_config):
        log_directory = Path(self.temp_dir.name) / "logs"

        trivia_main.setup_logging_from_config(
            {"logging": {"level": "debug", "log_directory": str(log_directory)}}
        )

        self.assertTrue(log_directory.is_dir())
        self.assertEqual(mock_basic_config.call_args.kwargs['level'], logging.DEBUG)
        for handler in mock_basic_config.call_args.kwargs['handlers']:
            handler.close()


class TestBuildGame(unittest.TestCase):
    """Test cases for wiring the game together."""

    def setUp(self):
        logging.disable(logging.CRITICAL)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    @patch('trivia.main.create_terminal_controller', return_value=PlainTerminalController())
    def test_build_game_applies_config(self, mock_create_terminal):
        game = trivia_main.build_game({"api": {"url": "http://localhost:8000", "timeout": 5}})

        self.assertIsInstance(game, TriviaGame)
        self.assertEqual(game.client.config_manager.get_api_url(), "http://localhost:8000")
        self.assertEqual(game.client.config_manager.get_request_timeout(), 5.0)
        mock_create_terminal.assert_called_once_with(select_size=10)
        game.client.close()

    @patch('trivia.main.create_terminal_controller', return_value=PlainTerminalController())
    def test_build_game_ignores_invalid_config(self, mock_create_terminal):
        game = trivia_main.build_game({"api": {"url": "not a url"}})

        self.assertEqual(game.client.config_manager.get_api_url(), "https://opentdb.com")
        game.client.close()


class TestMain(unittest.TestCase):
    """Test cases for exit codes."""

    def setUp(self):
        logging.disable(logging.CRITICAL)
        self.game = Mock()
        patchers = [
            patch('trivia.main.load_config', return_value={}),
            patch('trivia.main.setup_logging_from_config'),
            patch('trivia.main.build_game', return_value=self.game),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self):
        logging.disable(logging.NOTSET)

    def test_normal_end_returns_zero(self):
        self.game.run.return_value = 0

        self.assertEqual(trivia_main.main(), 0)
        self.game.client.close.assert_called_once_with()

    def test_fatal_error_returns_one(self):
        """Provider and decode errors stop the game with a non-zero exit code."""
        self.game.run.side_effect = TriviaDecodeError("bad escape")

        self.assertEqual(trivia_main.main(), 1)
        self.game.client.close.assert_called_once_with()

    @patch('builtins.print')
    def test_keyboard_interrupt_returns_zero(self, mock_print):
        self.game.run.side_effect = KeyboardInterrupt

        self.assertEqual(trivia_main.main(), 0)


if __name__ == '__main__':
    unittest.main()
