import io
import logging
import tempfile
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import openai

from termchat import main
from termchat.cli import _parse_args
from termchat.config import RunConfig, resolve_api_key, resolve_prompt
from termchat.core import ConfigurationError
from termchat.utils import TRACE, console, err_console, init_logger

from .test_base import sdk_reply


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.home = Path(self.tmp.name)
        home_patcher = patch("termchat.config.Path.home", return_value=self.home)
        home_patcher.start()
        self.addCleanup(home_patcher.stop)

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk-env"})
    def test_api_key_from_environment(self):
        self.assertEqual(resolve_api_key(), "sk-env")

    @patch.dict("os.environ", {}, clear=True)
    def test_api_key_from_zshrc(self):
        (self.home / ".zshrc").write_text("alias ll='ls -l'\nexport OPENAI_API_KEY='sk-rc'\n")
        self.assertEqual(resolve_api_key(), "sk-rc")

    @patch.dict("os.environ", {}, clear=True)
    def test_missing_api_key(self):
        with self.assertRaises(ConfigurationError):
            resolve_api_key()

    def test_resolve_prompt(self):
        self.assertEqual(resolve_prompt(" hi ", io.StringIO("ignored")), "hi")
        self.assertEqual(resolve_prompt(None, io.StringIO("from stdin\n")), "from stdin")
        with self.assertRaises(ConfigurationError):
            resolve_prompt(None, io.StringIO("\n\t "))
        with self.assertRaises(ConfigurationError):
            resolve_prompt("   ", io.StringIO(""))

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk", "OPENAI_DEFAULT_MODEL": "o3"}, clear=True)
    def test_run_config_from_args(self):
        config = RunConfig.from_args(
            _parse_args(["-i", "-s", "be brief", "-w", "72", "-t", "0.3", "--max-tokens", "100"])
        )
        self.assertEqual(config.model, "o3")
        self.assertTrue(config.interactive)
        self.assertEqual(config.system_prompt, "be brief")
        self.assertEqual(config.wrap_width, 72)
        self.assertEqual(config.options.temperature, 0.3)
        self.assertEqual(config.options.max_tokens, 100)
        self.assertIsNone(config.base_url)

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
    def test_model_flag_and_wrap_disabled(self):
        config = RunConfig.from_args(_parse_args(["-m", "gpt-4.1", "-w", "0", "hello"]))
        self.assertEqual(config.model, "gpt-4.1")
        self.assertIsNone(config.wrap_width)
        self.assertEqual(config.prompt, "hello")
        self.assertFalse(config.interactive)


class TestMain(unittest.TestCase):
    def setUp(self):
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        for target, stream in ((console, self.stdout), (err_console, self.stderr)):
            patcher = patch.object(target, "_file", stream)
            patcher.start()
            self.addCleanup(patcher.stop)

        self.sdk = Mock()
        self.sdk.chat.completions.create = AsyncMock()
        self.sdk.close = AsyncMock()
        factory = patch("termchat.cli.create_openai_client", return_value=self.sdk)
        self.factory = factory.start()
        self.addCleanup(factory.stop)
        self.addCleanup(init_logger)

    @patch("termchat.config.Path.home")
    @patch.dict("os.environ", {}, clear=True)
    def test_missing_key_exits_without_request(self, home):
        home.return_value = Path(tempfile.gettempdir()) / "termchat-no-home"
        self.assertEqual(main(["hello"]), 1)
        self.assertIn("OPENAI_API_KEY", self.stderr.getvalue())
        self.factory.assert_not_called()

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
    def test_unwritable_log_file_is_reported(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing" / "termchat.log"
            self.assertEqual(main(["--log-file", str(path), "hello"]), 1)

        self.assertIn("cannot open log file", self.stderr.getvalue())
        self.factory.assert_not_called()

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
    def test_single_turn_success_closes_client(self):
        self.sdk.chat.completions.create.return_value = sdk_reply("hi there")

        self.assertEqual(main(["--raw", "hello"]), 0)

        self.assertIn("hi there", self.stdout.getvalue())
        self.factory.assert_called_once_with("sk", None)
        self.sdk.close.assert_awaited_once()

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
    def test_single_turn_failure_closes_client(self):
        self.sdk.chat.completions.create.side_effect = openai.OpenAIError("nope")

        self.assertEqual(main(["hello"]), 1)

        self.assertIn("nope", self.stderr.getvalue())
        self.sdk.close.assert_awaited_once()

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
    @patch("builtins.input", side_effect=["/model o3", "/quit"])
    def test_interactive_mode(self, _input):
        self.assertEqual(main(["-i", "-s", "be brief"]), 0)
        self.sdk.close.assert_awaited_once()
        self.assertIn("Model switched to o3", self.stdout.getvalue())

    @patch.dict("os.environ", {"OPENAI_API_KEY": "sk"}, clear=True)
    def test_list_models(self):
        self.sdk.models.list = AsyncMock(return_value=Mock(data=[Mock(id="gpt-4o"), Mock(id="o3")]))

        self.assertEqual(main(["--list-models"]), 0)

        self.assertIn("gpt-4o <- current", self.stdout.getvalue())
        self.sdk.close.assert_awaited_once()


class TestLogging(unittest.TestCase):
    def test_log_file_receives_trace_messages(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "termchat.log"
            logger = init_logger(str(path), "trace")
            logging.getLogger("termchat.test").log(TRACE, "hello %s", "trace")
            logging.getLogger("termchat.test").debug("debug line")
            init_logger()

            text = path.read_text()
        self.assertIn("[TRACE] termchat.test: hello trace", text)
        self.assertIn("[DEBUG] termchat.test: debug line", text)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)

    def test_level_filters(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "termchat.log"
            init_logger(str(path), "warn")
            logging.getLogger("termchat.test").info("quiet")
            logging.getLogger("termchat.test").error("loud")
            init_logger()

            text = path.read_text()
        self.assertNotIn("quiet", text)
        self.assertIn("[ERROR] termchat.test: loud", text)
