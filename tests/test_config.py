"""Tests for settings and configuration manager."""
import os
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest import mock

from statementai.config import AppSettings, ConfigManager, Config

ENV_KEYS = ("GEMINI_API_KEY", "API_KEY", "STATEMENTAI_MODEL", "STATEMENTAI_LOG_LEVEL")


def clean_environ(**values):
    env = {k: v for k, v in os.environ.items() if k not in ENV_KEYS}
    env.update(values)
    return mock.patch.dict(os.environ, env, clear=True)


class TestAppSettings(unittest.TestCase):
    """Test AppSettings loading."""

    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_load_packaged_settings(self):
        settings = AppSettings.load()

        self.assertEqual(settings.app_name, "StatementAI")
        self.assertEqual(settings.render_zoom, 2.0)
        self.assertEqual(settings.jpeg_quality, 80)
        self.assertTrue(settings.llm_model_name)

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            AppSettings.load(self.test_dir / "missing.yaml")


class TestConfigManager(unittest.TestCase):
    """Test ConfigManager functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())
        # Point at an empty .env so a developer's local file is never picked up
        self.env_file = self.test_dir / ".env"
        self.env_file.write_text("")
        self.config_manager = ConfigManager(env_file=self.env_file)

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_reads_gemini_api_key(self):
        with clean_environ(GEMINI_API_KEY="gem-key", API_KEY="other"):
            config = self.config_manager.load_config()

        self.assertEqual(config.gemini_api_key, "gem-key")

    def test_falls_back_to_api_key(self):
        with clean_environ(API_KEY="plain-key"):
            config = self.config_manager.load_config()

        self.assertEqual(config.gemini_api_key, "plain-key")

    def test_reads_key_from_env_file(self):
        self.env_file.write_text("GEMINI_API_KEY=from-dotenv\n")

        with clean_environ():
            config = self.config_manager.load_config()

        self.assertEqual(config.gemini_api_key, "from-dotenv")

    def test_model_override(self):
        with clean_environ(API_KEY="k", STATEMENTAI_MODEL="gemini-2.5-flash"):
            config = self.config_manager.load_config()

        self.assertEqual(config.model_name, "gemini-2.5-flash")

    def test_validate_config_valid(self):
        """Test validation with valid config."""
        config = Config(gemini_api_key="test_key", model_name="gemini-2.5-flash")

        is_valid, message = self.config_manager.validate_config(config)
        self.assertTrue(is_valid)

    def test_validate_config_missing_key(self):
        """Test validation with missing API key."""
        with clean_environ():
            config = self.config_manager.load_config()

        is_valid, message = self.config_manager.validate_config(config)
        self.assertFalse(is_valid)
        self.assertIn("API key", message)

    def test_validate_rendering_values(self):
        bad_zoom = Config(gemini_api_key="k", model_name="m", render_zoom=0)
        bad_quality = Config(gemini_api_key="k", model_name="m", jpeg_quality=101)

        self.assertFalse(self.config_manager.validate_config(bad_zoom)[0])
        self.assertFalse(self.config_manager.validate_config(bad_quality)[0])


if __name__ == "__main__":
    unittest.main()
