"""
Unit tests for configuration and logging setup.
"""

import io
import logging
import pytest
from herotracker.core.config import Config, get_config, reset_config
from herotracker.core.logging_config import ColoredFormatter, setup_logging, get_logger

ENV_VARS = [
    'HEROTRACKER_CURVE',
    'HEROTRACKER_MAX_LEVEL',
    'HEROTRACKER_MINUTES_PER_TIME_LEVEL',
    'HEROTRACKER_ROSTER',
    'LOG_LEVEL',
    'LOG_FILE',
    'LOG_COLORS',
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Clear config variables and run from an empty directory."""
    for name in ENV_VARS:
        # Registered first so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield monkeypatch
    reset_config()


class TestConfig:
    """Test environment-based configuration."""

    def test_defaults(self, clean_env):
        """Test values when nothing is set."""
        config = Config()
        assert config.curve == 'standard'
        assert config.max_level == 500
        assert config.minutes_per_time_level == 20
        assert config.roster_path is None
        assert config.log_level == 'INFO'
        assert config.log_colors is True
        assert config.validate()

    def test_environment_overrides(self, clean_env):
        """Test reading values from the environment."""
        clean_env.setenv('HEROTRACKER_CURVE', 'legacy')
        clean_env.setenv('HEROTRACKER_MAX_LEVEL', '200')
        clean_env.setenv('LOG_LEVEL', 'debug')
        clean_env.setenv('LOG_COLORS', 'false')
        config = Config()
        assert config.curve == 'legacy'
        assert config.max_level == 200
        assert config.log_level == 'DEBUG'
        assert config.log_colors is False

    def test_env_file(self, clean_env, tmp_path):
        """Test loading values from a .env file."""
        env_file = tmp_path / 'custom.env'
        env_file.write_text("HEROTRACKER_MINUTES_PER_TIME_LEVEL=30\n")
        config = Config(env_file=str(env_file))
        assert config.minutes_per_time_level == 30

    def test_dotenv_in_cwd(self, clean_env, tmp_path):
        """Test that a .env in the working directory is picked up."""
        (tmp_path / '.env').write_text("HEROTRACKER_CURVE=legacy\n")
        assert Config().curve == 'legacy'

    def test_bad_integer_falls_back(self, clean_env):
        """Test that a non-integer value uses the default."""
        clean_env.setenv('HEROTRACKER_MAX_LEVEL', 'lots')
        assert Config().max_level == 500

    def test_validate_rejects_bad_values(self, clean_env):
        """Test validation of out-of-range values."""
        clean_env.setenv('HEROTRACKER_MAX_LEVEL', '0')
        assert Config().validate() is False

    def test_get_config_singleton(self, clean_env):
        """Test that get_config returns the same instance until reset."""
        first = get_config()
        assert get_config() is first
        reset_config()
        assert get_config() is not first

    def test_repr(self, clean_env):
        """Test the config representation."""
        assert 'curve=standard' in repr(Config())


class TestLogging:
    """Test logging setup."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in list(root.handlers):
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)

    def test_setup_logging_to_stream(self):
        """Test that console output goes to the given stream."""
        stream = io.StringIO()
        setup_logging(level='WARNING', use_colors=False, stream=stream)
        get_logger('herotracker.test').warning("curve missing")
        get_logger('herotracker.test').info("not shown")
        output = stream.getvalue()
        assert 'curve missing' in output
        assert 'not shown' not in output

    def test_log_file(self, tmp_path):
        """Test that a log file receives records."""
        log_file = tmp_path / 'herotracker.log'
        setup_logging(level='DEBUG', log_file=str(log_file), use_colors=False, stream=io.StringIO())
        get_logger('herotracker.test').debug("resolved level 26")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert 'resolved level 26' in log_file.read_text()

    def test_colored_formatter_restores_levelname(self):
        """Test that coloring does not leak into other handlers."""
        record = logging.LogRecord('x', logging.ERROR, __file__, 1, 'boom', None, None)
        ColoredFormatter('%(levelname)s %(message)s').format(record)
        assert record.levelname == 'ERROR'

    def test_unknown_level_defaults_to_info(self):
        """Test that an unknown level name falls back to INFO."""
        logger = setup_logging(level='chatty', use_colors=False, stream=io.StringIO())
        assert logger.level == logging.INFO
