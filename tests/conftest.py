import logging
import pytest
from datetime import datetime

from glipper.models import Config


@pytest.fixture
def fixed_time():
    return datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def sample_repo(tmp_path):
    """Create a sample project tree for testing."""
    repo_root = tmp_path / "sample_repo"
    repo_root.mkdir()

    # Create directory structure
    (repo_root / "src").mkdir()
    (repo_root / "src" / "utils").mkdir()
    (repo_root / ".git").mkdir()
    (repo_root / "assets").mkdir()

    # Create files
    (repo_root / "README.md").write_text("# Sample Repository\n", encoding="utf-8")
    (repo_root / "src" / "main.py").write_text("def main():\n    print('Hello, World!')\n", encoding="utf-8")
    (repo_root / "src" / "utils" / "helpers.py").write_text("def helper():\n    return 42\n", encoding="utf-8")
    (repo_root / ".git" / "config").write_text("[core]\n    repositoryformatversion = 0\n", encoding="utf-8")
    (repo_root / ".env").write_text("DEBUG=1\n", encoding="utf-8")

    # Create binary file
    (repo_root / "assets" / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 4)

    return repo_root


@pytest.fixture(autouse=True)
def reset_glipper_logger():
    """The CLI installs a stderr handler on the package logger; drop it between tests."""
    yield
    logger = logging.getLogger("glipper")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
