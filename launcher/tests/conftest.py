import pytest
from pathlib import Path

from cs2_launcher.settings import Settings
from cs2_launcher.fs_layout import build_layout


@pytest.fixture
def settings(tmp_path):
    """Settings with every directory inside tmp_path."""
    return Settings(**{
        "CS2_APP_DIR": tmp_path / "app",
        "CS2_INSTANCE_DIR": tmp_path / "instance",
        "CS2_CFG_DIR": tmp_path / "instance" / "cfg",
        "TMP_DIR": tmp_path / "tmp",
        "LOG_DIR": tmp_path / "logs",
        "CS2_PRESET": "",
        "CS2_CONSOLE_TARGET": "cs2-test",
    })


@pytest.fixture
def layout(settings):
    return build_layout(settings)


@pytest.fixture
def write_conf():
    """Write a .conf file, creating parent directories."""
    def _write(path: Path, text: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write
