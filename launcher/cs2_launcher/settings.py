from __future__ import annotations
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PACKAGE_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    app_dir: Path = Field(default=_PACKAGE_DIR, alias="CS2_APP_DIR")
    instance_dir: Path = Field(default=Path("/var/lib/cs2/instance"), alias="CS2_INSTANCE_DIR")
    cfg_dir: Path = Field(default=Path("/var/lib/cs2/instance/cfg"), alias="CS2_CFG_DIR")
    tmp_dir: Path = Field(default=Path("/tmp/cs2"), alias="TMP_DIR")
    log_dir: Path = Field(default=Path("/var/lib/cs2/instance/logs"), alias="LOG_DIR")

    server_binary: str = Field(default="cs2", alias="CS2_BINARY")
    default_preset: str = Field(default="", alias="CS2_PRESET")
    console_target: str = Field(default="cs2-server", alias="CS2_CONSOLE_TARGET")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)
