from __future__ import annotations
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

_FALSY = {"", "0", "false", "no", "off"}
TITLE_MAX_LEN = 64


class ServerConfig(BaseModel):
    """
    Effective instance configuration after merging server.conf, the preset,
    the built-in defaults and the GOTV overlay.

    Field aliases are the upper-case keys used in the `.conf` files. Optional
    scalars are None when the setting is absent or explicitly empty.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    preset: Optional[str] = Field(default=None, alias="PRESET")

    # network
    ip: str = Field(default="0.0.0.0", alias="IP")
    port: int = Field(default=27015, alias="PORT")
    wan_ip: Optional[str] = Field(default=None, alias="WAN_IP")

    # credentials
    gslt: Optional[str] = Field(default=None, alias="GSLT")
    apikey: Optional[str] = Field(default=None, alias="APIKEY")
    password: Optional[str] = Field(default=None, alias="PASS")
    rcon_password: Optional[str] = Field(default=None, alias="RCON_PASS")

    # runtime
    cpu_affinity: Optional[str] = Field(default=None, alias="CPU_AFFINITY")
    use_rcon: bool = Field(default=False, alias="USE_RCON")
    tickrate: Optional[int] = Field(default=None, alias="TICKRATE")
    maxplayers: Optional[int] = Field(default=None, alias="MAXPLAYERS")

    # game mode + maps
    gametype: int = Field(default=0, alias="GAMETYPE")
    gamemode: int = Field(default=1, alias="GAMEMODE")
    mapgroup: Optional[str] = Field(default=None, alias="MAPGROUP")
    maps: List[str] = Field(default_factory=list, alias="MAPS")
    map_name: Optional[str] = Field(default=None, alias="MAP")
    workshop_collection_id: Optional[str] = Field(default=None, alias="WORKSHOP_COLLECTION_ID")
    workshop_map_id: Optional[str] = Field(default=None, alias="WORKSHOP_MAP_ID")

    # presentation
    title: Optional[str] = Field(default=None, alias="TITLE")
    tags: List[str] = Field(default_factory=list, alias="TAGS")

    # GOTV
    tv_enable: bool = Field(default=False, alias="TV_ENABLE")
    tv_port: Optional[int] = Field(default=None, alias="TV_PORT")
    tv_maxclients: Optional[int] = Field(default=None, alias="TV_MAXCLIENTS")
    tv_relay: Optional[str] = Field(default=None, alias="TV_RELAY")
    tv_relaypass: Optional[str] = Field(default=None, alias="TV_RELAYPASS")
    tv_title: Optional[str] = Field(default=None, alias="TV_TITLE")
    tv_password: Optional[str] = Field(default=None, alias="TV_PASS")
    tv_delay: Optional[int] = Field(default=None, alias="TV_DELAY")

    @field_validator("*", mode="before")
    @classmethod
    def _empty_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and v.strip() == "":
            return None
        return v

    @field_validator("use_rcon", "tv_enable", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        # USE_RCON historically holds the literal flag "-usercon"
        if v is None:
            return False
        if isinstance(v, bool):
            return v
        if isinstance(v, (int, float)):
            return v != 0
        return str(v).strip().lower() not in _FALSY

    @field_validator("maps", "tags", mode="before")
    @classmethod
    def _word_list(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return [w for w in v.replace(",", " ").split() if w]
        return [str(w) for w in v if str(w)]

    @field_validator("workshop_collection_id", "workshop_map_id", "gslt", "apikey", mode="before")
    @classmethod
    def _as_text(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v

    # --- derivations ---------------------------------------------------- #
    @property
    def display_title(self) -> str:
        base = self.title or "Counter-Strike 2 Server"
        return base[:TITLE_MAX_LEN]

    @property
    def tag_string(self) -> str:
        if self.tags:
            return ",".join(self.tags)
        return self.preset or ""

    @property
    def gotv_title(self) -> str:
        return self.tv_title or f"{self.display_title} GOTV"

    def resolved_map(self) -> Optional[str]:
        """Explicit MAP, else the first configured map with `\\` turned into `/`."""
        if self.map_name:
            return self.map_name
        if self.maps:
            return self.maps[0].replace("\\", "/")
        return None
