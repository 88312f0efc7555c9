"""
Tests for the CS2 argument vector.
"""

import shlex

import pytest

from cs2_launcher.config import ConfigMerger
from cs2_launcher.launch_args import (
    BOOTSTRAP_MAP, MapSource, build_launch_args, map_source, redact, shell_command,
)
from cs2_launcher.models import ServerConfig


def cfg_of(**values):
    return ServerConfig.model_validate(values)


def count(args, token):
    return sum(1 for a in args if a == token)


def value_after(args, flag):
    return args[args.index(flag) + 1]


class TestMinimal:

    def test_minimal_vector(self):
        args = build_launch_args(cfg_of(GAMETYPE="0", GAMEMODE="1", PORT="27015", IP="0.0.0.0"))
        assert args == [
            "-dedicated", "-console",
            "-ip", "0.0.0.0", "-port", "27015",
            "+game_type", "0", "+game_mode", "1",
            "+exec", "autoexec.cfg",
        ]

    def test_no_optional_tokens(self):
        args = build_launch_args(cfg_of(GAMETYPE="0", GAMEMODE="1", PORT="27015", IP="0.0.0.0", MAPS="de_dust2"))
        for token in ["-usercon", "-tickrate", "-maxplayers", "+tv_enable", "+tv_port", "+tv_relay",
                      "-authkey", "+sv_setsteamaccount", "+net_public_adr"]:
            assert token not in args
        assert count(args, "+game_type") == 1
        assert count(args, "+game_mode") == 1

    def test_with_merged_defaults(self, layout):
        cfg = ConfigMerger(layout).merge({})
        args = build_launch_args(cfg)
        assert value_after(args, "+mapgroup") == "mg_active"
        assert value_after(args, "+map") == "de_dust2"
        assert "+tv_enable" not in args


class TestOrdering:

    def test_full_order(self):
        cfg = cfg_of(
            USE_RCON="-usercon", TICKRATE="128", MAXPLAYERS="12", WAN_IP="203.0.113.7",
            APIKEY="KEY", GSLT="TOKEN", IP="0.0.0.0", PORT="27015", GAMETYPE="0", GAMEMODE="1",
            MAPGROUP="mg_active", MAPS="de_nuke", TV_ENABLE="1", TV_PORT="27020", TV_MAXCLIENTS="5",
            TV_RELAY="10.0.0.2:27020", TV_RELAYPASS="relay",
        )
        args = build_launch_args(cfg)
        assert args == [
            "-dedicated", "-console",
            "-usercon",
            "-tickrate", "128",
            "-maxplayers", "12",
            "+net_public_adr", "203.0.113.7",
            "-authkey", "KEY",
            "+sv_setsteamaccount", "TOKEN",
            "-ip", "0.0.0.0", "-port", "27015",
            "+game_type", "0", "+game_mode", "1",
            "+mapgroup", "mg_active", "+map", "de_nuke",
            "+tv_enable", "1", "+tv_port", "27020", "+tv_maxclients", "5",
            "+tv_relay", "10.0.0.2:27020", "+tv_relaypassword", "relay",
            "+exec", "autoexec.cfg",
        ]

    def test_exec_is_last(self):
        args = build_launch_args(cfg_of(TV_ENABLE="1", TV_PORT="27020"))
        assert args[-2:] == ["+exec", "autoexec.cfg"]


class TestMapSource:

    def test_collection_wins_over_map_id(self):
        cfg = cfg_of(WORKSHOP_COLLECTION_ID="123", WORKSHOP_MAP_ID="456", MAPGROUP="mg_active", MAPS="de_dust2")
        args = build_launch_args(cfg)
        assert map_source(cfg) == MapSource.COLLECTION
        assert value_after(args, "+host_workshop_collection") == "123"
        assert value_after(args, "+map") == BOOTSTRAP_MAP
        assert "+host_workshop_map" not in args
        assert "+mapgroup" not in args
        assert count(args, "+map") == 1

    def test_workshop_map(self):
        cfg = cfg_of(WORKSHOP_MAP_ID="456", MAPGROUP="mg_active", MAPS="de_dust2")
        args = build_launch_args(cfg)
        assert map_source(cfg) == MapSource.WORKSHOP_MAP
        assert args[args.index("+map"):args.index("+map") + 4] == ["+map", BOOTSTRAP_MAP, "+host_workshop_map", "456"]
        assert "+mapgroup" not in args

    def test_numeric_ids_accepted(self):
        cfg = cfg_of(WORKSHOP_COLLECTION_ID=3070244462)
        assert value_after(build_launch_args(cfg), "+host_workshop_collection") == "3070244462"

    def test_static_mapgroup_uses_first_map(self):
        cfg = cfg_of(MAPGROUP="mg_casual", MAPS=["workshop\\123\\de_x", "de_dust2"])
        args = build_launch_args(cfg)
        assert map_source(cfg) == MapSource.MAPGROUP
        assert value_after(args, "+mapgroup") == "mg_casual"
        assert value_after(args, "+map") == "workshop/123/de_x"

    def test_explicit_map(self):
        args = build_launch_args(cfg_of(MAPGROUP="mg_casual", MAPS="de_dust2", MAP="de_inferno"))
        assert value_after(args, "+map") == "de_inferno"


class TestGotv:

    def test_relay_ignored_when_tv_disabled(self):
        args = build_launch_args(cfg_of(TV_ENABLE="0", TV_RELAY="10.0.0.2:27020", TV_RELAYPASS="x"))
        assert not [a for a in args if a.startswith("+tv_")]

    def test_relay_ignored_when_tv_unset(self):
        args = build_launch_args(cfg_of(TV_RELAY="10.0.0.2:27020"))
        assert not [a for a in args if a.startswith("+tv_")]

    def test_tv_without_relay(self):
        args = build_launch_args(cfg_of(TV_ENABLE="1", TV_PORT="27020", TV_MAXCLIENTS="10"))
        assert "+tv_enable" in args
        assert "+tv_relay" not in args
        assert "+tv_relaypassword" not in args


class TestShellCommand:

    def test_values_with_spaces_stay_one_token(self):
        args = build_launch_args(cfg_of(WAN_IP="my host; rm -rf /", MAPS="de_dust2"))
        cmd = shell_command("./cs2", args)
        assert shlex.split(cmd) == ["./cs2"] + args
        assert value_after(shlex.split(cmd), "+net_public_adr") == "my host; rm -rf /"

    def test_affinity_prefix(self):
        cmd = shell_command("./cs2", ["-dedicated"], cpu_affinity="0-3")
        assert cmd == "taskset -c 0-3 ./cs2 -dedicated"

    def test_no_affinity(self):
        assert shell_command("./cs2", ["-dedicated"]) == "./cs2 -dedicated"


def test_redact_hides_credentials():
    args = build_launch_args(cfg_of(APIKEY="KEY", GSLT="TOKEN", TV_ENABLE="1", TV_RELAY="r", TV_RELAYPASS="pw"))
    masked = redact(args)
    assert "KEY" not in masked and "TOKEN" not in masked and "pw" not in masked
    assert len(masked) == len(args)
    assert value_after(masked, "-authkey") == "***"
