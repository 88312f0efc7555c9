from __future__ import annotations
import argparse
import json
import uvicorn
from .settings import Settings
from .logging_setup import setup_logging, get_logger
from .orchestrator import Orchestrator
from .errors import LaunchError
from .api import create_app

log = get_logger("cs2.launcher.cli")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cs2-launcher")
    parser.add_argument("--preset", default=None, help="Preset name, overrides PRESET from server.conf ('' disables)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("plan", help="Validate and print the launch plan as JSON; writes nothing")
    sub.add_parser("prepare", help="Validate, write autoexec.cfg and the start script")
    sub.add_parser("run", help="Prepare and run the server in the foreground")
    sub.add_parser("start", help="Prepare and start the server in a detached tmux session")
    sub.add_parser("announce", help="Announce an upcoming shutdown for an update")
    sub.add_parser("shutdown", help="Ask the server to quit")
    sub.add_parser("kill", help="Terminate the process bound to the server port")
    sub.add_parser("status", help="Print the server status as JSON")

    api_p = sub.add_parser("api", help="Run REST API (FastAPI)")
    api_p.add_argument("--host", default="127.0.0.1")
    api_p.add_argument("--port", type=int, default=8000)
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings)

    if args.cmd == "api":
        app = create_app(settings)
        uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
        return 0

    orch = Orchestrator(settings, preset=args.preset)
    try:
        if args.cmd == "plan":
            print(json.dumps(orch.plan().to_dict(), indent=2, ensure_ascii=False))
            return 0
        if args.cmd == "prepare":
            orch.prepare()
            return 0
        if args.cmd == "run":
            return orch.run()
        if args.cmd == "start":
            return 0 if orch.start() else 1

        lc = orch.lifecycle()
        if args.cmd == "announce":
            lc.announce_update()
        elif args.cmd == "shutdown":
            lc.shutdown_server()
        elif args.cmd == "kill":
            lc.kill_server()
        elif args.cmd == "status":
            print(json.dumps(lc.status(), indent=2))
        return 0
    except LaunchError as e:
        log.error("%s", e)
        return 1
