from __future__ import annotations
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel
from .errors import LaunchError, PortInUseError
from .log_reader import latest_log, list_run_logs, read_tail
from .settings import Settings
from .orchestrator import Orchestrator

class ActionResult(BaseModel):
    ok: bool
    detail: str | None = None
    data: dict | None = None

def _http_error(e: LaunchError) -> HTTPException:
    return HTTPException(status_code=409 if isinstance(e, PortInUseError) else 400, detail=str(e))

def create_app(settings: Settings, orchestrator_factory=None) -> FastAPI:
    app = FastAPI(title="CS2 Launcher API", version="0.3.0")
    # config files may change between requests, so every call starts from a fresh orchestrator
    make = orchestrator_factory or (lambda: Orchestrator(settings))

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/config")
    def get_config():
        try:
            return make().cfg.model_dump(by_alias=True)
        except LaunchError as e:
            raise _http_error(e)

    @app.get("/plan")
    def plan():
        try:
            return make().plan().to_dict()
        except LaunchError as e:
            raise _http_error(e)

    @app.post("/prepare", response_model=ActionResult)
    def prepare():
        try:
            p = make().prepare()
        except LaunchError as e:
            raise _http_error(e)
        return ActionResult(ok=True, detail="prepared", data=p.to_dict())

    @app.post("/announce", response_model=ActionResult)
    def announce():
        try:
            make().lifecycle().announce_update()
        except LaunchError as e:
            raise _http_error(e)
        return ActionResult(ok=True, detail="announced")

    @app.post("/shutdown", response_model=ActionResult)
    def shutdown():
        try:
            make().lifecycle().shutdown_server()
        except LaunchError as e:
            raise _http_error(e)
        return ActionResult(ok=True, detail="quit sent")

    @app.post("/kill", response_model=ActionResult)
    def kill():
        try:
            pid = make().lifecycle().kill_server()
        except LaunchError as e:
            raise _http_error(e)
        return ActionResult(ok=True, detail="killed" if pid else "not running", data={"pid": pid})

    @app.get("/status", response_model=ActionResult)
    def status():
        try:
            return ActionResult(ok=True, data=make().lifecycle().status())
        except LaunchError as e:
            raise _http_error(e)

    @app.get("/logs")
    def logs():
        return {"ok": True, "logs": list_run_logs(settings.log_dir)}

    @app.get("/logs/latest")
    def get_latest(tail: int = Query(default=200, ge=0, le=5000)):
        path = latest_log(settings.log_dir / "server.log")
        if path is None:
            raise HTTPException(status_code=404, detail="log_not_found")
        chunk = read_tail(path, tail_lines=tail)
        return {
            "ok": True,
            "path": chunk.path,
            "entries": [{"n": i + 1, "line": line} for i, line in enumerate(chunk.entries)],
            "truncated": chunk.truncated,
        }
    return app
