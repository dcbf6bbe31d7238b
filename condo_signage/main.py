import os
import asyncio
import logging
from datetime import datetime, timezone
from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from condo_signage.db import Base, engine, ensure_sqlite_schema
from condo_signage.db import SessionLocal
from condo_signage.api import anuncio, aviso, condominio, dashboard, rotation, tv, user
from condo_signage.api.tv import TV_OFFLINE_AFTER_SEC, sync_runtime_status
from condo_signage.models.tv import TV
from condo_signage.services.realtime import hub

LOG_LEVEL = os.getenv("SIGNAGE_LOG_LEVEL", "INFO").strip().upper() or "INFO"
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)
ensure_sqlite_schema()

API_KEY = os.getenv("SIGNAGE_API_KEY", "").strip()
TV_STATUS_SWEEP_SEC = int(os.getenv("SIGNAGE_TV_STATUS_SWEEP_SEC", "5"))
QUIET_ACCESS_LOG = os.getenv("SIGNAGE_QUIET_ACCESS_LOG", "1").strip().lower() in {"1", "true", "yes", "on"}
QUIET_WEBSOCKET_LOG = os.getenv("SIGNAGE_QUIET_WEBSOCKET_LOG", "1").strip().lower() in {"1", "true", "yes", "on"}
WATCHED_PREFIXES = ("/condominios", "/tvs", "/anuncios", "/avisos", "/users")
_tv_status_task: asyncio.Task | None = None

if QUIET_ACCESS_LOG:
    # Keep warning/error lines, suppress normal access noise (200/201 etc).
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

if QUIET_WEBSOCKET_LOG:
    # TV players on flaky building networks reconnect on their own.
    logging.getLogger("websockets").setLevel(logging.CRITICAL)
    logging.getLogger("uvicorn.protocols.websockets").setLevel(logging.CRITICAL)


def sweep_tv_status(now_utc: datetime | None = None) -> list[dict[str, str | None]]:
    changed_payload: list[dict[str, str | None]] = []
    db = SessionLocal()
    try:
        now = now_utc or datetime.utcnow()
        for item in db.query(TV).all():
            if sync_runtime_status(item, now):
                changed_payload.append(
                    {
                        "tv_id": str(item.id),
                        "status": item.status,
                        "last_seen": item.last_seen.isoformat() if item.last_seen else None,
                    }
                )
        if changed_payload:
            db.commit()
    except Exception:
        db.rollback()
        logger.exception("tv status sweep failed")
        changed_payload = []
    finally:
        db.close()
    return changed_payload


async def _tv_status_watcher() -> None:
    while True:
        await asyncio.sleep(TV_STATUS_SWEEP_SEC)
        changed_payload = sweep_tv_status()
        if changed_payload:
            await hub.tv_status_changed(changed_payload, TV_OFFLINE_AFTER_SEC)

app = FastAPI(title="condo-signage-api")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.get("/")
def root():
    return {
        "ok": True,
        "service": "condo-signage-api",
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "docs": "/docs",
    }

@app.get("/healthz")
def healthz():
    return {"ok": True, "revision": hub.revision, "realtime_clients": hub.client_count}


@app.websocket("/ws/updates")
async def ws_updates(websocket: WebSocket):
    await hub.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(websocket)
    except Exception:
        await hub.disconnect(websocket)


@app.on_event("startup")
async def startup_events() -> None:
    global _tv_status_task
    if _tv_status_task is None or _tv_status_task.done():
        _tv_status_task = asyncio.create_task(_tv_status_watcher())


@app.on_event("shutdown")
async def shutdown_events() -> None:
    global _tv_status_task
    if _tv_status_task is not None:
        _tv_status_task.cancel()
        try:
            await _tv_status_task
        except asyncio.CancelledError:
            pass
        _tv_status_task = None

@app.middleware("http")
async def api_key_middleware(request: Request, call_next):
    if not API_KEY:
        return await call_next(request)
    path = request.url.path
    if path.startswith("/docs") or path.startswith("/openapi.json") or path.startswith("/redoc") or path == "/healthz":
        return await call_next(request)
    if request.headers.get("X-API-Key") != API_KEY:
        return JSONResponse({"detail": "Unauthorized"}, status_code=401)
    return await call_next(request)


@app.middleware("http")
async def realtime_mutation_middleware(request: Request, call_next):
    response = await call_next(request)
    method = request.method.upper()
    path = request.url.path
    if response.status_code < 400 and method in {"POST", "PUT", "DELETE"}:
        # Heartbeats are presence, not configuration.
        if path.startswith(WATCHED_PREFIXES) and path != "/tvs/heartbeat":
            await hub.config_changed(method, path)
    return response

app.include_router(user.router)
app.include_router(condominio.router)
app.include_router(tv.router)
app.include_router(anuncio.router)
app.include_router(aviso.router)
app.include_router(dashboard.router)
app.include_router(rotation.router)
