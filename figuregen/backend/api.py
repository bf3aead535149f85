"""FastAPI endpoints for the generator controls, page serving and websocket sync."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from pathlib import Path
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, Response, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from pydantic import BaseModel

from .config import AppSettings, configure_logging, load_settings
from .engine import parse_count
from .sequencer import GenerationSequencer
from .state import MAX_COUNT, MIN_COUNT, AppState
from .svg import to_svg

logger = logging.getLogger(__name__)

UI_FILE = Path(__file__).resolve().parents[1] / "client" / "ui" / "index.html"


class StateResponse(BaseModel):
    state: dict[str, Any]
    svg: str


class CountEnvelope(BaseModel):
    count: Any = None


def control_count(raw: Any) -> int | None:
    """Count from the range control, or None when outside its domain."""
    count = parse_count(raw)
    if count is None or not MIN_COUNT <= count <= MAX_COUNT:
        return None
    return count


class StateWebSocketHub:
    def __init__(self) -> None:
        self._connections: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.add(websocket)

    def disconnect(self, websocket: WebSocket) -> None:
        self._connections.discard(websocket)

    async def send_message(self, websocket: WebSocket, message: dict[str, Any]) -> None:
        await websocket.send_json(message)

    async def broadcast(self, message: dict[str, Any]) -> None:
        stale_connections: list[WebSocket] = []
        for websocket in list(self._connections):
            try:
                await self.send_message(websocket, message)
            except RuntimeError:
                stale_connections.append(websocket)
        for websocket in stale_connections:
            logger.info("Dropping closed websocket client")
            self.disconnect(websocket)


def create_app(sequencer: GenerationSequencer | None = None, settings: AppSettings | None = None) -> FastAPI:
    app_settings = settings if settings is not None else load_settings()
    configure_logging(app_settings.log_level)
    generation_sequencer = sequencer if sequencer is not None else GenerationSequencer()
    websocket_hub = StateWebSocketHub()

    def state_message(state: AppState) -> dict[str, Any]:
        return {
            "type": "state.full",
            "state": state.to_dict(),
            "svg": to_svg(state.samples, columns=app_settings.columns),
        }

    async def publish_state(state: AppState) -> None:
        await websocket_hub.broadcast(state_message(state))

    generation_sequencer.subscribe(publish_state)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await generation_sequencer.drain()
        logger.info("Initial batch ready (%s figures)", len(generation_sequencer.state.samples))
        yield

    app = FastAPI(title="Figure Generator API", version="0.1.0", lifespan=lifespan)
    app.state.websocket_hub = websocket_hub
    app.state.sequencer = generation_sequencer
    app.state.publish_state = publish_state

    def get_sequencer() -> GenerationSequencer:
        return generation_sequencer

    def state_response(state: AppState) -> StateResponse:
        message = state_message(state)
        return StateResponse(state=message["state"], svg=message["svg"])

    @app.get("/", include_in_schema=False)
    def index() -> FileResponse:
        return FileResponse(UI_FILE, media_type="text/html")

    @app.get("/api/state", response_model=StateResponse)
    def get_state(local_sequencer: GenerationSequencer = Depends(get_sequencer)) -> StateResponse:
        return state_response(local_sequencer.state)

    @app.get("/api/figures.svg")
    def get_figures(local_sequencer: GenerationSequencer = Depends(get_sequencer)) -> Response:
        svg = to_svg(local_sequencer.state.samples, columns=app_settings.columns)
        return Response(content=svg, media_type="image/svg+xml")

    @app.post("/api/regenerate", response_model=StateResponse)
    async def post_regenerate(local_sequencer: GenerationSequencer = Depends(get_sequencer)) -> StateResponse:
        state = await local_sequencer.submit({"type": "REQUEST_REGENERATION"})
        return state_response(state)

    @app.post("/api/count", response_model=StateResponse)
    async def post_count(
        payload: CountEnvelope,
        local_sequencer: GenerationSequencer = Depends(get_sequencer),
    ) -> StateResponse:
        count = control_count(payload.count)
        if count is None:
            logger.debug("Ignoring count %r from control", payload.count)
            return state_response(local_sequencer.state)
        state = await local_sequencer.submit({"type": "SET_DESIRED_COUNT", "count": count})
        return state_response(state)

    @app.websocket("/ws/state")
    async def state_ws(
        websocket: WebSocket,
        local_sequencer: GenerationSequencer = Depends(get_sequencer),
    ) -> None:
        await websocket_hub.connect(websocket)
        await websocket_hub.send_message(websocket, state_message(local_sequencer.state))

        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            websocket_hub.disconnect(websocket)

    return app


app = create_app()
