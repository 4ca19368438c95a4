from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import AsyncIterator, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dispatch import Direction
from elevator_bank import BankConfig, Controller, RandomCallGenerator, RequestOutcome, Snapshot

logger = logging.getLogger(__name__)


class HallCall(BaseModel):
    floor: int
    direction: Direction = Field(description="UP or DOWN")


class AutoGenerateSetting(BaseModel):
    enabled: bool


class SimulationManager:
    def __init__(
        self,
        total_floors: int = 10,
        number_of_cars: int = 4,
        tick_interval: float = 1.0,
        loading_latency: float = 10.0,
        travel_latency: float = 10.0,
        random_seed: Optional[int] = None,
    ) -> None:
        config = BankConfig(
            number_of_cars=number_of_cars,
            total_floors=total_floors,
            loading_latency=loading_latency,
            travel_latency=travel_latency,
        )
        self.controller = Controller(config, observer=self._on_state_change)
        self.generator = RandomCallGenerator(total_floors, random_seed=random_seed)
        self.tick_interval = tick_interval
        self.running = False
        self.auto_generate = False
        self.snapshots_seen = 0
        self.latest: Snapshot = self.controller.get_state()
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    def _on_state_change(self, snapshot: Snapshot) -> None:
        self.latest = snapshot
        self.snapshots_seen += 1

    async def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        self.controller.retire()

    async def _run(self) -> None:
        while True:
            async with self._lock:
                stepped = self.advance()
                payload = self.current_state()
            if stepped:
                await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    def advance(self) -> bool:
        """Run one driver step if the simulation is running."""

        if not self.running:
            return False
        if self.auto_generate:
            call = self.generator.due(self.controller.current_time)
            if call is not None:
                self.controller.request_elevator(*call)
        self.controller.step(self.tick_interval)
        return True

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        state = self.latest.to_dict()
        state["running"] = self.running
        state["auto_generate"] = self.auto_generate
        state["total_floors"] = self.controller.total_floors
        return state

    async def request(self, floor: int, direction: Direction) -> dict:
        async with self._lock:
            outcome = self.controller.request_elevator(floor, direction)
            state = self.current_state()
        state["outcome"] = outcome.value
        if not outcome.rejected:
            await self.broadcast(state)
        return state

    async def random_request(self) -> dict:
        floor, direction = self.generator.random_call()
        return await self.request(floor, direction)

    async def set_running(self, running: bool) -> dict:
        async with self._lock:
            self.running = running
            logger.info("Simulation %s", "started" if running else "paused")
            return self.current_state()

    async def set_auto_generate(self, enabled: bool) -> dict:
        async with self._lock:
            self.auto_generate = enabled
            self.generator.next_call_time = None
            return self.current_state()

    async def reset(self) -> dict:
        async with self._lock:
            self.running = False
            self.auto_generate = False
            self.generator.next_call_time = None
            self.controller.reset()
            state = self.current_state()
        await self.broadcast(state)
        return state


def create_app(manager: Optional[SimulationManager] = None) -> FastAPI:
    manager = manager or SimulationManager()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await manager.start()
        try:
            yield
        finally:
            await manager.stop()

    app = FastAPI(title="Elevator Bank Simulation API", lifespan=lifespan)
    app.state.manager = manager
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/state")
    async def get_state() -> dict:
        return manager.current_state()

    @app.post("/requests")
    async def request_elevator(call: HallCall) -> dict:
        state = await manager.request(call.floor, call.direction)
        if state["outcome"] == RequestOutcome.REJECTED_INVALID_FLOOR.value:
            raise HTTPException(status_code=400, detail=f"Invalid floor {call.floor}")
        if state["outcome"] == RequestOutcome.REJECTED_INVALID_DIRECTION.value:
            raise HTTPException(status_code=400, detail="Direction must be UP or DOWN")
        return state

    @app.post("/requests/random")
    async def random_request() -> dict:
        return await manager.random_request()

    @app.post("/simulation/start")
    async def start_simulation() -> dict:
        return await manager.set_running(True)

    @app.post("/simulation/stop")
    async def stop_simulation() -> dict:
        return await manager.set_running(False)

    @app.post("/simulation/reset")
    async def reset_simulation() -> dict:
        return await manager.reset()

    @app.post("/simulation/auto-generate")
    async def auto_generate(setting: AutoGenerateSetting) -> dict:
        return await manager.set_auto_generate(setting.enabled)

    @app.websocket("/ws/stream")
    async def websocket_endpoint(websocket: WebSocket) -> None:
        await manager.register(websocket)
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            await manager.unregister(websocket)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
