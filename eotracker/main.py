from contextlib import asynccontextmanager
from typing import Any
import asyncio
import logging

from fastapi import FastAPI, BackgroundTasks
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from eotracker import config
from eotracker import session
from eotracker.builder import build_snapshot
from eotracker.errors import SnapshotWriteError
from eotracker.frontend import router as frontend_router
from eotracker.render import render_table

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.log_effective_config()
    await session.controller.load(config.SNAPSHOT_SOURCE)
    yield


app = FastAPI(title="Executive Order Tracker", lifespan=lifespan)

def to_camel_case(snake_str: str) -> str:
    components = snake_str.split('_')
    return components[0] + ''.join(x.title() for x in components[1:])

def convert_keys_to_camel(data: Any) -> Any:
    if isinstance(data, dict):
        return {to_camel_case(k): convert_keys_to_camel(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [convert_keys_to_camel(item) for item in data]
    return data

def display_response() -> dict:
    display = render_table(session.controller.state)
    return convert_keys_to_camel(display.to_dict())

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

class SearchRequest(BaseModel):
    term: str = ""

class SortRequest(BaseModel):
    field: str

class PageRequest(BaseModel):
    page: int

@app.get("/api/status")
async def get_status():
    state = session.controller.state
    return {
        "status": state.status,
        "total": len(state.all_orders),
        "showing": len(state.current_orders),
        "lastUpdated": state.last_updated,
        "source": config.SNAPSHOT_SOURCE,
        "buildRunning": snapshot_build_running,
    }

@app.get("/api/orders")
async def list_orders():
    return display_response()

@app.post("/api/orders/search")
async def search_orders(request: SearchRequest):
    session.controller.search(request.term)
    return display_response()

@app.post("/api/orders/sort")
async def sort_orders(request: SortRequest):
    session.controller.sort(request.field)
    return display_response()

@app.post("/api/orders/page")
async def paginate_orders(request: PageRequest):
    """Out-of-range pages are ignored; the current page is returned unchanged."""
    session.controller.paginate(request.page)
    return display_response()

@app.post("/api/orders/reload")
async def reload_orders():
    loaded = await session.controller.load(config.SNAPSHOT_SOURCE)
    response = display_response()
    response["success"] = loaded
    return response

snapshot_build_running = False

async def run_snapshot_build():
    global snapshot_build_running
    try:
        stats = await asyncio.to_thread(build_snapshot)
        logger.info(
            f"Snapshot rebuilt with {stats.total_written} orders "
            f"(fallback={stats.used_fallback})"
        )
        await session.controller.load(config.SNAPSHOT_SOURCE)
    except SnapshotWriteError as e:
        logger.error(f"Snapshot build failed: {e}")
    except Exception as e:
        logger.exception(f"Snapshot build failed: {e}")
    finally:
        snapshot_build_running = False

@app.post("/api/admin/build_snapshot")
async def build_snapshot_endpoint(background_tasks: BackgroundTasks):
    global snapshot_build_running

    if snapshot_build_running:
        return {
            "success": False,
            "message": "Snapshot build already in progress"
        }

    snapshot_build_running = True
    background_tasks.add_task(run_snapshot_build)

    return {
        "success": True,
        "message": "Snapshot build started",
        "output": config.SNAPSHOT_PATH,
    }

app.include_router(frontend_router)
