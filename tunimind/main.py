import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tunimind.database import init_db
from tunimind.routes.auth_routes import router as auth_router
from tunimind.routes.mood_routes import router as mood_router
from tunimind.routes.emotion_routes import router as emotion_router
from tunimind.routes.data_routes import router as data_router
from tunimind.routes.analytics_routes import router as analytics_router
from tunimind.routes.chat_routes import router as chat_router
from tunimind import config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The Supabase backend keeps its table remotely; only the SQL one needs creating
    if config.STORAGE_BACKEND == "sql":
        try:
            init_db()
        except Exception as e:
            logger.error(f"Database init skipped or failed: {e}")
    yield


app = FastAPI(title="TuniMind API", lifespan=lifespan)


@app.get("/api/v1/health-check")
async def health():
    return {"status": "ok", "message": "Backend is alive!", "storage": config.STORAGE_BACKEND}


# Configure CORS for the web front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(mood_router)
app.include_router(emotion_router)
app.include_router(data_router)
app.include_router(analytics_router)
app.include_router(chat_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("tunimind.main:app", host="0.0.0.0", port=8000, reload=True)
