from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import load_settings
from routes import game_ws, games

settings = load_settings()

app = FastAPI(title="Sudoku Duel API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(games.router, prefix="/api")
app.include_router(game_ws.router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
