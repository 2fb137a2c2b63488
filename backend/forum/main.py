"""
FastAPI application entrypoint.
Run with: uvicorn forum.main:app --reload --port 8080

API base path: /api
  - Auth:      POST /api/auth/register, POST /api/auth/login, GET /api/auth/me
  - Pages:     GET /api/pages, GET /api/pages/{id}, GET /api/pages/name/{name}, POST/DELETE (admin)
  - Questions: GET /api/questions/page/{page_id}?page=&size=, GET /api/questions/{id}, POST, PUT, DELETE
  - Replies:   GET/POST /api/replies/question/{question_id}, PUT/DELETE /api/replies/{id}
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from forum.config import settings, DEFAULT_SECRET_KEY
from forum.api.auth import router as auth_router
from forum.api.pages import router as pages_router
from forum.api.questions import router as questions_router
from forum.api.replies import router as replies_router
from forum.services.errors import ForumError

logger = logging.getLogger("forum.main")

app = FastAPI(
    title="Spark Forum API",
    description="Q&A forum: topic pages, questions and replies with author/admin permissions.",
    version="0.1.0",
)

_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins if _origins else ["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(pages_router)
app.include_router(questions_router)
app.include_router(replies_router)


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError):
    """Map domain errors (not found, conflict, forbidden, ...) to their HTTP status."""
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


@app.on_event("startup")
def startup():
    """Configure logging, init DB (tables, default pages, admin). Fail fast if production uses default SECRET_KEY."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if settings.is_production and (settings.secret_key or "").strip() == DEFAULT_SECRET_KEY:
        logger.critical("SECRET_KEY must be set in production. Set SECRET_KEY in env or .env.")
        raise RuntimeError("SECRET_KEY must be set in production. Set SECRET_KEY in env or .env.")
    from forum.database import init_db
    init_db()


@app.get("/health")
def health():
    """Health check (JSON)."""
    return {"status": "ok", "message": "Spark Forum API"}
