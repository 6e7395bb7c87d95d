# medicall/main.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from medicall.common.database.database import connect_to_db, close_db_connection
from medicall.common.config import settings
from medicall.common.utils.exceptions import register_exception_handlers
from medicall.common.utils.storage import upload_dir
from medicall.router.routers import include_routers

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_db()
    logger.info("MediCall API started (%s)", settings.APP_ENV)
    yield
    await close_db_connection()

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title="MediCall API",
    description="Hospital call-center API: patients, doctors, bookings and reminder calls",
    version="1.0.0",
    lifespan=lifespan
)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers from a separate file
include_routers(app)

# Uploaded prescriptions and avatars
app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=upload_dir()), name="uploads")

# Root endpoint
@app.get("/", response_class=HTMLResponse)
async def root():
    html_content = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>MediCall API</title>
    <style>
        body {
            font-family: system-ui, -apple-system, sans-serif;
            line-height: 1.6;
            background: #0a0a0f;
            color: #e5e5e5;
            max-width: 720px;
            margin: 0 auto;
            padding: 4rem 2rem;
        }
        h1 { color: #fff; }
        a { color: #6366f1; }
        code { color: #9ca3af; }
    </style>
</head>
<body>
    <h1>MediCall API</h1>
    <p>Patients, doctors, bookings and reminder calls for the hospital call center.</p>
    <p>Resources: <code>/patients</code>, <code>/doctors</code>, <code>/bookings</code>,
       <code>/call-logs</code>, <code>/users</code>, <code>/dashboard/stats</code></p>
    <p><a href="/docs">Swagger UI</a> &middot; <a href="/redoc">ReDoc</a></p>
</body>
</html>
"""
    return html_content

@app.get("/health")
async def health():
    return {"status": "ok"}
