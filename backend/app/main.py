import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import Response

from app.core.config import settings
from app.core.errors import register_error_handlers
from app.routers import admin, channels, comments, community, notifications, reports, users, videos

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

OPENAPI_TAGS = [
    {"name": "Admin", "description": "Moderation queues, user and video actions, stats."},
    {"name": "Admin Notifications", "description": "Admin notification inbox."},
    {"name": "Users", "description": "Sign-up and the signed-in user."},
    {"name": "Videos", "description": "Upload and edit videos."},
    {"name": "Comments", "description": "Comment on videos."},
    {"name": "Reports", "description": "Report content or users to moderators."},
    {"name": "Community", "description": "Community posts, polls, likes and comments."},
    {"name": "Channels", "description": "Channel profiles and subscriptions."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Video platform backend. Moderation console, admin notifications, "
        "activity timeline, and the content endpoints that feed them."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def options_handler(request: Request, call_next):  # type: ignore[no-untyped-def]
    if request.method == "OPTIONS":
        origin = request.headers.get("origin", "*")
        return Response(
            status_code=200,
            headers={
                "Access-Control-Allow-Origin": origin,
                "Access-Control-Allow-Methods": "*",
                "Access-Control-Allow-Headers": "*",
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "86400",
            },
        )
    return await call_next(request)


register_error_handlers(app)

app.include_router(admin.router, prefix="/v1/admin", tags=["Admin"])
app.include_router(
    notifications.router,
    prefix="/v1/admin/notifications",
    tags=["Admin Notifications"],
)
app.include_router(users.router, prefix="/v1/users", tags=["Users"])
app.include_router(videos.router, prefix="/v1/videos", tags=["Videos"])
app.include_router(comments.router, prefix="/v1/comments", tags=["Comments"])
app.include_router(reports.router, prefix="/v1/reports", tags=["Reports"])
app.include_router(community.router, prefix="/v1/community", tags=["Community"])
app.include_router(channels.router, prefix="/v1/channels", tags=["Channels"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
