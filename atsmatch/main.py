import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk

from atsmatch import __version__
from atsmatch.api.v1.health import router as health_router
from atsmatch.api.v1.keywords import router as keywords_router
from atsmatch.api.v1.messages import router as messages_router
from atsmatch.api.v1.score import router as score_router
from atsmatch.api.v1.suggestions import router as suggestions_router
from atsmatch.core.rate_limit import limiter
from atsmatch.core.config import settings
from atsmatch.core.lifespan import lifespan

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="ATS Keyword Match API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_allowed_origins),
    allow_origin_regex=(settings.cors_allow_origin_regex or "").strip() or None,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(score_router, prefix="/v1", tags=["Score"])
app.include_router(keywords_router, prefix="/v1", tags=["Keywords"])
app.include_router(suggestions_router, prefix="/v1", tags=["Suggestions"])
app.include_router(messages_router, prefix="/v1", tags=["Messages"])
