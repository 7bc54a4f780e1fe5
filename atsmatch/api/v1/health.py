from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check(request: Request):
    context = getattr(request.app.state, "extraction_context", None)
    return {
        "status": "healthy",
        "remote": bool(context and context.remote_enabled),
        "semantic": bool(context and context.semantic_enabled),
    }
