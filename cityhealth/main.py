from contextlib import asynccontextmanager
from typing import List, Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from cityhealth.core.config import settings
from cityhealth.core.errors import (
    CityHealthError,
    NotFound,
    ValidationError,
    user_message,
)
from cityhealth.core.log import setup_logging
from cityhealth.models import (
    ChatReply,
    ChatRequest,
    InteractionRequest,
    Provider,
    ResultPage,
    SearchRequest,
    SuggestionCandidate,
)
from cityhealth.services import Services, build_services

router = APIRouter()


def get_services(request: Request) -> Services:
    return request.app.state.services


@router.post("/search", response_model=ResultPage)
async def search(req: SearchRequest, services: Services = Depends(get_services)):
    page = await services.search.search(req)
    if req.page == 1 and (req.query.strip() or req.category or req.location):
        services.history.add(req.query, req.category, req.location)
    return page


@router.get("/search/history")
async def search_history(services: Services = Depends(get_services)):
    return services.history.all()


@router.delete("/search/history")
async def clear_search_history(services: Services = Depends(get_services)):
    services.history.clear()
    return {"status": "cleared"}


@router.get("/providers/emergency", response_model=List[Provider])
async def emergency_providers(
    limit: Optional[int] = None, services: Services = Depends(get_services)
):
    return await services.search.emergency_providers(limit)


@router.get("/providers/popular", response_model=List[Provider])
async def popular_providers(
    limit: Optional[int] = None, services: Services = Depends(get_services)
):
    return await services.search.popular_providers(limit)


@router.get("/providers/types", response_model=List[str])
async def service_types(services: Services = Depends(get_services)):
    return await services.search.service_types()


@router.get("/providers/cities", response_model=List[str])
async def cities(services: Services = Depends(get_services)):
    return await services.search.cities()


@router.get("/suggestions", response_model=List[SuggestionCandidate])
async def suggestions(
    location: Optional[str] = None, services: Services = Depends(get_services)
):
    return await services.suggestions.suggest(user_location=location)


@router.post("/suggestions/{provider_id}/dismiss")
async def dismiss_suggestion(provider_id: str, services: Services = Depends(get_services)):
    services.suggestions.dismiss(provider_id)
    return {"dismissed": provider_id}


@router.delete("/suggestions/dismissed")
async def clear_dismissed(services: Services = Depends(get_services)):
    services.suggestions.clear_dismissed()
    return {"status": "cleared"}


@router.post("/interactions")
async def track_interaction(
    req: InteractionRequest, services: Services = Depends(get_services)
):
    category = req.category.value if req.category else None
    services.suggestions.track_interaction(req.provider_id, req.kind, category)
    return {"tracked": req.provider_id, "kind": req.kind}


@router.post("/chat", response_model=ChatReply)
async def chat(req: ChatRequest, services: Services = Depends(get_services)):
    return await services.chatbot.reply(req.message, req.language)


@router.get("/health")
async def health():
    return {"status": "ok", "elasticsearch": settings.ES_HOST}


async def handle_core_error(request: Request, exc: CityHealthError):
    language = request.query_params.get("lang", settings.DEFAULT_LANGUAGE)
    if isinstance(exc, ValidationError):
        status_code = 400
    elif isinstance(exc, NotFound):
        status_code = 404
    else:
        status_code = 502
    return JSONResponse(
        status_code=status_code, content={"detail": user_message(exc, language)}
    )


def create_app(services: Services = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = getattr(app.state, "services", None) is None
        if owned:
            app.state.services = build_services()
        yield
        if owned:
            await app.state.services.close()

    app = FastAPI(title="CityHealth Directory Service", version="1.0", lifespan=lifespan)
    if services is not None:
        app.state.services = services
    app.include_router(router)
    app.add_exception_handler(CityHealthError, handle_core_error)
    return app


app = create_app()


if __name__ == "__main__":
    setup_logging()
    uvicorn.run(app, host=settings.SERVICE_HOST, port=settings.APP_PORT)
