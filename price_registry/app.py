import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse, Response

from price_registry.config import LOG_LEVEL
from price_registry.models.price_model import PriceIn
from price_registry.services.services import (
    BadRequest,
    IdFactory,
    PriceNotFound,
    PriceService,
)
from price_registry.store import PriceTable

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger("price_registry.app")

router = APIRouter()


# dependency for getting the service bound to this app's table
def get_service(request: Request) -> PriceService:
    return request.app.state.price_service


# REST: health
@router.get("/health")
async def health():
    logger.debug("Health check requested")
    return {"status": "ok"}


@router.get("/prices")
async def list_prices(service: PriceService = Depends(get_service)) -> List[int]:
    return await service.list_prices()


@router.post("/prices")
async def create_price(
    payload: PriceIn = Body(...), service: PriceService = Depends(get_service)
):
    price_id = await service.create_price(payload.price)
    return PlainTextResponse(str(price_id))


@router.get("/prices/{price_id}")
async def get_price(price_id: str, service: PriceService = Depends(get_service)):
    price = await service.get_price(price_id)
    return PlainTextResponse(str(price))


@router.patch("/prices/{price_id}")
async def update_price(
    price_id: str,
    payload: PriceIn = Body(...),
    service: PriceService = Depends(get_service),
):
    await service.update_price(price_id, payload.price)
    return Response(status_code=200)


@router.delete("/prices/{price_id}")
async def delete_price(price_id: str, service: PriceService = Depends(get_service)):
    await service.delete_price(price_id)
    return Response(status_code=200)


# Error translation: every client error goes out with an empty body
async def _not_found_handler(request: Request, exc: PriceNotFound):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return Response(status_code=404)


async def _bad_request_handler(request: Request, exc: BadRequest):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return Response(status_code=400)


async def _validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path}: invalid body {exc.errors()}")
    return Response(status_code=400)


def create_app(
    table: Optional[PriceTable] = None, id_factory: Optional[IdFactory] = None
) -> FastAPI:
    app = FastAPI(title="Price Registry")
    app.state.price_table = table if table is not None else PriceTable()
    app.state.price_service = PriceService(
        app.state.price_table, id_factory=id_factory or uuid.uuid4
    )
    app.include_router(router)
    app.add_exception_handler(PriceNotFound, _not_found_handler)
    app.add_exception_handler(BadRequest, _bad_request_handler)
    app.add_exception_handler(RequestValidationError, _validation_handler)

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            f"Starting up application with {len(app.state.price_table)} prices"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        # nothing is persisted; the table is dropped with the app
        logger.info(
            f"Shutting down application, discarding {len(app.state.price_table)} prices"
        )

    return app


app = create_app()
