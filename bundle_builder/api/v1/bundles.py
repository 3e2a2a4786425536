"""
Bundle API endpoints
"""

import asyncio
from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator

from bundle_builder.api.dependencies import get_shopify_client
from bundle_builder.core.exceptions import BundleBuilderException, ValidationError
from bundle_builder.core.logging import get_logger
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from bundle_builder.domains.shopify.models import BundleCreationStatus, ProductReference
from bundle_builder.domains.shopify.services import (
    BundleCreationService,
    BundleListingService,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["bundles"])

# Client went away before we answered (nginx convention)
CLIENT_CLOSED_REQUEST = 499
DISCONNECT_CHECK_INTERVAL = 0.5


class SaveBundleRequest(BaseModel):
    """Body of POST /api/save-bundle"""

    title: Optional[str] = None
    price: Optional[str] = None
    selected_products: Optional[List[ProductReference]] = Field(
        None, alias="selectedProducts"
    )

    @field_validator("price", mode="before")
    @classmethod
    def coerce_price(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


async def _cancel_on_disconnect(request: Request, task: asyncio.Task, disconnected: asyncio.Event):
    while not task.done():
        if await request.is_disconnected():
            disconnected.set()
            task.cancel()
            return
        await asyncio.sleep(DISCONNECT_CHECK_INTERVAL)


@router.post("/save-bundle")
async def save_bundle(
    body: SaveBundleRequest,
    request: Request,
    api_client: IShopifyAdminClient = Depends(get_shopify_client),
):
    """
    Create a bundle product and wait for Shopify to finish building it.

    Returns 200 with status "created", or "created_price_unset" when the
    product exists but its price could not be set.
    """
    service = BundleCreationService(api_client)
    task = asyncio.create_task(
        service.create_bundle(body.title, body.selected_products or [], body.price)
    )
    disconnected = asyncio.Event()
    watcher = asyncio.create_task(_cancel_on_disconnect(request, task, disconnected))

    try:
        result = await task
    except asyncio.CancelledError:
        if not disconnected.is_set():
            # The handler itself is being cancelled; take the workflow down with it
            task.cancel()
            raise
        logger.warning(
            "Client disconnected, bundle creation abandoned",
            shop_domain=api_client.shop_domain,
        )
        return JSONResponse(
            status_code=CLIENT_CLOSED_REQUEST,
            content={"message": "Request cancelled"},
        )
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"message": e.message})
    except BundleBuilderException as e:
        logger.error(
            "Error creating bundle",
            shop_domain=api_client.shop_domain,
            error_code=e.error_code,
            error=e.message,
        )
        return JSONResponse(
            status_code=500,
            content={
                "message": "Failed to create bundle",
                "error": e.message,
                "errorCode": e.error_code,
            },
        )
    finally:
        watcher.cancel()
        for outcome in await asyncio.gather(watcher, return_exceptions=True):
            if isinstance(outcome, Exception):
                logger.warning(
                    "Disconnect watcher failed",
                    shop_domain=api_client.shop_domain,
                    error=str(outcome),
                )

    content = {
        "message": "Bundle created successfully",
        "status": result.status.value,
        "productId": result.product_id,
        "productGid": result.product_gid,
        "productEditUrl": result.product_edit_url,
        "price": result.price,
    }
    if result.status is BundleCreationStatus.CREATED_PRICE_UNSET:
        content["message"] = "Bundle created, but its price could not be set"
        content["warning"] = result.reconciliation_error

    return JSONResponse(status_code=200, content=content)


@router.get("/get-bundles")
async def get_bundles(api_client: IShopifyAdminClient = Depends(get_shopify_client)):
    """Bundle products, highest first-variant price first"""
    try:
        bundles = await BundleListingService(api_client).list_bundles()
    except BundleBuilderException as e:
        logger.error(
            "Error fetching bundles", shop_domain=api_client.shop_domain, error=e.message
        )
        return JSONResponse(status_code=500, content={"error": "Failed to fetch bundles"})

    return {"bundles": bundles}
