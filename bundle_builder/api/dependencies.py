"""
Request-scoped dependencies

The embedding Shopify app authenticates the admin session and forwards the
shop domain and offline access token as headers.
"""

from dataclasses import dataclass
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from bundle_builder.core.config.settings import settings
from bundle_builder.core.database import get_db_session
from bundle_builder.domains.feedback import FeedbackRepository, FeedbackService
from bundle_builder.domains.shopify.interfaces import IShopifyAdminClient
from bundle_builder.domains.shopify.services import ShopifyAdminClient

SHOP_DOMAIN_HEADER = "X-Shopify-Shop-Domain"
ACCESS_TOKEN_HEADER = "X-Shopify-Access-Token"


@dataclass(frozen=True)
class ShopSession:
    shop_domain: str
    access_token: str


async def get_shop_session(
    shop_domain: Optional[str] = Header(None, alias=SHOP_DOMAIN_HEADER),
    access_token: Optional[str] = Header(None, alias=ACCESS_TOKEN_HEADER),
) -> ShopSession:
    token = access_token or settings.shopify.SHOPIFY_ACCESS_TOKEN
    if not shop_domain or not token:
        raise HTTPException(status_code=401, detail="Missing Shopify session")
    return ShopSession(shop_domain=shop_domain, access_token=token)


async def get_shopify_client(
    session: ShopSession = Depends(get_shop_session),
) -> AsyncGenerator[IShopifyAdminClient, None]:
    """One Admin API client per request, closed when the request ends"""
    async with ShopifyAdminClient(session.shop_domain, session.access_token) as client:
        yield client


async def get_feedback_service(
    db_session: AsyncSession = Depends(get_db_session),
) -> FeedbackService:
    return FeedbackService(FeedbackRepository(db_session))
