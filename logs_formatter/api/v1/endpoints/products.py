"""Product catalog endpoint."""

import random

from fastapi import APIRouter
import structlog

from logs_formatter.schemas import Product

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Products"])

PRODUCT_NAMES = ("Laptop", "Mouse", "Keyboard", "Monitor", "Printer", "Headset")
PRODUCT_COUNT = 3


@router.get(
    "/products",
    response_model=list[Product],
    summary="List Products",
    description="Return a small random sample of products with prices.",
)
async def get_products() -> list[Product]:
    products = [
        Product(
            id=index,
            name=random.choice(PRODUCT_NAMES),
            price=round(random.random() * 1000, 2),
        )
        for index in range(1, PRODUCT_COUNT + 1)
    ]
    logger.info("Retrieved {ProductCount} products", ProductCount=len(products))
    return products
