"""Artisan Connect — Catalogue Routes."""

from fastapi import APIRouter

from artisan_connect.core.catalog import (
    ARTISAN_CATEGORIES,
    CATEGORY_DESCRIPTIONS,
    CATEGORY_ICONS,
    CITIES,
    DEFAULT_LOCATION,
    ESTATE_ZONES,
    STATES,
)

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/categories")
async def categories():
    return {
        "categories": [
            {
                "name": name,
                "icon": CATEGORY_ICONS[name],
                "description": CATEGORY_DESCRIPTIONS[name],
            }
            for name in ARTISAN_CATEGORIES
        ]
    }


@router.get("/locations")
async def locations():
    return {
        "estate_zones": ESTATE_ZONES,
        "cities": CITIES,
        "states": STATES,
        "default": DEFAULT_LOCATION,
    }
