"""Artisan Connect — Catalogue Constants.

Service categories and the hyper-local service area.
"""

from typing import Dict, List

ARTISAN_CATEGORIES: List[str] = [
    "Electrician",
    "Plumber",
    "Mechanic (Auto)",
    "Generator Repair",
    "AC Technician",
    "Carpenter",
    "Painter",
    "Tiler",
    "Bricklayer",
    "Welder",
    "Roofer",
    "Cleaner",
    "Hairstylist",
    "Tailor",
]

CATEGORY_ICONS: Dict[str, str] = {
    "Electrician": "⚡",
    "Plumber": "🔧",
    "Mechanic (Auto)": "🔩",
    "Generator Repair": "🔌",
    "AC Technician": "❄️",
    "Carpenter": "🪚",
    "Painter": "🎨",
    "Tiler": "🧱",
    "Bricklayer": "🧱",
    "Welder": "🔥",
    "Roofer": "🏠",
    "Cleaner": "🧹",
    "Hairstylist": "✂️",
    "Tailor": "🧵",
}

CATEGORY_DESCRIPTIONS: Dict[str, str] = {
    "Electrician": "Wiring, installations, repairs",
    "Plumber": "Pipes, fixtures, drainage",
    "Mechanic (Auto)": "Car repairs and maintenance",
    "Generator Repair": "Generator servicing and fixes",
    "AC Technician": "Air conditioning installation and repair",
    "Carpenter": "Furniture, doors, woodwork",
    "Painter": "Interior and exterior painting",
    "Tiler": "Floor and wall tiling",
    "Bricklayer": "Masonry and construction",
    "Welder": "Metal fabrication and welding",
    "Roofer": "Roofing installation and repair",
    "Cleaner": "Home and office cleaning",
    "Hairstylist": "Hair cutting and styling",
    "Tailor": "Clothing alterations and sewing",
}

# ── Service Area ──

ESTATE_ZONES: List[str] = [
    "Arepo Zone 1",
    "Arepo Zone 2",
    "Arepo Zone 3",
    "Arepo Zone 4",
    "Magboro",
    "Berger",
    "Ojodu",
    "Isheri",
    "Warewa",
]

CITIES: List[str] = ["Arepo", "Magboro", "Berger", "Ojodu", "Isheri"]

STATES: List[str] = ["Ogun", "Lagos"]

DEFAULT_LOCATION: Dict[str, str] = {"city": "Arepo", "state": "Ogun"}


def is_valid_category(category: str) -> bool:
    return category in CATEGORY_ICONS
