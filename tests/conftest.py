from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from manaimport.models.inventory import InventoryRecord

BOLT_ID = "e3285e6b-3e79-4d7c-bf96-d920f973b80d"
DELVER_ID = "11bf83bb-c95b-4b4f-9a56-ce7a1816307a"

CardFactory = Callable[..., dict[str, Any]]


def _image_uris(slug: str) -> dict[str, str]:
    return {
        "small": f"https://cards.scryfall.io/small/{slug}.jpg",
        "normal": f"https://cards.scryfall.io/normal/{slug}.jpg",
        "large": f"https://cards.scryfall.io/large/{slug}.jpg",
        "png": f"https://cards.scryfall.io/png/{slug}.png",
    }


@pytest.fixture
def manabox_csv_path() -> Path:
    """Two-row ManaBox export: 4x Lightning Bolt and 1x foil Delver."""
    return Path(__file__).parent / "fixtures" / "manabox_export.csv"


@pytest.fixture
def make_card() -> CardFactory:
    """Build a single-image Scryfall card object."""

    def _make(card_id: str = BOLT_ID, name: str = "Lightning Bolt", **overrides: Any) -> dict:
        card: dict[str, Any] = {
            "object": "card",
            "id": card_id,
            "name": name,
            "set": "2x2",
            "set_name": "Double Masters 2022",
            "rarity": "uncommon",
            "layout": "normal",
            "image_uris": _image_uris(card_id),
            "prices": {"usd": "1.20"},
        }
        card.update(overrides)
        return card

    return _make


@pytest.fixture
def make_dfc() -> CardFactory:
    """Build a multi-faced Scryfall card object with per-face images."""

    def _make(
        card_id: str = DELVER_ID,
        name: str = "Delver of Secrets // Insectile Aberration",
        faces: int = 2,
        **overrides: Any,
    ) -> dict:
        card: dict[str, Any] = {
            "object": "card",
            "id": card_id,
            "name": name,
            "set": "isd",
            "set_name": "Innistrad",
            "rarity": "common",
            "layout": "transform",
            "card_faces": [
                {
                    "object": "card_face",
                    "name": f"Face {i}",
                    "image_uris": _image_uris(f"{card_id}-{i}"),
                }
                for i in range(faces)
            ],
        }
        card.update(overrides)
        return card

    return _make


@pytest.fixture
def make_record() -> Callable[..., InventoryRecord]:
    """Build an un-enriched inventory record."""

    def _make(
        lookup_id: str = BOLT_ID,
        quantity: int = 1,
        unit_price_cents: int = 100,
        is_foil: bool = False,
        source_id: str = "1",
    ) -> InventoryRecord:
        return InventoryRecord(
            is_foil=is_foil,
            quantity=quantity,
            source_id=source_id,
            lookup_id=lookup_id,
            unit_price_cents=unit_price_cents,
        )

    return _make
