from manaimport.parsers.manabox import (
    load_inventory,
    normalize_row,
    price_to_cents,
    read_manabox_rows,
)

__all__ = [
    "load_inventory",
    "normalize_row",
    "price_to_cents",
    "read_manabox_rows",
]
