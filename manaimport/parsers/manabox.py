"""
Parser for ManaBox CSV collection exports.

ManaBox exports one row per card copy-group with a fixed column order:

    Name,Set code,Set name,Collector number,Foil,Rarity,Quantity,
    ManaBox ID,Scryfall ID,Purchase price,...

Only the columns needed for enrichment are read. Card name, set and
rarity are taken from Scryfall instead of the export.
"""

import csv
from collections.abc import Iterator, Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path

from manaimport.errors import MalformedRecordError, SourceFileError
from manaimport.models.inventory import InventoryRecord

# 0-based column positions in the ManaBox export
FOIL_COLUMN = 4
QUANTITY_COLUMN = 6
MANABOX_ID_COLUMN = 7
SCRYFALL_ID_COLUMN = 8
PRICE_COLUMN = 9

MIN_COLUMNS = PRICE_COLUMN + 1

NON_FOIL_FINISH = "normal"


def _parse_quantity(value: str) -> int:
    try:
        quantity = int(value)
    except ValueError as e:
        raise MalformedRecordError(f"Invalid quantity: {value!r}") from e

    if quantity < 1:
        raise MalformedRecordError(f"Quantity must be at least 1, got {quantity}")
    return quantity


def price_to_cents(value: str) -> int:
    """
    Convert a decimal price string to whole cents.

    Rounds half up at the cent. A blank price counts as 0.

    Raises:
        MalformedRecordError: If the price is not a finite number
    """
    if not value:
        return 0

    try:
        price = Decimal(value)
    except InvalidOperation as e:
        raise MalformedRecordError(f"Invalid price: {value!r}") from e

    if not price.is_finite():
        raise MalformedRecordError(f"Invalid price: {value!r}")

    return int((price * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def normalize_row(row: Sequence[str]) -> InventoryRecord:
    """
    Convert one decoded CSV row into an InventoryRecord.

    Args:
        row: Column values in ManaBox export order

    Returns:
        Un-enriched InventoryRecord

    Raises:
        MalformedRecordError: If the row is too short or a numeric column is invalid
    """
    if len(row) < MIN_COLUMNS:
        raise MalformedRecordError(f"Expected at least {MIN_COLUMNS} columns, got {len(row)}")

    return InventoryRecord(
        is_foil=row[FOIL_COLUMN] != NON_FOIL_FINISH,
        quantity=_parse_quantity(row[QUANTITY_COLUMN]),
        source_id=row[MANABOX_ID_COLUMN],
        lookup_id=row[SCRYFALL_ID_COLUMN],
        unit_price_cents=price_to_cents(row[PRICE_COLUMN]),
    )


def read_manabox_rows(path: Path) -> Iterator[tuple[int, list[str]]]:
    """
    Read data rows from a ManaBox export.

    Skips the header line and blank lines, strips whitespace around
    every field, and does not enforce a column count.

    Yields:
        (line_number, fields) with 1-based line numbers

    Raises:
        SourceFileError: If the file cannot be opened, decoded or parsed as CSV
    """
    try:
        with open(path, encoding="utf-8", newline="") as f:
            reader = csv.reader(f, delimiter=",")
            next(reader, None)
            for row in reader:
                fields = [field.strip() for field in row]
                if not any(fields):
                    continue
                yield reader.line_num, fields
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise SourceFileError(f"Cannot read ManaBox export {path}: {e}") from e


def load_inventory(path: Path) -> list[InventoryRecord]:
    """
    Read and normalize every row of a ManaBox export up front.

    Raises:
        SourceFileError: If the file cannot be read
        MalformedRecordError: On the first invalid row, tagged with its line number
    """
    records: list[InventoryRecord] = []

    for line, row in read_manabox_rows(path):
        try:
            records.append(normalize_row(row))
        except MalformedRecordError as e:
            raise MalformedRecordError(str(e), line=line) from e

    return records
