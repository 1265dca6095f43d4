"""Static municipality tax-rate reference table"""

import json
from importlib import resources
from typing import Any, Dict, Iterable, List, Tuple

from budgetkollen.domain.exceptions import TaxDataError
from budgetkollen.domain.models import KommunData

KOMMUN_TABLE_RESOURCE = "kommunalskatt_2025.json"

# Used when no municipality is selected or the name is not in the table
DEFAULT_KOMMUN = KommunData(
    kommun_namn="",
    kommunal_skatt=31.0,
    kyrko_skatt=1.0,
    summa_inkl_kyrka=32.0,
)


def kommun_from_record(record: Dict[str, Any]) -> KommunData:
    """Parse one artifact record ({kommunNamn, kommunalSkatt, kyrkoSkatt, summaInklKyrka})"""
    try:
        return KommunData(
            kommun_namn=str(record["kommunNamn"]),
            kommunal_skatt=float(record["kommunalSkatt"]),
            kyrko_skatt=float(record["kyrkoSkatt"]),
            summa_inkl_kyrka=float(record["summaInklKyrka"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise TaxDataError(f"Invalid municipality record: {record!r}") from e


def kommun_to_record(kommun: KommunData) -> Dict[str, Any]:
    """Serialize to the artifact record shape"""
    return {
        "kommunNamn": kommun.kommun_namn,
        "kommunalSkatt": kommun.kommunal_skatt,
        "kyrkoSkatt": kommun.kyrko_skatt,
        "summaInklKyrka": kommun.summa_inkl_kyrka,
    }


def parse_kommun_table(records: Iterable[Dict[str, Any]]) -> Tuple[KommunData, ...]:
    table = tuple(kommun_from_record(record) for record in records)
    if not table:
        raise TaxDataError("Municipality table is empty")
    return table


def load_kommun_table() -> Tuple[KommunData, ...]:
    """Load the bundled municipality table shipped in budgetkollen/data"""
    raw = resources.files("budgetkollen.data").joinpath(KOMMUN_TABLE_RESOURCE).read_text(encoding="utf-8")
    return parse_kommun_table(json.loads(raw))


# Read-only after import
KOMMUN_TABLE: Tuple[KommunData, ...] = load_kommun_table()


def get_kommun_options() -> List[KommunData]:
    """All municipalities, sorted alphabetically"""
    return list(KOMMUN_TABLE)


def find_kommun(kommun_namn: str) -> KommunData | None:
    """Exact, case-sensitive lookup by municipality name"""
    for kommun in KOMMUN_TABLE:
        if kommun.kommun_namn == kommun_namn:
            return kommun
    return None
