"""Skatteverket open-data client and municipality tax table builder (offline batch job)"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

import httpx

from budgetkollen.config import settings
from budgetkollen.domain.exceptions import TaxDataError, TaxDataFetchError
from budgetkollen.domain.kommuner import kommun_to_record
from budgetkollen.domain.models import KommunData
from budgetkollen.infrastructure.observability.logging import setup_logging
from budgetkollen.infrastructure.observability.metrics import skatteverket_fetch_failures_counter
from budgetkollen.utils.text_utils import swedish_sort_key

MUNICIPAL_RATE_FIELD = "summa, exkl. kyrkoavgift"
CHURCH_FEE_FIELD = "kyrkoavgift"
KOMMUN_FIELD = "kommun"


class SkatteverketClient:
    """Client for the Skatteverket municipal tax rate dataset (paginated rowstore API)"""

    def __init__(
        self,
        base_url: str | None = None,
        page_size: int | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.skatteverket_api_url
        self.page_size = page_size or settings.skatteverket_page_size
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.fetch_max_retries
        self.backoff_base = settings.fetch_backoff_base
        self.request_delay = settings.skatteverket_request_delay_seconds
        self.transport = transport

    async def fetch_rows(self, year: int) -> List[Dict[str, Any]]:
        """
        Fetch every row for a tax year, one page at a time.

        Stops on an empty page, a short page, or once resultCount rows are in.

        Raises:
            TaxDataFetchError: On timeout, HTTP errors after retries, or unknown response shape
        """
        rows: List[Dict[str, Any]] = []
        offset = 0

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                data = await self._fetch_page(client, offset, year)

                batch = data.get("results")
                if not isinstance(batch, list):
                    raise TaxDataFetchError(f"Unexpected Skatteverket response keys: {sorted(data)}")

                logging.info(
                    "Fetched Skatteverket page",
                    extra={"step": "fetch_page", "offset": offset, "rows": len(batch), "year": year},
                )

                if not batch:
                    break

                rows.extend(batch)
                result_count = data.get("resultCount", 0)

                if len(rows) >= result_count or len(batch) < self.page_size:
                    break

                offset += self.page_size

                # Guard against an API that keeps returning full pages
                if offset > result_count + self.page_size:
                    break

                await asyncio.sleep(self.request_delay)

        logging.info("Skatteverket fetch completed", extra={"step": "fetch_complete", "rows": len(rows), "year": year})
        return rows

    async def _fetch_page(self, client: httpx.AsyncClient, offset: int, year: int) -> Dict[str, Any]:
        """
        Fetch a single page with retry logic.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base, ...
        - Retries on 5xx errors and network failures; 4xx fails immediately
        """
        attempt = 0
        while True:
            try:
                response = await client.get(
                    self.base_url,
                    params={"_offset": offset, "_limit": self.page_size, "år": year},
                    headers={"Accept": "application/json", "User-Agent": "BudgetKollen/1.0"},
                )
                response.raise_for_status()
                return response.json()

            except httpx.HTTPStatusError as e:
                skatteverket_fetch_failures_counter.inc()
                if e.response.status_code < 500:
                    raise TaxDataFetchError(f"Skatteverket API error: {e.response.status_code}") from e
                attempt += 1
                if attempt >= self.max_retries:
                    raise TaxDataFetchError(f"Skatteverket API error: {e.response.status_code}") from e

            except httpx.TimeoutException as e:
                skatteverket_fetch_failures_counter.inc()
                attempt += 1
                if attempt >= self.max_retries:
                    raise TaxDataFetchError(f"Skatteverket API timeout after {self.timeout}s") from e

            except httpx.RequestError as e:
                skatteverket_fetch_failures_counter.inc()
                attempt += 1
                if attempt >= self.max_retries:
                    raise TaxDataFetchError(f"Skatteverket API unreachable: {e}") from e

            except ValueError as e:
                raise TaxDataFetchError(f"Invalid JSON from Skatteverket: {e}") from e

            backoff = self.backoff_base * (2 ** (attempt - 1))
            await asyncio.sleep(backoff)


def _parse_rate(value: Any) -> float:
    """Parse a rate field; accepts numbers and strings with decimal comma or point"""
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().replace(",", "."))
    except ValueError:
        return 0.0


def process_kommun_rows(rows: List[Dict[str, Any]]) -> List[KommunData]:
    """
    Aggregate raw rows (one per parish) into one record per municipality.

    - Municipal rate: first row seen for the municipality
    - Church tax: average of the positive kyrkoavgift values across its parishes
    - Values rounded to 2 decimals, records sorted in Swedish alphabetical order

    Raises:
        TaxDataError: No rows, or no rows with a municipality name
    """
    if not rows:
        raise TaxDataError("No municipality rows to process")

    municipal_rates: Dict[str, float] = {}
    church_fees: Dict[str, List[float]] = {}

    for row in rows:
        kommun_namn = row.get(KOMMUN_FIELD)
        if not kommun_namn:
            continue

        if kommun_namn not in municipal_rates:
            municipal_rates[kommun_namn] = _parse_rate(row.get(MUNICIPAL_RATE_FIELD))
            church_fees[kommun_namn] = []

        church_fee = _parse_rate(row.get(CHURCH_FEE_FIELD))
        if church_fee > 0:
            church_fees[kommun_namn].append(church_fee)

    if not municipal_rates:
        raise TaxDataError("No municipalities found in rows")

    records = []
    for kommun_namn, kommunal_skatt in municipal_rates.items():
        fees = church_fees[kommun_namn]
        kyrko_skatt = sum(fees) / len(fees) if fees else 0.0
        records.append(
            KommunData(
                kommun_namn=kommun_namn,
                kommunal_skatt=round(kommunal_skatt, 2),
                kyrko_skatt=round(kyrko_skatt, 2),
                summa_inkl_kyrka=round(kommunal_skatt + kyrko_skatt, 2),
            )
        )

    records.sort(key=lambda k: swedish_sort_key(k.kommun_namn))
    return records


def save_kommun_table(records: List[KommunData], path: str | Path) -> Path:
    """Write the static lookup artifact consumed by budgetkollen.domain.kommuner"""
    output = Path(path)
    output.write_text(
        json.dumps([kommun_to_record(k) for k in records], ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    logging.info("Municipality table saved", extra={"path": str(output), "kommuner": len(records)})
    return output


async def build_kommun_table(year: int, output: str | Path, client: SkatteverketClient | None = None) -> List[KommunData]:
    """Fetch, aggregate and persist the municipality table for one tax year"""
    client = client or SkatteverketClient()
    rows = await client.fetch_rows(year)
    records = process_kommun_rows(rows)
    save_kommun_table(records, output)
    return records


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the municipality tax table from Skatteverket open data")
    parser.add_argument("--year", type=int, default=settings.tax_year, help="Tax year to fetch")
    parser.add_argument("--output", default=settings.kommun_table_output, help="Output JSON path")
    args = parser.parse_args(argv)

    setup_logging(settings.log_level)

    try:
        records = asyncio.run(build_kommun_table(args.year, args.output))
    except (TaxDataFetchError, TaxDataError) as e:
        logging.error(f"Municipality table build failed: {e}")
        return 1

    logging.info("Municipality table build completed", extra={"kommuner": len(records), "year": args.year})
    return 0


if __name__ == "__main__":
    sys.exit(main())
