"""Currency exchange rates against the rouble, with conversion."""

from __future__ import annotations

import urllib.request
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from scicalc.models import CurrencyEntity
from scicalc.repositories import CurrencyRepository

RATES_URL = "https://www.cbr-xml-daily.ru/daily_utf8.xml"
BASE_CODE = "RUB"
BASE_NAME = "Российский рубль"

Fetcher = Callable[[str], bytes]


class CurrencyError(RuntimeError):
    """Raised when rates cannot be downloaded or parsed."""


@dataclass
class CurrencyRate:
    """Price of ``nominal`` units of a currency in roubles."""

    code: str
    name: str
    nominal: int
    rate: float
    last_update: Optional[datetime]


def _download(url: str) -> bytes:
    try:
        with urllib.request.urlopen(url, timeout=30) as response:
            return response.read()
    except OSError as exc:
        raise CurrencyError(f"cannot load rates: {exc}") from exc


def _to_int(text: Optional[str]) -> int:
    try:
        return int((text or "").strip())
    except ValueError:
        return 0


def _to_float(text: Optional[str]) -> float:
    try:
        return float((text or "").strip().replace(",", "."))
    except ValueError:
        return 0.0


class CurrencyManager:
    """Holds the current rates, loading them from storage or the network."""

    def __init__(
        self, repository: CurrencyRepository, fetch: Optional[Fetcher] = None
    ) -> None:
        self._repository = repository
        self._fetch = fetch if fetch is not None else _download
        self._rates: dict[str, CurrencyRate] = {}

    def initialize(self) -> None:
        """Load stored rates, downloading fresh ones if none are stored."""
        self.load_rates_from_database()
        if not self.has_rates():
            self.load_rates_from_network()

    def load_rates_from_database(self) -> None:
        self._rates = {
            entity.code: CurrencyRate(
                code=entity.code,
                name=entity.name,
                nominal=entity.nominal,
                rate=entity.rate,
                last_update=entity.last_update,
            )
            for entity in self._repository.find_all()
        }

    def load_rates_from_network(self) -> None:
        """Download the daily rates and store them."""
        try:
            data = self._fetch(RATES_URL)
        except CurrencyError:
            raise
        except Exception as exc:
            raise CurrencyError(f"cannot load rates: {exc}") from exc
        self.parse_xml_data(data)

    def parse_xml_data(self, data: bytes | str) -> None:
        """Replace the rates with those in a daily rates XML document and save them."""
        now = datetime.now()
        self._rates = {
            BASE_CODE: CurrencyRate(BASE_CODE, BASE_NAME, 1, 1.0, now),
        }
        try:
            root = ET.fromstring(data)
        except ET.ParseError as exc:
            raise CurrencyError(f"error parsing data: {exc}") from exc

        for valute in root.iter("Valute"):
            code = valute.findtext(".//CharCode") or ""
            name = valute.findtext(".//Name") or ""
            nominal_text = valute.findtext(".//Nominal")
            nominal = 1 if nominal_text is None else _to_int(nominal_text)
            rate = _to_float(valute.findtext(".//Value"))
            if code and rate > 0:
                self._rates[code] = CurrencyRate(code, name, nominal, rate, now)

        self._repository.save_all(
            CurrencyEntity(
                code=r.code,
                name=r.name,
                nominal=r.nominal,
                rate=r.rate,
                last_update=r.last_update,
            )
            for r in (self._rates[code] for code in sorted(self._rates))
        )

    def convert(self, from_currency: str, to_currency: str, amount: float) -> float:
        """Convert ``amount``; 0.0 if either currency is unknown."""
        source = self._rates.get(from_currency)
        target = self._rates.get(to_currency)
        if source is None or target is None:
            return 0.0
        in_roubles = amount * source.rate / source.nominal
        return in_roubles * target.nominal / target.rate

    def currency_name(self, code: str) -> str:
        rate = self._rates.get(code)
        return rate.name if rate is not None else ""

    def currencies(self) -> list[str]:
        """Known currency codes in sorted order."""
        return sorted(self._rates)

    def has_rates(self) -> bool:
        return bool(self._rates)