# === validation.py: Validierung der Formularfelder ===
# Reine Funktionen: gleiche Eingabe ergibt immer die gleichen Fehler.

import re
import unicodedata
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import quote, urlparse

from constants import (
    DEFAULT_LANGUAGE, MAX_DECIMALS, MAX_NAME_LENGTH, MAX_SYMBOL_LENGTH, U64_MAX, t,
)

SYMBOL_PATTERN = re.compile(r"[A-Z]+")
ALLOWED_URL_SCHEMES = ("http", "https", "ipfs", "ar")
# Zeichen, die in einer URL nie als HTML-Markup durchgereicht werden
MARKUP_CHARS = "<>\"'`"
URL_SAFE_CHARS = ":/?#[]@!$&()*+,;=%-._~"


@dataclass(frozen=True)
class FormData:
    """Die fünf Formularfelder als Rohtexte, so wie sie eingegeben wurden."""
    name: str
    symbol: str
    image_url: str
    initial_supply: str
    decimals: str

    @classmethod
    def from_fields(cls, fields: Mapping[str, str]) -> "FormData":
        return cls(
            name=fields.get("name", ""),
            symbol=fields.get("symbol", ""),
            image_url=fields.get("imageUrl", ""),
            initial_supply=fields.get("initialSupply", ""),
            decimals=fields.get("decimals", ""),
        )

    @property
    def decimals_value(self) -> int:
        return int(self.decimals)

    @property
    def supply_value(self) -> Decimal:
        return Decimal(self.initial_supply.strip())

    @property
    def base_units(self) -> int:
        """Initialer Vorrat in kleinsten Einheiten (supply * 10^decimals)."""
        return to_base_units(self.supply_value, self.decimals_value)


# Ganzzahl-Arithmetik auf Koeffizient und Exponent; der Decimal-Kontext
# (28 Stellen, begrenzter Exponent) würde runden oder überlaufen.
def _coefficient(supply: Decimal) -> Tuple[int, int]:
    _, digits, exponent = supply.as_tuple()
    stripped = "".join(map(str, digits)).rstrip("0")
    if not stripped:
        return 0, 0
    return int(stripped), exponent + len(digits) - len(stripped)


def has_excess_precision(supply: Decimal, decimals: int) -> bool:
    """True, wenn supply mehr Nachkommastellen hat als decimals erlaubt."""
    _, exponent = _coefficient(supply)
    return exponent < -decimals


def to_base_units(supply: Decimal, decimals: int) -> int:
    """Exakter Wert von supply * 10^decimals; überzählige Nachkommastellen werden abgeschnitten."""
    coefficient, exponent = _coefficient(supply)
    shift = exponent + decimals
    if shift >= 0:
        return coefficient * 10**shift
    return coefficient // 10**(-shift)


def _validate_name(value: str, lang: str) -> Optional[str]:
    if not value:
        return t("validation.name.required", lang)
    if len(value) > MAX_NAME_LENGTH:
        return t("validation.name.tooLong", lang)
    return None


def _validate_symbol(value: str, lang: str) -> Optional[str]:
    if not value:
        return t("validation.symbol.required", lang)
    if len(value) > MAX_SYMBOL_LENGTH:
        return t("validation.symbol.tooLong", lang)
    if not SYMBOL_PATTERN.fullmatch(value):
        return t("validation.symbol.pattern", lang)
    return None


def is_valid_url(value: str) -> bool:
    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False
    try:
        parsed = urlparse(candidate)
    except ValueError:
        return False
    return parsed.scheme.lower() in ALLOWED_URL_SCHEMES and bool(parsed.netloc)


def _validate_image_url(value: str, lang: str) -> Optional[str]:
    if not value.strip():
        return t("validation.imageUrl.required", lang)
    if not is_valid_url(value):
        return t("validation.imageUrl.invalid", lang)
    return None


def _parse_decimals(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


def _validate_decimals(value: str, lang: str) -> Optional[str]:
    if not value.strip():
        return t("validation.decimals.required", lang)
    decimals = _parse_decimals(value)
    if decimals is None:
        return t("validation.decimals.invalid", lang)
    if not 0 <= decimals <= MAX_DECIMALS:
        return t("validation.decimals.range", lang)
    return None


def _validate_initial_supply(value: str, decimals: Optional[int], lang: str) -> Optional[str]:
    if not value.strip():
        return t("validation.initialSupply.required", lang)
    try:
        supply = Decimal(value.strip())
    except InvalidOperation:
        return t("validation.initialSupply.invalid", lang)
    if not supply.is_finite():
        return t("validation.initialSupply.invalid", lang)
    if supply <= 0:
        return t("validation.initialSupply.positive", lang)

    # Prüfungen gegen die Dezimalstellen nur, wenn diese selbst gültig sind
    if decimals is None or not 0 <= decimals <= MAX_DECIMALS:
        return None
    if has_excess_precision(supply, decimals):
        return t("validation.initialSupply.precision", lang)
    # Grobe Schranke vor der exakten Rechnung, damit riesige Exponenten nicht ausmultipliziert werden
    if supply.adjusted() + decimals >= len(str(U64_MAX)) or to_base_units(supply, decimals) > U64_MAX:
        return t("validation.initialSupply.tooLarge", lang)
    return None


def validate_form(fields: Mapping[str, str], lang: str = DEFAULT_LANGUAGE) -> Dict[str, str]:
    """Validiert alle Felder und liefert ein Dict Feldname -> Fehlermeldung (leer = gültig)."""
    name = fields.get("name", "") or ""
    symbol = fields.get("symbol", "") or ""
    image_url = fields.get("imageUrl", "") or ""
    initial_supply = fields.get("initialSupply", "") or ""
    decimals = fields.get("decimals", "") or ""

    checks = {
        "name": _validate_name(name, lang),
        "symbol": _validate_symbol(symbol, lang),
        "imageUrl": _validate_image_url(image_url, lang),
        "initialSupply": _validate_initial_supply(initial_supply, _parse_decimals(decimals), lang),
        "decimals": _validate_decimals(decimals, lang),
    }
    return {field: message for field, message in checks.items() if message}


def parse_form(fields: Mapping[str, str], lang: str = DEFAULT_LANGUAGE) -> Tuple[Optional[FormData], Dict[str, str]]:
    errors = validate_form(fields, lang)
    if errors:
        return None, errors
    return FormData.from_fields(fields), {}


def sanitize_image_url(url: str) -> str:
    """Entfernt Steuer- und Markup-Zeichen und kodiert alles Übrige, was in einer URL nichts verloren hat."""
    cleaned = "".join(
        ch for ch in url.strip()
        if ch not in MARKUP_CHARS and not unicodedata.category(ch).startswith("C")
    )
    return quote(cleaned, safe=URL_SAFE_CHARS)
