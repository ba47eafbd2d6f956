# === display.py: Anzeige-Logik (Schritte, Vorschau, Links, Formatierung) ===

import io
from typing import Dict, List, Mapping, Tuple

import requests
from PIL import Image

from constants import DEFAULT_LANGUAGE, EXPLORER_BASE_URL, t
from validation import is_valid_url

STEP_KEYS = ("steps.prepare", "steps.create", "steps.mint", "steps.complete")
STEP_ICONS = ("🪙", "🚀", "📚", "✅")


def step_states(phase: int, lang: str = DEFAULT_LANGUAGE) -> List[Tuple[str, bool]]:
    """(Beschriftung, erreicht) je Schritt; erreicht sind alle Schritte bis einschließlich der Phase."""
    return [(t(key, lang), index <= phase) for index, key in enumerate(STEP_KEYS)]


def preview_model(fields: Mapping[str, str], lang: str = DEFAULT_LANGUAGE) -> Dict[str, str]:
    image_url = (fields.get("imageUrl") or "").strip()
    return {
        "name": fields.get("name") or t("preview.name", lang),
        "symbol": fields.get("symbol") or t("preview.symbol", lang),
        "image_url": image_url if is_valid_url(image_url) else "",
    }


def _cluster_query(cluster: str) -> str:
    return "" if not cluster or cluster == "mainnet-beta" else f"?cluster={cluster}"


def explorer_tx_url(signature: str, cluster: str = "devnet") -> str:
    return f"{EXPLORER_BASE_URL}/tx/{signature}{_cluster_query(cluster)}"


def explorer_address_url(address: str, cluster: str = "devnet") -> str:
    return f"{EXPLORER_BASE_URL}/address/{address}{_cluster_query(cluster)}"


def truncate_address(address: str, start_chars: int = 8, end_chars: int = 8) -> str:
    """Kürzt Blockchain-Adressen für bessere Lesbarkeit"""
    if len(address) <= start_chars + end_chars + 3:
        return address
    return f"{address[:start_chars]}...{address[-end_chars:]}"


def format_sol_amount(lamports: int) -> str:
    return f"{(lamports / 10**9):.6f} SOL"


def format_token_amount(base_units: int, decimals: int) -> str:
    """Formatiert einen Betrag in Basiseinheiten als lesbaren Token-Betrag."""
    whole, fraction = divmod(base_units, 10**decimals)
    if decimals == 0:
        return f"{whole:,}"
    return f"{whole:,}.{fraction:0{decimals}d}"


MAX_PREVIEW_BYTES = 2 * 1024 * 1024
PREVIEW_SIZE = (64, 64)


def fetch_preview_image(url: str, timeout: float = 10.0) -> Image.Image:
    """Lädt das Vorschaubild herunter und liefert ein auf Vorschaugröße verkleinertes PIL-Bild."""
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    if len(response.content) > MAX_PREVIEW_BYTES:
        raise ValueError(f"Bild ist größer als {MAX_PREVIEW_BYTES // 1024} KB.")

    with Image.open(io.BytesIO(response.content)) as img:
        preview = img.convert("RGBA")
    preview.thumbnail(PREVIEW_SIZE)
    return preview
