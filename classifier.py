"""
Keyword-based waste classifier for EcoScan.

Maps a free-text description of a waste item (usually produced by the vision
model) to one of the three Colombian recycling bins. Matching is a plain,
case-insensitive substring test over fixed keyword lists, checked in priority
order: Recyclable, then Organic, then Non-recyclable. The first category with
any hit wins.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


class CategoryLabel(str, Enum):
    RECYCLABLE = "RECYCLABLE"
    ORGANIC = "ORGANIC"
    NON_RECYCLABLE = "NON_RECYCLABLE"
    UNRECOGNIZED = "UNRECOGNIZED"


# Bin tokens shared with the quiz scoring and the UI. Compared by exact equality.
CONTAINERS = MappingProxyType({
    CategoryLabel.RECYCLABLE: "Blanco (Aprovechables)",
    CategoryLabel.ORGANIC: "Verde (Orgánicos)",
    CategoryLabel.NON_RECYCLABLE: "Negro (No Aprovechables)",
})

DESCRIPTIONS = MappingProxyType({
    CategoryLabel.RECYCLABLE: "Residuos Aprovechables (plástico, vidrio, metales, papel y cartón)",
    CategoryLabel.ORGANIC: "Residuos Orgánicos (restos de comida, desechos agrícolas)",
    CategoryLabel.NON_RECYCLABLE: "Residuos No Aprovechables (papel higiénico, servilletas, papeles y cartones contaminados)",
    CategoryLabel.UNRECOGNIZED: "No se reconoce claramente un residuo en la imagen",
})

# Order matters at both levels. Bare "papel" is deliberately absent from the
# recyclable list, otherwise "papel higiénico" would never reach its bin.
KEYWORD_TABLE: Tuple[Tuple[CategoryLabel, Tuple[str, ...]], ...] = (
    (CategoryLabel.RECYCLABLE, (
        "plástico", "plastico", "botella", "vidrio", "lata", "metal",
        "aluminio", "cartón", "carton", "periódico", "periodico", "revista",
        "papel de oficina", "hoja de papel", "tetrapak", "envase", "frasco",
    )),
    (CategoryLabel.ORGANIC, (
        "comida", "cáscara", "cascara", "fruta", "verdura", "banano",
        "manzana", "hueso", "hojas secas", "poda", "cafe molido",
        "café molido", "semilla", "agrícola", "agricola",
    )),
    (CategoryLabel.NON_RECYCLABLE, (
        "papel higiénico", "papel higienico", "servilleta", "pañal",
        "toalla higiénica", "toalla higienica", "tapabocas", "colilla",
        "contaminad", "icopor", "chicle",
    )),
)


def match_keyword(text) -> Tuple[CategoryLabel, Optional[str]]:
    """Returns the winning label and the keyword that decided it (None if unmatched)."""
    if not isinstance(text, str):
        text = "" if text is None else str(text)
    normalized = text.lower()

    for label, keywords in KEYWORD_TABLE:
        for keyword in keywords:
            if keyword in normalized:
                return label, keyword
    return CategoryLabel.UNRECOGNIZED, None


def classify(text) -> CategoryLabel:
    """Classifies a waste description. Never raises; no hit yields UNRECOGNIZED."""
    label, keyword = match_keyword(text)
    logger.debug(f"Classified description as {label.value} (keyword: {keyword})")
    return label


def describe_label(label: CategoryLabel) -> str:
    return DESCRIPTIONS[label]


def container_for(label: CategoryLabel) -> Optional[str]:
    return CONTAINERS.get(label)


def label_for_container(container) -> CategoryLabel:
    """
    Validates a bin name reported by the model against the closed set of bins.
    Accepts the exact bin token or only its color word ("Blanco", "verde", ...).
    Anything else is UNRECOGNIZED.
    """
    if not isinstance(container, str):
        return CategoryLabel.UNRECOGNIZED
    candidate = container.strip()
    if not candidate:
        return CategoryLabel.UNRECOGNIZED

    for label, token in CONTAINERS.items():
        if candidate == token:
            return label

    color = candidate.lower()
    for label, token in CONTAINERS.items():
        if color == token.split()[0].lower():
            return label
    return CategoryLabel.UNRECOGNIZED
