from __future__ import annotations

import math
import re
from typing import List, Optional

from utils.config import ExtractorConfig
from utils.logging import get_logger
from .strategy import Strategy, first_result


logger = get_logger(__name__)

# "7", "7.5" and "7,5" (comma decimal separator)
NUMBER = r"\d+(?:[.,]\d+)?"
# "/10" that is not the start of "/100" or "/10.5"
OUT_OF_TEN = r"10(?![\d]|[.,]\d)"

EMPHASIZED_FRACTION = re.compile(rf"\*\*\s*({NUMBER})\s*/\s*{OUT_OF_TEN}\s*\*\*")
LABELED_SCORE = re.compile(
    rf"\b(?:score|rating)\b[\s:*_]*({NUMBER})(?:\s*/\s*{OUT_OF_TEN})?",
    re.IGNORECASE,
)
# a digit run is only tried from its first digit
ANY_FRACTION = re.compile(rf"(?<!\d)({NUMBER})\s*(?:/|out\s+of)\s*{OUT_OF_TEN}", re.IGNORECASE)


def parse_number(token: str) -> Optional[float]:
    try:
        value = float(token.replace(",", "."))
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def clamp_score(value: float, config: Optional[ExtractorConfig] = None) -> float:
    cfg = config or ExtractorConfig()
    return float(max(cfg.min_score, min(cfg.max_score, value)))


def _search(pattern: "re.Pattern[str]", text: str) -> Optional[float]:
    for match in pattern.finditer(text):
        value = parse_number(match.group(1))
        if value is not None:
            return value
    return None


def emphasized_fraction(text: str) -> Optional[float]:
    return _search(EMPHASIZED_FRACTION, text)


def labeled_score(text: str) -> Optional[float]:
    return _search(LABELED_SCORE, text)


def any_fraction(text: str) -> Optional[float]:
    return _search(ANY_FRACTION, text)


def score_strategies(config: Optional[ExtractorConfig] = None) -> List[Strategy[float]]:
    cfg = config or ExtractorConfig()

    def default_score(text: str) -> Optional[float]:
        return cfg.default_score

    return [emphasized_fraction, labeled_score, any_fraction, default_score]


def extract_score(text: Optional[str], config: Optional[ExtractorConfig] = None) -> float:
    cfg = config or ExtractorConfig()
    name, value = first_result(score_strategies(cfg), text or "")
    if value is None:
        name, value = "default_score", cfg.default_score
    if name == "default_score":
        logger.info(f"No score found in evaluation text, using default {cfg.default_score}")
    else:
        logger.debug(f"Score {value} found by {name}")
    return clamp_score(value, cfg)
