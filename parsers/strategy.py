from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple, TypeVar

from utils.logging import get_logger


T = TypeVar("T")
Strategy = Callable[[str], Optional[T]]

logger = get_logger(__name__)


def strategy_name(strategy: Callable[..., object]) -> str:
    return getattr(strategy, "__name__", repr(strategy)).lstrip("_")


def first_result(strategies: Sequence[Strategy[T]], text: str) -> Tuple[Optional[str], Optional[T]]:
    """Run ``strategies`` in order and return the name and result of the first
    one that produces something other than ``None``.

    A strategy that raises is logged and skipped, so a single bad pattern can
    never abort the whole extraction.
    """
    for strategy in strategies:
        try:
            result = strategy(text)
        except Exception as e:
            logger.warning(f"Strategy {strategy_name(strategy)} failed: {e}")
            continue
        if result is not None:
            return strategy_name(strategy), result
    return None, None
