"""Payee naming and payment split rules."""

from typing import List, Optional, Sequence

from loguru import logger

from landmate.domain.entities import Grantor

_NAME_STOPPERS = (" and ", ", ")


def nickname_grantor(long_name: Optional[str]) -> Optional[str]:
    """
    Short payee name: the grantor name up to its first " and " or ", ".

    >>> nickname_grantor("Smith Family Trust, John Smith Trustee")
    'Smith Family Trust'
    """
    if not long_name:
        return long_name
    lowered = long_name.lower()
    indexes = [lowered.find(stopper) for stopper in _NAME_STOPPERS]
    indexes = [i for i in indexes if i > 0]
    if not indexes:
        return long_name
    return long_name[: min(indexes)]


def payee_shares(grantors: Sequence[Grantor]) -> List[float]:
    """
    Fraction of each payment owed to each grantor.

    Explicit `payment_split` percentages are used as given; grantors without
    one share whatever percentage remains equally. Splits that do not add up
    to 100 are scaled so the shares always sum to 1.
    """
    if not grantors:
        return []
    explicit = [g.payment_split for g in grantors if g.payment_split is not None]
    unspecified = len(grantors) - len(explicit)
    remainder = max(100.0 - sum(explicit), 0.0)
    default_split = remainder / unspecified if unspecified else 0.0
    splits = [g.payment_split if g.payment_split is not None else default_split for g in grantors]

    total = sum(splits)
    if total <= 0:
        logger.debug(f"Payment splits of {len(grantors)} grantors sum to {total}, sharing equally")
        return [1 / len(grantors)] * len(grantors)
    if abs(total - 100.0) > 1e-9:
        logger.debug(f"Payment splits sum to {total}, scaling to 100")
    return [split / total for split in splits]


def payee_name(grantor: Grantor, override: Optional[str] = None) -> Optional[str]:
    """Model-level payee override wins over the grantor's nickname"""
    return override or nickname_grantor(grantor.name)
