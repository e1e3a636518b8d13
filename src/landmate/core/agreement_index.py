"""Read-only cross-reference of a document snapshot."""

from collections import defaultdict
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from landmate.domain.entities import Agreement


class AgreementIndex:
    """
    Documents of one computation batch indexed by id and agreement group.

    Built once per batch and shared by reference; consumers only read it.
    Group members keep the order in which the snapshot listed them.
    """

    def __init__(self, agreements: Iterable[Agreement]):
        by_id: Dict[str, Agreement] = {}
        by_group: Dict[str, List[Agreement]] = defaultdict(list)
        for agreement in agreements:
            by_id[agreement.id] = agreement
            if agreement.agreement_group:
                by_group[agreement.agreement_group].append(agreement)

        self._by_id = MappingProxyType(by_id)
        self._by_group = MappingProxyType({key: tuple(docs) for key, docs in by_group.items()})

    def get(self, agreement_id: str) -> Optional[Agreement]:
        return self._by_id.get(agreement_id)

    def group(self, agreement_group: Optional[str]) -> Tuple[Agreement, ...]:
        """Every document sharing the agreement group, empty for a missing key"""
        if not agreement_group:
            return ()
        return self._by_group.get(agreement_group, ())

    def originals(self) -> List[Agreement]:
        """Documents with an effective date, the ones schedules are computed for"""
        return [a for a in self._by_id.values() if a.is_original()]

    def __contains__(self, agreement_id: object) -> bool:
        return agreement_id in self._by_id

    def __iter__(self) -> Iterator[Agreement]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
