import dataclasses
import logging
from typing import Any, Dict, List, NamedTuple, Sequence

import bijective._util as util

logger = logging.getLogger(__name__)


class Element(NamedTuple):
    index: int
    value: Any


class MatchingProblem:
    """Pair predicates with distinct elements, that they accept.

    Predicates and elements are referenced by their position. The graph is
    built once, so every predicate is called exactly once per element.
    """

    def __init__(self, predicates, elements):
        self._predicates = list(predicates)
        self._elements = list(elements)

    def solve(self):
        logger.debug(
            "Matching %d predicates with %d elements",
            len(self._predicates),
            len(self._elements),
        )
        graph = util.build_graph(self._predicates, self._elements)
        matching, unmatched = util.find_best_matching(graph)

        matched_elements = set(matching.values())
        unmatched_elements = [
            v for v in range(len(self._elements)) if v not in matched_elements
        ]

        return MatchingSolution(
            predicates=self._predicates,
            elements=self._elements,
            matching=matching,
            unmatched_predicates=sorted(unmatched),
            unmatched_elements=unmatched_elements,
        )


@dataclasses.dataclass
class MatchingSolution:
    predicates: Sequence[Any]
    elements: Sequence[Any]
    matching: Dict[int, int]
    unmatched_predicates: List[int]
    unmatched_elements: List[int]

    def __len__(self):
        return len(self.matching)

    @property
    def unmatched_predicates_exist(self):
        return bool(self.unmatched_predicates)

    @property
    def unmatched_elements_exist(self):
        return bool(self.unmatched_elements)

    @property
    def is_perfect(self):
        """Every predicate and every element is part of the matching.

        This is only possible, if there are as many predicates as elements.
        """
        if len(self.predicates) != len(self.elements):
            return False
        return not (self.unmatched_predicates_exist or self.unmatched_elements_exist)

    def pairs(self):
        for u, v in sorted(self.matching.items()):
            yield self.predicates[u], Element(v, self.elements[v])

    def get_unmatched_predicates(self):
        return [self.predicates[u] for u in self.unmatched_predicates]

    def get_unmatched_elements(self):
        return [Element(v, self.elements[v]) for v in self.unmatched_elements]
