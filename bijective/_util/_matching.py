# pylint: disable=invalid-name
import collections
import logging

logger = logging.getLogger(__name__)


def build_graph(predicates, elements):
    """Evaluate every predicate against every element.

    The result is the bipartite graph G between predicates (U) and elements
    (V) as a list of adjacency lists: G[p] holds the indices of all elements,
    which are accepted by predicate p, in ascending order. For example the
    predicates (x > 0, x > 1) and the elements (1, 2) result in:

        G = [
            [0, 1],
            [1],
        ]

    Each predicate is called exactly once for each element.
    """
    elements = list(elements)
    G = []
    for predicate in predicates:
        G.append([v for v, element in enumerate(elements) if predicate(element)])
    return G


class Assignments:
    """Current matching as a mapping from assigned elements to predicates."""

    def __init__(self):
        self._predicate_of = {}

    def __len__(self):
        return len(self._predicate_of)

    def __repr__(self):
        return f"{self.__class__.__name__}({self._predicate_of!r})"

    def assign(self, element, predicate):
        # Overwrites the previous predicate of the element. The displaced
        # predicate is reassigned by the same augmenting path.
        self._predicate_of[element] = predicate

    def apply(self, path):
        for predicate, element in path:
            self.assign(element, predicate)

    def is_assigned(self, element):
        return element in self._predicate_of

    def predicate_of(self, element):
        return self._predicate_of[element]

    def by_predicate(self):
        return {u: v for v, u in self._predicate_of.items()}


def find_augmenting_path(G, assignments, start):
    """Search an augmenting path for the free predicate `start`.

    An augmenting path starts at `start`, alternates between an edge to an
    element and the matched edge from that element back to its current
    predicate, and ends at a free element. The search is breadth-first, so
    every element is visited at most once.

    The return value is the list of (predicate, element) pairs, which have to
    be assigned to realize the path, ordered from `start` to the free element.
    If no augmenting path exists, None is returned.
    """
    queue = collections.deque([start])
    visited = set()

    # Maps a predicate, that loses its element, to the (predicate, element)
    # pair, that takes it.
    displaced_by = {}

    while queue:
        u = queue.popleft()
        for v in G[u]:
            if v in visited:
                continue
            visited.add(v)

            if not assignments.is_assigned(v):
                path = [(u, v)]
                while u != start:
                    u, v = displaced_by[u]
                    path.append((u, v))
                path.reverse()
                return path

            # v is matched, so its predicate needs to find a different element
            next_u = assignments.predicate_of(v)
            displaced_by[next_u] = (u, v)
            queue.append(next_u)

    return None


def find_best_matching(G):
    """Find the most pairs in the bipartite graph `G`.

    The problem is better known as maximum cardinality matching. `G` is a
    Sequence of adjacency lists as returned by `build_graph()`. Predicates are
    processed in order: for each one an augmenting path is searched and
    applied. A predicate without an augmenting path at that point can never be
    matched by a later augmentation, so it stays unmatched.

    The return value is a tuple of the maximum matching M, described as a
    Mapping from every matched predicate to its element, and the Set of
    unmatched predicates.
    """
    assignments = Assignments()
    unmatched = set()

    for u in range(len(G)):
        path = find_augmenting_path(G, assignments, u)
        if path is None:
            logger.debug("No augmenting path for predicate %d", u)
            unmatched.add(u)
            continue

        if len(path) > 1:
            logger.debug("Predicate %d matched by reassigning %s", u, path[1:])
        assignments.apply(path)

    M = assignments.by_predicate()
    logger.debug("Matched %d of %d predicates", len(M), len(G))
    return M, unmatched
