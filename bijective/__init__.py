from ._assertions import (
    SatisfyError,
    describe_predicate,
    described,
    failure_message,
    satisfy,
)
from ._problem import Element, MatchingProblem, MatchingSolution
