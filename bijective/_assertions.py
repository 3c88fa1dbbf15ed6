import collections.abc
import functools
import inspect
import logging

import bijective._problem as problem
import bijective._util as util

logger = logging.getLogger(__name__)


class SatisfyError(AssertionError):
    pass


def satisfy(subject, *predicates, because="", because_args=()):
    """Assert a one-to-one mapping between `subject` and `predicates`.

    Every element of `subject` must be accepted by exactly one of the
    predicates and every predicate must accept exactly one element. The order
    of the predicates doesn't need to match the order of the elements. The
    predicates can also be passed as a single iterable.

    On success the solution with the found pairs is returned, otherwise a
    SatisfyError describes the predicates and elements, that couldn't be
    matched.
    """
    predicates = _predicate_list(predicates)
    expectation = _expectation(because, because_args)

    if subject is None:
        raise SatisfyError(f"{expectation}, but collection is <null>.")

    elements = list(subject)
    if not elements:
        raise SatisfyError(f"{expectation}, but collection is empty.")

    solution = problem.MatchingProblem(predicates, elements).solve()
    if not solution.is_perfect:
        logger.debug("No one-to-one mapping for %d predicates", len(predicates))
        raise SatisfyError(failure_message(solution, because, because_args))

    return solution


def described(description, predicate):
    """Attach a human readable description to `predicate`."""

    @functools.wraps(predicate)
    def wrapper(element):
        return predicate(element)

    wrapper.description = description
    return wrapper


def describe_predicate(predicate):
    description = getattr(predicate, "description", None)
    if description:
        return str(description)

    name = getattr(predicate, "__name__", None)
    if name == "<lambda>":
        return _lambda_source(predicate) or repr(predicate)
    if name:
        return getattr(predicate, "__qualname__", name)

    return repr(predicate)


def format_element(element):
    if isinstance(element, collections.abc.Mapping):
        return " ".join(util.to_flat_format(dict(element)))
    return repr(element)


def _predicate_list(predicates):
    if len(predicates) == 1:
        (single,) = predicates
        if single is None:
            raise ValueError("Cannot verify against a <null> collection of predicates")
        if not callable(single) and isinstance(single, collections.abc.Iterable):
            predicates = list(single)

    if not predicates:
        raise ValueError("Cannot verify against an empty collection of predicates")

    for predicate in predicates:
        if not callable(predicate):
            raise TypeError(f"Predicate {predicate!r} is not callable")

    return list(predicates)


def _expectation(because, because_args):
    expectation = "Expected collection to satisfy all predicates"
    if not because:
        return expectation

    if because_args:
        because = because.format(*because_args)

    because = because.strip()
    if not because.lower().startswith("because"):
        because = "because " + because

    return f"{expectation} {because}"


def failure_message(solution, because="", because_args=()):
    message = _expectation(because, because_args) + ", but:"

    unmatched_predicates = solution.get_unmatched_predicates()
    if unmatched_predicates:
        message += "\n\nThe following predicates did not have matching elements:"
        message += "\n\n" + "\n".join(
            describe_predicate(p) for p in unmatched_predicates
        )

    unmatched_elements = solution.get_unmatched_elements()
    if unmatched_elements:
        message += "\n\nThe following elements did not match any predicate:"
        message += "\n\n" + "\n\n".join(
            f"Index: {e.index}, Element: {format_element(e.value)}"
            for e in unmatched_elements
        )

    return message


def _lambda_source(func):
    try:
        lines, _ = inspect.getsourcelines(func)
    except (OSError, TypeError):
        return None

    # several lambdas on one line can't be told apart
    if len(lines) != 1 or lines[0].count("lambda") != 1:
        return None

    source = lines[0].strip()
    source = source[source.index("lambda") :]
    body_start = source.index(":") + 1
    return source[:body_start] + _expression_prefix(source[body_start:])


def _expression_prefix(source):
    # cut at the end of the expression: a top-level comma, an unbalanced
    # closing bracket or a comment
    depth = 0
    quote = None
    for i, char in enumerate(source):
        if quote:
            if char == quote and source[i - 1] != "\\":
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([{":
            depth += 1
        elif char in ")]}":
            if depth == 0:
                return source[:i].rstrip()
            depth -= 1
        elif char == "#" or (char == "," and depth == 0):
            return source[:i].rstrip()

    return source.rstrip()
