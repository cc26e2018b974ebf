import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Tuple, Union

from interaction.failures import CheckFailure, CompositeFailure, InteractionFailure

logger = logging.getLogger(__name__)


@dataclass
class Check:
    """A named assertion. The predicate may return a bool or raise AssertionError."""

    description: str
    predicate: Callable[[], Any]


async def aggregate_check(checks: Iterable[Union[Check, Tuple[str, Callable[[], Any]]]]) -> int:
    """
    Evaluate every check, even after one fails, then report them together.

    Returns the number of checks that passed. Raises CompositeFailure listing
    each failed check (in order) if any failed. Errors other than assertion
    and interaction failures are not collected and propagate immediately.
    """
    failures: List[CheckFailure] = []
    passed = 0

    for check in checks:
        if not isinstance(check, Check):
            check = Check(*check)
        try:
            outcome = check.predicate()
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except (AssertionError, InteractionFailure) as e:
            detail = str(e) or type(e).__name__
            failures.append(CheckFailure(check.description, detail, e))
            continue

        if outcome is False:
            failures.append(CheckFailure(check.description, "check returned False"))
            continue
        passed += 1

    if failures:
        logger.warning(f"{len(failures)} of {len(failures) + passed} checks failed")
        raise CompositeFailure(failures)
    return passed
