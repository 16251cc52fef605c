"""
Turn one completion reply into a batch of new todos.

The reply is split into lines and every non-blank line becomes its own
insert. Inserts run concurrently and fail independently: one bad insert is
logged and the rest still land.
"""

import logging
import re
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Callable, List

from .completion import CompletionClient, CompletionError, build_prompt

logger = logging.getLogger(__name__)


@dataclass
class FanOutResult:
    created: List[Any] = field(default_factory=list)
    failed: int = 0


def split_subtasks(reply: str) -> List[str]:
    """Return the non-blank lines of ``reply``, otherwise untouched."""
    return [line for line in re.split(r"\r?\n", reply) if line.strip()]


def subtask_text(line: str, parent_text: str) -> str:
    return f"{line} (subtask of: {parent_text})"


def fan_out(
    lines: List[str], parent_text: str, create: Callable[[str], Any]
) -> FanOutResult:
    result = FanOutResult()
    if not lines:
        return result

    # one worker per line, no cap
    with ThreadPoolExecutor(max_workers=len(lines)) as pool:
        futures = {
            pool.submit(create, subtask_text(line, parent_text)): line
            for line in lines
        }
        for future in as_completed(futures):
            try:
                result.created.append(future.result())
            except Exception:
                result.failed += 1
                logger.exception("Error creating subtask %r", futures[future])

    return result


def generate_subtasks(
    parent_text: str, completion: CompletionClient, create: Callable[[str], Any]
) -> FanOutResult:
    try:
        reply = completion.complete(build_prompt(parent_text))
    except CompletionError as exc:
        logger.error("Error generating subtasks: %s", exc.message)
        return FanOutResult()

    lines = split_subtasks(reply)
    result = fan_out(lines, parent_text, create)
    logger.info(
        "generated %d subtasks (%d failed) for %r",
        len(result.created),
        result.failed,
        parent_text,
    )
    return result
