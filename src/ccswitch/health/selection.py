# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Outcome selection for the cascade.

Phase one is an early-exit scan: the first 2xx outcome ends the cascade and is the
chosen outcome. Phase two runs only when no probe succeeded and picks the best of
all collected evidence with a total order:

  1. reachable (status < 500) beats unreachable,
  2. the lowest present status code wins, even across unrelated paths,
  3. earlier catalog position wins ties.

Rule 2 treats lower codes as "closer to success" (401 beats 404 beats 500). It is a
judgment call kept for parity with the original tool, not a logical necessity. When no
outcome carries a status code the first outcome is kept so its error detail survives.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ..models import ProbeOutcome


def is_success(outcome: ProbeOutcome) -> bool:
    """Early-exit predicate: a 2xx status."""
    return outcome.is_success


def rank_key(index: int, outcome: ProbeOutcome) -> tuple[int, float, int]:
    """Sort key for phase two; smaller is better."""
    status = outcome.status_code if outcome.status_code is not None else math.inf
    return (0 if outcome.ok else 1, status, index)


def select_best(outcomes: Sequence[ProbeOutcome]) -> ProbeOutcome | None:
    """Return the best ranked outcome, or None when nothing was collected."""
    if not outcomes:
        return None
    _, best = min(enumerate(outcomes), key=lambda pair: rank_key(*pair))
    return best


__all__ = ["is_success", "rank_key", "select_best"]
