from __future__ import annotations

from collections import Counter
from typing import Dict

from prometheus_client import Counter as PromCounter

# Field mutation counters (in-process view, keyed "<operation>|<action>")
_MUTATIONS = Counter()

_PROM_FIELD_MUTATIONS = PromCounter(
    "crudpanel_field_mutations_total",
    "Field registry mutations",
    ["operation", "action"],
)


def reset_metrics() -> None:
    """
    Test helper: clears the in-process counters to avoid cross-test leakage.
    Prometheus counters are process-global and are not reset.
    """
    _MUTATIONS.clear()


def inc_mutation(operation: str, action: str) -> None:
    op = operation or "unknown"
    _MUTATIONS[f"{op}|{action}"] += 1
    _PROM_FIELD_MUTATIONS.labels(operation=op, action=action).inc()


def snapshot_mutations() -> Dict[str, int]:
    return dict(_MUTATIONS)
