"""Keeping marker text, the bookmark registry and the store in step."""

from highlightcode.sync.extraction import extract, reconcile, release, render
from highlightcode.sync.persistence import PersistenceSynchronizer, SqlKeyValueStore
from highlightcode.sync.planner import (
    InsertionPlan,
    LineSpan,
    plan_insertions,
    widen_selections,
)

__all__ = [
    "InsertionPlan",
    "LineSpan",
    "PersistenceSynchronizer",
    "SqlKeyValueStore",
    "extract",
    "plan_insertions",
    "reconcile",
    "release",
    "render",
    "widen_selections",
]
