import os

from canon_core.errors import ErrorKind

_engine_metrics_calls = 0
_engine_metrics_failures = 0
_engine_metrics_commits = 0
_engine_metrics_failure_kinds: dict[str, int] = {}


def _engine_metrics_enabled():
    value = os.environ.get("CANON_METRICS", "").strip().lower()
    return value in ("1", "true", "yes", "on")


def engine_metrics_reset():
    global _engine_metrics_calls
    global _engine_metrics_failures
    global _engine_metrics_commits
    _engine_metrics_calls = 0
    _engine_metrics_failures = 0
    _engine_metrics_commits = 0
    _engine_metrics_failure_kinds.clear()


def engine_metrics_get():
    if not _engine_metrics_enabled():
        return {
            "calls": 0,
            "failures": 0,
            "commits": 0,
            "failure_kinds": {},
        }
    return {
        "calls": int(_engine_metrics_calls),
        "failures": int(_engine_metrics_failures),
        "commits": int(_engine_metrics_commits),
        "failure_kinds": dict(_engine_metrics_failure_kinds),
    }


def _engine_metrics_update(*, committed=False, failure: ErrorKind | None = None):
    global _engine_metrics_calls
    global _engine_metrics_failures
    global _engine_metrics_commits
    if not _engine_metrics_enabled():
        return
    _engine_metrics_calls += 1
    if committed:
        _engine_metrics_commits += 1
    if failure is not None:
        _engine_metrics_failures += 1
        name = failure.value
        _engine_metrics_failure_kinds[name] = _engine_metrics_failure_kinds.get(name, 0) + 1


__all__ = [
    "engine_metrics_reset",
    "engine_metrics_get",
    "_engine_metrics_enabled",
    "_engine_metrics_update",
]
