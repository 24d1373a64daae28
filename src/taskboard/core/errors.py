# src/taskboard/core/errors.py

from __future__ import annotations


class RemoteStoreError(RuntimeError):
    """
    Any failure talking to the hosted table.

    kind is one of: auth, not_found, rate_limited, server, network, bad_response, http.
    """

    def __init__(self, message: str, *, kind: str = "http", status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


def kind_for_status(status_code: int) -> str:
    if status_code in (401, 403):
        return "auth"
    if status_code == 404:
        return "not_found"
    if status_code == 429:
        return "rate_limited"
    if status_code >= 500:
        return "server"
    return "http"


def friendly_store_error_message(err: Exception) -> str:
    kind = getattr(err, "kind", None)
    if kind == "auth":
        return "Task store rejected the credentials. Check TASKBOARD_SUPABASE_KEY in .env (see .env.example)."
    if kind == "not_found":
        return "Task table not found. Check TASKBOARD_TABLE and TASKBOARD_SUPABASE_URL in .env."
    if kind == "rate_limited":
        return "Task store is rate-limited. Try again later."
    if kind == "network":
        return "Task store is unreachable (network/timeout error). Try again later."
    if kind == "server":
        return "Task store had an internal error. Try again later."
    msg = str(err).strip()
    return msg or "Task store error."
