"""Tracks the request currently being served.

Render mode detection reads its signals (the edit parameter and the request
path) from the active request. :class:`block_bridge.middleware.BlockBridgeMiddleware`
installs the request for the duration of a view; code running outside a
request simply sees ``None``.
"""

from contextvars import ContextVar

_request_var: ContextVar = ContextVar("block_bridge_request", default=None)


def get_current_request():
    """Return the request installed for the current context, if any."""

    return _request_var.get()


def set_current_request(request):
    """Install ``request`` and return a token for :func:`reset_current_request`."""

    return _request_var.set(request)


def reset_current_request(token) -> None:
    _request_var.reset(token)


def clear_current_request() -> None:
    _request_var.set(None)
