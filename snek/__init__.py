"""Fluent HTTP request builder with normalized results."""
from __future__ import annotations

import logging

from snek.clients.request import Request, RequestOptions, delete, get, head, options, patch, post, put
from snek.clients.transport import RawResponse, RequestsTransport, Transport
from snek.exceptions.custom_exceptions import ConfigurationError, HTTPError, SnekError, TransportError
from snek.services.deferred import Deferred
from snek.services.normalizer import Result
from snek.utils.constants import VERSION

__version__ = VERSION

__all__ = (
    "ConfigurationError",
    "Deferred",
    "HTTPError",
    "RawResponse",
    "Request",
    "RequestOptions",
    "RequestsTransport",
    "Result",
    "SnekError",
    "Transport",
    "TransportError",
    "delete",
    "get",
    "head",
    "options",
    "patch",
    "post",
    "put",
)

logging.getLogger(__name__).addHandler(logging.NullHandler())
