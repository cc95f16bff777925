"""Transport handle shared by every command of one invocation."""

import logging
import time
from typing import Optional

import grpc
from google.protobuf.message import Message

from direkcli import protocol
from direkcli.config.direktiv import config, resolve_address
from direkcli.constants import direk_constants
from direkcli.exceptions.errors import RemoteError

logger = logging.getLogger(__name__)


class Connection:
    """An insecure channel to a direktiv server.

    The channel dials lazily, so constructing a `Connection` never touches the
    network. Every `call` carries its own deadline and no call is retried.

    Example: ::

        with Connection("127.0.0.1:6666") as conn:
            resp = conn.call(config.rpc.namespace.list)
    """

    def __init__(
        self,
        address: Optional[str] = None,
        *,
        timeout: float = direk_constants.rpc_timeout,
    ):
        self.address = resolve_address(address)
        self.timeout = timeout
        self._channel: Optional[grpc.Channel] = None
        self._closed = False

    @property
    def channel(self) -> grpc.Channel:
        if self._closed:
            raise RuntimeError(f"connection to {self.address} is already closed")

        if self._channel is None:
            logger.debug("opening channel to %s", self.address)
            self._channel = grpc.insecure_channel(self.address)
        return self._channel

    def call(self, method: str, **fields) -> Message:
        """Issue the unary RPC `method` with a request built from `fields`.

        Any non-OK status becomes a `RemoteError` carrying the status code name
        and the server supplied details.
        """
        request = protocol.request_class(method)(**fields)
        response_cls = protocol.response_class(method)

        stub = self.channel.unary_unary(
            config.method_path(method),
            request_serializer=lambda x: x.SerializeToString(),
            response_deserializer=response_cls.FromString,
        )

        start = time.monotonic()
        try:
            resp = stub(request, timeout=self.timeout)
        except grpc.RpcError as e:
            code = e.code()
            details = e.details()
            logger.debug(
                "%s failed after %.3fs: %s",
                method,
                time.monotonic() - start,
                code,
            )
            raise RemoteError(
                code.name if code is not None else "UNKNOWN",
                details if details is not None else "",
            ) from e

        logger.debug("%s ok after %.3fs", method, time.monotonic() - start)
        return resp

    def close(self):
        if self._closed:
            return

        self._closed = True
        if self._channel is not None:
            logger.debug("closing channel to %s", self.address)
            self._channel.close()
            self._channel = None

    def __enter__(self):
        return self

    def __exit__(self, type, value, tb):
        self.close()
