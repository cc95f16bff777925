"""Service to manage the container registries of a namespace."""

from typing import List

from google.protobuf.message import Message

from direkcli.config.direktiv import config
from direkcli.connection import Connection
from direkcli.constants import direk_constants

rpc = config.rpc.registry


def encode_credential(credential: str) -> str:
    """Rewrite a `user:token` credential into its wire form `user!token`.

    Every `:` is replaced, `!` is left alone. The rewrite cannot be undone
    when the token itself contains `!`; the server owns that format.

    >>> encode_credential("alice:s3cr3t")
    'alice!s3cr3t'
    >>> encode_credential("alice!already")
    'alice!already'
    """
    return credential.replace(
        direk_constants.credential_separator,
        direk_constants.credential_separator_wire,
    )


def create_registry(conn: Connection, namespace: str, url: str, credential: str) -> str:
    data = encode_credential(credential).encode("utf-8")

    conn.call(rpc.create, namespace=namespace, name=url, data=data)
    return f"Created registry '{url}' in '{namespace}'"


def delete_registry(conn: Connection, namespace: str, url: str) -> str:
    conn.call(rpc.delete, namespace=namespace, name=url)
    return f"Removed registry '{url}' from '{namespace}'"


def list_registries(conn: Connection, namespace: str) -> List[Message]:
    resp = conn.call(rpc.list, namespace=namespace)
    return list(resp.registries)
