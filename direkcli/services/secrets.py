"""Service to manage namespace secrets. Secret values are write-only."""

from typing import List

from google.protobuf.message import Message

from direkcli.config.direktiv import config
from direkcli.connection import Connection

rpc = config.rpc.secret


def create_secret(conn: Connection, namespace: str, key: str, value: str) -> str:
    conn.call(rpc.create, namespace=namespace, name=key, data=value.encode("utf-8"))
    return f"Created secret '{key}' in '{namespace}'"


def delete_secret(conn: Connection, namespace: str, key: str) -> str:
    conn.call(rpc.delete, namespace=namespace, name=key)
    return f"Removed secret '{key}' from '{namespace}'"


def list_secrets(conn: Connection, namespace: str) -> List[Message]:
    resp = conn.call(rpc.list, namespace=namespace)
    return list(resp.secrets)
