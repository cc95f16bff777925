"""Service to list, create and delete namespaces and send them events."""

from typing import List

from google.protobuf.message import Message

from direkcli.config.direktiv import config
from direkcli.connection import Connection
from direkcli.utils import read_local_file

rpc = config.rpc.namespace


def list_namespaces(conn: Connection) -> List[Message]:
    """Every namespace on the server, possibly none."""
    resp = conn.call(rpc.list)
    return list(resp.namespaces)


def create_namespace(conn: Connection, name: str) -> str:
    resp = conn.call(rpc.create, name=name)
    return f"Created namespace: {resp.name}"


def delete_namespace(conn: Connection, name: str) -> str:
    resp = conn.call(rpc.delete, name=name)
    return f"Deleted namespace: {resp.name}"


def send_event(conn: Connection, namespace: str, cloudevent_path: str) -> str:
    """Broadcast a CloudEvent to `namespace`.

    The file is forwarded byte for byte; it is not parsed or validated here.
    Nothing is sent if the file cannot be read.
    """
    cloudevent = read_local_file(cloudevent_path)

    conn.call(rpc.send_event, namespace=namespace, cloudevent=cloudevent)
    return f"Successfully sent event to '{namespace}'"
