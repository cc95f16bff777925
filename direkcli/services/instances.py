"""Service to inspect workflow instances."""

from typing import List

from google.protobuf.message import Message

from direkcli.config.direktiv import config
from direkcli.connection import Connection
from direkcli.constants import direk_constants

rpc = config.rpc.instance


def get_instance(conn: Connection, id: str) -> Message:
    """Details of instance `id`. `input` and `output` are left as raw bytes."""
    return conn.call(rpc.get, id=id)


def list_instances(conn: Connection, namespace: str) -> List[Message]:
    resp = conn.call(rpc.list, namespace=namespace)
    return list(resp.workflowInstances)


def get_logs(conn: Connection, id: str) -> List[Message]:
    """Current logs of instance `id`, in the order the server returns them.

    This is a single batch, not a live stream. At most
    `direk_constants.log_batch_limit` (10000) entries are requested, and any
    entries past that are silently left out.
    """
    resp = conn.call(
        rpc.logs,
        instanceId=id,
        offset=0,
        limit=direk_constants.log_batch_limit,
    )
    return list(resp.workflowInstanceLogs)
