"""Service to manage and execute workflows.

Workflows are addressed by their user facing `id` for reads and invocations,
but the server only accepts its own `uid` for updates and deletes. Those
commands first look the workflow up by id and then issue the mutating call
keyed by the uid. The two calls are not transactional: if the id is
reassigned in between, the mutation applies to whatever the lookup returned.
"""

from typing import List, Optional

from google.protobuf.message import Message

from direkcli.config.direktiv import config
from direkcli.connection import Connection
from direkcli.utils import decode_payload, read_local_file, read_optional_file

rpc = config.rpc.workflow


def list_workflows(conn: Connection, namespace: str) -> List[Message]:
    resp = conn.call(rpc.list, namespace=namespace)
    return list(resp.workflows)


def _get_by_id(conn: Connection, namespace: str, id: str) -> Message:
    return conn.call(rpc.get, namespace=namespace, id=id)


def get_workflow_uid(conn: Connection, namespace: str, id: str) -> str:
    """Resolve the server assigned uid of workflow `id` in `namespace`."""
    return _get_by_id(conn, namespace, id).uid


def get_workflow(conn: Connection, namespace: str, id: str) -> str:
    """Source of the workflow definition, exactly as stored."""
    return decode_payload(_get_by_id(conn, namespace, id).workflow)


def add_workflow(conn: Connection, namespace: str, path: str) -> str:
    workflow = read_local_file(path)

    resp = conn.call(rpc.create, namespace=namespace, workflow=workflow)
    return f"Created workflow '{resp.id}'"


def update_workflow(conn: Connection, namespace: str, id: str, path: str) -> str:
    """Replace the definition of workflow `id` with the contents of `path`.

    The file is read before anything is sent. A failed lookup aborts before
    the update is issued.
    """
    workflow = read_local_file(path)
    uid = get_workflow_uid(conn, namespace, id)

    resp = conn.call(rpc.update, uid=uid, workflow=workflow)
    return f"Successfully updated '{resp.id}'"


def delete_workflow(conn: Connection, namespace: str, id: str) -> str:
    uid = get_workflow_uid(conn, namespace, id)

    conn.call(rpc.delete, uid=uid)
    return f"Deleted workflow '{id}'"


def execute_workflow(
    conn: Connection, namespace: str, id: str, input_path: Optional[str] = None
) -> str:
    """Invoke workflow `id`, returning a message with the new instance id.

    Without `input_path` the workflow is invoked with an empty payload,
    otherwise the file's bytes are sent unmodified.
    """
    payload = read_optional_file(input_path)

    resp = conn.call(rpc.execute, namespace=namespace, workflowId=id, input=payload)
    return f"Successfully invoked, Instance ID: {resp.instanceId}"


def toggle_workflow(conn: Connection, namespace: str, id: str) -> str:
    """Enable a disabled workflow or disable an enabled one."""
    current = _get_by_id(conn, namespace, id)
    active = not current.active

    conn.call(rpc.update, uid=current.uid, workflow=current.workflow, active=active)
    return f"Workflow '{id}' is now {'enabled' if active else 'disabled'}"
