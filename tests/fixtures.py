import re
import time
from concurrent import futures
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import grpc
import pytest
from google.protobuf.message import Message

from direkcli import protocol
from direkcli.config.direktiv import config
from direkcli.connection import Connection

_id_pattern = re.compile(r"^id:\s*(\S+)\s*$", re.MULTILINE)


@dataclass
class _Workflow:
    uid: str
    id: str
    namespace: str
    workflow: bytes
    active: bool = True
    revision: int = 0


@dataclass
class _Instance:
    id: str
    namespace: str
    status: str
    input: bytes
    output: bytes = b""
    logs: List[str] = field(default_factory=list)


class FakeDirektiv:
    """In-memory stand-in for the direktiv ingress service.

    Every request is recorded in `calls` before it is handled. `fail` makes a
    method answer with an error status and `stall` makes it sleep first.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Message]] = []
        self.errors: Dict[str, Tuple[grpc.StatusCode, str]] = {}
        self.delays: Dict[str, float] = {}

        self.namespaces: List[str] = []
        self.workflows: Dict[str, _Workflow] = {}
        self.instances: Dict[str, _Instance] = {}
        self.secrets: Dict[Tuple[str, str], bytes] = {}
        self.registries: Dict[Tuple[str, str], bytes] = {}

        self._next_uid = 0

    @property
    def methods(self) -> List[str]:
        return [m for m, _ in self.calls]

    def requests(self, method: str) -> List[Message]:
        return [r for m, r in self.calls if m == method]

    def fail(self, method: str, code: grpc.StatusCode, details: str):
        self.errors[method] = (code, details)

    def stall(self, method: str, seconds: float):
        self.delays[method] = seconds

    def seed_workflow(
        self, namespace: str, id: str, workflow: bytes = b"", active: bool = True
    ) -> _Workflow:
        self._next_uid += 1
        wf = _Workflow(
            uid=f"uid-{self._next_uid}",
            id=id,
            namespace=namespace,
            workflow=workflow if workflow else f"id: {id}\n".encode(),
            active=active,
        )
        self.workflows[wf.uid] = wf
        return wf

    def seed_instance(
        self,
        id: str,
        namespace: str,
        status: str = "complete",
        input: bytes = b"",
        output: bytes = b"",
        logs: Optional[List[str]] = None,
    ) -> _Instance:
        inst = _Instance(
            id=id,
            namespace=namespace,
            status=status,
            input=input,
            output=output,
            logs=list(logs or []),
        )
        self.instances[id] = inst
        return inst

    def _find_workflow(self, context, namespace: str, id: str) -> _Workflow:
        for wf in self.workflows.values():
            if wf.namespace == namespace and wf.id == id:
                return wf
        context.abort(grpc.StatusCode.NOT_FOUND, f"workflow '{id}' not found")

    def _workflow_by_uid(self, context, uid: str) -> _Workflow:
        wf = self.workflows.get(uid)
        if wf is None:
            context.abort(grpc.StatusCode.NOT_FOUND, f"workflow uid '{uid}' not found")
        return wf

    # namespaces

    def GetNamespaces(self, request, context):
        resp = protocol.response_class("GetNamespaces")()
        for name in self.namespaces:
            resp.namespaces.add(name=name)
        return resp

    def AddNamespace(self, request, context):
        name = request.name.lower()
        if name in self.namespaces:
            context.abort(
                grpc.StatusCode.ALREADY_EXISTS, f"namespace '{name}' already exists"
            )
        self.namespaces.append(name)
        return protocol.response_class("AddNamespace")(name=name)

    def DeleteNamespace(self, request, context):
        if request.name not in self.namespaces:
            context.abort(
                grpc.StatusCode.NOT_FOUND, f"namespace '{request.name}' not found"
            )
        self.namespaces.remove(request.name)
        return protocol.response_class("DeleteNamespace")(name=request.name)

    def BroadcastEvent(self, request, context):
        return protocol.response_class("BroadcastEvent")()

    # workflows

    def GetWorkflows(self, request, context):
        resp = protocol.response_class("GetWorkflows")()
        for wf in self.workflows.values():
            if wf.namespace == request.namespace:
                resp.workflows.add(uid=wf.uid, id=wf.id, active=wf.active)
        return resp

    def GetWorkflowById(self, request, context):
        wf = self._find_workflow(context, request.namespace, request.id)
        return protocol.response_class("GetWorkflowById")(
            uid=wf.uid,
            id=wf.id,
            active=wf.active,
            revision=wf.revision,
            workflow=wf.workflow,
        )

    def AddWorkflow(self, request, context):
        match = _id_pattern.search(request.workflow.decode("utf-8", errors="replace"))
        if match is None:
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, "workflow has no id")
        wf = self.seed_workflow(request.namespace, match.group(1), request.workflow)
        return protocol.response_class("AddWorkflow")(uid=wf.uid, id=wf.id)

    def UpdateWorkflow(self, request, context):
        wf = self._workflow_by_uid(context, request.uid)
        wf.workflow = request.workflow
        if request.HasField("active"):
            wf.active = request.active
        wf.revision += 1
        return protocol.response_class("UpdateWorkflow")(
            uid=wf.uid, id=wf.id, revision=wf.revision, active=wf.active
        )

    def DeleteWorkflow(self, request, context):
        wf = self._workflow_by_uid(context, request.uid)
        del self.workflows[wf.uid]
        return protocol.response_class("DeleteWorkflow")(uid=wf.uid)

    def InvokeWorkflow(self, request, context):
        wf = self._find_workflow(context, request.namespace, request.workflowId)
        id = f"{wf.namespace}/{wf.id}/{len(self.instances) + 1}"
        self.seed_instance(id, wf.namespace, status="pending", input=request.input)
        return protocol.response_class("InvokeWorkflow")(instanceId=id)

    # instances

    def GetWorkflowInstance(self, request, context):
        inst = self.instances.get(request.id)
        if inst is None:
            context.abort(
                grpc.StatusCode.NOT_FOUND, f"instance '{request.id}' not found"
            )
        return protocol.response_class("GetWorkflowInstance")(
            id=inst.id, status=inst.status, input=inst.input, output=inst.output
        )

    def GetWorkflowInstances(self, request, context):
        resp = protocol.response_class("GetWorkflowInstances")()
        for inst in self.instances.values():
            if inst.namespace == request.namespace:
                resp.workflowInstances.add(id=inst.id, status=inst.status)
        return resp

    def GetWorkflowInstanceLogs(self, request, context):
        inst = self.instances.get(request.instanceId)
        if inst is None:
            context.abort(
                grpc.StatusCode.NOT_FOUND, f"instance '{request.instanceId}' not found"
            )
        resp = protocol.response_class("GetWorkflowInstanceLogs")()
        for msg in inst.logs[request.offset : request.offset + request.limit]:
            resp.workflowInstanceLogs.add(message=msg)
        return resp

    # secrets

    def StoreSecret(self, request, context):
        self.secrets[(request.namespace, request.name)] = request.data
        return protocol.response_class("StoreSecret")()

    def DeleteSecret(self, request, context):
        if self.secrets.pop((request.namespace, request.name), None) is None:
            context.abort(
                grpc.StatusCode.NOT_FOUND, f"secret '{request.name}' not found"
            )
        return protocol.response_class("DeleteSecret")()

    def GetSecrets(self, request, context):
        resp = protocol.response_class("GetSecrets")()
        for ns, name in self.secrets:
            if ns == request.namespace:
                resp.secrets.add(name=name)
        return resp

    # registries

    def StoreRegistry(self, request, context):
        self.registries[(request.namespace, request.name)] = request.data
        return protocol.response_class("StoreRegistry")()

    def DeleteRegistry(self, request, context):
        if self.registries.pop((request.namespace, request.name), None) is None:
            context.abort(
                grpc.StatusCode.NOT_FOUND, f"registry '{request.name}' not found"
            )
        return protocol.response_class("DeleteRegistry")()

    def GetRegistries(self, request, context):
        resp = protocol.response_class("GetRegistries")()
        for ns, name in self.registries:
            if ns == request.namespace:
                resp.registries.add(name=name)
        return resp

    def _handler(self, method: str):
        impl = getattr(self, method)

        def _handle(request, context):
            self.calls.append((method, request))

            delay = self.delays.get(method)
            if delay is not None:
                time.sleep(delay)

            err = self.errors.get(method)
            if err is not None:
                context.abort(*err)

            return impl(request, context)

        return grpc.unary_unary_rpc_method_handler(
            _handle,
            request_deserializer=protocol.request_class(method).FromString,
            response_serializer=lambda x: x.SerializeToString(),
        )

    def generic_handler(self):
        return grpc.method_handlers_generic_handler(
            config.service,
            {m: self._handler(m) for m in config.method_names()},
        )


@pytest.fixture
def direktiv():
    fake = FakeDirektiv()

    server = grpc.server(futures.ThreadPoolExecutor(max_workers=4))
    server.add_generic_rpc_handlers((fake.generic_handler(),))
    port = server.add_insecure_port("127.0.0.1:0")
    server.start()

    fake.address = f"127.0.0.1:{port}"
    try:
        yield fake
    finally:
        server.stop(None)


@pytest.fixture
def conn(direktiv):
    with Connection(direktiv.address) as res:
        yield res
