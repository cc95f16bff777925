"""
config.direktiv
~~~~~~~~~~~~~~~
Connection wide configuration, eg. server address, rpc method paths...
"""

import os
from dataclasses import dataclass, field, fields
from typing import Optional

from direkcli.constants import direk_constants


@dataclass(frozen=True)
class _NamespaceRPC:
    list: str = "GetNamespaces"
    create: str = "AddNamespace"
    delete: str = "DeleteNamespace"
    send_event: str = "BroadcastEvent"


@dataclass(frozen=True)
class _WorkflowRPC:
    list: str = "GetWorkflows"
    get: str = "GetWorkflowById"
    create: str = "AddWorkflow"
    update: str = "UpdateWorkflow"
    delete: str = "DeleteWorkflow"
    execute: str = "InvokeWorkflow"


@dataclass(frozen=True)
class _InstanceRPC:
    get: str = "GetWorkflowInstance"
    list: str = "GetWorkflowInstances"
    logs: str = "GetWorkflowInstanceLogs"


@dataclass(frozen=True)
class _SecretRPC:
    create: str = "StoreSecret"
    delete: str = "DeleteSecret"
    list: str = "GetSecrets"


@dataclass(frozen=True)
class _RegistryRPC:
    create: str = "StoreRegistry"
    delete: str = "DeleteRegistry"
    list: str = "GetRegistries"


@dataclass(frozen=True)
class _RPC:
    namespace: _NamespaceRPC = field(default_factory=_NamespaceRPC)
    workflow: _WorkflowRPC = field(default_factory=_WorkflowRPC)
    instance: _InstanceRPC = field(default_factory=_InstanceRPC)
    secret: _SecretRPC = field(default_factory=_SecretRPC)
    registry: _RegistryRPC = field(default_factory=_RegistryRPC)


@dataclass(frozen=True)
class _DirektivConfig:
    rpc: _RPC
    service: str

    def method_path(self, method: str) -> str:
        """Fully qualified gRPC path, e.g. `/ingress.DirektivIngress/AddWorkflow`"""
        return f"/{self.service}/{method}"

    def method_names(self):
        res = []
        for group in fields(self.rpc):
            resource = getattr(self.rpc, group.name)
            for method in fields(resource):
                res.append(getattr(resource, method.name))
        return res


def resolve_address(flag: Optional[str] = None) -> str:
    """Address of the direktiv server.

    The `--grpc` flag wins over `$DIREKCLI_GRPC`, which wins over the default
    `127.0.0.1:6666`. Empty values count as unset.
    """
    if flag:
        return flag

    env = os.environ.get(direk_constants.address_env)
    if env:
        return env

    return direk_constants.grpc_address


def build_config() -> _DirektivConfig:
    service = os.environ.get(direk_constants.service_env) or direk_constants.grpc_service
    return _DirektivConfig(rpc=_RPC(), service=service)


# singleton config instance
config = build_config()
