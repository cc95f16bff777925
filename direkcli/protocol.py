"""Protobuf messages spoken by the direktiv ingress service.

The service definition is owned by the server. Only the fields this client
reads or writes are declared here; anything else the server sends is kept
as unknown fields and ignored. Messages are proto2 with every scalar field
optional, matching the server's schema.
"""

from typing import Dict, List, Tuple, Type

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.message import Message

PACKAGE = "ingress"

_FieldProto = descriptor_pb2.FieldDescriptorProto

_SCALARS = {
    "string": _FieldProto.TYPE_STRING,
    "bytes": _FieldProto.TYPE_BYTES,
    "bool": _FieldProto.TYPE_BOOL,
    "int32": _FieldProto.TYPE_INT32,
}

# message name -> [(field name, number, type, repeated)]
# nested messages are written as `Outer.Inner`
_Field = Tuple[str, int, str, bool]

SCHEMA: Dict[str, List[_Field]] = {
    # namespaces
    "GetNamespacesRequest": [
        ("offset", 1, "int32", False),
        ("limit", 2, "int32", False),
    ],
    "GetNamespacesResponse": [
        ("namespaces", 1, "GetNamespacesResponse.Namespace", True),
    ],
    "GetNamespacesResponse.Namespace": [
        ("name", 1, "string", False),
    ],
    "AddNamespaceRequest": [
        ("name", 1, "string", False),
    ],
    "AddNamespaceResponse": [
        ("name", 1, "string", False),
    ],
    "DeleteNamespaceRequest": [
        ("name", 1, "string", False),
    ],
    "DeleteNamespaceResponse": [
        ("name", 1, "string", False),
    ],
    "BroadcastEventRequest": [
        ("namespace", 1, "string", False),
        ("cloudevent", 2, "bytes", False),
    ],
    "BroadcastEventResponse": [],
    # workflows
    "GetWorkflowsRequest": [
        ("namespace", 1, "string", False),
        ("offset", 2, "int32", False),
        ("limit", 3, "int32", False),
    ],
    "GetWorkflowsResponse": [
        ("workflows", 1, "GetWorkflowsResponse.Workflow", True),
    ],
    "GetWorkflowsResponse.Workflow": [
        ("uid", 1, "string", False),
        ("id", 2, "string", False),
        ("revision", 3, "int32", False),
        ("active", 4, "bool", False),
        ("description", 6, "string", False),
    ],
    "GetWorkflowByIdRequest": [
        ("namespace", 1, "string", False),
        ("id", 2, "string", False),
    ],
    "GetWorkflowByIdResponse": [
        ("uid", 1, "string", False),
        ("id", 2, "string", False),
        ("revision", 3, "int32", False),
        ("active", 4, "bool", False),
        ("description", 6, "string", False),
        ("workflow", 7, "bytes", False),
    ],
    "AddWorkflowRequest": [
        ("namespace", 1, "string", False),
        ("active", 2, "bool", False),
        ("workflow", 3, "bytes", False),
    ],
    "AddWorkflowResponse": [
        ("uid", 1, "string", False),
        ("id", 2, "string", False),
        ("revision", 3, "int32", False),
        ("active", 4, "bool", False),
    ],
    "UpdateWorkflowRequest": [
        ("uid", 1, "string", False),
        ("version", 2, "int32", False),
        ("active", 3, "bool", False),
        ("workflow", 4, "bytes", False),
    ],
    "UpdateWorkflowResponse": [
        ("uid", 1, "string", False),
        ("id", 2, "string", False),
        ("revision", 3, "int32", False),
        ("active", 4, "bool", False),
    ],
    "DeleteWorkflowRequest": [
        ("uid", 1, "string", False),
    ],
    "DeleteWorkflowResponse": [
        ("uid", 1, "string", False),
    ],
    "InvokeWorkflowRequest": [
        ("namespace", 1, "string", False),
        ("workflowId", 2, "string", False),
        ("input", 3, "bytes", False),
    ],
    "InvokeWorkflowResponse": [
        ("instanceId", 1, "string", False),
    ],
    # instances
    "GetWorkflowInstanceRequest": [
        ("id", 1, "string", False),
    ],
    "GetWorkflowInstanceResponse": [
        ("id", 1, "string", False),
        ("status", 2, "string", False),
        ("invokedBy", 3, "string", False),
        ("revision", 4, "int32", False),
        ("input", 7, "bytes", False),
        ("output", 8, "bytes", False),
    ],
    "GetWorkflowInstancesRequest": [
        ("namespace", 1, "string", False),
        ("offset", 2, "int32", False),
        ("limit", 3, "int32", False),
    ],
    "GetWorkflowInstancesResponse": [
        ("workflowInstances", 1, "GetWorkflowInstancesResponse.WorkflowInstance", True),
    ],
    "GetWorkflowInstancesResponse.WorkflowInstance": [
        ("id", 1, "string", False),
        ("status", 2, "string", False),
    ],
    "GetWorkflowInstanceLogsRequest": [
        ("instanceId", 1, "string", False),
        ("offset", 2, "int32", False),
        ("limit", 3, "int32", False),
    ],
    "GetWorkflowInstanceLogsResponse": [
        (
            "workflowInstanceLogs",
            1,
            "GetWorkflowInstanceLogsResponse.WorkflowInstanceLog",
            True,
        ),
    ],
    "GetWorkflowInstanceLogsResponse.WorkflowInstanceLog": [
        ("message", 2, "string", False),
    ],
    # secrets
    "StoreSecretRequest": [
        ("namespace", 1, "string", False),
        ("name", 2, "string", False),
        ("data", 3, "bytes", False),
    ],
    "StoreSecretResponse": [],
    "DeleteSecretRequest": [
        ("namespace", 1, "string", False),
        ("name", 2, "string", False),
    ],
    "DeleteSecretResponse": [],
    "GetSecretsRequest": [
        ("namespace", 1, "string", False),
    ],
    "GetSecretsResponse": [
        ("secrets", 1, "GetSecretsResponse.Secret", True),
    ],
    "GetSecretsResponse.Secret": [
        ("name", 1, "string", False),
    ],
    # registries
    "StoreRegistryRequest": [
        ("namespace", 1, "string", False),
        ("name", 2, "string", False),
        ("data", 3, "bytes", False),
    ],
    "StoreRegistryResponse": [],
    "DeleteRegistryRequest": [
        ("namespace", 1, "string", False),
        ("name", 2, "string", False),
    ],
    "DeleteRegistryResponse": [],
    "GetRegistriesRequest": [
        ("namespace", 1, "string", False),
    ],
    "GetRegistriesResponse": [
        ("registries", 1, "GetRegistriesResponse.Registry", True),
    ],
    "GetRegistriesResponse.Registry": [
        ("name", 1, "string", False),
    ],
}


def _build_field(name: str, number: int, type_: str, repeated: bool):
    res = _FieldProto(
        name=name,
        number=number,
        label=(
            _FieldProto.LABEL_REPEATED if repeated else _FieldProto.LABEL_OPTIONAL
        ),
    )

    if type_ in _SCALARS:
        res.type = _SCALARS[type_]
    else:
        res.type = _FieldProto.TYPE_MESSAGE
        res.type_name = f".{PACKAGE}.{type_}"

    return res


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name="direkcli/ingress.proto",
        package=PACKAGE,
        syntax="proto2",
    )

    messages: Dict[str, descriptor_pb2.DescriptorProto] = {}
    # outer messages are declared before their nested ones
    for full_name in sorted(SCHEMA, key=lambda x: x.count(".")):
        outer, _, inner = full_name.rpartition(".")
        if outer == "":
            msg = file.message_type.add(name=inner)
        else:
            msg = messages[outer].nested_type.add(name=inner)

        msg.field.extend(_build_field(*f) for f in SCHEMA[full_name])
        messages[full_name] = msg

    return file


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())

_classes: Dict[str, Type[Message]] = {}


def message_class(name: str) -> Type[Message]:
    """Generated message class for `name`, e.g. `"AddNamespaceRequest"`."""
    res = _classes.get(name)
    if res is None:
        descriptor = _pool.FindMessageTypeByName(f"{PACKAGE}.{name}")
        res = message_factory.GetMessageClass(descriptor)
        _classes[name] = res

    return res


def request_class(method: str) -> Type[Message]:
    return message_class(f"{method}Request")


def response_class(method: str) -> Type[Message]:
    return message_class(f"{method}Response")
