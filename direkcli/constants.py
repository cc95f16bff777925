from dataclasses import dataclass


@dataclass(frozen=True)
class DirekConstants:
    pkg_name: str = "direkcli"

    grpc_address: str = "127.0.0.1:6666"
    grpc_service: str = "ingress.DirektivIngress"

    # seconds
    rpc_timeout: float = 3

    # the server returns every entry up to this count in a single batch
    log_batch_limit: int = 10000

    # `:` is reserved on the wire, so registry credentials use `!` instead
    credential_separator: str = ":"
    credential_separator_wire: str = "!"

    address_env: str = "DIREKCLI_GRPC"
    service_env: str = "DIREKCLI_SERVICE"


direk_constants = DirekConstants()
