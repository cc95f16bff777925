import pytest

from direkcli.exceptions.errors import RemoteError
from direkcli.services.instances import get_instance, get_logs, list_instances

from .fixtures import conn, direktiv


def test_get_keeps_raw_payloads(direktiv, conn):
    direktiv.seed_instance(
        "alpha/greeter/1",
        "alpha",
        input=b'{"name": "x"}',
        output=b"\xff\xfe not utf-8",
    )

    res = get_instance(conn, "alpha/greeter/1")

    assert res.id == "alpha/greeter/1"
    assert res.input == b'{"name": "x"}'
    assert res.output == b"\xff\xfe not utf-8"


def test_get_unknown(direktiv, conn):
    with pytest.raises(RemoteError) as e:
        get_instance(conn, "ghost")

    assert e.value.code == "NOT_FOUND"


def test_list(direktiv, conn):
    assert list_instances(conn, "alpha") == []

    direktiv.seed_instance("a/1", "alpha", status="complete")
    direktiv.seed_instance("a/2", "alpha", status="failed")
    direktiv.seed_instance("b/1", "beta", status="pending")

    res = list_instances(conn, "alpha")
    assert [(x.id, x.status) for x in res] == [("a/1", "complete"), ("a/2", "failed")]


def test_logs_single_batch_in_order(direktiv, conn):
    lines = [f"step {i}\n" for i in range(50)]
    direktiv.seed_instance("a/1", "alpha", logs=lines)

    res = get_logs(conn, "a/1")

    assert [x.message for x in res] == lines
    assert direktiv.methods == ["GetWorkflowInstanceLogs"]
    (req,) = direktiv.requests("GetWorkflowInstanceLogs")
    assert req.instanceId == "a/1"
    assert req.offset == 0
    assert req.limit == 10000


def test_logs_past_batch_limit_are_dropped(direktiv, conn):
    lines = [f"{i}\n" for i in range(10005)]
    direktiv.seed_instance("a/1", "alpha", logs=lines)

    res = get_logs(conn, "a/1")

    assert len(res) == 10000
    assert res[-1].message == "9999\n"
    assert direktiv.methods == ["GetWorkflowInstanceLogs"]
