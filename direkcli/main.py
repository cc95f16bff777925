"""Entrypoints to service functions through direkcli."""

from typing import Optional

import click

import direkcli.click_utils
from direkcli.click_utils import DirekGroup
from direkcli.connection import Connection
from direkcli.exceptions.handler import CrashHandler
from direkcli.utils import configure_logging, decode_payload, print_table

direkcli.click_utils.patch()

crash_handler = CrashHandler()


@click.group(
    "direkcli",
    cls=DirekGroup,
    context_settings={
        "max_content_width": 160,
    },
)
@click.option(
    "--grpc",
    "address",
    type=str,
    default=None,
    help=(
        "Address of the direktiv gRPC endpoint. Defaults to $DIREKCLI_GRPC,"
        " then 127.0.0.1:6666."
    ),
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Log every RPC to stderr.",
)
@click.version_option(package_name="direkcli")
@click.pass_context
def main(ctx: click.Context, address: Optional[str], verbose: bool):
    """A CLI for interacting with a direktiv server via gRPC."""
    configure_logging(verbose)
    crash_handler.init()

    if ctx.obj is None:
        ctx.obj = Connection(address)
    ctx.call_on_close(ctx.obj.close)


"""
NAMESPACE COMMANDS
"""


@main.group("namespaces")
def namespaces():
    """List, create and delete namespaces."""


@namespaces.command("list")
@click.pass_obj
def namespaces_list(conn: Connection):
    """Returns a list of namespaces."""
    crash_handler.message = "Unable to list namespaces"

    from direkcli.services.namespaces import list_namespaces

    res = list_namespaces(conn)
    if len(res) == 0:
        click.echo("No namespaces exist")
        return

    print_table(["Name"], [[x.name] for x in res])


@namespaces.command("create")
@click.argument("name", nargs=1)
@click.pass_obj
def namespaces_create(conn: Connection, name: str):
    """Create a new namespace."""
    crash_handler.message = f"Unable to create namespace {name}"

    from direkcli.services.namespaces import create_namespace

    click.secho(create_namespace(conn, name), fg="green")


@namespaces.command("delete")
@click.argument("name", nargs=1)
@click.pass_obj
def namespaces_delete(conn: Connection, name: str):
    """Delete a namespace."""
    crash_handler.message = f"Unable to delete namespace {name}"

    from direkcli.services.namespaces import delete_namespace

    click.secho(delete_namespace(conn, name), fg="green")


@namespaces.command("send")
@click.argument("namespace", nargs=1)
@click.argument("cloudevent_path", metavar="CLOUDEVENTPATH", nargs=1)
@click.pass_obj
def namespaces_send(conn: Connection, namespace: str, cloudevent_path: str):
    """Sends a cloud event to a namespace."""
    crash_handler.message = f"Unable to send event to {namespace}"

    from direkcli.services.namespaces import send_event

    click.secho(send_event(conn, namespace, cloudevent_path), fg="green")


"""
WORKFLOW COMMANDS
"""


@main.group("workflows")
def workflows():
    """List, create, get and execute workflows."""


@workflows.command("list")
@click.argument("namespace", nargs=1)
@click.pass_obj
def workflows_list(conn: Connection, namespace: str):
    """List all workflows under a namespace."""
    crash_handler.message = f"Unable to list workflows in {namespace}"

    from direkcli.services.workflows import list_workflows

    res = list_workflows(conn, namespace)
    if len(res) == 0:
        click.echo(f"No workflows exist under '{namespace}'")
        return

    print_table(["ID"], [[x.id] for x in res])


@workflows.command("get")
@click.argument("namespace", nargs=1)
@click.argument("id", nargs=1)
@click.pass_obj
def workflows_get(conn: Connection, namespace: str, id: str):
    """Get the YAML definition of a workflow."""
    crash_handler.message = f"Unable to get workflow {id}"

    from direkcli.services.workflows import get_workflow

    click.echo(get_workflow(conn, namespace, id))


@workflows.command("create")
@click.argument("namespace", nargs=1)
@click.argument("path", metavar="FILEPATH", nargs=1)
@click.pass_obj
def workflows_create(conn: Connection, namespace: str, path: str):
    """Creates a new workflow from a YAML file."""
    crash_handler.message = f"Unable to create workflow from {path}"

    from direkcli.services.workflows import add_workflow

    click.secho(add_workflow(conn, namespace, path), fg="green")


@workflows.command("update")
@click.argument("namespace", nargs=1)
@click.argument("id", nargs=1)
@click.argument("path", metavar="FILEPATH", nargs=1)
@click.pass_obj
def workflows_update(conn: Connection, namespace: str, id: str, path: str):
    """Updates an existing workflow from a YAML file."""
    crash_handler.message = f"Unable to update workflow {id}"

    from direkcli.services.workflows import update_workflow

    click.secho(update_workflow(conn, namespace, id, path), fg="green")


@workflows.command("delete")
@click.argument("namespace", nargs=1)
@click.argument("id", nargs=1)
@click.pass_obj
def workflows_delete(conn: Connection, namespace: str, id: str):
    """Deletes an existing workflow."""
    crash_handler.message = f"Unable to delete workflow {id}"

    from direkcli.services.workflows import delete_workflow

    click.secho(delete_workflow(conn, namespace, id), fg="green")


@workflows.command("execute")
@click.argument("namespace", nargs=1)
@click.argument("id", nargs=1)
@click.option(
    "--input",
    "input_path",
    metavar="FILEPATH",
    type=str,
    default=None,
    help="File whose contents are passed to the workflow as its input.",
)
@click.pass_obj
def workflows_execute(
    conn: Connection, namespace: str, id: str, input_path: Optional[str]
):
    """Executes the workflow with the given ID."""
    crash_handler.message = f"Unable to execute workflow {id}"

    from direkcli.services.workflows import execute_workflow

    click.secho(execute_workflow(conn, namespace, id, input_path), fg="green")


@workflows.command("toggle")
@click.argument("namespace", nargs=1)
@click.argument("id", nargs=1)
@click.pass_obj
def workflows_toggle(conn: Connection, namespace: str, id: str):
    """Enables or disables the workflow with the given ID."""
    crash_handler.message = f"Unable to toggle workflow {id}"

    from direkcli.services.workflows import toggle_workflow

    click.secho(toggle_workflow(conn, namespace, id), fg="green")


"""
INSTANCE COMMANDS
"""


@main.group("instances")
def instances():
    """List, get and retrieve logs for workflow instances."""


@instances.command("get")
@click.argument("id", nargs=1)
@click.pass_obj
def instances_get(conn: Connection, id: str):
    """Get details about a workflow instance."""
    crash_handler.message = f"Unable to get instance {id}"

    from direkcli.services.instances import get_instance

    res = get_instance(conn, id)
    click.echo(f"ID: {res.id}")
    click.echo(f"Input: {decode_payload(res.input)}")
    click.echo(f"Output: {decode_payload(res.output)}")


@instances.command("list")
@click.argument("namespace", nargs=1)
@click.pass_obj
def instances_list(conn: Connection, namespace: str):
    """List all workflow instances in a namespace."""
    crash_handler.message = f"Unable to list instances in {namespace}"

    from direkcli.services.instances import list_instances

    res = list_instances(conn, namespace)
    if len(res) == 0:
        click.echo(f"No instances exist under '{namespace}'")
        return

    print_table(["ID", "Status"], [[x.id, x.status] for x in res])


@instances.command("logs")
@click.argument("id", nargs=1)
@click.pass_obj
def instances_logs(conn: Connection, id: str):
    """Prints all logs of the given instance."""
    crash_handler.message = f"Unable to get logs for instance {id}"

    from direkcli.services.instances import get_logs

    for entry in get_logs(conn, id):
        click.echo(entry.message, nl=False)


"""
SECRET COMMANDS
"""


@main.group("secrets")
def secrets():
    """List, create and remove secrets from a namespace."""


@secrets.command("create")
@click.argument("namespace", nargs=1)
@click.argument("key", nargs=1)
@click.argument("value", nargs=1)
@click.pass_obj
def secrets_create(conn: Connection, namespace: str, key: str, value: str):
    """Creates a new secret in a namespace."""
    crash_handler.message = f"Unable to create secret {key}"

    from direkcli.services.secrets import create_secret

    click.secho(create_secret(conn, namespace, key, value), fg="green")


@secrets.command("delete")
@click.argument("namespace", nargs=1)
@click.argument("key", nargs=1)
@click.pass_obj
def secrets_delete(conn: Connection, namespace: str, key: str):
    """Removes a secret from a namespace."""
    crash_handler.message = f"Unable to remove secret {key}"

    from direkcli.services.secrets import delete_secret

    click.secho(delete_secret(conn, namespace, key), fg="green")


@secrets.command("list")
@click.argument("namespace", nargs=1)
@click.pass_obj
def secrets_list(conn: Connection, namespace: str):
    """Returns the secret keys of a namespace."""
    crash_handler.message = f"Unable to list secrets in {namespace}"

    from direkcli.services.secrets import list_secrets

    res = list_secrets(conn, namespace)
    if len(res) == 0:
        click.echo(f"No secrets exist under '{namespace}'")
        return

    print_table(["Secret"], [[x.name] for x in res])


"""
REGISTRY COMMANDS
"""


@main.group("registries")
def registries():
    """List, create and remove registries from a namespace."""


@registries.command("create")
@click.argument("namespace", nargs=1)
@click.argument("url", nargs=1)
@click.argument("credential", metavar="USER:TOKEN", nargs=1)
@click.pass_obj
def registries_create(conn: Connection, namespace: str, url: str, credential: str):
    """Creates a registry under a namespace."""
    crash_handler.message = f"Unable to create registry {url}"

    from direkcli.services.registries import create_registry

    click.secho(create_registry(conn, namespace, url, credential), fg="green")


@registries.command("delete")
@click.argument("namespace", nargs=1)
@click.argument("url", nargs=1)
@click.pass_obj
def registries_delete(conn: Connection, namespace: str, url: str):
    """Removes the registry with the given URL from a namespace."""
    crash_handler.message = f"Unable to remove registry {url}"

    from direkcli.services.registries import delete_registry

    click.secho(delete_registry(conn, namespace, url), fg="green")


@registries.command("list")
@click.argument("namespace", nargs=1)
@click.pass_obj
def registries_list(conn: Connection, namespace: str):
    """Returns the registries of a namespace."""
    crash_handler.message = f"Unable to list registries in {namespace}"

    from direkcli.services.registries import list_registries

    res = list_registries(conn, namespace)
    if len(res) == 0:
        click.echo(f"No registries exist under '{namespace}'")
        return

    print_table(["Registry"], [[x.name] for x in res])
