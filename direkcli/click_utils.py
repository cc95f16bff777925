from typing import IO, List, Optional, Sequence, Tuple

import click
from click import Command, Context, Group, HelpFormatter, style
from click._compat import get_text_stderr

from direkcli.exceptions.errors import RemoteError


def edit_distance(a: str, b: str) -> int:
    """Insertions, deletions, substitutions and adjacent swaps needed to turn
    `a` into `b`, each costing one.

    >>> edit_distance("secrets", "secrest")
    1
    >>> edit_distance("", "abc")
    3
    """
    prev2: List[int] = []
    prev = list(range(len(b) + 1))

    for i, ca in enumerate(a, start=1):
        cur = [i] + [0] * len(b)
        for j, cb in enumerate(b, start=1):
            cur[j] = min(
                prev[j] + 1,
                cur[j - 1] + 1,
                prev[j - 1] + (ca != cb),
            )
            if i > 1 and j > 1 and ca == b[j - 2] and a[i - 2] == cb:
                cur[j] = min(cur[j], prev2[j - 2] + 1)
        prev2, prev = prev, cur

    return prev[len(b)]


def suggest(
    typed: str, candidates: Sequence[Tuple[str, str]], max_distance: int = 2
) -> List[str]:
    """Full command paths whose last word is close to `typed`.

    `candidates` pairs each command name with the path to print for it. A
    name matches when it starts with `typed` or is within `max_distance`
    edits of it, ignoring case.
    """
    typed = typed.lower()

    res: List[str] = []
    for name, path in candidates:
        name = name.lower()
        if not name.startswith(typed) and edit_distance(typed, name) > max_distance:
            continue
        if path not in res:
            res.append(path)

    return res


class DirekCommand(Command):
    def format_epilog(self, ctx: Context, formatter: HelpFormatter) -> None:
        formatter.write_paragraph()
        formatter.write_text(
            style("See " + style("https://docs.direktiv.io/", underline=True), dim=True)
            + style(" for the direktiv manual and API reference", dim=True)
        )


class DirekGroup(DirekCommand, Group):
    command_class = DirekCommand
    group_class = type

    def _candidates(self, ctx: Context) -> List[Tuple[str, str]]:
        # own subcommands first, then the commands one level below them
        res = []
        nested = []
        for name in self.list_commands(ctx):
            res.append((name, f"{ctx.command_path} {name}"))

            cmd = Group.get_command(self, ctx, name)
            if isinstance(cmd, Group):
                nested.extend(
                    (sub, f"{ctx.command_path} {name} {sub}")
                    for sub in cmd.list_commands(ctx)
                )

        return res + nested

    def get_command(self, ctx, cmd_name):
        rv = Group.get_command(self, ctx, cmd_name)
        if rv is not None:
            return rv

        matches = suggest(cmd_name, self._candidates(ctx))
        if len(matches) == 0:
            return None

        word = "this" if len(matches) == 1 else "one of these"
        sep = "\n        "
        ctx.fail(
            f"No such command '{cmd_name}'\nDid you mean {word}?{sep}"
            + sep.join(matches)
        )

    def resolve_command(self, ctx, args):
        _, cmd, args = super().resolve_command(ctx, args)
        return cmd.name if cmd is not None else None, cmd, args


def _error_line(e: click.ClickException) -> str:
    if isinstance(e, RemoteError):
        return (
            style("Error: ", fg="red")
            + style(f"[{e.code}]", fg="red", bold=True)
            + f" {e.status_message}"
        )
    return style("Error: ", fg="red") + e.format_message()


def show_exception(self, file: Optional[IO] = None) -> None:
    if file is None:
        file = get_text_stderr()
    click.echo(_error_line(self), file=file)


def show_usage_error(self, file: Optional[IO] = None) -> None:
    if file is None:
        file = get_text_stderr()

    color = None
    if self.ctx is not None:
        color = self.ctx.color
        click.echo(self.ctx.get_usage(), file=file, color=color)
        if self.ctx.command.get_help_option(self.ctx) is not None:
            click.echo(
                f"Try '{self.ctx.command_path} {self.ctx.help_option_names[0]}'"
                " for help.\n",
                file=file,
                color=color,
            )

    click.echo(_error_line(self), file=file, color=color)


def patch():
    click.ClickException.show = show_exception
    click.UsageError.show = show_usage_error

    # a malformed command line is a local error like any other
    click.UsageError.exit_code = 1
