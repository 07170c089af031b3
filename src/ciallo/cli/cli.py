import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

import click

from ciallo.cli.output import user_output
from ciallo.core.config import DEFAULT_PROJECT_CONFIG, load_global_config, load_project_config
from ciallo.core.context import CialloContext, create_context
from ciallo.core.errors import CialloError
from ciallo.core.notify.dispatcher import dispatch_notifications
from ciallo.core.resolver import resolve_command

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(
    help_option_names=["-h", "--help"],
    # Everything after COMMAND_NAME belongs to the child, including options
    ignore_unknown_options=True,
    allow_interspersed_args=False,
)


def preserve_separator(args: Sequence[str], argv: Sequence[str]) -> list[str]:
    """Build the child's extra arguments, keeping a literal ``--`` up front.

    Option parsing stops at COMMAND_NAME, so a ``--`` typed after it shows up
    in ``args`` while one typed before it is consumed. The first ``--`` is
    treated as our own separator and dropped. Then, if any trailing arguments
    remain and ``--`` appears anywhere in the original argv, ``--`` is put
    back in front of them so the child's argument parser still sees it.

    Examples:
        >>> preserve_separator(["--", "-x"], ["test", "--", "-x"])
        ['--', '-x']
        >>> preserve_separator(["-x"], ["--", "test", "-x"])
        ['--', '-x']
        >>> preserve_separator(["-x"], ["test", "-x"])
        ['-x']
    """
    trailing = list(args)
    if "--" in trailing:
        trailing.remove("--")
    if trailing and "--" in argv:
        return ["--", *trailing]
    return trailing


def _render_error(error: BaseException) -> None:
    user_output(click.style("Error: ", fg="red") + str(error))
    cause = error.__cause__
    while cause is not None:
        user_output(f"Caused by: {cause}")
        cause = cause.__cause__


@click.command("ciallo", context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ciallo")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_PROJECT_CONFIG,
    show_default=True,
    help="Path to the project config file.",
)
@click.argument("command_name")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, config_path: Path, command_name: str, args: tuple[str, ...]) -> None:
    """Run COMMAND_NAME from the project config and notify its hooks when it finishes.

    ARGS are passed through to the command unchanged.
    """
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()
    ciallo_ctx: CialloContext = ctx.obj

    extra_args = preserve_separator(args, ciallo_ctx.argv)
    project_path = config_path if config_path.is_absolute() else ciallo_ctx.cwd / config_path

    try:
        global_config = load_global_config(ciallo_ctx.global_config_path)
        project_config = load_project_config(project_path)
        resolved = resolve_command(project_config, global_config, command_name)

        logger.info(
            "Executing %s with hooks: %s",
            resolved.command.command,
            list(resolved.command.hooks),
        )
        result = ciallo_ctx.process_runner.execute(resolved.command, extra_args)
    except CialloError as e:
        _render_error(e)
        raise SystemExit(1) from e

    logger.info("Command finished with status: %s", result.status_label)

    dispatch_notifications(result, resolved.hooks, ciallo_ctx.webhook_client, logger)

    # Exit with same code as the command
    if not result.success:
        raise SystemExit(result.exit_code if result.exit_code is not None else 1)


def main() -> None:
    """CLI entry point used by the `ciallo` console script."""
    level = logging.DEBUG if os.environ.get("CIALLO_DEBUG") else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    cli()
