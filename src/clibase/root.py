from __future__ import annotations

import functools
import sys
from collections.abc import Callable, Sequence
from typing import Any, NoReturn

import click
import typer
from click.core import ParameterSource
from typer.models import DefaultPlaceholder

from clibase import exit_codes
from clibase.console import print_error, print_warning
from clibase.env import envvar, load_env
from clibase.exceptions import FlagRedefinedError
from clibase.flags import FLAGS
from clibase.logging import enable_debug, get_logger

__all__ = [
    "FlagFunc",
    "PreRunFunc",
    "RootCommand",
    "VERBOSE_NOTICE",
    "build_root_command",
    "combined_pre_run",
    "execute",
]

FlagFunc = Callable[["RootCommand"], None]
PreRunFunc = Callable[[click.Context, list[str]], None]

VERBOSE_NOTICE = "Verbose mode enabled by clibase."

_PRE_RUN_DONE = "clibase.pre_run_done"
_PRE_RUN_WRAPPED = "__clibase_pre_run__"

logger = get_logger("root")


class _PersistentOption(click.Option):
    """An option copied onto every command of the tree."""


class _PersistentFlag:
    def __init__(self, param_decls: tuple[str, ...], attrs: dict[str, Any]) -> None:
        attrs = dict(attrs)
        attrs.pop("expose_value", None)
        self._user_callback = attrs.pop("callback", None)
        self.param_decls = param_decls
        self.attrs = attrs

        template = click.Option(param_decls, **attrs)
        assert template.name is not None
        self.name: str = template.name
        self.switches: set[str] = {*template.opts, *template.secondary_opts}

    def _store(self, ctx: click.Context, param: click.Parameter, value: Any) -> Any:
        if self._user_callback is not None:
            value = self._user_callback(ctx, param, value)

        # The root always records (defaults included); descendants only
        # override it with a value typed on their part of the command line.
        source = ctx.get_parameter_source(self.name)
        if ctx.parent is None or source is ParameterSource.COMMANDLINE:
            FLAGS.set(self.name, value)
        return value

    def build(self) -> _PersistentOption:
        return _PersistentOption(
            self.param_decls,
            expose_value=False,
            callback=self._store,
            **self.attrs,
        )


def _show_help_without_subcommand(ctx: typer.Context) -> None:
    if ctx.obj is None:
        ctx.obj = FLAGS
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(exit_codes.SUCCESS)


def _positional_args(ctx: click.Context) -> list[str]:
    values: list[str] = []
    for param in ctx.command.params:
        if not isinstance(param, click.Argument) or param.name is None:
            continue
        # Only what was typed, like a raw argv slice.
        if ctx.get_parameter_source(param.name) is ParameterSource.DEFAULT:
            continue
        value = ctx.params.get(param.name)
        if value is None:
            continue
        if isinstance(value, list | tuple):
            values.extend(str(v) for v in value)
        else:
            values.append(str(value))
    values.extend(ctx.args)
    return values


def _typer_name(app: typer.Typer) -> str | None:
    name = app.info.name
    if isinstance(name, DefaultPlaceholder):
        name = name.value
    return name


class RootCommand:
    """Top-level command of a clibase application.

    Wraps a :class:`typer.Typer` and keeps the list of persistent flags that
    are copied onto every command when the tree is assembled by
    :meth:`to_click`.
    """

    def __init__(self, name: str, *, short_help: str, help: str) -> None:
        self.name = name
        self.short_help = short_help
        self.help = help
        self.app = typer.Typer(
            name=name,
            help=help,
            short_help=short_help,
            add_completion=False,
            rich_markup_mode=None,
        )
        self.app.callback(
            invoke_without_command=True,
            help=help,
            short_help=short_help,
        )(_show_help_without_subcommand)

        self._persistent: list[_PersistentFlag] = []
        self._click_commands: list[click.Command] = []
        self._pre_run: PreRunFunc | None = None
        self._group: click.Group | None = None

    @property
    def persistent_flags(self) -> list[str]:
        return [flag.name for flag in self._persistent]

    def add_persistent_flag(self, *param_decls: str, **attrs: Any) -> None:
        """Declare an option accepted by the root and all of its descendants.

        Arguments are those of :class:`click.Option`. The parsed value is
        stored in ``FLAGS`` under the option's parameter name.
        """
        flag = _PersistentFlag(param_decls, attrs)
        for existing in self._persistent:
            if existing.name == flag.name or existing.switches & flag.switches:
                raise FlagRedefinedError(
                    f"persistent flag '{flag.name}' redefines '{existing.name}'",
                )
        self._persistent.append(flag)
        self._group = None

    def set_pre_run(self, hook: PreRunFunc | None) -> None:
        self._pre_run = hook
        self._group = None

    def add_command(self, *commands: typer.Typer | click.Command | Callable[..., Any]) -> None:
        """Attach subcommands.

        Accepts named :class:`typer.Typer` sub-applications, ready-made
        :class:`click.Command` objects and plain functions (registered the
        way ``@app.command()`` would).
        """
        for command in commands:
            if isinstance(command, typer.Typer):
                name = _typer_name(command)
                if not name:
                    raise ValueError(
                        "Sub-applications need a name, e.g. typer.Typer(name='db')."
                    )
                self.app.add_typer(command, name=name)
            elif isinstance(command, click.Command):
                name = command.name
                self._click_commands.append(command)
            elif callable(command):
                name = getattr(command, "__name__", repr(command))
                self.app.command()(command)
            else:
                raise TypeError(f"Cannot attach {command!r} as a subcommand.")

            logger.debug("attached subcommand %s to %s", name, self.name)
        self._group = None

    def to_click(self) -> click.Group:
        """Assemble the Click command tree with persistent flags installed."""
        if self._group is not None:
            return self._group

        group = typer.main.get_command(self.app)
        assert isinstance(group, click.Group)
        for command in self._click_commands:
            group.add_command(command)

        self._install(group)
        self._group = group
        return group

    def _install(self, command: click.Command) -> None:
        own = [p for p in command.params if not isinstance(p, _PersistentOption)]
        installed = {p.name for p in command.params if isinstance(p, _PersistentOption)}
        taken = {s for p in own for s in (*p.opts, *p.secondary_opts)}
        names = {p.name for p in own}
        for flag in self._persistent:
            if flag.name in installed:
                continue
            if taken & flag.switches or flag.name in names:
                raise FlagRedefinedError(
                    f"command '{command.name}' redefines persistent flag"
                    f" '{flag.name}'",
                    hint="Rename the command's own option.",
                )
            command.params.append(flag.build())

        is_group = isinstance(command, click.Group)
        if not getattr(command.callback, _PRE_RUN_WRAPPED, False):
            # Groups without a body behave like the root: bare invocation
            # shows help and succeeds.
            show_help = is_group and not command.invoke_without_command
            if show_help:
                command.invoke_without_command = True
                command.no_args_is_help = False
            command.callback = self._with_pre_run(
                command.callback, is_group=is_group, show_help=show_help
            )

        if is_group:
            for sub in command.commands.values():
                self._install(sub)

    def _with_pre_run(
        self,
        callback: Callable[..., Any] | None,
        *,
        is_group: bool,
        show_help: bool = False,
    ) -> Callable[..., Any]:
        def invoke(*args: Any, **kwargs: Any) -> Any:
            ctx = click.get_current_context()
            # A group only runs the hook when it is the target itself.
            targeted = not is_group or ctx.invoked_subcommand is None
            if targeted:
                self._run_pre_run(ctx)
            rv = callback(*args, **kwargs) if callback is not None else None
            if show_help and targeted:
                typer.echo(ctx.get_help())
                raise typer.Exit(exit_codes.SUCCESS)
            return rv

        if callback is not None:
            functools.update_wrapper(invoke, callback)
        setattr(invoke, _PRE_RUN_WRAPPED, True)
        return invoke

    def _run_pre_run(self, ctx: click.Context) -> None:
        root = ctx.find_root()
        if self._pre_run is None or root.meta.get(_PRE_RUN_DONE):
            return
        root.meta[_PRE_RUN_DONE] = True
        self._pre_run(ctx, _positional_args(ctx))

    def run(self, args: Sequence[str] | None = None) -> int:
        """Parse ``args``, dispatch, and return the process exit status.

        Errors are reported on stderr; nothing escapes except ``SystemExit``
        raised by command code itself.
        """
        argv = list(sys.argv[1:] if args is None else args)
        group = self.to_click()
        try:
            with group.make_context(self.name, argv) as ctx:
                group.invoke(ctx)
        except click.exceptions.Exit as exc:
            return exc.exit_code
        except click.ClickException as exc:
            exc.show()
            return exit_codes.FAILURE
        except (click.Abort, KeyboardInterrupt, EOFError):
            print_warning("Aborted!")
            return exit_codes.FAILURE
        except Exception as exc:
            logger.debug("%s failed", self.name, exc_info=True)
            print_error(exc)
            return exit_codes.FAILURE
        return exit_codes.SUCCESS


def combined_pre_run(pre_run: PreRunFunc | None = None) -> PreRunFunc:
    """Build the hook run before every command body.

    Global work (the verbose notice) always happens first; the application's
    hook then runs with the same arguments and its exception, if any,
    propagates unchanged.
    """

    def hook(ctx: click.Context, args: list[str]) -> None:
        if FLAGS.verbose:
            typer.echo(VERBOSE_NOTICE)
            enable_debug()
        # Reading FLAGS.config_file is left to the application's hook.
        if pre_run is not None:
            logger.debug("running pre-run hook for %s", ctx.command_path)
            pre_run(ctx, args)

    return hook


def build_root_command(
    app_name: str,
    register_flags: FlagFunc | None = None,
    pre_run: PreRunFunc | None = None,
) -> RootCommand:
    """Create the root command for ``app_name``.

    ``app_name`` is shown in usage and help text and must not contain
    full-width or no-break spaces. Only one root command can be built per
    process because the global flags are registered once.
    """
    if not app_name:
        raise ValueError("app_name must be a non-empty string")
    if FLAGS.registered:
        raise FlagRedefinedError(
            "global flags are already registered in this process",
            hint="Build one root command and attach every subcommand to it.",
        )

    root = RootCommand(
        app_name,
        short_help=f"A CLI tool for {app_name}.",
        help=f"The CLI tool for {app_name}. Use a subcommand to perform a task.",
    )
    root.add_persistent_flag(
        "-v",
        "--verbose",
        is_flag=True,
        default=False,
        help="Enable verbose output",
        envvar=envvar(app_name, "verbose"),
    )
    root.add_persistent_flag(
        "-c",
        "--config",
        "config_file",
        default="",
        metavar="PATH",
        help="Config file path",
        envvar=envvar(app_name, "config"),
    )
    FLAGS.registered = True

    if register_flags is not None:
        register_flags(root)

    root.set_pre_run(combined_pre_run(pre_run))
    return root


def execute(
    app_name: str,
    *subcommands: typer.Typer | click.Command | Callable[..., Any],
    register_flags: FlagFunc | None = None,
    pre_run: PreRunFunc | None = None,
    args: Sequence[str] | None = None,
) -> NoReturn:
    """Run the application and terminate the process.

    Meant to be called once from the program's entry point. Exits with 0 on
    success and 1 when parsing, the pre-run hook or the command fails.
    """
    load_env()
    root = build_root_command(app_name, register_flags, pre_run)
    root.add_command(*subcommands)
    sys.exit(root.run(args))
