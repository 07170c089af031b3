"""Resolve a command name and its hook references against loaded configs."""

from dataclasses import dataclass

from ciallo.core.config import Command, GlobalConfig, Hook, ProjectConfig
from ciallo.core.errors import CommandNotFound, HookNotFound


@dataclass(frozen=True)
class NamedHook:
    """A resolved hook together with the name it was configured under."""

    name: str
    hook: Hook


@dataclass(frozen=True)
class ResolvedCommand:
    """Command definition plus its hooks, in the order the command lists them."""

    name: str
    command: Command
    hooks: tuple[NamedHook, ...]


def resolve_command(
    project_config: ProjectConfig,
    global_config: GlobalConfig,
    name: str,
) -> ResolvedCommand:
    """Look up a command and every hook it references.

    Raises:
        CommandNotFound: If the project config has no command called ``name``
        HookNotFound: If any referenced hook is missing from the global config
    """
    command = project_config.commands.get(name)
    if command is None:
        raise CommandNotFound(name, project_config.path)

    hooks: list[NamedHook] = []
    for hook_name in command.hooks:
        hook = global_config.hooks.get(hook_name)
        if hook is None:
            raise HookNotFound(hook_name, global_config.path)
        hooks.append(NamedHook(name=hook_name, hook=hook))

    return ResolvedCommand(name=name, command=command, hooks=tuple(hooks))
