"""Configuration data structures and loading.

Two files are involved:
- The project config (``ciallo.toml`` in the working directory by default)
  maps command names to shell commands.
- The global config (``~/.config/ciallo/config.toml``) maps hook names to
  notification backend credentials.

Both are loaded eagerly at the CLI entry point into immutable dataclasses.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ciallo.core.errors import ConfigError

DEFAULT_PROJECT_CONFIG = "ciallo.toml"


@dataclass(frozen=True)
class Command:
    """A named shell invocation from the project config.

    Attributes:
        command: Shell command string, split on whitespace at execution time
        stdout: Pass stdout through and capture it (False discards it)
        stderr: Pass stderr through and capture it (False discards it)
        hooks: Hook names to notify, resolved against the global config
    """

    command: str
    stdout: bool = True
    stderr: bool = True
    hooks: tuple[str, ...] = ()


@dataclass(frozen=True)
class FeishuHook:
    """Feishu-style webhook target (tag ``feishu``)."""

    webhook_url: str


# Union of all notification backend variants. Add new hook dataclasses here
# and give them a parser in HOOK_PARSERS and a branch in the dispatcher.
Hook = FeishuHook


@dataclass(frozen=True)
class ProjectConfig:
    """In-memory representation of the project ``ciallo.toml``."""

    path: Path
    commands: dict[str, Command]


@dataclass(frozen=True)
class GlobalConfig:
    """In-memory representation of ``~/.config/ciallo/config.toml``."""

    path: Path
    hooks: dict[str, Hook]


def global_config_path() -> Path:
    """Get the path to the global config file.

    Returns:
        Path to config file (for error messages and debugging)
    """
    return Path.home() / ".config" / "ciallo" / "config.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}", path) from e
    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse config file {path}", path) from e


def _parse_command(name: str, raw: Any, path: Path) -> Command:
    if not isinstance(raw, dict):
        raise ConfigError(f"Command '{name}' in {path} must be a table", path)

    command = raw.get("command")
    if not isinstance(command, str):
        raise ConfigError(f"Command '{name}' in {path} is missing a 'command' string", path)

    flags: dict[str, bool] = {}
    for key in ("stdout", "stderr"):
        value = raw.get(key, True)
        if not isinstance(value, bool):
            raise ConfigError(
                f"Field '{key}' of command '{name}' in {path} must be a boolean", path
            )
        flags[key] = value

    hooks = raw.get("hooks", [])
    if not isinstance(hooks, list) or not all(isinstance(h, str) for h in hooks):
        raise ConfigError(
            f"Field 'hooks' of command '{name}' in {path} must be a list of strings", path
        )

    return Command(
        command=command,
        stdout=flags["stdout"],
        stderr=flags["stderr"],
        hooks=tuple(hooks),
    )


def load_project_config(path: Path) -> ProjectConfig:
    """Load the project config.

    Example config:
      [cmd.build]
      command = "cargo build --release"
      stderr = false
      hooks = ["team"]

    Args:
        path: Path to the project config file

    Returns:
        ProjectConfig with every command parsed

    Raises:
        ConfigError: If the file is missing, unreadable, or malformed
    """
    data = _read_toml(path)
    raw_commands = data.get("cmd")
    if not isinstance(raw_commands, dict):
        raise ConfigError(f"Missing [cmd] table in {path}", path)

    commands = {
        str(name): _parse_command(str(name), raw, path) for name, raw in raw_commands.items()
    }
    return ProjectConfig(path=path, commands=commands)


def _parse_feishu_hook(name: str, raw: Any, path: Path) -> FeishuHook:
    if not isinstance(raw, dict):
        raise ConfigError(f"Hook '{name}' in {path}: 'feishu' must be a table", path)
    url = raw.get("webhook_url")
    if not isinstance(url, str) or not url:
        raise ConfigError(f"Hook '{name}' in {path} is missing a 'webhook_url' string", path)
    return FeishuHook(webhook_url=url)


HOOK_PARSERS = {
    "feishu": _parse_feishu_hook,
}


def _parse_hook(name: str, raw: Any, path: Path) -> Hook:
    # Each hook is a table with exactly one key: the backend tag.
    if not isinstance(raw, dict) or len(raw) != 1:
        raise ConfigError(
            f"Hook '{name}' in {path} must be a table with exactly one backend key "
            f"(one of: {', '.join(sorted(HOOK_PARSERS))})",
            path,
        )
    ((tag, body),) = raw.items()
    parser = HOOK_PARSERS.get(tag)
    if parser is None:
        raise ConfigError(f"Hook '{name}' in {path} has unknown backend '{tag}'", path)
    return parser(name, body, path)


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load global config from ~/.config/ciallo/config.toml.

    A missing file is not an error: it yields an empty hook set.

    Args:
        path: Config file path (defaults to ~/.config/ciallo/config.toml)

    Returns:
        GlobalConfig instance with loaded hooks

    Raises:
        ConfigError: If the file exists but is unreadable or malformed
    """
    config_path = path if path is not None else global_config_path()

    if not config_path.exists():
        return GlobalConfig(path=config_path, hooks={})

    data = _read_toml(config_path)
    raw_hooks = data.get("hook", {})
    if not isinstance(raw_hooks, dict):
        raise ConfigError(f"[hook] in {config_path} must be a table", config_path)

    hooks = {str(name): _parse_hook(str(name), raw, config_path) for name, raw in raw_hooks.items()}
    return GlobalConfig(path=config_path, hooks=hooks)
