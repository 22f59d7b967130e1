"""Loading, merging and persisting of global and per-project configuration."""

from __future__ import annotations

import copy
import os
import re
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from lotar.config import templates
from lotar.config.types import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigIOError,
    ConfigParseError,
    GlobalConfig,
    ProjectConfig,
    ProjectTemplate,
    ResolvedConfig,
)

CONFIG_FILE_NAME = "config.yml"
HOME_CONFIG_NAME = ".lotar"
DEFAULT_TASKS_DIR = Path(".tasks")
TEMPLATES_DIR = Path("src") / "config" / "templates"
BUILTIN_TEMPLATES = ("default", "simple", "agile", "kanban")

_BUILTIN_FACTORIES: dict[str, Callable[[], ProjectTemplate]] = {
    "default": templates.create_default_template,
    "simple": templates.create_simple_template,
    "agile": templates.create_agile_template,
    "kanban": templates.create_kanban_template,
}

_PORT_TEXT = re.compile(r"\+?[0-9]+")

PrefixFunction = Callable[[str], str]
PathLike = "str | os.PathLike[str]"


def _describe(exc: BaseException) -> str:
    return exc.detail if isinstance(exc, ConfigError) else str(exc)


def _global_config_path(tasks_dir: str | os.PathLike[str] | None) -> Path:
    base = DEFAULT_TASKS_DIR if tasks_dir is None else Path(tasks_dir)
    return base / CONFIG_FILE_NAME


def _dump_yaml(data: Mapping[str, Any]) -> str:
    return yaml.safe_dump(dict(data), sort_keys=False, allow_unicode=True)


def _read_text(path: Path, failure: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigIOError(f"{failure}: {exc}") from exc


def _write_text(path: Path, content: str, failure: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ConfigIOError(f"{failure}: {exc}") from exc


def _parse_global(content: str, failure: str) -> GlobalConfig:
    try:
        return GlobalConfig.from_dict(yaml.safe_load(content))
    except (yaml.YAMLError, ConfigParseError) as exc:
        raise ConfigParseError(f"{failure}: {_describe(exc)}") from exc


def load_config_file(path: str | os.PathLike[str]) -> GlobalConfig:
    """Read a global-style configuration file."""
    target = Path(path)
    if not target.exists():
        raise ConfigFileNotFoundError(str(target))
    content = _read_text(target, "Failed to read config")
    return _parse_global(content, "Failed to parse config")


def _home_config_path() -> Path:
    try:
        return Path.home() / HOME_CONFIG_NAME
    except (RuntimeError, KeyError) as exc:
        raise ConfigIOError("Home directory not found") from exc


def load_home_config(home_config_path: str | os.PathLike[str] | None = None) -> GlobalConfig:
    """Read the per-user configuration, from ~/.lotar unless another path is given."""
    path = _home_config_path() if home_config_path is None else Path(home_config_path)
    return load_config_file(path)


def merge_global_config(base: GlobalConfig, override: GlobalConfig) -> None:
    """Copy into base every field of override that differs from the built-in default."""
    defaults = GlobalConfig()
    if override.server_port != defaults.server_port:
        base.server_port = override.server_port
    if override.default_prefix != defaults.default_prefix:
        base.default_prefix = override.default_prefix
    for name in ("issue_states", "issue_types", "issue_priorities", "categories", "tags"):
        value = getattr(override, name)
        if value.values != getattr(defaults, name).values:
            setattr(base, name, copy.deepcopy(value))
    if override.default_assignee is not None:
        base.default_assignee = override.default_assignee
    if override.default_priority != defaults.default_priority:
        base.default_priority = override.default_priority


def apply_env_overrides(
    config: GlobalConfig,
    environ: Mapping[str, str] | None = None,
    prefix_for: PrefixFunction | None = None,
) -> None:
    """Apply LOTAR_PORT, LOTAR_PROJECT and LOTAR_DEFAULT_ASSIGNEE from the environment."""
    env = os.environ if environ is None else environ
    to_prefix = prefix_for or (lambda name: name)

    port = env.get("LOTAR_PORT")
    if port is not None and _PORT_TEXT.fullmatch(port):
        number = int(port)
        if number <= 65535:
            config.server_port = number

    project = env.get("LOTAR_PROJECT")
    if project is not None:
        config.default_prefix = to_prefix(project)

    assignee = env.get("LOTAR_DEFAULT_ASSIGNEE")
    if assignee is not None:
        config.default_assignee = assignee


def load_resolved_config(
    tasks_dir: str | os.PathLike[str] | None = None,
    home_config_path: str | os.PathLike[str] | None = None,
    ensure_config_exists: bool = False,
    prefix_for: PrefixFunction | None = None,
) -> ResolvedConfig:
    """Merge defaults, the global file, the home file and the environment, in that order."""
    config = GlobalConfig()
    if ensure_config_exists:
        ensure_global_config_exists(tasks_dir)

    try:
        merge_global_config(config, load_config_file(_global_config_path(tasks_dir)))
    except ConfigError:
        pass

    try:
        merge_global_config(config, load_home_config(home_config_path))
    except ConfigError:
        pass

    apply_env_overrides(config, prefix_for=prefix_for)
    return ResolvedConfig.from_global(config)


def ensure_global_config_exists(tasks_dir: str | os.PathLike[str] | None = None) -> None:
    """Create the global configuration file if it is missing."""
    if not _global_config_path(tasks_dir).exists():
        create_default_global_config(tasks_dir)


def create_default_global_config(tasks_dir: str | os.PathLike[str] | None = None) -> None:
    """Write a default global configuration, with a prefix detected from existing projects."""
    config_path = _global_config_path(tasks_dir)
    parent = config_path.parent
    if not parent.exists():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigIOError(f"Failed to create tasks directory: {exc}") from exc

    default_config = GlobalConfig()
    if tasks_dir is not None:
        detected = auto_detect_prefix(tasks_dir)
        if detected is not None:
            default_config.default_prefix = detected

    _write_text(
        config_path,
        _dump_yaml(default_config.to_dict()),
        "Failed to write default global config",
    )
    print(f"Created default global configuration at: {config_path}")


def auto_detect_prefix(tasks_dir: str | os.PathLike[str]) -> str | None:
    """Return the alphabetically first project directory that holds a config file."""
    try:
        entries = list(Path(tasks_dir).iterdir())
    except OSError:
        return None
    prefixes = sorted(
        entry.name
        for entry in entries
        if entry.is_dir()
        and not entry.name.startswith(".")
        and (entry / CONFIG_FILE_NAME).exists()
    )
    return prefixes[0] if prefixes else None


def load_template(template_name: str) -> ProjectTemplate:
    """Load a template from the templates directory, falling back to the built-in ones."""
    template_path = TEMPLATES_DIR / f"{template_name}.yml"
    if template_path.exists():
        content = _read_text(template_path, "Failed to read template file")
        try:
            return ProjectTemplate.from_dict(yaml.safe_load(content))
        except (yaml.YAMLError, ConfigParseError) as exc:
            raise ConfigParseError(f"Failed to parse template: {_describe(exc)}") from exc

    factory = _BUILTIN_FACTORIES.get(template_name)
    if factory is None:
        raise ConfigFileNotFoundError(
            f"Template '{template_name}' not found at \"{template_path}\""
        )
    return factory()


def list_available_templates() -> list[str]:
    """Return the names of the available templates."""
    if not TEMPLATES_DIR.exists():
        return list(BUILTIN_TEMPLATES)
    try:
        entries = list(TEMPLATES_DIR.iterdir())
    except OSError as exc:
        raise ConfigIOError(f"Failed to read templates directory: {exc}") from exc
    names = [entry.stem for entry in entries if entry.suffix == ".yml" and entry.stem]
    if not names:
        names = list(BUILTIN_TEMPLATES)
    return sorted(names)


def apply_template_to_project(template: ProjectTemplate, project_name: str) -> ProjectConfig:
    """Return a copy of the template's configuration named for the given project."""
    config = copy.deepcopy(template.config)
    config.project_name = project_name
    return config


def _load_project_config(tasks_dir: Path, project_name: str) -> ProjectConfig:
    path = tasks_dir / project_name / CONFIG_FILE_NAME
    if not path.exists():
        return ProjectConfig(project_name)
    content = _read_text(path, "Failed to read project config")
    try:
        return ProjectConfig.from_dict(yaml.safe_load(content))
    except (yaml.YAMLError, ConfigParseError) as exc:
        raise ConfigParseError(f"Failed to parse project config: {_describe(exc)}") from exc


class ConfigManager:
    """Holds a resolved configuration and derives per-project views of it."""

    def __init__(self, resolved_config: ResolvedConfig) -> None:
        self.resolved_config = resolved_config
        self._tasks_dir = DEFAULT_TASKS_DIR

    @classmethod
    def from_environment(cls) -> ConfigManager:
        """Resolve configuration using the default tasks directory."""
        return cls(load_resolved_config(None))

    @classmethod
    def for_tasks_dir(
        cls, tasks_dir: str | os.PathLike[str], ensure_config: bool = False
    ) -> ConfigManager:
        """Resolve configuration for a tasks directory, optionally creating its global file."""
        manager = cls(load_resolved_config(tasks_dir, ensure_config_exists=ensure_config))
        manager._tasks_dir = Path(tasks_dir)
        return manager

    def get_project_config(self, project_name: str) -> ResolvedConfig:
        """Return the resolved configuration with the project's overrides applied."""
        project = _load_project_config(self._tasks_dir, project_name)
        resolved = copy.deepcopy(self.resolved_config)
        for name in ("issue_states", "issue_types", "issue_priorities", "categories", "tags"):
            value = getattr(project, name)
            if value is not None:
                setattr(resolved, name, value)
        if project.default_assignee is not None:
            resolved.default_assignee = project.default_assignee
        if project.default_priority is not None:
            resolved.default_priority = project.default_priority
        return resolved

    def set_default_prefix_if_empty(self, prefix: str, tasks_dir: str | os.PathLike[str]) -> None:
        """Record prefix as the default project when none has been set yet."""
        if self.resolved_config.default_prefix:
            return
        self.resolved_config.default_prefix = prefix

        config_path = Path(tasks_dir) / CONFIG_FILE_NAME
        if not config_path.exists():
            return
        content = _read_text(config_path, "Failed to read global config")
        global_config = _parse_global(content, "Failed to parse global config")
        if global_config.default_prefix:
            return
        global_config.default_prefix = prefix
        _write_text(
            config_path,
            _dump_yaml(global_config.to_dict()),
            "Failed to write global config",
        )