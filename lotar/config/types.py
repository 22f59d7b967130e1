"""Configuration data types and their mapping (YAML-ready) representations."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

WILDCARD = "*"
DEFAULT_SERVER_PORT = 8080


class _Choice(Enum):
    """Enum whose value is its serialized name and whose label is its CLI spelling."""

    @property
    def label(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, text: str):
        """Parse a user-supplied name such as 'IN_PROGRESS', 'in-progress' or 'InProgress'."""
        key = text.strip().upper().replace("-", "_").replace(" ", "_")
        for member in cls:
            if key in (member.name, member.value.upper()):
                return member
        raise ValueError(f"Invalid {cls.__name__}: '{text}'")


class TaskStatus(_Choice):
    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    VERIFY = "Verify"
    BLOCKED = "Blocked"
    DONE = "Done"


class TaskType(_Choice):
    FEATURE = "Feature"
    BUG = "Bug"
    EPIC = "Epic"
    SPIKE = "Spike"
    CHORE = "Chore"


class Priority(_Choice):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class ConfigError(Exception):
    """Base class for configuration errors."""

    label = "Config error"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"{self.label}: {self.detail}"


class ConfigIOError(ConfigError):
    label = "IO Error"


class ConfigParseError(ConfigError):
    label = "Parse Error"


class ConfigFileNotFoundError(ConfigError):
    label = "Config file not found"


T = TypeVar("T", bound=_Choice)
E = TypeVar("E", bound=_Choice)


@dataclass
class ConfigurableField(Generic[T]):
    """A list of allowed enum values."""

    values: list[T]

    def to_dict(self) -> dict[str, Any]:
        return {"values": [value.value for value in self.values]}


@dataclass
class StringConfigField:
    """A list of allowed strings; '*' allows any value."""

    values: list[str]

    @classmethod
    def new_wildcard(cls) -> StringConfigField:
        return cls([WILDCARD])

    @classmethod
    def new_strict(cls, values) -> StringConfigField:
        return cls(list(values))

    def has_wildcard(self) -> bool:
        return WILDCARD in self.values

    def get_suggestions(self) -> list[str]:
        return [value for value in self.values if value != WILDCARD]

    def to_dict(self) -> dict[str, Any]:
        return {"values": list(self.values)}


def _mapping(data: Any, where: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigParseError(f"{where}: expected a mapping")
    return data


def _string(raw: Any, where: str) -> str:
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise ConfigParseError(f"{where}: expected a string")
    return str(raw)


def _port(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or not 0 <= raw <= 65535:
        raise ConfigParseError(f"server_port: invalid port {raw!r}")
    return raw


def _enum_value(enum_cls: type[E], raw: Any, where: str) -> E:
    if isinstance(raw, str):
        try:
            return enum_cls(raw)
        except ValueError:
            pass
    raise ConfigParseError(f"{where}: unknown {enum_cls.__name__} variant {raw!r}")


def _values_list(data: Any, where: str) -> list[Any]:
    mapping = _mapping(data, where)
    if data is None or "values" not in mapping:
        raise ConfigParseError(f"{where}: missing field 'values'")
    values = mapping["values"]
    if not isinstance(values, list):
        raise ConfigParseError(f"{where}: 'values' must be a list")
    return values


def _enum_field(enum_cls: type[E], data: Any, where: str) -> ConfigurableField[E]:
    return ConfigurableField([_enum_value(enum_cls, item, where) for item in _values_list(data, where)])


def _string_field(data: Any, where: str) -> StringConfigField:
    return StringConfigField([_string(item, where) for item in _values_list(data, where)])


def _default_issue_states() -> ConfigurableField[TaskStatus]:
    return ConfigurableField([TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE])


def _default_issue_types() -> ConfigurableField[TaskType]:
    return ConfigurableField([TaskType.FEATURE, TaskType.BUG, TaskType.CHORE])


def _default_issue_priorities() -> ConfigurableField[Priority]:
    return ConfigurableField([Priority.LOW, Priority.MEDIUM, Priority.HIGH])


@dataclass
class ProjectConfig:
    """Per-project overrides; unset fields inherit from the global configuration."""

    project_name: str
    issue_states: ConfigurableField[TaskStatus] | None = None
    issue_types: ConfigurableField[TaskType] | None = None
    issue_priorities: ConfigurableField[Priority] | None = None
    categories: StringConfigField | None = None
    tags: StringConfigField | None = None
    default_assignee: str | None = None
    default_priority: Priority | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"project_name": self.project_name}
        for name in ("issue_states", "issue_types", "issue_priorities", "categories", "tags"):
            value = getattr(self, name)
            if value is not None:
                result[name] = value.to_dict()
        if self.default_assignee is not None:
            result["default_assignee"] = self.default_assignee
        if self.default_priority is not None:
            result["default_priority"] = self.default_priority.value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> ProjectConfig:
        mapping = _mapping(data, "project config")
        if "project_name" not in mapping:
            raise ConfigParseError("project config: missing field 'project_name'")
        config = cls(_string(mapping["project_name"], "project_name"))

        def present(key: str) -> Any:
            return mapping.get(key)

        if present("issue_states") is not None:
            config.issue_states = _enum_field(TaskStatus, mapping["issue_states"], "issue_states")
        if present("issue_types") is not None:
            config.issue_types = _enum_field(TaskType, mapping["issue_types"], "issue_types")
        if present("issue_priorities") is not None:
            config.issue_priorities = _enum_field(
                Priority, mapping["issue_priorities"], "issue_priorities"
            )
        if present("categories") is not None:
            config.categories = _string_field(mapping["categories"], "categories")
        if present("tags") is not None:
            config.tags = _string_field(mapping["tags"], "tags")
        if present("default_assignee") is not None:
            config.default_assignee = _string(mapping["default_assignee"], "default_assignee")
        if present("default_priority") is not None:
            config.default_priority = _enum_value(
                Priority, mapping["default_priority"], "default_priority"
            )
        return config


@dataclass
class GlobalConfig:
    """Repository-wide configuration; serialized with 'default_project' for the prefix."""

    server_port: int = DEFAULT_SERVER_PORT
    default_prefix: str = ""
    issue_states: ConfigurableField[TaskStatus] = field(default_factory=_default_issue_states)
    issue_types: ConfigurableField[TaskType] = field(default_factory=_default_issue_types)
    issue_priorities: ConfigurableField[Priority] = field(default_factory=_default_issue_priorities)
    categories: StringConfigField = field(default_factory=StringConfigField.new_wildcard)
    tags: StringConfigField = field(default_factory=StringConfigField.new_wildcard)
    default_assignee: str | None = None
    default_priority: Priority = Priority.MEDIUM

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "server_port": self.server_port,
            "default_project": self.default_prefix,
            "issue_states": self.issue_states.to_dict(),
            "issue_types": self.issue_types.to_dict(),
            "issue_priorities": self.issue_priorities.to_dict(),
            "categories": self.categories.to_dict(),
            "tags": self.tags.to_dict(),
        }
        if self.default_assignee is not None:
            result["default_assignee"] = self.default_assignee
        result["default_priority"] = self.default_priority.value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> GlobalConfig:
        mapping = _mapping(data, "global config")
        config = cls()
        if "server_port" in mapping:
            config.server_port = _port(mapping["server_port"])
        if "default_project" in mapping:
            config.default_prefix = _string(mapping["default_project"], "default_project")
        if "issue_states" in mapping:
            config.issue_states = _enum_field(TaskStatus, mapping["issue_states"], "issue_states")
        if "issue_types" in mapping:
            config.issue_types = _enum_field(TaskType, mapping["issue_types"], "issue_types")
        if "issue_priorities" in mapping:
            config.issue_priorities = _enum_field(
                Priority, mapping["issue_priorities"], "issue_priorities"
            )
        if "categories" in mapping:
            config.categories = _string_field(mapping["categories"], "categories")
        if "tags" in mapping:
            config.tags = _string_field(mapping["tags"], "tags")
        if mapping.get("default_assignee") is not None:
            config.default_assignee = _string(mapping["default_assignee"], "default_assignee")
        if "default_priority" in mapping:
            config.default_priority = _enum_value(
                Priority, mapping["default_priority"], "default_priority"
            )
        return config


@dataclass
class ResolvedConfig:
    """The effective configuration after all sources are merged."""

    server_port: int
    default_prefix: str
    issue_states: ConfigurableField[TaskStatus]
    issue_types: ConfigurableField[TaskType]
    issue_priorities: ConfigurableField[Priority]
    categories: StringConfigField
    tags: StringConfigField
    default_assignee: str | None
    default_priority: Priority

    @classmethod
    def from_global(cls, global_config: GlobalConfig) -> ResolvedConfig:
        source = copy.deepcopy(global_config)
        return cls(
            server_port=source.server_port,
            default_prefix=source.default_prefix,
            issue_states=source.issue_states,
            issue_types=source.issue_types,
            issue_priorities=source.issue_priorities,
            categories=source.categories,
            tags=source.tags,
            default_assignee=source.default_assignee,
            default_priority=source.default_priority,
        )


@dataclass
class ProjectTemplate:
    """A named project configuration used to initialise new projects."""

    name: str
    description: str
    config: ProjectConfig

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "config": self.config.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> ProjectTemplate:
        mapping = _mapping(data, "template")
        for key in ("name", "description", "config"):
            if key not in mapping:
                raise ConfigParseError(f"template: missing field '{key}'")
        return cls(
            name=_string(mapping["name"], "name"),
            description=_string(mapping["description"], "description"),
            config=ProjectConfig.from_dict(mapping["config"]),
        )