"""Built-in project configuration templates."""

from __future__ import annotations

from lotar.config.types import (
    ConfigurableField,
    Priority,
    ProjectConfig,
    ProjectTemplate,
    StringConfigField,
    TaskStatus,
    TaskType,
)

PROJECT_NAME_PLACEHOLDER = "{{project_name}}"


def _config(
    categories: StringConfigField,
    states: list[TaskStatus],
    types: list[TaskType],
    priorities: list[Priority],
) -> ProjectConfig:
    return ProjectConfig(
        project_name=PROJECT_NAME_PLACEHOLDER,
        issue_states=ConfigurableField(states),
        issue_types=ConfigurableField(types),
        issue_priorities=ConfigurableField(priorities),
        categories=categories,
        tags=StringConfigField.new_wildcard(),
        default_assignee=None,
        default_priority=Priority.MEDIUM,
    )


def create_default_template() -> ProjectTemplate:
    """Return the default project template."""
    return ProjectTemplate(
        name="default",
        description="Basic project template with standard task categories",
        config=_config(
            StringConfigField.new_wildcard(),
            [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE],
            [TaskType.FEATURE, TaskType.BUG, TaskType.CHORE],
            [Priority.LOW, Priority.MEDIUM, Priority.HIGH],
        ),
    )


def create_simple_template() -> ProjectTemplate:
    """Return the minimal project template."""
    return ProjectTemplate(
        name="simple",
        description="Minimal project template with basic task management",
        config=_config(
            StringConfigField.new_strict(["frontend", "backend", "general"]),
            [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.DONE],
            [TaskType.FEATURE],
            [Priority.MEDIUM],
        ),
    )


def create_agile_template() -> ProjectTemplate:
    """Return the agile development template."""
    return ProjectTemplate(
        name="agile",
        description="Agile development template with sprints and story points",
        config=_config(
            StringConfigField.new_strict(
                ["frontend", "backend", "testing", "documentation", "devops"]
            ),
            [TaskStatus.TODO, TaskStatus.IN_PROGRESS, TaskStatus.VERIFY, TaskStatus.DONE],
            [TaskType.FEATURE, TaskType.BUG, TaskType.EPIC],
            [Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.CRITICAL],
        ),
    )


def create_kanban_template() -> ProjectTemplate:
    """Return the kanban board template."""
    return ProjectTemplate(
        name="kanban",
        description="Kanban board template with workflow stages",
        config=_config(
            StringConfigField.new_wildcard(),
            [
                TaskStatus.TODO,
                TaskStatus.IN_PROGRESS,
                TaskStatus.VERIFY,
                TaskStatus.BLOCKED,
                TaskStatus.DONE,
            ],
            [TaskType.FEATURE, TaskType.BUG, TaskType.CHORE],
            [Priority.LOW, Priority.MEDIUM, Priority.HIGH],
        ),
    )