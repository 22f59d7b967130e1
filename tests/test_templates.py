import pytest
import yaml

from lotar.config.templates import (
    PROJECT_NAME_PLACEHOLDER,
    create_agile_template,
    create_default_template,
    create_kanban_template,
    create_simple_template,
)
from lotar.config.types import Priority, ProjectTemplate, TaskStatus, TaskType

ALL = [
    create_default_template,
    create_simple_template,
    create_agile_template,
    create_kanban_template,
]


def test_default_template_description():
    template = create_default_template()
    assert template.name == "default"
    assert template.description.startswith("Basic project template")


def test_simple_template_contents():
    template = create_simple_template()
    assert template.name == "simple"
    assert template.config.categories.values == ["frontend", "backend", "general"]
    assert template.config.issue_types.values == [TaskType.FEATURE]
    assert template.config.issue_priorities.values == [Priority.MEDIUM]


def test_simple_template_serialized_states():
    dumped = yaml.safe_dump(create_simple_template().config.to_dict())
    assert "issue_states:" in dumped
    for name in ("Todo", "InProgress", "Done"):
        assert name in dumped


def test_agile_template_has_epic():
    template = create_agile_template()
    assert TaskType.EPIC in template.config.issue_types.values
    dumped = yaml.safe_dump(template.config.to_dict())
    assert "issue_types:" in dumped
    assert "Epic" in dumped
    assert template.config.issue_priorities.values[-1] is Priority.CRITICAL


def test_kanban_template_states():
    states = create_kanban_template().config.issue_states.values
    assert states == [
        TaskStatus.TODO,
        TaskStatus.IN_PROGRESS,
        TaskStatus.VERIFY,
        TaskStatus.BLOCKED,
        TaskStatus.DONE,
    ]


def test_common_fields():
    configs = [
        create_default_template().config,
        create_simple_template().config,
        create_agile_template().config,
        create_kanban_template().config,
    ]
    for config in configs:
        assert config.project_name == PROJECT_NAME_PLACEHOLDER
        assert config.tags.has_wildcard()
        assert config.default_priority is Priority.MEDIUM
        assert config.default_assignee is None


@pytest.mark.parametrize("factory", ALL)
def test_round_trip_through_dict(factory):
    template = factory()
    assert ProjectTemplate.from_dict(template.to_dict()) == template


def test_factories_return_independent_objects():
    first = create_default_template()
    first.config.categories.values.append("extra")
    assert create_default_template().config.categories.values == ["*"]