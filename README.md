# lotar

Library pieces for a local task repository kept in plain YAML files next
to your code. The repository lives in a tasks directory (by default
`.tasks`), with a global `config.yml` and one folder per project prefix,
each of which may hold its own `config.yml` overriding the global one.

Requires Python 3.10 or later and PyYAML.

## Modules

- `lotar.config.types` — the enums `TaskStatus`, `TaskType` and
  `Priority`; the configuration dataclasses `ConfigurableField`,
  `StringConfigField`, `ProjectConfig`, `GlobalConfig`, `ResolvedConfig`
  and `ProjectTemplate`; and the `ConfigError` exceptions
  (`ConfigIOError`, `ConfigParseError`, `ConfigFileNotFoundError`).
- `lotar.config.templates` — the four built-in project templates.
- `lotar.config.manager` — loading, merging and writing configuration,
  and the `ConfigManager` class.
- `lotar.index` — the cross-project tag index `TaskIndex` and the
  `TaskFilter` used to query it.
- `lotar.project` — detection of the current project's name.
- `lotar.api_server` and `lotar.routes` — a path-prefix request router.
- `lotar.errors` — the `LotarError` exception hierarchy.

## Configuration

```python
from pathlib import Path
from lotar.config.manager import ConfigManager

manager = ConfigManager.for_tasks_dir(Path(".tasks"), ensure_config=False)
resolved = manager.get_project_config("AUTH")
print(resolved.server_port, resolved.default_priority)
```

Settings are resolved in this order, later entries winning:

1. built-in defaults (port 8080, states TODO / IN_PROGRESS / DONE,
   types FEATURE / BUG / CHORE, priorities LOW / MEDIUM / HIGH,
   wildcard categories and tags, default priority MEDIUM)
2. the global `config.yml` in the tasks directory
3. the home config file `~/.lotar`
4. the environment: `LOTAR_PORT`, `LOTAR_PROJECT`, `LOTAR_DEFAULT_ASSIGNEE`

When merging a file, only fields that differ from the built-in defaults
replace what is already there. Missing or unreadable files are skipped.
In the global file the default project prefix is stored under the key
`default_project`.

`get_project_config(name)` reads `<tasks dir>/<name>/config.yml`, if it
exists, and applies every field it sets on top of the resolved
configuration. With `ensure_config=True`, `ConfigManager.for_tasks_dir`
first writes a default global `config.yml` if there is none; its
`default_project` is set to the alphabetically first project folder that
already holds a `config.yml`, or left empty.
`set_default_prefix_if_empty(prefix, tasks_dir)` fills in that value
later, in memory and in the file, only while it is still empty.

The lower-level functions `load_config_file`, `load_home_config`,
`merge_global_config`, `apply_env_overrides`, `load_resolved_config`,
`ensure_global_config_exists`, `create_default_global_config` and
`auto_detect_prefix` are available from `lotar.config.manager` as well.

Categories and tags are `StringConfigField` values; a list containing `*`
is in wildcard mode (`has_wildcard()`), anything else is strict.

Enum members serialize to YAML by value (`Todo`, `InProgress`, `High`, …);
`TaskStatus.parse("IN_PROGRESS")` and the like accept user spellings.

### Templates

Four templates are built in — `default`, `simple`, `agile` and `kanban`.
`load_template` first looks for `src/config/templates/<name>.yml`
relative to the working directory and otherwise uses the built-in one;
an unknown name raises `ConfigFileNotFoundError`.

```python
from lotar.config.manager import apply_template_to_project, load_template

template = load_template("agile")
project_config = apply_template_to_project(template, "MyProject")
print(project_config.to_dict())
```

## Tag index

```python
from lotar.index import TaskFilter, TaskIndex

index = TaskIndex()
index.add_task_with_id("AUTH-1", ["backend", "security"], "AUTH/1.yml")
index.add_task_with_id("AUTH-2", ["frontend"], "AUTH/2.yml")

print(index.find_by_filter(TaskFilter(tags=["backend"])))  # ['AUTH-1']
```

`find_by_filter` intersects the ids for every tag in the filter and
returns an empty list when the filter names no tags; the other filter
fields are not applied by the index. `save_to_file(path)` writes the
index as YAML, `TaskIndex.load_from_file(path)` reads it back (an empty
index if the file is missing), and `TaskIndex.rebuild_from_storage(root)`
scans each non-hidden project folder for numbered task files such as
`AUTH/5.yml` and indexes their tags under ids such as `AUTH-5`.

## Project name detection

`lotar.project.detect_project_name()` returns, in order of preference,
the `LOTAR_PROJECT` environment variable, the `name` field of a
`Cargo.toml` in the working directory, the working directory's folder
name, or `"default"`. `get_project_path()` returns the working directory.

## Request routing

```python
from lotar.api_server import ApiServer
from lotar.routes import initialize

server = ApiServer()
initialize(server)
print(server.handle_request("/api/test"))    # {"result": "OK"}
print(server.handle_request("/missing"))     # 404 response text
```

Registered paths and request paths are compared lower-cased with trailing
slashes removed; the longest registered path that prefixes the request
wins, and its handler receives the original request path.

## What this package does not do

It is a library only. It installs no command-line program, and it has no
task storage: it does not create, edit, list, search or delete task
files, and it does not turn a `TaskFilter` into search results beyond the
tag lookup above. `ApiServer` only maps a path to a response string; it
does not listen on a network port. There is no scanner for TODO comments
in source files.