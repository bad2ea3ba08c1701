"""Workflow configuration: schema, flow presets, layered loading and saving.

Configuration is assembled once per session from explicit layers, later
layers winning field by field:

1. DEFAULT_CONFIG (built in)
2. the selected flow preset (FLOW_PRESETS)
3. ``[tool.branchflow]`` in ``<root>/pyproject.toml``
4. ``<root>/.branchflow.toml``
5. the ``--flow`` command-line override (flow selection only)

Nested tables (``hooks``, ``branches``, ``logs``) merge key by key; the
``long-lived`` and ``short-lived`` branch tables are replaced as a whole so a
user can drop branch types a preset defines.
"""

import copy
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import click
import tomlkit

from branchflow.cli.output import user_output
from branchflow.core.action_types import SEPARATOR_MARKER, ActionId
from branchflow.core.messages import t

CONFIG_FILE_NAME = ".branchflow.toml"

# Tables replaced wholesale rather than merged key by key
_REPLACED_TABLES = frozenset({"long-lived", "short-lived"})


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


@dataclass(frozen=True)
class LongLivedBranch:
    """A persistent branch role such as main or develop."""

    name: str
    protected: bool = False


@dataclass(frozen=True)
class ShortLivedBranch:
    """A branch type identified by name prefix, e.g. ``feature``."""

    base_on: str
    merge_to: str


@dataclass(frozen=True)
class BranchesConfig:
    main: str
    long_lived: dict[str, LongLivedBranch] = field(default_factory=dict)
    short_lived: dict[str, ShortLivedBranch] = field(default_factory=dict)
    infix: str = "/"

    @property
    def protected(self) -> tuple[str, ...]:
        """Long-lived branch keys marked protected, recomputed on every access."""
        return tuple(key for key, branch in self.long_lived.items() if branch.protected)


@dataclass(frozen=True)
class HooksConfig:
    pre: tuple[str, ...] = ()
    post: tuple[str, ...] = ()


@dataclass(frozen=True)
class LogsConfig:
    done: bool = True


@dataclass(frozen=True)
class WorkflowConfig:
    """Immutable branching convention for one session.

    Built once by build_workflow_config() and stored in FlowContext.
    """

    flow: str
    default_flow: str
    actions: tuple[str, ...]
    hooks: HooksConfig
    branches: BranchesConfig
    root: Path
    check_conflict_string: bool = True
    logs: LogsConfig = field(default_factory=LogsConfig)
    tag_prefix: str = ""


DEFAULT_CONFIG: dict[str, Any] = {
    "flow": "github-flow",
    "default": "github-flow",
    "actions": ["commit", "sync branch", "new branch", "switch-branch"],
    "hooks": {
        "pre": ["check", "status"],
        "post": ["setup", "helpers", "exit"],
    },
    "branches": {
        "main": "main",
        "long-lived": {},
        "short-lived": {},
        "infix": "/",
    },
    "checkConflictString": True,
    "tagPrefix": "v",
    "logs": {"DONE": True},
}

FLOW_PRESETS: dict[str, dict[str, Any]] = {
    "no-flow": {
        "actions": ["commit", "sync branch", "switch-branch", "rebase"],
        "branches": {
            "main": "main",
            "long-lived": {"main": {"name": "main", "protected": False}},
            "short-lived": {},
        },
    },
    "git-flow": {
        "actions": [
            "commit",
            "sync branch",
            "new branch",
            "switch-branch",
            "rebase",
            "release",
        ],
        "branches": {
            "main": "master",
            "long-lived": {
                "master": {"name": "master", "protected": True},
                "develop": {"name": "develop", "protected": True},
            },
            "short-lived": {
                "feature": {"baseOn": "develop", "mergeTo": "develop"},
                "bugfix": {"baseOn": "develop", "mergeTo": "develop"},
                "release": {"baseOn": "develop", "mergeTo": "master"},
                "hotfix": {"baseOn": "master", "mergeTo": "master"},
            },
        },
    },
    "github-flow": {
        "actions": ["commit", "sync branch", "new branch", "switch-branch", "release"],
        "branches": {
            "main": "main",
            "long-lived": {"main": {"name": "main", "protected": True}},
            "short-lived": {
                "feature": {"baseOn": "main", "mergeTo": "main"},
                "fix": {"baseOn": "main", "mergeTo": "main"},
            },
        },
    },
    "gitlab-flow": {
        "actions": ["commit", "sync branch", "new branch", "switch-branch", "release"],
        "branches": {
            "main": "main",
            "long-lived": {
                "main": {"name": "main", "protected": True},
                "pre-production": {"name": "pre-production", "protected": True},
                "production": {"name": "production", "protected": True},
            },
            "short-lived": {
                "feature": {"baseOn": "main", "mergeTo": "main"},
                "hotfix": {"baseOn": "main", "mergeTo": "main"},
            },
        },
    },
}


def merge_layers(*layers: dict[str, Any]) -> dict[str, Any]:
    """Merge config dicts left to right; later layers win.

    Nested dicts merge recursively except for the branch tables listed in
    _REPLACED_TABLES. Inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            existing = merged.get(key)
            mergeable = isinstance(value, dict) and isinstance(existing, dict)
            if mergeable and key not in _REPLACED_TABLES:
                merged[key] = merge_layers(existing, value)
            else:
                merged[key] = copy.deepcopy(value)
    return merged


def read_user_config(root: Path) -> dict[str, Any]:
    """Read user overrides from pyproject.toml and .branchflow.toml under root.

    Returns:
        Merged raw settings ({} when neither file configures branchflow)
    """
    layers: list[dict[str, Any]] = []

    pyproject_path = root / "pyproject.toml"
    if pyproject_path.exists():
        with pyproject_path.open("rb") as f:
            data = tomllib.load(f)
        section = data.get("tool", {}).get("branchflow")
        if section is not None:
            layers.append(section)

    config_path = root / CONFIG_FILE_NAME
    if config_path.exists():
        with config_path.open("rb") as f:
            layers.append(tomllib.load(f))

    return merge_layers(*layers)


def build_workflow_config(
    root: Path, user: dict[str, Any], *, flow_override: str | None = None
) -> WorkflowConfig:
    """Assemble and validate the session's WorkflowConfig.

    An unknown flow name is not fatal: a warning is printed and the configured
    default flow is used instead.

    Raises:
        ConfigError: If any field is malformed or names an unknown action
    """
    selection = merge_layers(DEFAULT_CONFIG, user)
    flow = flow_override or selection["flow"]
    default_flow = selection["default"]

    if default_flow not in FLOW_PRESETS:
        raise ConfigError(f"Default flow '{default_flow}' is not one of {sorted(FLOW_PRESETS)}")

    if flow not in FLOW_PRESETS:
        user_output(
            click.style(
                f"\n{t('status.flowNotFound', current=flow, default=default_flow)}\n",
                fg="yellow",
            )
        )
        flow = default_flow

    raw = merge_layers(DEFAULT_CONFIG, FLOW_PRESETS[flow], user)
    raw["flow"] = flow
    return _parse_config(raw, root)


def load_workflow_config(root: Path, *, flow_override: str | None = None) -> WorkflowConfig:
    """Read user config files under root and build the WorkflowConfig."""
    return build_workflow_config(root, read_user_config(root), flow_override=flow_override)


def _parse_config(raw: dict[str, Any], root: Path) -> WorkflowConfig:
    hooks = _require_table(raw, "hooks")
    logs = _require_table(raw, "logs")
    return WorkflowConfig(
        flow=raw["flow"],
        default_flow=_require_str(raw, "default"),
        actions=_parse_action_list(raw.get("actions"), "actions"),
        hooks=HooksConfig(
            pre=_parse_action_list(hooks.get("pre", []), "hooks.pre"),
            post=_parse_action_list(hooks.get("post", []), "hooks.post"),
        ),
        branches=_parse_branches(_require_table(raw, "branches")),
        root=root,
        check_conflict_string=_require_bool(raw, "checkConflictString"),
        logs=LogsConfig(done=_require_bool(logs, "DONE", where="logs.DONE")),
        tag_prefix=_require_str(raw, "tagPrefix", allow_empty=True),
    )


def _parse_action_list(value: Any, where: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ConfigError(f"'{where}' must be a list of action names")
    known = {a.value for a in ActionId}
    for name in value:
        if name == SEPARATOR_MARKER:
            continue
        if not isinstance(name, str) or name not in known:
            raise ConfigError(
                f"Unknown action '{name}' in '{where}'. Known actions: {sorted(known)}"
            )
    return tuple(value)


def _parse_branches(raw: dict[str, Any]) -> BranchesConfig:
    long_lived: dict[str, LongLivedBranch] = {}
    for key, entry in _require_table(raw, "long-lived", where="branches.long-lived").items():
        if not isinstance(entry, dict):
            raise ConfigError(f"'branches.long-lived.{key}' must be a table")
        protected = entry.get("protected", False)
        if not isinstance(protected, bool):
            raise ConfigError(f"'branches.long-lived.{key}.protected' must be a boolean")
        long_lived[key] = LongLivedBranch(name=str(entry.get("name", key)), protected=protected)

    short_lived: dict[str, ShortLivedBranch] = {}
    for prefix, entry in _require_table(raw, "short-lived", where="branches.short-lived").items():
        where = f"branches.short-lived.{prefix}"
        if not isinstance(entry, dict):
            raise ConfigError(f"'{where}' must be a table")
        short_lived[prefix] = ShortLivedBranch(
            base_on=_require_str(entry, "baseOn", where=f"{where}.baseOn"),
            merge_to=_require_str(entry, "mergeTo", where=f"{where}.mergeTo"),
        )

    return BranchesConfig(
        main=_require_str(raw, "main", where="branches.main"),
        long_lived=long_lived,
        short_lived=short_lived,
        infix=_require_str(raw, "infix", where="branches.infix"),
    )


def _require_table(raw: dict[str, Any], key: str, where: str | None = None) -> dict[str, Any]:
    value = raw.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{where or key}' must be a table")
    return value


def _require_str(
    raw: dict[str, Any], key: str, where: str | None = None, allow_empty: bool = False
) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or (not value and not allow_empty):
        raise ConfigError(f"'{where or key}' must be a non-empty string")
    return value


def _require_bool(raw: dict[str, Any], key: str, where: str | None = None) -> bool:
    value = raw.get(key)
    if not isinstance(value, bool):
        raise ConfigError(f"'{where or key}' must be a boolean")
    return value


def _config_to_raw(config: WorkflowConfig) -> dict[str, Any]:
    branches = config.branches
    return {
        "flow": config.flow,
        "default": config.default_flow,
        "actions": list(config.actions),
        "hooks": {"pre": list(config.hooks.pre), "post": list(config.hooks.post)},
        "branches": {
            "main": branches.main,
            "infix": branches.infix,
            "long-lived": {
                key: {"name": branch.name, "protected": branch.protected}
                for key, branch in branches.long_lived.items()
            },
            "short-lived": {
                prefix: {"baseOn": branch_type.base_on, "mergeTo": branch_type.merge_to}
                for prefix, branch_type in branches.short_lived.items()
            },
        },
        "checkConflictString": config.check_conflict_string,
        "tagPrefix": config.tag_prefix,
        "logs": {"DONE": config.logs.done},
    }


def _diff_layer(raw: dict[str, Any], baseline: dict[str, Any]) -> dict[str, Any]:
    """Keep only the values of raw that differ from baseline.

    Tables in _REPLACED_TABLES are compared whole, matching merge_layers().
    """
    diff: dict[str, Any] = {}
    for key, value in raw.items():
        base = baseline.get(key)
        if isinstance(value, dict) and isinstance(base, dict) and key not in _REPLACED_TABLES:
            nested = _diff_layer(value, base)
            if nested:
                diff[key] = nested
        elif value != base:
            diff[key] = value
    return diff


def config_to_toml(config: WorkflowConfig) -> str:
    """Serialize a WorkflowConfig to the .branchflow.toml format.

    Only ``flow`` and the values that differ from the defaults and that flow's
    preset are written, so selecting another flow later still applies its
    preset.
    """
    baseline = merge_layers(DEFAULT_CONFIG, FLOW_PRESETS[config.flow])
    overrides = _diff_layer(_config_to_raw(config), baseline)
    overrides.pop("flow", None)

    doc = tomlkit.document()
    doc["flow"] = config.flow
    for key, value in overrides.items():
        doc[key] = value
    return tomlkit.dumps(doc)


def save_workflow_config(config: WorkflowConfig, path: Path | None = None) -> Path:
    """Write config to path (default ``<root>/.branchflow.toml``) and return the path."""
    target = path or config.root / CONFIG_FILE_NAME
    target.write_text(config_to_toml(config), encoding="utf-8")
    return target
