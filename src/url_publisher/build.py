from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EnvironmentContributingAction(Protocol):
    def build_env_vars(self, env: MutableMapping[str, str]) -> None:
        """Merge this action's variables into a build environment."""


@dataclass(frozen=True)
class EnvVarAction:
    """Build action that contributes one environment variable."""

    name: str
    value: str

    def build_env_vars(self, env: MutableMapping[str, str]) -> None:
        env[self.name] = self.value


@dataclass
class BuildContext:
    """
    The slice of a host build that a notifier step touches.

    ``env`` is the build-scoped environment visible to later steps and
    ``log`` is the console the host shows for the build.
    """

    name: str = "build"
    result: str = "SUCCESS"
    env: dict[str, str] = field(default_factory=dict)
    log: list[str] = field(default_factory=list)
    actions: list[Any] = field(default_factory=list)

    def add_action(self, action: Any) -> None:
        self.actions.append(action)
        if isinstance(action, EnvironmentContributingAction):
            action.build_env_vars(self.env)

    def write_log(self, lines: list[str]) -> None:
        self.log.extend(lines)
