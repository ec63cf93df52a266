"""Command tree: groups, leaf commands and name resolution.

The registry is populated once during start-up, then sealed. After sealing it
is only read, so lookups need no locking.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any

from azmcp.classifier import ErrorClassificationRule
from azmcp.options import (
    OptionContributor,
    OptionDefinition,
    Validator,
    compose_options,
)

SEPARATOR = "_"
ROOT_NAME = "azmcp"

Handler = Callable[..., Any]


@dataclass(frozen=True)
class ToolAnnotations:
    """Behavioral hints advertised for a leaf command."""

    destructive: bool = False
    read_only: bool = True
    idempotent: bool = True
    open_world: bool = False


@dataclass(frozen=True)
class CommandLeaf:
    """Smallest invocable unit; maps one-to-one onto a discoverable tool.

    Attributes:
        name: Leaf name within its group, e.g. ``list``.
        description: Human-readable description of the command.
        handler: Callable receiving ``(context, args)``; may be async.
        title: Short display title.
        options: Options declared by the leaf itself.
        contributors: Option contributors, ancestor first.
        validators: Leaf-specific cross-field validators.
        error_rules: Leaf-specific error classification rules.
        hidden: Whether the leaf is left out of discovery listings.
        annotations: Behavioral hints for tool clients.
        full_name: Path-qualified unique name, assigned at registration.

    """

    name: str
    description: str
    handler: Handler
    title: str = ""
    options: tuple[OptionDefinition, ...] = ()
    contributors: tuple[OptionContributor, ...] = ()
    validators: tuple[Validator, ...] = ()
    error_rules: tuple[ErrorClassificationRule, ...] = ()
    hidden: bool = False
    annotations: ToolAnnotations = ToolAnnotations()
    full_name: str = ""
    option_model: tuple[OptionDefinition, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Compose the option model, rejecting duplicate option names."""
        object.__setattr__(
            self, "option_model", compose_options(self.contributors, self.options)
        )

    @property
    def all_validators(self) -> tuple[Validator, ...]:
        """Contributor validators in declaration order, then the leaf's own."""
        return (
            *(v for contributor in self.contributors for v in contributor.validators),
            *self.validators,
        )

    def rule_families(self) -> list[tuple[ErrorClassificationRule, ...]]:
        """Rule lists ordered from the leaf itself out to its first ancestor."""
        return [
            self.error_rules,
            *(contributor.error_rules for contributor in reversed(self.contributors)),
        ]


@dataclass
class CommandGroup:
    """Named node holding subgroups and leaf commands."""

    name: str
    description: str = ""
    groups: dict[str, CommandGroup] = field(default_factory=dict)
    leaves: dict[str, CommandLeaf] = field(default_factory=dict)


class CommandRegistry:
    """Tree of command groups with a flat index keyed by full name."""

    def __init__(
        self,
        root_name: str = ROOT_NAME,
        description: str = "Azure MCP Server",
    ) -> None:
        """Create an empty registry under a root group."""
        self.root = CommandGroup(root_name, description)
        self._index: dict[str, CommandLeaf] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        """Return whether the registry accepts further registrations."""
        return self._sealed

    def seal(self) -> CommandRegistry:
        """Freeze the registry; later registrations raise ``RuntimeError``."""
        self._sealed = True
        return self

    def _ensure_open(self) -> None:
        if self._sealed:
            raise RuntimeError("Command registry is sealed")

    def add_group(self, path: str, description: str = "") -> CommandGroup:
        """Create (or describe) the group at a dotted ``path``."""
        self._ensure_open()
        group = self.root
        for segment in _segments(path):
            group = group.groups.setdefault(segment, CommandGroup(segment))
        if description:
            group.description = description
        return group

    def register(self, path: str, leaf: CommandLeaf) -> CommandLeaf:
        """Register ``leaf`` under the group at dotted ``path``.

        Args:
            path: Dotted group path such as ``"storage.blob"``.
            leaf: Leaf command to register.

        Raises:
            ValueError: If the name collides with an existing leaf or group.
            RuntimeError: If the registry is sealed.

        Returns:
            The registered leaf with its ``full_name`` assigned.

        """
        self._ensure_open()
        group = self.add_group(path)
        segments = [self.root.name, *_segments(path), leaf.name]
        full_name = SEPARATOR.join(segments)
        if leaf.name in group.leaves or full_name in self._index:
            raise ValueError(f"Command '{full_name}' is already registered")
        if leaf.name in group.groups:
            raise ValueError(f"Command '{full_name}' collides with a group name")
        registered = replace(leaf, full_name=full_name)
        group.leaves[leaf.name] = registered
        self._index[full_name] = registered
        return registered

    def resolve(self, full_name: str) -> CommandLeaf | None:
        """Look up a leaf by its exact full name, hidden leaves included."""
        return self._index.get(full_name)

    def resolve_path(self, words: Sequence[str]) -> CommandLeaf | None:
        """Resolve literal command words such as ``["storage", "blob", "list"]``."""
        if not words:
            return None
        group = self.find_group(words[:-1])
        if group is None:
            return None
        return group.leaves.get(words[-1])

    def find_group(self, words: Sequence[str]) -> CommandGroup | None:
        """Return the group reached by following ``words`` from the root."""
        group: CommandGroup | None = self.root
        for word in words:
            if group is None:
                return None
            group = group.groups.get(word)
        return group

    def all_leaves(self) -> list[CommandLeaf]:
        """Return every leaf sorted by full name."""
        return [self._index[name] for name in sorted(self._index)]

    def list_visible(self) -> list[CommandLeaf]:
        """Return non-hidden leaves sorted by full name."""
        return [leaf for leaf in self.all_leaves() if not leaf.hidden]

    def group_commands(self, namespaces: Iterable[str]) -> list[CommandLeaf]:
        """Return leaves beneath the named top-level groups.

        Raises:
            KeyError: If none of the namespaces names a top-level group.

        """
        wanted = {name.lower() for name in namespaces}
        prefixes = [
            f"{self.root.name}{SEPARATOR}{group.name}{SEPARATOR}"
            for group in self.root.groups.values()
            if group.name.lower() in wanted
        ]
        if not prefixes:
            raise KeyError(
                f"No valid group in '[{','.join(sorted(wanted))}]' found in "
                "command groups."
            )
        return [
            leaf
            for leaf in self.all_leaves()
            if any(leaf.full_name.startswith(prefix) for prefix in prefixes)
        ]


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split(".") if segment]
