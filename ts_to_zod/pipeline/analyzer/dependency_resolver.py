"""
Dependency resolver for schema emission order.

Orders schema definitions so that every schema is emitted after the schemas
it references, with a bounded fixed-point loop. Self-referencing schemas are
lazily resolved; schemas caught in cycles of two or more declarations (or
blocked by an unsupported type) stay unresolved and are reported.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...logging import get_logger
from .ir_nodes import IR, ResolutionState, SchemaDef

logger = get_logger("resolver")

DEFAULT_MAX_RUN = 10


@dataclass
class UnresolvedGroup:
    """A connected set of declarations that could not be resolved."""

    names: list[str] = field(default_factory=list)  # Declaration names, source order
    schema_names: list[str] = field(default_factory=list)
    cyclic: bool = False  # Contains a cycle of two or more declarations
    unsupported: dict[str, list[str]] = field(default_factory=dict)  # name -> reasons

    def describe(self, max_run: int) -> str:
        """Human readable error for the group."""
        if self.cyclic:
            header = "Some schemas can't be generated due to circular dependencies:"
        elif self.unsupported:
            header = "Some schemas can't be generated due to unsupported types:"
        else:
            header = f"Some schemas can't be generated within {max_run} resolution passes:"

        lines = [header]
        for name, schema_name in zip(self.names, self.schema_names):
            reasons = self.unsupported.get(name)
            lines.append(f"{schema_name} ({'; '.join(reasons)})" if reasons else schema_name)
        return "\n".join(lines)


@dataclass
class ResolutionResult:
    """Outcome of dependency resolution."""

    # Resolved and lazily resolved schemas, in emission order
    ordered: list[SchemaDef] = field(default_factory=list)

    # Declaration name -> state, for every in-scope declaration
    states: dict[str, ResolutionState] = field(default_factory=dict)

    unresolved_groups: list[UnresolvedGroup] = field(default_factory=list)

    # Number of passes actually run
    passes: int = 0

    def state_of(self, type_name: str) -> ResolutionState | None:
        return self.states.get(type_name)

    @property
    def unresolved(self) -> list[str]:
        return [name for group in self.unresolved_groups for name in group.names]


class DependencyResolver:
    """Resolves the emission order of schema definitions."""

    def __init__(self, ir: IR, max_run: int = DEFAULT_MAX_RUN):
        """
        Initialize the resolver.

        Args:
            ir: The analyzed IR (in-scope schemas in source order)
            max_run: Maximum number of resolution passes

        Raises:
            ValueError: If max_run is not a positive integer
        """
        if isinstance(max_run, bool) or not isinstance(max_run, int) or max_run < 1:
            raise ValueError(f"max_run must be a positive integer, got {max_run!r}")

        self.ir = ir
        self.max_run = max_run
        self._schemas: dict[str, SchemaDef] = {schema.type_name: schema for schema in ir.schemas}
        self._edges: dict[str, list[str]] = {schema.type_name: self._tracked_dependencies(schema) for schema in ir.schemas}

    def _tracked_dependencies(self, schema: SchemaDef) -> list[str]:
        """Dependencies that are in-scope declarations (graph edges)."""
        return [name for name in schema.dependencies if name in self._schemas]

    def resolve(self) -> ResolutionResult:
        """
        Run the bounded fixed-point resolution.

        Returns:
            ResolutionResult with emission order, states and unresolved groups
        """
        result = ResolutionResult()
        resolved: dict[str, SchemaDef] = {}

        while len(resolved) < len(self._schemas) and result.passes < self.max_run:
            result.passes += 1
            progressed = False

            for schema in self.ir.schemas:
                name = schema.type_name
                if name in resolved or not schema.is_supported:
                    continue
                missing = [dep for dep in self._edges[name] if dep != name and dep not in resolved]
                if not missing:
                    resolved[name] = schema
                    progressed = True

            logger.debug("Resolution pass %d: %d/%d schemas resolved", result.passes, len(resolved), len(self._schemas))
            if not progressed:
                break

        result.ordered = list(resolved.values())
        for schema in self.ir.schemas:
            name = schema.type_name
            if name not in resolved:
                result.states[name] = ResolutionState.UNRESOLVED
            elif name in self._edges[name]:
                result.states[name] = ResolutionState.LAZILY_RESOLVED
            else:
                result.states[name] = ResolutionState.RESOLVED

        result.unresolved_groups = self._group_unresolved([schema for schema in self.ir.schemas if schema.type_name not in resolved])
        for group in result.unresolved_groups:
            logger.warning("Unresolved schemas: %s", ", ".join(group.schema_names))
        return result

    def _group_unresolved(self, unresolved: list[SchemaDef]) -> list[UnresolvedGroup]:
        """Split unresolved schemas into connected groups, in source order."""
        names = [schema.type_name for schema in unresolved]
        remaining = set(names)

        # Undirected adjacency restricted to unresolved nodes
        neighbours: dict[str, set[str]] = {name: set() for name in names}
        for name in names:
            for dep in self._edges[name]:
                if dep in remaining and dep != name:
                    neighbours[name].add(dep)
                    neighbours[dep].add(name)

        cyclic_nodes = self._cyclic_nodes(names)

        groups = []
        for name in names:
            if name not in remaining:
                continue
            component = set()
            stack = [name]
            while stack:
                current = stack.pop()
                if current in component:
                    continue
                component.add(current)
                stack.extend(neighbours[current] - component)
            remaining -= component

            members = [member for member in names if member in component]
            groups.append(
                UnresolvedGroup(
                    names=members,
                    schema_names=[self._schemas[member].schema_name for member in members],
                    cyclic=any(member in cyclic_nodes for member in members),
                    unsupported={member: self._schemas[member].unsupported for member in members if not self._schemas[member].is_supported},
                )
            )
        return groups

    def _cyclic_nodes(self, names: list[str]) -> set[str]:
        """Nodes that belong to a strongly connected component of size two or more."""
        subset = set(names)
        index_of: dict[str, int] = {}
        lowlink: dict[str, int] = {}
        on_stack: set[str] = set()
        stack: list[str] = []
        cyclic: set[str] = set()
        counter = 0

        for root in names:
            if root in index_of:
                continue
            # Iterative Tarjan: (node, iterator over successors)
            work = [(root, iter([dep for dep in self._edges[root] if dep in subset]))]
            index_of[root] = lowlink[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)

            while work:
                node, successors = work[-1]
                advanced = False
                for succ in successors:
                    if succ not in index_of:
                        index_of[succ] = lowlink[succ] = counter
                        counter += 1
                        stack.append(succ)
                        on_stack.add(succ)
                        work.append((succ, iter([dep for dep in self._edges[succ] if dep in subset])))
                        advanced = True
                        break
                    if succ in on_stack:
                        lowlink[node] = min(lowlink[node], index_of[succ])
                if advanced:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == index_of[node]:
                    component = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    if len(component) > 1:
                        cyclic.update(component)

        return cyclic
