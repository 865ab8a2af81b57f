"""A tiny intermediate representation for generated JavaScript.

Composers build trees of these nodes instead of concatenating strings, and
``JsPrinter`` is the only place that knows about braces, commas and
indentation.  The node set covers what the store generator emits outside its
Jinja2 templates: imports, bindings, doc comments, forwarding members,
spreads and lazily-initialised factory functions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from storegen.naming import js_string

INDENT = "  "


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocComment:
    """A ``/** ... */`` block: free text lines followed by ``@tag`` lines."""

    lines: tuple[str, ...]
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Import:
    """``import { a, b } from 'source';`` or ``import name from 'source';``."""

    source: str
    names: tuple[str, ...] = ()
    default: Optional[str] = None


@dataclass(frozen=True)
class ConstBinding:
    """``const name = expression;``"""

    name: str
    expression: str
    doc: Optional[DocComment] = None


@dataclass(frozen=True)
class ForwardingMember:
    """Object method forwarding every argument to ``receiver().target``."""

    name: str
    receiver: str
    target: str
    doc: Optional[DocComment] = None


@dataclass(frozen=True)
class Spread:
    """``...name`` inside an object literal."""

    name: str


@dataclass(frozen=True)
class LazyFactory:
    """An exported factory returning an object of forwarding members.

    The wrapped action set is built on first use through ``getter``::

        export function useProductsActions(state) {
          let actionsInstance = null;
          const getActions = () => { ... };
          return { ...members };
        }
    """

    name: str
    params: tuple[str, ...]
    factory_call: str
    members: tuple[ForwardingMember, ...]
    doc: Optional[DocComment] = None
    getter: str = "getActions"
    instance: str = "actionsInstance"
    getter_doc: Optional[DocComment] = None


@dataclass(frozen=True)
class Module:
    """Top-level statements separated by blank lines."""

    imports: tuple[Import, ...] = ()
    body: tuple["Node", ...] = field(default_factory=tuple)


Node = Union[DocComment, Import, ConstBinding, ForwardingMember, Spread, LazyFactory, Module]


# ---------------------------------------------------------------------------
# Printer
# ---------------------------------------------------------------------------


class JsPrinter:
    """Renders IR nodes to JavaScript source text."""

    def render(self, node: Node, depth: int = 0) -> str:
        """Render *node* indented by *depth* levels."""
        method = getattr(self, f"_render_{type(node).__name__.lower()}", None)
        if method is None:
            raise TypeError(f"Cannot render node of type {type(node).__name__}")
        return method(node, depth)

    def render_lines(self, nodes: list[Node], depth: int = 0, separator: str = "\n") -> str:
        """Render several nodes and join them with *separator*."""
        return separator.join(self.render(n, depth) for n in nodes)

    # -- Node renderers ----------------------------------------------------

    def _render_doccomment(self, node: DocComment, depth: int) -> str:
        pad = INDENT * depth
        out = [f"{pad}/**"]
        for line in node.lines:
            out.append(f"{pad} * {line}".rstrip())
        if node.lines and node.tags:
            out.append(f"{pad} *")
        for tag in node.tags:
            out.append(f"{pad} * {tag}")
        out.append(f"{pad} */")
        return "\n".join(out)

    def _render_import(self, node: Import, depth: int) -> str:
        pad = INDENT * depth
        source = js_string(node.source)
        if node.default and node.names:
            return f"{pad}import {node.default}, {{ {', '.join(node.names)} }} from {source};"
        if node.default:
            return f"{pad}import {node.default} from {source};"
        if len(node.names) > 4:
            inner = ",\n".join(f"{pad}{INDENT}{n}" for n in node.names)
            return f"{pad}import {{\n{inner}\n{pad}}} from {source};"
        return f"{pad}import {{ {', '.join(node.names)} }} from {source};"

    def _render_constbinding(self, node: ConstBinding, depth: int) -> str:
        pad = INDENT * depth
        line = f"{pad}const {node.name} = {node.expression};"
        if node.doc:
            return f"{self.render(node.doc, depth)}\n{line}"
        return line

    def _render_forwardingmember(self, node: ForwardingMember, depth: int) -> str:
        pad = INDENT * depth
        lines = []
        if node.doc:
            lines.append(self.render(node.doc, depth))
        lines.append(f"{pad}{node.name}(...args) {{")
        lines.append(f"{pad}{INDENT}return {node.receiver}().{node.target}(...args);")
        lines.append(f"{pad}}},")
        return "\n".join(lines)

    def _render_spread(self, node: Spread, depth: int) -> str:
        return f"{INDENT * depth}...{node.name}"

    def _render_lazyfactory(self, node: LazyFactory, depth: int) -> str:
        pad = INDENT * depth
        inner = pad + INDENT
        lines = []
        if node.doc:
            lines.append(self.render(node.doc, depth))
        lines.append(f"{pad}export function {node.name}({', '.join(node.params)}) {{")
        lines.append(f"{inner}let {node.instance} = null;")
        lines.append("")
        if node.getter_doc:
            lines.append(self.render(node.getter_doc, depth + 1))
        lines.append(f"{inner}const {node.getter} = () => {{")
        lines.append(f"{inner}{INDENT}if (!{node.instance}) {{")
        lines.append(f"{inner}{INDENT * 2}{node.instance} = {node.factory_call};")
        lines.append(f"{inner}{INDENT}}}")
        lines.append(f"{inner}{INDENT}return {node.instance};")
        lines.append(f"{inner}}};")
        lines.append("")
        lines.append(f"{inner}return {{")
        lines.append(self.render_lines(list(node.members), depth + 2, separator="\n\n"))
        lines.append(f"{inner}}};")
        lines.append(f"{pad}}}")
        return "\n".join(lines)

    def _render_module(self, node: Module, depth: int) -> str:
        parts = []
        if node.imports:
            parts.append(self.render_lines(list(node.imports), depth))
        parts.extend(self.render(n, depth) for n in node.body)
        return "\n\n".join(parts) + "\n"
