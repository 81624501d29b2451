"""
Typed FFmpeg filter-graph builder.

Filters, chains and labelled edges are kept as plain objects so they can be
inspected in tests; they are turned into FFmpeg's textual filter syntax only
by `render()` at the subprocess boundary.

Escaping follows FFmpeg's two levels: option values are escaped for the
filter option parser (`\\ ' :`), then for the graph parser (`\\ ' [ ] , ;`).
"""
from dataclasses import dataclass, field
from typing import Optional, Union

Value = Union[str, int, float]

_OPTION_SPECIALS = "\\':"
_GRAPH_SPECIALS = "\\'[],;"


def _backslash_escape(text: str, specials: str) -> str:
    out = []
    for ch in text:
        if ch in specials:
            out.append("\\")
        out.append(ch)
    return "".join(out)


def escape_value(value: str) -> str:
    """Escape a string option value for use inside a filter graph."""
    return _backslash_escape(_backslash_escape(value, _OPTION_SPECIALS), _GRAPH_SPECIALS)


def format_number(value: float) -> str:
    """Compact number formatting: 2.0 -> '2', 0.25 -> '0.25'."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _render_value(value: Value) -> str:
    if isinstance(value, str):
        return escape_value(value)
    return format_number(value)


class Filter:
    """A single filter node: name, positional args and ordered options."""

    def __init__(self, name: str, *args: Value, **options: Optional[Value]):
        self.name = name
        self.args = list(args)
        # None drops an option so callers can pass optional values straight through
        self.options = {k: v for k, v in options.items() if v is not None}

    def get(self, key: str, default: Optional[Value] = None) -> Optional[Value]:
        return self.options.get(key, default)

    def render(self) -> str:
        parts = [_render_value(a) for a in self.args]
        parts.extend(f"{k}={_render_value(v)}" for k, v in self.options.items())
        if not parts:
            return self.name
        return f"{self.name}={':'.join(parts)}"

    def __repr__(self) -> str:
        return f"Filter({self.render()})"


@dataclass
class FilterChain:
    """Filters applied in sequence, with optional input/output pad labels."""
    filters: list[Filter] = field(default_factory=list)
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)

    def append(self, f: Filter) -> "FilterChain":
        self.filters.append(f)
        return self

    def extend(self, filters: list[Filter]) -> "FilterChain":
        self.filters.extend(filters)
        return self

    def render(self) -> str:
        ins = "".join(f"[{label}]" for label in self.inputs)
        outs = "".join(f"[{label}]" for label in self.outputs)
        body = ",".join(f.render() for f in self.filters)
        return f"{ins}{body}{outs}"

    def __len__(self) -> int:
        return len(self.filters)


class FilterGraph:
    """A complex filter graph: chains connected by labelled pads."""

    def __init__(self):
        self.chains: list[FilterChain] = []
        self._counters: dict[str, int] = {}

    def new_label(self, prefix: str) -> str:
        n = self._counters.get(prefix, 0) + 1
        self._counters[prefix] = n
        return f"{prefix}{n}"

    def chain(self, inputs: list[str], filters: list[Filter], outputs: list[str]) -> FilterChain:
        c = FilterChain(filters=list(filters), inputs=list(inputs), outputs=list(outputs))
        self.chains.append(c)
        return c

    def find(self, name: str) -> list[Filter]:
        """All filters with the given name, in graph order."""
        return [f for c in self.chains for f in c.filters if f.name == name]

    def render(self) -> str:
        return ";".join(c.render() for c in self.chains)

    def __bool__(self) -> bool:
        return bool(self.chains)
