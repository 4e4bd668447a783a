"""Source languages a generated unit can be written in."""
from __future__ import annotations

import keyword
from dataclasses import dataclass
from typing import Dict, List, Tuple


# Entry rendered into a unit: (name, literal_or_None, directive_or_None)
UnitEntry = Tuple[str, "str | None", "str | None"]

GENERATED_NOTICE = "Generated by git-const. Do not edit."


C_KEYWORDS = frozenset("""
    auto break case char const continue default do double else enum extern
    float for goto if inline int long register restrict return short signed
    sizeof static struct switch typedef union unsigned void volatile while
    _Alignas _Alignof _Atomic _Bool _Complex _Generic _Imaginary _Noreturn
    _Static_assert _Thread_local bool true false nullptr class namespace
    template typename this new delete operator private protected public
    virtual friend try catch throw using explicit mutable
""".split())

RUST_KEYWORDS = frozenset("""
    as break const continue crate else enum extern false fn for if impl in
    let loop match mod move mut pub ref return self Self static struct super
    trait true type unsafe use where while async await dyn abstract become
    box do final macro override priv typeof unsized virtual yield try gen
""".split())


def _escape_c_like(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    escaped = escaped.replace("\r", "\\r").replace("\n", "\\n").replace("\t", "\\t")
    return escaped


@dataclass(frozen=True)
class Target:
    """Base rendering rules shared by the supported languages."""
    name: str
    suffix: str
    reserved = frozenset()  # names the language will not accept

    def quote(self, value: str) -> str:
        """Return ``value`` as a double-quoted string literal."""
        return f'"{_escape_c_like(value)}"'

    def check_name(self, name: str) -> None:
        """Raise ValueError unless ``name`` can be defined in this language."""
        if not name.isidentifier():
            raise ValueError(f"Invalid constant name: {name!r}")
        if name in self.reserved:
            raise ValueError(f"Constant name {name!r} is reserved in {self.name}")

    def error_directive(self, message: str) -> str:
        raise NotImplementedError

    def define(self, name: str, literal: str) -> str:
        raise NotImplementedError

    def render_unit(self, entries: List[UnitEntry], guard: str = "GIT_CONST") -> str:
        raise NotImplementedError


class PythonTarget(Target):
    """Python module; a failing constant raises ImportError on import."""

    reserved = frozenset(keyword.kwlist) | {"__all__"}

    def error_directive(self, message: str) -> str:
        return f"raise ImportError({self.quote(message)})"

    def define(self, name: str, literal: str) -> str:
        return f"{name} = {literal}"

    def render_unit(self, entries: List[UnitEntry], guard: str = "GIT_CONST") -> str:
        lines = [f'"""{GENERATED_NOTICE}"""', ""]
        names = [name for name, _, _ in entries]
        lines.append("__all__ = [" + ", ".join(self.quote(n) for n in names) + "]")
        lines.append("")
        for name, literal, directive in entries:
            lines.append(directive if directive is not None else self.define(name, literal))
        return "\n".join(lines) + "\n"


class CTarget(Target):
    """C/C++ header with an include guard; failures become ``#error``."""

    reserved = C_KEYWORDS

    def error_directive(self, message: str) -> str:
        return f"#error {self.quote(message)}"

    def define(self, name: str, literal: str) -> str:
        return f"#define {name} {literal}"

    def render_unit(self, entries: List[UnitEntry], guard: str = "GIT_CONST") -> str:
        guard_macro = f"{guard.upper()}_H"
        lines = [
            f"/* {GENERATED_NOTICE} */",
            f"#ifndef {guard_macro}",
            f"#define {guard_macro}",
            "",
        ]
        for name, literal, directive in entries:
            lines.append(directive if directive is not None else self.define(name, literal))
        lines.extend(["", f"#endif /* {guard_macro} */"])
        return "\n".join(lines) + "\n"


class RustTarget(Target):
    """Rust module; failures become ``compile_error!``."""

    reserved = RUST_KEYWORDS

    def error_directive(self, message: str) -> str:
        return f"compile_error!({self.quote(message)});"

    def define(self, name: str, literal: str) -> str:
        return f"pub const {name}: &str = {literal};"

    def render_unit(self, entries: List[UnitEntry], guard: str = "GIT_CONST") -> str:
        lines = [f"// {GENERATED_NOTICE}", ""]
        for name, literal, directive in entries:
            lines.append(directive if directive is not None else self.define(name, literal))
        return "\n".join(lines) + "\n"


TARGETS: Dict[str, Target] = {
    "python": PythonTarget("python", ".py"),
    "c": CTarget("c", ".h"),
    "rust": RustTarget("rust", ".rs"),
}


def get_target(name: str) -> Target:
    """Look up a target by name (case-insensitive)."""
    target = TARGETS.get(name.strip().lower())
    if target is None:
        available = ", ".join(sorted(TARGETS))
        raise ValueError(f"Unsupported target: {name}. Available targets: {available}")
    return target


def target_for_path(path) -> Target:
    """Guess the target from an output file suffix, defaulting to python."""
    suffix = str(path).rsplit(".", 1)[-1].lower() if "." in str(path) else ""
    for target in TARGETS.values():
        if target.suffix == f".{suffix}":
            return target
    if suffix in ("hh", "hpp"):
        return TARGETS["c"]
    return TARGETS["python"]
