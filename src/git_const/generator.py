"""Generation of the source unit that defines the git constants."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .config import GenerationConfig
from .diagnostics import BuildDiagnostic
from .hashes import lookup
from .targets import UnitEntry, get_target


@dataclass
class GenerationResult:
    """Result of generating a constants unit."""
    success: bool
    output_path: str
    content: str
    values: Dict[str, str] = field(default_factory=dict)
    errors: List[BuildDiagnostic] = field(default_factory=list)
    written: bool = False

    @property
    def error_messages(self) -> List[str]:
        return [e.message for e in self.errors]


class ConstantGenerator:
    """Resolves configured constants and writes the generated unit."""

    def __init__(self, config: GenerationConfig):
        config.validate()
        self.config = config
        self.target = get_target(config.target)

    def resolve(self):
        """Look up every constant in order.

        Returns:
            (entries, values, errors) where failing constants carry the
            rendered failure directive instead of a literal.
        """
        entries: List[UnitEntry] = []
        values: Dict[str, str] = {}
        errors: List[BuildDiagnostic] = []
        for spec in self.config.constants:
            try:
                value = lookup(spec.kind, spec.revision, cwd=self.config.cwd, git=self.config.git)
            except BuildDiagnostic as e:
                errors.append(e)
                entries.append((spec.name, None, e.render(self.target)))
                continue
            values[spec.name] = value
            entries.append((spec.name, self.target.quote(value), None))
        return entries, values, errors

    def render(self, entries: List[UnitEntry]) -> str:
        guard = Path(self.config.output_path).stem.lstrip("_") or "git_const"
        guard = "".join(ch if ch.isascii() and ch.isalnum() else "_" for ch in guard)
        if not guard[0].isalpha():
            guard = f"_{guard}"
        return self.target.render_unit(entries, guard=guard)

    def generate(self) -> GenerationResult:
        entries, values, errors = self.resolve()
        content = self.render(entries)
        result = GenerationResult(
            success=not errors,
            output_path=self.config.output_path,
            content=content,
            values=values,
            errors=errors,
        )

        if errors and not self.config.emit_errors:
            return result
        if not self.config.dry_run:
            result.written = write_if_changed(Path(self.config.output_path), content)
        return result


def write_if_changed(path: Path, content: str) -> bool:
    """Write ``content`` unless the file already holds it. Returns True if written."""
    if path.exists():
        try:
            if path.read_text(encoding="utf-8") == content:
                return False
        except (OSError, UnicodeDecodeError):
            pass
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


def generate(config: Optional[GenerationConfig] = None) -> GenerationResult:
    """Generate the constants unit described by ``config``."""
    return ConstantGenerator(config or GenerationConfig()).generate()
