"""Configuration for generating a git constants unit.

Settings come from ``gitconst.yml`` in the project directory, or from the
``[tool.git-const]`` table of ``pyproject.toml`` when there is no YAML file.
Command-line values override both.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import toml
import yaml

from .hashes import DEFAULT_REVISION, HashKind
from .targets import get_target, target_for_path


CONFIG_FILENAME = "gitconst.yml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = "git-const"

DEFAULT_OUTPUT = "_git_const.py"


@dataclass(frozen=True)
class ConstantSpec:
    """One constant of the generated unit."""
    name: str
    kind: HashKind = HashKind.FULL
    revision: str = DEFAULT_REVISION

    def __post_init__(self):
        if not self.name.isidentifier():
            raise ValueError(f"Invalid constant name: {self.name!r}")

    @classmethod
    def parse(cls, text: str) -> "ConstantSpec":
        """Parse ``NAME=KIND[:REVISION]`` (e.g. ``BASE=short:v1.0``).

        ``NAME`` alone means the full hash of ``HEAD``.
        """
        name, sep, rest = text.partition("=")
        if not sep:
            return cls(name=name.strip())
        return cls.from_value(name.strip(), rest)

    @classmethod
    def from_value(cls, name: str, value: Any) -> "ConstantSpec":
        """Build a constant from a config value: ``"kind[:rev]"`` or a mapping."""
        if isinstance(value, dict):
            revision = value.get("revision")
            if revision is not None and not isinstance(revision, str):
                raise ValueError(
                    f"Revision of {name} must be a string, got {revision!r}; quote it in the config file"
                )
            return cls(
                name=str(value.get("name", name)),
                kind=HashKind.parse(value.get("kind", "full")),
                revision=_revision_or_default(value.get("revision")),
            )
        if value is None:
            return cls(name=name)
        kind, _, revision = str(value).partition(":")
        return cls(name=name, kind=HashKind.parse(kind or "full"),
                   revision=_revision_or_default(revision))


def _revision_or_default(revision: Optional[Any]) -> str:
    if revision is None:
        return DEFAULT_REVISION
    return str(revision).strip() or DEFAULT_REVISION


def default_constants() -> List[ConstantSpec]:
    return [
        ConstantSpec("GIT_HASH", HashKind.FULL),
        ConstantSpec("GIT_SHORT_HASH", HashKind.SHORT),
    ]


def parse_constants(raw: Any, source: str = CONFIG_FILENAME) -> List[ConstantSpec]:
    """Parse the ``constants`` setting (list of mappings or name mapping)."""
    if raw is None:
        return default_constants()
    try:
        if isinstance(raw, dict):
            constants = [ConstantSpec.from_value(name, value) for name, value in raw.items()]
        elif isinstance(raw, list):
            constants = []
            for item in raw:
                if isinstance(item, str):
                    constants.append(ConstantSpec.parse(item))
                elif isinstance(item, dict) and "name" in item:
                    constants.append(ConstantSpec.from_value(item["name"], item))
                else:
                    raise ValueError(f"Invalid constant entry: {item!r}")
        else:
            raise ValueError(f"'constants' must be a list or mapping, got {type(raw).__name__}")
    except ValueError as e:
        raise ValueError(f"Invalid configuration in {source}: {e}")

    check_unique(constants, source)
    return constants


def check_unique(constants: List[ConstantSpec], source: str = CONFIG_FILENAME) -> None:
    """Raise ValueError if two constants share a name."""
    names = [c.name for c in constants]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Invalid configuration in {source}: duplicate constants {', '.join(duplicates)}")


@dataclass
class GenerationConfig:
    """Configuration for one generated unit."""
    output_path: str = DEFAULT_OUTPUT
    target: Optional[str] = None  # inferred from output_path when None
    constants: List[ConstantSpec] = field(default_factory=default_constants)
    git: str = "git"
    cwd: Optional[str] = None
    emit_errors: bool = False
    dry_run: bool = False

    def __post_init__(self):
        if self.target is None:
            self.target = target_for_path(self.output_path).name
        else:
            self.target = get_target(self.target).name
        self.validate()

    def validate(self, source: str = "configuration") -> None:
        """Check the constants can all be defined together in the target language.

        Raises:
            ValueError: On a reserved or duplicate constant name.
        """
        target = get_target(self.target)
        for constant in self.constants:
            target.check_name(constant.name)
        check_unique(self.constants, source)

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], source: str = CONFIG_FILENAME,
                     base_dir: Optional[Path] = None) -> "GenerationConfig":
        """Create configuration from a parsed settings table."""
        if not isinstance(data, dict):
            raise ValueError(f"{source} must contain a mapping, got {type(data).__name__}")

        kwargs: Dict[str, Any] = {}
        output = Path(str(data.get("output", DEFAULT_OUTPUT)))
        if base_dir is not None and not output.is_absolute():
            output = base_dir / output
        kwargs["output_path"] = str(output)
        if "target" in data:
            kwargs["target"] = str(data["target"])
        if "git" in data:
            kwargs["git"] = str(data["git"])
        if "emit_errors" in data:
            kwargs["emit_errors"] = bool(data["emit_errors"])
        kwargs["constants"] = parse_constants(data.get("constants"), source)
        if base_dir is not None:
            kwargs["cwd"] = str(base_dir)

        try:
            return cls(**kwargs)
        except ValueError as e:
            raise ValueError(f"Invalid configuration in {source}: {e}")

    @classmethod
    def from_config_file(cls, base_dir: Optional[Path] = None, **overrides) -> "GenerationConfig":
        """Load ``gitconst.yml`` or ``pyproject.toml`` and apply overrides.

        Args:
            base_dir: Project directory; the current directory when omitted.
            **overrides: Command-line values; ``None`` means not given.

        Raises:
            ValueError: If a config file exists but is invalid.
        """
        base = Path(base_dir) if base_dir is not None else Path(".")
        data, source = load_settings(base)
        config = cls.from_mapping(data, source, base_dir=base if base_dir is not None else None)

        for key, value in overrides.items():
            if value is None:
                continue
            if key == "constants":
                if not value:
                    continue
                value = [c if isinstance(c, ConstantSpec) else ConstantSpec.parse(c) for c in value]
            setattr(config, key, value)

        # Target follows the output suffix unless it was set explicitly.
        if overrides.get("target") is not None:
            config.target = get_target(config.target).name
        elif "target" not in data and overrides.get("output_path") is not None:
            config.target = target_for_path(config.output_path).name

        config.validate(source if not overrides.get("constants") else "command-line constants")
        return config


def load_settings(base_dir: Path):
    """Return ``(settings, source_name)`` for the project in ``base_dir``."""
    yml_path = base_dir / CONFIG_FILENAME
    if yml_path.exists():
        try:
            with open(yml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format in {yml_path}: {e}")
        return data, CONFIG_FILENAME

    pyproject_path = base_dir / PYPROJECT_FILENAME
    if pyproject_path.exists():
        try:
            with open(pyproject_path, "r", encoding="utf-8") as f:
                pyproject = toml.load(f)
        except toml.TomlDecodeError as e:
            raise ValueError(f"Invalid TOML format in {pyproject_path}: {e}")
        table = pyproject.get("tool", {}).get(PYPROJECT_TABLE, {})
        return table, f"{PYPROJECT_FILENAME} [tool.{PYPROJECT_TABLE}]"

    return {}, "defaults"
