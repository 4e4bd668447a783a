"""Hatchling build hook that generates the git constants unit before a build.

Enable it in the consuming project's ``pyproject.toml``::

    [build-system]
    requires = ["hatchling", "git-const"]

    [tool.hatch.build.hooks.git-const]
    output = "src/mypkg/_git_const.py"
    constants = {GIT_HASH = "full", GIT_SHORT_HASH = "short"}
"""
from __future__ import annotations

from pathlib import Path

from hatchling.builders.hooks.plugin.interface import BuildHookInterface
from hatchling.plugin import hookimpl

from .config import GenerationConfig
from .generator import ConstantGenerator
from .utils.console import _rich_info, _rich_error


HOOK_SETTINGS = ("output", "target", "git", "emit_errors", "constants")


class GitConstBuildHook(BuildHookInterface):
    """Build hook that writes the git constants unit and ships it."""

    PLUGIN_NAME = "git-const"

    def generation_config(self) -> GenerationConfig:
        settings = {k: v for k, v in self.config.items() if k in HOOK_SETTINGS}
        return GenerationConfig.from_mapping(
            settings,
            source=f"[tool.hatch.build.hooks.{self.PLUGIN_NAME}]",
            base_dir=Path(self.root),
        )

    def initialize(self, version: str, build_data: dict) -> None:
        """Generate the unit; a failed lookup aborts the build."""
        config = self.generation_config()
        result = ConstantGenerator(config).generate()

        if not result.success and not config.emit_errors:
            for error in result.errors:
                _rich_error(error.message, symbol="error")
            raise result.errors[0]

        output_path = Path(result.output_path)
        try:
            relative = output_path.relative_to(Path(self.root))
        except ValueError:
            relative = Path(output_path.name)
        build_data.setdefault("force_include", {})[str(output_path)] = relative.as_posix()
        _rich_info(f"Embedded git constants in {relative.as_posix()}", symbol="info")


@hookimpl
def hatch_register_build_hook():
    return GitConstBuildHook
