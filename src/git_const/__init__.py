"""git-const: embed git commit hashes into generated source files."""

from .diagnostics import (
    BuildDiagnostic,
    SpawnError,
    ProcessFailure,
    DecodeError,
    InvalidRevisionError,
    EmptyOutputError,
    compile_error,
)
from .hashes import (
    HashKind,
    resolve_revision,
    git_hash,
    git_short_hash,
    expand_hash,
    expand_short_hash,
)
from .config import ConstantSpec, GenerationConfig
from .generator import ConstantGenerator, GenerationResult, generate
from .version import get_version

__version__ = get_version()

__all__ = [
    # Lookups
    'git_hash',
    'git_short_hash',
    'expand_hash',
    'expand_short_hash',
    'resolve_revision',
    'HashKind',

    # Generation
    'ConstantSpec',
    'GenerationConfig',
    'ConstantGenerator',
    'GenerationResult',
    'generate',

    # Diagnostics
    'BuildDiagnostic',
    'SpawnError',
    'ProcessFailure',
    'DecodeError',
    'InvalidRevisionError',
    'EmptyOutputError',
    'compile_error',
]
