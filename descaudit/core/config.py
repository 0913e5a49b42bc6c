"""
Configuration Module

This module holds the paths, executables and environment used when running
the external linters, and the registry of cop names that include/exclude
filters are validated against.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple
import logging

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Cops implemented by this package's description rulebook.
DESCRIPTION_COPS = (
    'FormulaAudit/Desc',
    'FormulaAuditStrict/Desc',
    'Cask/Desc',
)

# Departments shipped with RuboCop and the extensions the library loads.
STANDARD_DEPARTMENTS = (
    'Bundler',
    'Gemspec',
    'Layout',
    'Lint',
    'Metrics',
    'Migration',
    'Naming',
    'Security',
    'Style',
    'Performance',
    'RSpec',
    'Sorbet',
    'Cask',
    'FormulaAudit',
    'FormulaAuditStrict',
    'Homebrew',
)

# Cop headers in `rubocop --show-cops` output, e.g. "Style/StringLiterals:".
SHOW_COPS_PATTERN = re.compile(r'^([A-Z]\w*(?:/\w+)+):[ \t]*$', re.M)

DEFAULT_SHELL_SCRIPT_GLOBS = ('*.sh', 'cmd/*.sh', 'utils/*.sh')


@dataclass
class StyleConfig:
    """Locations and executables used by the style checker."""
    library_path: Path
    library: Path
    entry_script: Path
    cache_dir: Path
    linter: str = "rubocop"
    shell_checker: str = "shellcheck"
    extra_path: Optional[str] = None
    install_command: Optional[Tuple[str, ...]] = None
    shell_script_globs: Tuple[str, ...] = DEFAULT_SHELL_SCRIPT_GLOBS
    known_cops: Tuple[str, ...] = DESCRIPTION_COPS

    @property
    def default_config_file(self) -> Path:
        return self.library / ".rubocop.yml"

    @property
    def spec_config_file(self) -> Path:
        return self.library / ".rubocop_rspec.yml"

    def cache_env(self) -> Dict[str, str]:
        """Environment overrides passed to every linter invocation."""
        return {"XDG_CACHE_HOME": str(self.cache_dir / "style")}

    def shell_files(self) -> List[Path]:
        """Entry script plus the shell utilities, restricted to files that exist."""
        candidates = [self.entry_script]
        for pattern in self.shell_script_globs:
            candidates.extend(sorted(self.library_path.glob(pattern)))
        return [path for path in candidates if path.exists()]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StyleConfig":
        """
        Build a configuration from DESCAUDIT_* environment variables.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Returns:
            StyleConfig instance
        """
        env = os.environ if environ is None else environ

        library_path = Path(env.get("DESCAUDIT_LIBRARY_PATH", "Library/Homebrew")).expanduser()
        library = Path(env.get("DESCAUDIT_LIBRARY", str(library_path.parent))).expanduser()
        entry_script = Path(env.get("DESCAUDIT_ENTRY_SCRIPT", str(library.parent / "bin" / "brew"))).expanduser()
        cache_dir = Path(env.get("DESCAUDIT_CACHE", str(Path.home() / ".cache" / "descaudit"))).expanduser()

        extra_cops = [
            name.strip() for name in env.get("DESCAUDIT_KNOWN_COPS", "").split(",") if name.strip()
        ]

        config = cls(
            library_path=library_path,
            library=library,
            entry_script=entry_script,
            cache_dir=cache_dir,
            linter=env.get("DESCAUDIT_LINTER", "rubocop"),
            shell_checker=env.get("DESCAUDIT_SHELL_CHECKER", "shellcheck"),
            extra_path=env.get("DESCAUDIT_PATH"),
            known_cops=DESCRIPTION_COPS + tuple(extra_cops),
        )
        logger.debug(f"Loaded style configuration: {config}")
        return config


class CopRegistry:
    """
    Registry of known cop names used to validate include/exclude filters.

    Names are qualified as ``Department/Name``; a department on its own is
    also accepted as a filter. Departments are the given ones plus those of
    every known name.
    """

    def __init__(self,
                 names: Iterable[str] = DESCRIPTION_COPS,
                 departments: Iterable[str] = STANDARD_DEPARTMENTS):
        self.names: FrozenSet[str] = frozenset(names)
        self.departments: FrozenSet[str] = frozenset(departments) | frozenset(
            name.split('/', 1)[0] for name in self.names if '/' in name
        )

    @classmethod
    def from_show_cops(cls, output: str, extra_names: Iterable[str] = ()) -> "CopRegistry":
        """
        Build a registry from the output of ``rubocop --show-cops``.

        Args:
            output: Text printed by the linter
            extra_names: Names to register alongside the ones found

        Returns:
            CopRegistry knowing every listed cop
        """
        names = SHOW_COPS_PATTERN.findall(output)
        logger.debug(f"Found {len(names)} cop(s) in linter output")
        return cls(list(names) + list(extra_names))

    def is_known(self, name: str) -> bool:
        return name in self.names or name in self.departments

    def qualified_name(self, name: str) -> str:
        """
        Resolve a bare cop name to its ``Department/Name`` form.

        Names that are already qualified, departments and unknown names are
        returned unchanged.
        """
        name = name.strip()
        if '/' in name or self.is_known(name):
            return name

        candidates = sorted(n for n in self.names if n.split('/', 1)[1] == name)
        if len(candidates) > 1:
            raise ConfigurationError(
                f"Ambiguous cop name `{name}` could mean {', '.join(candidates)}", [name]
            )
        if candidates:
            return candidates[0]
        return name

    def validate(self, names: Iterable[str]) -> List[str]:
        """
        Qualify every name and fail if any of them is not a known cop or department.

        Returns:
            List of qualified names, in input order
        """
        qualified = [self.qualified_name(str(name)) for name in names]
        unknown = [name for name in qualified if not self.is_known(name)]
        if unknown:
            raise ConfigurationError(f"RuboCops {','.join(unknown)} were not found", unknown)
        return qualified
