"""
Style Checker Module

This module runs RuboCop (and, for whole-library runs, ShellCheck) over a set
of files and reports the outcome either as terminal output or as a parsed
RunResult.
"""

from pathlib import Path
from typing import List, Optional, Sequence
import logging

from .aggregator import ResultAggregator, RunResult
from .config import CopRegistry, StyleConfig
from .errors import ConfigurationError, ExecutionError
from .runner import RunOutcome, SubprocessRunner, classify_outcome

logger = logging.getLogger(__name__)


class StyleChecker:
    """
    Orchestrates the external style linters.

    Args:
        config: Paths and executables, defaults to StyleConfig.from_env()
        runner: Subprocess runner, replaceable in tests
        registry: Known cop names, loaded from the linter on first use if omitted
    """

    def __init__(self,
                 config: Optional[StyleConfig] = None,
                 runner: Optional[SubprocessRunner] = None,
                 registry: Optional[CopRegistry] = None):
        self.config = config or StyleConfig.from_env()
        self.runner = runner or SubprocessRunner()
        self._registry = registry
        self.aggregator = ResultAggregator()

    @property
    def registry(self) -> CopRegistry:
        if self._registry is None:
            self._registry = self.load_registry()
        return self._registry

    def load_registry(self) -> CopRegistry:
        """
        Ask the linter which cops it knows.

        Falls back to the configured known cops and the standard departments
        when the linter can't list them.
        """
        capture = self.runner.run(self.config.linter, ["--show-cops"], env=self.config.cache_env())
        if capture.success:
            registry = CopRegistry.from_show_cops(capture.stdout, self.config.known_cops)
            if len(registry.names) > len(set(self.config.known_cops)):
                return registry

        logger.warning(f"Could not list cops with `{capture.command_line}`; "
                       f"validating filters against known cops and departments only")
        return CopRegistry(self.config.known_cops)

    def check_style_and_print(self, files: Optional[Sequence[str]] = None, **options) -> bool:
        """
        Check style and let the linters print their own output.

        Returns:
            True if every linter that ran exited cleanly
        """
        return self._check_style(files, "print", **options)

    def check_style_json(self, files: Optional[Sequence[str]] = None, **options) -> RunResult:
        """
        Check style and return the linter's JSON report as a RunResult.

        Raises:
            ConfigurationError: If the cop filters are invalid
            ExecutionError: If RuboCop exits with an unexpected status or bad output
        """
        return self._check_style(files, "json", **options)

    def build_args(self,
                   files: Optional[Sequence[str]] = None,
                   fix: bool = False,
                   except_cops: Optional[Sequence[str]] = None,
                   only_cops: Optional[Sequence[str]] = None,
                   display_cop_names: bool = False,
                   verbose: bool = False) -> List[str]:
        """
        Build the RuboCop argument list shared by both output modes.

        Raises:
            ConfigurationError: If both filters are given or a cop name is unknown
        """
        files = list(files or [])
        args = ["--force-exclusion"]
        args.append("--auto-correct" if fix else "--parallel")

        if verbose:
            args.append("--extra-details")
        if display_cop_names or verbose:
            args.append("--display-cop-names")

        if except_cops and only_cops:
            raise ConfigurationError("--except-cops and --only-cops are mutually exclusive")
        if except_cops:
            args += ["--except", ",".join(self.registry.validate(except_cops))]
        elif only_cops:
            args += ["--only", ",".join(self.registry.validate(only_cops))]

        if files and not self._has_library_file(files):
            if Path(files[0], "spec").exists():
                config_file = self.config.spec_config_file
            else:
                config_file = self.config.default_config_file
            args += ["--config", str(config_file)]

        if files:
            args += files
        else:
            args.append(str(self.config.library_path))

        return args

    def _has_library_file(self, files: Sequence[str]) -> bool:
        library_path = str(self.config.library_path.expanduser().resolve())
        return any(str(Path(f).expanduser().resolve()).startswith(library_path) for f in files)

    def _check_style(self, files, output_type: str,
                     fix: bool = False,
                     except_cops: Optional[Sequence[str]] = None,
                     only_cops: Optional[Sequence[str]] = None,
                     display_cop_names: bool = False,
                     debug: bool = False,
                     verbose: bool = False):
        files = list(files or [])
        args = self.build_args(files, fix=fix, except_cops=except_cops, only_cops=only_cops,
                               display_cop_names=display_cop_names, verbose=verbose)
        env = self.config.cache_env()

        if output_type == "json":
            return self._run_json(args, env)
        if output_type != "print":
            raise ValueError(f"Invalid output_type for check_style: {output_type}")

        if debug:
            args.append("--debug")
        if files:
            args += ["--format", "simple"]

        capture = self.runner.run(self.config.linter, args, env=env, capture=False)
        rubocop_success = capture.success
        logger.debug(f"{self.config.linter} finished with exit status {capture.returncode}")

        if files:
            return rubocop_success

        shellcheck_success = self.check_shell_style()
        if shellcheck_success is None:
            return rubocop_success
        return rubocop_success and shellcheck_success

    def _run_json(self, args: List[str], env) -> RunResult:
        command = [self.config.linter, "--format", "json"] + args
        capture = self.runner.run(self.config.linter, ["--format", "json"] + args, env=env)
        outcome = classify_outcome(capture.returncode, capture.stdout)

        if outcome == RunOutcome.EXECUTION_ERROR:
            logger.error(f"{self.config.linter} failed with exit status {capture.returncode}")
            raise ExecutionError(f"Error running `{' '.join(command)}`", command, capture.stderr)

        logger.info(f"{self.config.linter} run finished: {outcome.value}")
        try:
            return self.aggregator.parse(capture.stdout)
        except ExecutionError as e:
            logger.error(f"{self.config.linter} produced an unusable report: {e}")
            raise ExecutionError(f"Error running `{' '.join(command)}`: {e}", command, capture.stderr) from e

    def find_shell_checker(self) -> Optional[str]:
        """Locate the shell checker, installing it first if an installer is configured."""
        name = self.config.shell_checker
        found = self.runner.which(name) or self.runner.which(name, self.config.extra_path)
        if found or not self.config.install_command:
            return found

        logger.info(f"Installing `{name}` for shell style checks...")
        install = self.config.install_command
        self.runner.run(install[0], list(install[1:]), capture=False)
        return self.runner.which(name) or self.runner.which(name, self.config.extra_path)

    def check_shell_style(self) -> Optional[bool]:
        """
        Run the shell checker over the entry script and shell utilities.

        Returns:
            Whether the check passed, or None if the checker isn't available
        """
        shell_checker = self.find_shell_checker()
        if not shell_checker:
            logger.warning(f"Could not find or install `{self.config.shell_checker}`! Not checking shell style.")
            return None

        shell_files = [str(path) for path in self.config.shell_files()]
        capture = self.runner.run(shell_checker, ["--shell=bash"] + shell_files, capture=False)
        return capture.success
