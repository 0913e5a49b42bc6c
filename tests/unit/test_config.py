"""
Unit tests for the style configuration and cop registry.
"""

from pathlib import Path

import pytest

from descaudit.core.config import CopRegistry, DESCRIPTION_COPS, StyleConfig
from descaudit.core.errors import ConfigurationError


class TestStyleConfig:
    """Test StyleConfig construction and helpers."""

    def test_from_env(self, tmp_path):
        environ = {
            'DESCAUDIT_LIBRARY_PATH': str(tmp_path / "Library" / "Homebrew"),
            'DESCAUDIT_CACHE': str(tmp_path / "cache"),
            'DESCAUDIT_LINTER': "/opt/bin/rubocop",
            'DESCAUDIT_PATH': "/opt/bin",
            'DESCAUDIT_KNOWN_COPS': "Style/StringLiterals, Lint/Syntax,",
        }
        config = StyleConfig.from_env(environ)

        assert config.library_path == tmp_path / "Library" / "Homebrew"
        assert config.library == tmp_path / "Library"
        assert config.entry_script == tmp_path / "bin" / "brew"
        assert config.linter == "/opt/bin/rubocop"
        assert config.shell_checker == "shellcheck"
        assert config.extra_path == "/opt/bin"
        assert config.known_cops == DESCRIPTION_COPS + ("Style/StringLiterals", "Lint/Syntax")

    def test_defaults(self):
        config = StyleConfig.from_env({})

        assert config.library_path == Path("Library/Homebrew")
        assert config.linter == "rubocop"
        assert config.extra_path is None
        assert config.install_command is None

    def test_config_files(self, tmp_path):
        config = StyleConfig(tmp_path / "Homebrew", tmp_path, tmp_path / "brew", tmp_path / "cache")

        assert config.default_config_file == tmp_path / ".rubocop.yml"
        assert config.spec_config_file == tmp_path / ".rubocop_rspec.yml"

    def test_cache_env(self, tmp_path):
        config = StyleConfig(tmp_path / "Homebrew", tmp_path, tmp_path / "brew", tmp_path / "cache")
        assert config.cache_env() == {"XDG_CACHE_HOME": str(tmp_path / "cache" / "style")}

    def test_shell_files(self, tmp_path):
        """Test that only existing scripts from the fixed globs are listed."""
        library_path = tmp_path / "Homebrew"
        (library_path / "cmd").mkdir(parents=True)
        (library_path / "utils").mkdir()
        (library_path / "brew.sh").write_text("#!/bin/bash\n")
        (library_path / "cmd" / "update.sh").write_text("#!/bin/bash\n")
        (library_path / "utils" / "lock.sh").write_text("#!/bin/bash\n")
        (library_path / "cmd" / "ignored.rb").write_text("")

        config = StyleConfig(library_path, tmp_path, tmp_path / "missing-brew", tmp_path / "cache")

        assert config.shell_files() == [
            library_path / "brew.sh",
            library_path / "cmd" / "update.sh",
            library_path / "utils" / "lock.sh",
        ]

    def test_shell_files_include_entry_script(self, tmp_path):
        entry = tmp_path / "brew"
        entry.write_text("#!/bin/bash\n")
        config = StyleConfig(tmp_path / "Homebrew", tmp_path, entry, tmp_path / "cache")

        assert config.shell_files() == [entry]


class TestCopRegistry:
    """Test cop name qualification and validation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = CopRegistry(["Style/StringLiterals", "Lint/Syntax", "FormulaAudit/Desc"])

    def test_departments(self):
        registry = CopRegistry(["Style/StringLiterals", "Lint/Syntax", "FormulaAudit/Desc"], departments=())
        assert registry.departments == frozenset(["Style", "Lint", "FormulaAudit"])

    def test_qualified_name(self):
        assert self.registry.qualified_name("StringLiterals") == "Style/StringLiterals"
        assert self.registry.qualified_name("Style/StringLiterals") == "Style/StringLiterals"
        assert self.registry.qualified_name("Lint") == "Lint"
        assert self.registry.qualified_name("Unknown") == "Unknown"

    def test_ambiguous_name(self):
        registry = CopRegistry(DESCRIPTION_COPS)

        with pytest.raises(ConfigurationError) as excinfo:
            registry.qualified_name("Desc")
        assert excinfo.value.names == ["Desc"]

    def test_validate(self):
        assert self.registry.validate(["StringLiterals", "Lint"]) == ["Style/StringLiterals", "Lint"]

    def test_validate_rejects_unknown_names(self):
        """Test that any unknown cop is a configuration error."""
        with pytest.raises(ConfigurationError) as excinfo:
            self.registry.validate(["StringLiterals", "Style/Nope", "Bogus"])

        assert excinfo.value.names == ["Style/Nope", "Bogus"]
        assert "Style/Nope,Bogus" in str(excinfo.value)

    @pytest.mark.parametrize("department", ["Style", "Layout", "Lint", "Metrics", "Naming", "FormulaAudit"])
    def test_default_registry_knows_standard_departments(self, department):
        assert CopRegistry().validate([department]) == [department]

    def test_default_registry_rejects_unlisted_cops(self):
        with pytest.raises(ConfigurationError):
            CopRegistry().validate(["Style/StringLiterals"])

    def test_from_show_cops(self):
        output = (
            "# Available cops (2) + config for /brew/Library:\n"
            "# Department 'Style' (1):\n"
            "Style/StringLiterals:\n"
            "  Description: Checks if uses of quotes match the configured preference.\n"
            "  EnforcedStyle: single_quotes\n"
            "# Department 'RSpec/Capybara' (1):\n"
            "RSpec/Capybara/FeatureMethods:\n"
            "  Enabled: true\n"
        )
        registry = CopRegistry.from_show_cops(output, extra_names=DESCRIPTION_COPS)

        assert registry.names == frozenset(
            ["Style/StringLiterals", "RSpec/Capybara/FeatureMethods"] + list(DESCRIPTION_COPS)
        )
        assert registry.validate(["StringLiterals", "RSpec"]) == ["Style/StringLiterals", "RSpec"]
