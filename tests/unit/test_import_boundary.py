"""Unit tests for the import boundary checking script.

Tests verify that the A-Frame import rules are enforced:
- domain/ imports NOTHING from other src layers and no effectful modules
- config/ imports from domain/ only
- infrastructure/ imports from domain/ and config/
- application/ imports from domain/, config/ and infrastructure/
"""

import ast

# Import from scripts directory
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent / "scripts"))

from check_imports import (
    ALLOWED_IMPORTS,
    LAYER_HIERARCHY,
    check_file_imports,
    check_import_boundaries,
    format_violations,
    get_import_module,
)


class TestLayerHierarchy:
    """Test that the layer hierarchy is correctly defined."""

    def test_domain_is_innermost(self) -> None:
        """Domain should be the innermost layer (level 0)."""
        assert LAYER_HIERARCHY["domain"] == 0

    def test_application_is_outermost(self) -> None:
        """Application should be the outermost layer."""
        assert LAYER_HIERARCHY["application"] == max(LAYER_HIERARCHY.values())


class TestAllowedImports:
    """Test that the allowed imports are correctly defined."""

    def test_domain_imports_nothing(self) -> None:
        assert ALLOWED_IMPORTS["domain"] == set()

    def test_config_imports_domain_only(self) -> None:
        assert ALLOWED_IMPORTS["config"] == {"domain"}

    def test_infrastructure_imports_domain_and_config(self) -> None:
        assert ALLOWED_IMPORTS["infrastructure"] == {"domain", "config"}

    def test_application_imports_everything_below(self) -> None:
        assert ALLOWED_IMPORTS["application"] == {"domain", "config", "infrastructure"}


class TestGetImportModule:
    """Test the get_import_module helper function."""

    def test_import_from_statement(self) -> None:
        """Test extraction from 'from x import y' statement."""
        node = ast.parse("from src.domain.models import Counter").body[0]
        assert isinstance(node, ast.ImportFrom)
        assert get_import_module(node) == "src.domain.models"

    def test_import_statement(self) -> None:
        """Test extraction from 'import x' statement."""
        node = ast.parse("import src.domain.models").body[0]
        assert isinstance(node, ast.Import)
        assert get_import_module(node) == "src.domain.models"

    def test_none_for_relative_import(self) -> None:
        """Relative imports have module=None."""
        node = ast.parse("from . import something").body[0]
        assert isinstance(node, ast.ImportFrom)
        assert get_import_module(node) is None


class TestCheckFileImports:
    """Test the check_file_imports function with temporary files."""

    @pytest.fixture
    def temp_src_dir(self, tmp_path: Path) -> Path:
        """Create a temporary src directory structure."""
        src_dir = tmp_path / "src"
        src_dir.mkdir()
        for layer in LAYER_HIERARCHY:
            (src_dir / layer).mkdir()
            (src_dir / layer / "__init__.py").write_text("")
        return src_dir

    def test_valid_import_domain_to_stdlib(self, temp_src_dir: Path) -> None:
        """Domain can import pure standard library modules."""
        domain_file = temp_src_dir / "domain" / "module.py"
        domain_file.write_text("import copy\nfrom dataclasses import dataclass")

        assert check_file_imports(domain_file, temp_src_dir) == []

    def test_valid_import_infrastructure_to_config(self, temp_src_dir: Path) -> None:
        infra_file = temp_src_dir / "infrastructure" / "adapter.py"
        infra_file.write_text("from src.config.loader import coerce_config\nimport httpx")

        assert check_file_imports(infra_file, temp_src_dir) == []

    def test_valid_same_layer_import(self, temp_src_dir: Path) -> None:
        domain_file = temp_src_dir / "domain" / "module.py"
        domain_file.write_text("from src.domain.other import Something")

        assert check_file_imports(domain_file, temp_src_dir) == []

    def test_violation_domain_imports_infrastructure(self, temp_src_dir: Path) -> None:
        domain_file = temp_src_dir / "domain" / "bad_module.py"
        domain_file.write_text("from src.infrastructure.adapters import HttpClient")

        violations = check_file_imports(domain_file, temp_src_dir)

        assert len(violations) == 1
        assert violations[0][0] == str(domain_file)
        assert violations[0][1] == 1  # Line number
        assert "domain layer cannot import from infrastructure" in violations[0][2]

    @pytest.mark.parametrize("module", ["httpx", "pathlib", "time", "os.path", "asyncio"])
    def test_violation_domain_imports_effectful_module(
        self, temp_src_dir: Path, module: str
    ) -> None:
        domain_file = temp_src_dir / "domain" / "bad_module.py"
        domain_file.write_text(f"import {module}")

        violations = check_file_imports(domain_file, temp_src_dir)

        assert len(violations) == 1
        assert "effectful module" in violations[0][2]

    def test_every_name_of_a_multi_import_is_checked(self, temp_src_dir: Path) -> None:
        domain_file = temp_src_dir / "domain" / "bad_module.py"
        domain_file.write_text("import json, socket")

        violations = check_file_imports(domain_file, temp_src_dir)

        assert [v.message for v in violations] == [
            "domain layer cannot import effectful module socket"
        ]

    def test_violation_config_imports_infrastructure(self, temp_src_dir: Path) -> None:
        config_file = temp_src_dir / "config" / "bad_config.py"
        config_file.write_text("\nfrom src.infrastructure.adapters import Clock")

        violations = check_file_imports(config_file, temp_src_dir)

        assert violations[0][1] == 2
        assert "config layer cannot import from infrastructure" in violations[0][2]

    def test_violation_infrastructure_imports_application(self, temp_src_dir: Path) -> None:
        infra_file = temp_src_dir / "infrastructure" / "bad_adapter.py"
        infra_file.write_text("from src.application.services import CounterService")

        violations = check_file_imports(infra_file, temp_src_dir)

        assert "infrastructure layer cannot import from application" in violations[0][2]

    def test_syntax_error_is_skipped(self, temp_src_dir: Path) -> None:
        broken = temp_src_dir / "domain" / "broken.py"
        broken.write_text("def (:")

        assert check_file_imports(broken, temp_src_dir) == []


class TestCheckImportBoundaries:
    """Tests over whole trees, including this project's own src/."""

    def test_project_src_has_no_violations(self) -> None:
        src_dir = Path(__file__).parent.parent.parent / "src"

        violations = check_import_boundaries(src_dir)

        assert violations == [], format_violations(violations)

    def test_missing_directory(self, tmp_path: Path) -> None:
        assert check_import_boundaries(tmp_path / "nope") == []
