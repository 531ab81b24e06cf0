import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from ts_to_zod.ts_to_zod import module_reference, ts_to_zod

HERO_SOURCE = """export type Name = "superman" | "clark kent" | "kal-l";

export interface Superman {
  name: Name;
  age: number;
}
"""

VILAIN_SOURCE = """export interface EvilPlan {
  details: EvilPlanDetails;
}

export interface EvilPlanDetails {
  parent: EvilPlan;
}
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI configures the package logger; restore it after each test"""
    yield
    logger = logging.getLogger("ts_to_zod")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def hero_file(tmp_path):
    path = tmp_path / "hero.ts"
    path.write_text(HERO_SOURCE)
    return path


class TestModuleReference:
    def test_same_directory(self):
        assert module_reference(Path("/src/hero.ts"), Path("/src/hero.zod.ts")) == "./hero"

    def test_generated_module(self):
        assert module_reference(Path("/src/hero.zod.ts"), Path("/src/hero.integration.ts")) == "./hero.zod"

    def test_other_directory(self):
        assert module_reference(Path("/src/hero.ts"), Path("/src/generated/hero.zod.ts")) == "../hero"


class TestCli:
    def test_generate_schemas(self, tmp_path, hero_file):
        output = tmp_path / "hero.zod.ts"
        result = CliRunner().invoke(ts_to_zod, [str(hero_file), str(output)])

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert content.startswith("// Generated by ts_to_zod\n")
        assert "export const nameSchema = z.union(" in content
        assert "export const supermanSchema = z.object({" in content

    def test_tests_output(self, tmp_path, hero_file):
        output = tmp_path / "hero.zod.ts"
        tests_output = tmp_path / "hero.integration.ts"
        result = CliRunner().invoke(ts_to_zod, [str(hero_file), str(output), "--tests-output", str(tests_output)])

        assert result.exit_code == 0, result.output
        content = tests_output.read_text()
        assert 'import * as spec from "./hero";' in content
        assert 'import * as generated from "./hero.zod";' in content
        assert "expectType<spec.Superman>({} as supermanSchemaInferredType)" in content

    def test_strict_flag(self, tmp_path, hero_file):
        output = tmp_path / "hero.zod.ts"
        result = CliRunner().invoke(ts_to_zod, [str(hero_file), str(output), "--strict"])

        assert result.exit_code == 0, result.output
        assert "}).strict();" in output.read_text()

    def test_config_file(self, tmp_path, hero_file):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"namePattern": "^Name$", "schemaNameSuffix": "Validator"}))
        output = tmp_path / "hero.zod.ts"
        result = CliRunner().invoke(ts_to_zod, ["--config", str(config), str(hero_file), str(output)])

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "export const nameValidator" in content
        assert "supermanValidator" not in content

    def test_circular_dependencies_exit_code(self, tmp_path):
        source = tmp_path / "vilain.ts"
        source.write_text(VILAIN_SOURCE)
        output = tmp_path / "vilain.zod.ts"
        result = CliRunner().invoke(ts_to_zod, [str(source), str(output), "--max-run", "3"])

        assert result.exit_code == 1
        assert "Some schemas can't be generated due to circular dependencies:" in result.output
        # Resolved schemas are still written
        assert output.exists()

    def test_invalid_max_run(self, tmp_path, hero_file):
        result = CliRunner().invoke(ts_to_zod, [str(hero_file), str(tmp_path / "out.ts"), "--max-run", "0"])
        assert result.exit_code == 2

    def test_syntax_error(self, tmp_path):
        source = tmp_path / "broken.ts"
        source.write_text("export interface Hero { name: ")
        output = tmp_path / "broken.zod.ts"
        result = CliRunner().invoke(ts_to_zod, [str(source), str(output)])

        assert result.exit_code == 1
        assert "Failed to parse TypeScript source" in result.output
        assert not output.exists()
