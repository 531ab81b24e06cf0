import json
import os
from pathlib import Path

import click

from .logging import configure_logging
from .pipeline import CodeGeneratorConfig, PipelineGenerator, SourceParseError


def module_reference(target: Path, importer: Path) -> str:
    """Relative module specifier of `target` as imported from `importer` ("./hero")."""
    target = Path(target)
    stem = target.with_suffix("") if target.suffix in (".ts", ".tsx") else target
    relative = Path(os.path.relpath(stem, Path(importer).parent)).as_posix()
    if not relative.startswith("."):
        relative = f"./{relative}"
    return relative


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--max-run", default=None, type=click.IntRange(min=1), help="Maximum number of dependency resolution passes")
@click.option("--keep-comments", is_flag=True, default=False, help="Reproduce JSDoc comments in the schemas file")
@click.option("--strict", is_flag=True, default=False, help="Generated object schemas reject unknown keys")
@click.option("--skip-parse-jsdoc", is_flag=True, default=False, help="Ignore JSDoc tags")
@click.option(
    "--tests-output",
    "-t",
    default=None,
    type=click.Path(resolve_path=True),
    help="Also write the integration test file to this path",
)
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def ts_to_zod(config, max_run, keep_comments, strict, skip_parse_jsdoc, tests_output, verbose, path, output):
    configure_logging(verbose=verbose)

    with open(path, encoding="utf-8") as f:
        source_text = f.read()

    if config is not None:
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if max_run is not None:
        config.max_run = max_run
    if keep_comments:
        config.keep_comments = True
    if strict:
        config.strict = True
    if skip_parse_jsdoc:
        config.skip_parse_jsdoc = True

    try:
        result = PipelineGenerator(source_text, config).generate()
    except SourceParseError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w", encoding="utf-8") as f:
        f.write(result.get_zod_schemas_file(module_reference(Path(path), Path(output))))

    if tests_output is not None:
        with open(tests_output, "w", encoding="utf-8") as f:
            f.write(
                result.get_integration_test_file(
                    module_reference(Path(path), Path(tests_output)),
                    module_reference(Path(output), Path(tests_output)),
                )
            )

    for error in result.errors:
        click.echo(error, err=True)

    if result.errors:
        click.get_current_context().exit(1)
