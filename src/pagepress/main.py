from __future__ import annotations

import sys
from pathlib import Path

import typer
from typer.main import get_command
from pygments.util import ClassNotFound

from pagepress.core.highlighter import render_style_css
from pagepress.core.pipeline import publish
from pagepress.errors import PublisherError
from pagepress.loaders.files import discover
from pagepress.loaders.frontmatter import YamlFrontMatterParser
from pagepress.models.config import PublisherConfig, load_env
from pagepress.models.entry import Entry
from pagepress.ui.reporting import (
    entries_to_json,
    print_summary,
    save_entries_json,
)
from pagepress.utils.logging import configure_logging

cli = typer.Typer(add_completion=False, no_args_is_help=True)


@cli.callback()
def root() -> None:
	"""
	Root callback for the pagepress CLI.

	Sets up the Typer application with no-args-is-help behavior.
	"""
	return None


def build_impl(
    pattern: str,
    highlighters: list[str] | None = None,
    workers: int | None = None,
    output: Path | None = None,
    yaml_front_matter: bool = False,
) -> None:
	"""
	Publish every file matching a pattern and emit the entries as JSON.

	Loads configuration from the environment, applies CLI overrides,
	runs the pipeline and prints a summary table to stderr.

	Parameters:
		pattern: Glob pattern for the source files.
		highlighters: Override for languages to highlight.
		workers: Override for the number of concurrent files.
		output: JSON destination; stdout when omitted.
		yaml_front_matter: Parse sources as ``---``-fenced YAML front matter.
	"""
	load_env()
	try:
		config = PublisherConfig()
		config.apply_overrides(highlighters=highlighters or None,
		                       max_workers=workers)
	except ValueError as e:
		typer.echo(f"error: {e}", err=True)
		raise typer.Exit(code=1)
	configure_logging(config.log_level)

	try:
		paths = discover(pattern)
		if not paths:
			typer.echo(f"no files match {pattern!r}", err=True)
			raise typer.Exit(code=1)
		parser = YamlFrontMatterParser() if yaml_front_matter else None
		entries = publish(paths, Entry, config, parser=parser)
	except (PublisherError, ValueError, OSError) as e:
		typer.echo(f"error: {e}", err=True)
		raise typer.Exit(code=1)

	if output:
		save_entries_json(output, entries)
	else:
		typer.echo(entries_to_json(entries))
	print_summary(entries)


@cli.command()
def build(
    pattern: str,
    highlighter: list[str] = typer.Option(
        None,
        "--highlighter",
        "-H",
        help="Language to highlight (repeatable)",
    ),
    workers: int = typer.Option(None, "--workers", min=1,
                                help="Override concurrent file count"),
    output: Path = typer.Option(None, "--output", "-o",
                                help="Write entries JSON to this file"),
    yaml_front_matter: bool = typer.Option(
        False,
        "--yaml-front-matter/--no-yaml-front-matter",
        help="Parse ---fenced YAML front matter",
    ),
) -> None:
	"""
	Publish files matching PATTERN and print entries as JSON.
	"""
	build_impl(pattern, highlighter, workers, output, yaml_front_matter)


@cli.command()
def styles(
    style: str = typer.Option("default", "--style",
                              help="Pygments style name"),
    selector: str = typer.Option(".highlight", "--selector",
                                 help="CSS selector to scope rules to"),
) -> None:
	"""
	Print CSS for highlighted code blocks.
	"""
	try:
		typer.echo(render_style_css(style, selector))
	except ClassNotFound:
		typer.echo(f"error: unknown style {style!r}", err=True)
		raise typer.Exit(code=1)


def entrypoint(argv=None, *, standalone_mode: bool = True):
	"""
	Typer entrypoint that defaults to `build` when appropriate.

	Allows calling 'pagepress "posts/*.md"' without explicitly
	specifying the 'build' subcommand.

	Parameters:
		argv: Command-line arguments. Defaults to sys.argv[1:].
		standalone_mode: If True, Click handles exit codes.

	Returns:
		Result of the Click application main invocation.
	"""
	args = sys.argv[1:] if argv is None else list(argv)

	_click_app = get_command(cli)
	commands = getattr(_click_app, "commands", {}).keys()
	if args and not args[0].startswith("-") and args[0] not in commands:
		args = ["build"] + args
	return _click_app.main(
	    args=args,
	    prog_name="pagepress",
	    standalone_mode=standalone_mode,
	)


if __name__ == "__main__":
	entrypoint()
