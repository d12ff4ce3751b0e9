#!/usr/bin/env python3
"""
Command-line interface for cc-transcript.

Renders Claude Code session transcripts as readable text, or re-exports them
as an Anthropic Messages API `messages` array.
"""

from __future__ import annotations

import asyncio
import json
import traceback
from collections.abc import Sequence
from pathlib import Path

import typer

from cc_transcript.cli.logger import CLILogger
from cc_transcript.config.cli import settings
from cc_transcript.exceptions import TranscriptError
from cc_transcript.schemas.policy import DisplayPolicy
from cc_transcript.schemas.resolution import Candidates, DirectFile, NotFound, ResolutionError, SingleMatch
from cc_transcript.services.discovery import SessionResolver
from cc_transcript.services.formatter import format_candidates
from cc_transcript.services.transcript import export_transcript, render_transcript

app = typer.Typer(
    name='cc-transcript',
    help='View Claude Code session transcripts',
    add_completion=False,
)


def _validate_max_length(value: int | None) -> int | None:
    """Reject non-positive truncation thresholds before any file is touched."""
    if value is not None and value < 1:
        raise typer.BadParameter(f'Must be a positive number of characters, got {value}')
    return value


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f'{settings.APP_NAME} {settings.VERSION}')
        raise typer.Exit()


@app.command(no_args_is_help=True)
def view(
    references: list[str] = typer.Argument(
        ...,
        metavar='REFS...',
        help='Session ID or prefix, .jsonl file, or project directory (e.g. ".")',
    ),
    no_thinking: bool = typer.Option(False, '--no-thinking', help='Replace thinking blocks with a one-line indicator'),
    no_tools: bool = typer.Option(False, '--no-tools', help='Replace tool calls and results with one-line indicators'),
    no_system: bool = typer.Option(False, '--no-system', help='Omit system messages entirely'),
    no_timestamps: bool = typer.Option(False, '--no-timestamps', help='Omit timestamps from block headers'),
    no_metadata: bool = typer.Option(False, '--no-metadata', help='Omit the session metadata header'),
    truncate: bool = typer.Option(False, '--truncate', help='Truncate long text bodies'),
    max_length: int | None = typer.Option(
        None,
        '--max-length',
        help='Truncation threshold in characters (default: 500)',
        callback=_validate_max_length,
    ),
    exclude_agents: bool = typer.Option(False, '--exclude-agents', help='Leave agent-* sessions out of ID lookups'),
    latest: bool = typer.Option(False, '--latest', help='Pick the most recent session when several match'),
    api_json: bool = typer.Option(False, '--api-json', help='Print an API-ready {"messages": [...]} JSON document'),
    projects_dir: Path | None = typer.Option(
        None, '--projects-dir', help='Projects directory (default: ~/.claude/projects)'
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
    version: bool = typer.Option(
        False, '--version', help='Show the version and exit', callback=_show_version, is_eager=True
    ),
) -> None:
    """View one or more Claude Code session transcripts.

    Examples:

        cc-transcript 0f3a                 # session ID prefix

        cc-transcript . --latest           # newest session of the current project

        cc-transcript session.jsonl --api-json > messages.json
    """
    policy = DisplayPolicy(
        thinking='indicator' if no_thinking else 'show',
        tool_calls='indicator' if no_tools else 'show',
        tool_results='indicator' if no_tools else 'show',
        system='suppress' if no_system else 'show',
        show_timestamps=not no_timestamps,
        show_metadata=not no_metadata,
        truncate=truncate,
        max_length=max_length if max_length is not None else settings.DEFAULT_MAX_LENGTH,
    )
    logger = CLILogger(verbose=verbose)
    resolver = SessionResolver(
        projects_dir or settings.PROJECTS_DIR,
        include_agents=not exclude_agents,
        auto_pick_latest=latest,
        logger=logger,
    )
    asyncio.run(_view_async(references, resolver, policy, api_json, logger))


async def _view_async(
    references: Sequence[str],
    resolver: SessionResolver,
    policy: DisplayPolicy,
    api_json: bool,
    logger: CLILogger,
) -> None:
    """Async implementation of the view command."""
    try:
        paths, resolved_all = await _resolve_references(references, resolver, logger)
        if not paths:
            ok = True
        elif api_json:
            ok = await _export_api_json(paths, logger)
        else:
            ok = _display_transcripts(paths, policy, logger.verbose)
    except Exception as e:
        await logger.error(f'Failed to view transcripts: {e}')
        if logger.verbose:
            traceback.print_exc()
        raise typer.Exit(1)

    if not (resolved_all and ok):
        raise typer.Exit(1)


async def _resolve_references(
    references: Sequence[str],
    resolver: SessionResolver,
    logger: CLILogger,
) -> tuple[list[Path], bool]:
    """
    Resolve every reference before processing any file.

    Returns:
        (unique paths in first-seen order, whether every reference resolved)
    """
    paths: list[Path] = []
    resolved_all = True

    for reference in references:
        result = await resolver.resolve(reference)
        match result:
            case DirectFile(path=path) | SingleMatch(path=path):
                await logger.info(f'{reference} -> {path}')
                if path not in paths:
                    paths.append(path)
            case Candidates(sessions=sessions):
                typer.echo(f'\nMultiple sessions match "{reference}":\n', err=True)
                typer.echo(format_candidates(sessions), err=True)
                resolved_all = False
            case NotFound():
                typer.secho(f'No session found: {reference}', fg=typer.colors.RED, err=True)
                resolved_all = False
            case ResolutionError(error=error):
                typer.secho(f'Error resolving "{reference}": {error}', fg=typer.colors.RED, err=True)
                resolved_all = False

    return paths, resolved_all


async def _export_api_json(paths: Sequence[Path], logger: CLILogger) -> bool:
    """Print the combined messages of all files as JSON on stdout; warnings go to stderr."""
    messages: list[dict] = []
    ok = True

    for path in paths:
        try:
            export = export_transcript(path)
        except TranscriptError as e:
            typer.secho(f'Error extracting {path}:', fg=typer.colors.RED, err=True)
            typer.echo(str(e), err=True)
            ok = False
            continue

        if export.has_summaries:
            typer.secho(
                f'Warning: {path} contains summarized history. Export may be incomplete.',
                fg=typer.colors.YELLOW,
                err=True,
            )
        if export.unparseable_lines:
            line_list = ', '.join(str(n) for n in export.unparseable_lines)
            typer.secho(
                f'Warning: {path} has unparseable lines left out of the export: {line_list}',
                fg=typer.colors.YELLOW,
                err=True,
            )
        payload = export.to_api_payload()
        await logger.info(
            f'Exported {len(payload["messages"])} messages from session {export.session_id or "unknown"} ({path})'
        )
        messages.extend(payload['messages'])

    typer.echo(json.dumps({'messages': messages}, indent=2, ensure_ascii=False))
    return ok


def _display_transcripts(paths: Sequence[Path], policy: DisplayPolicy, verbose: bool) -> bool:
    """Render each file in turn; a failing file is reported and the rest still run."""
    ok = True

    for path in paths:
        typer.echo(f'\n=== Parsing: {path} ===\n')
        try:
            for chunk in render_transcript(path, policy):
                typer.echo(chunk)
        except TranscriptError as e:
            typer.secho(f'Error processing {path}:', fg=typer.colors.RED, err=True)
            typer.echo(str(e), err=True)
            if verbose:
                traceback.print_exc()
            ok = False

    return ok


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
