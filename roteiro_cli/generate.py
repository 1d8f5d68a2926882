"""Generation commands - script, topics, classify, images, narrate"""

import asyncio
import json
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from roteiro.config import get_settings, make_credential_store
from roteiro.content_analyzer import classify, extract_topics
from roteiro.models import ScriptParameters, Topic
from roteiro.pipeline import ScriptPipeline
from roteiro.providers import WIRE_FORMATS
from roteiro.providers.audio import DEFAULT_VOICES, MODELS

console = Console()


def make_pipeline() -> ScriptPipeline:
    settings = get_settings()
    return ScriptPipeline(credentials=make_credential_store(settings), settings=settings)


async def _with_pipeline(step):
    pipeline = make_pipeline()
    try:
        return await step(pipeline)
    finally:
        await pipeline.close()


def _read_script(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _topics_json(topics: List[Topic]) -> str:
    return json.dumps(
        [{"title": t.title, "prompt": t.prompt, "image_url": t.artifact_url, "error": t.error} for t in topics],
        indent=2,
        ensure_ascii=False,
    )


def _load_topics(path: str) -> List[Topic]:
    """Topics from a script file, or from the JSON written by ``topics --json``"""
    if Path(path).suffix.lower() != ".json":
        return extract_topics(_read_script(path))

    try:
        data = json.loads(_read_script(path))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid topics file:[/red] {e}")
        raise SystemExit(1)
    if not isinstance(data, list) or not all(isinstance(item, dict) and item.get("title") for item in data):
        console.print("[red]Invalid topics file:[/red] expected a list of objects with a title")
        raise SystemExit(1)

    return [
        Topic(
            title=item["title"],
            prompt=item.get("prompt") or None,
            artifact_url=item.get("image_url"),
            error=item.get("error"),
        )
        for item in data
    ]


@click.command()
@click.option("--provider", "-p", type=click.Choice(sorted(WIRE_FORMATS)), default=None,
              help="Text provider (default from settings)")
@click.option("--topic", "-t", required=True, help="Video topic")
@click.option("--duration", "-d", required=True, help="Duration in minutes, e.g. 5-10")
@click.option("--style", "-s", required=True, help="Video style")
@click.option("--style-keywords", default="", help="Tone keywords")
@click.option("--language", default="", help="Script language")
@click.option("--niche", default="")
@click.option("--subniche", default="")
@click.option("--microniche", default="")
@click.option("--nanoniche", default="")
@click.option("--audience", default="", help="Target audience")
@click.option("--info", "additional_info", default="", help="Additional information")
@click.option("--youtube-link", default="", help="Reference video URL")
@click.option("--qualified/--general", default=False, help="Audience is already familiar with the subject")
@click.option("--import-metadata", is_flag=True,
              help="Pre-fill niche fields from --youtube-link before generating")
@click.option("--output", "-o", type=click.Path(), help="Write the script to this file")
def script_cmd(provider: Optional[str], output: Optional[str], import_metadata: bool, **fields):
    """
    Generate a YouTube script with one text provider.

    Examples:

        roteiro script -p gemini -t "Como criar thumbnails" -d 5-10 -s Educativo

        roteiro script -p claude -t "ETFs para iniciantes" -d 10-15 -s Didático \\
            --youtube-link https://youtu.be/abc123 --import-metadata -o roteiro.txt
    """
    params = ScriptParameters(**fields)
    provider = provider or get_settings().default_text_provider

    async def run(pipeline: ScriptPipeline):
        nonlocal params
        if import_metadata:
            imported = await pipeline.import_metadata(params.youtube_link)
            if imported.success:
                params = params.apply_analysis(imported.analysis)
                console.print(f"[green]Imported:[/green] niche={imported.analysis.niche}")
            else:
                console.print(f"[yellow]Metadata import failed:[/yellow] {imported.error_message}")
        return await pipeline.generate_script(provider, params)

    with console.status(f"Generating script with {provider}..."):
        result = asyncio.run(_with_pipeline(run))

    if not result.success:
        console.print(f"[red]Error ({result.error_kind.value}):[/red] {result.error_message}")
        raise SystemExit(1)

    if output:
        Path(output).write_text(result.text, encoding="utf-8")
        console.print(f"[green]Script saved to[/green] {output}")
    else:
        console.print(Panel(result.text, title=f"Roteiro ({provider})", border_style="cyan"))


@click.command()
@click.argument("script_file", type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def topics_cmd(script_file: str, as_json: bool):
    """List the sections detected in a script file"""
    topics = extract_topics(_read_script(script_file))

    if as_json:
        click.echo(_topics_json(topics))
        return

    if not topics:
        console.print("[yellow]No topics found[/yellow]")
        return

    table = Table(title="Topics")
    table.add_column("#", style="dim")
    table.add_column("Title", style="cyan")
    for i, topic in enumerate(topics, start=1):
        table.add_row(str(i), topic.title)
    console.print(table)


@click.command()
@click.option("--title", default="", help="Video title")
@click.option("--description", default="", help="Video description")
@click.option("--tag", "tags", multiple=True, help="Video tag (repeatable, order matters)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def classify_cmd(title: str, description: str, tags: tuple, as_json: bool):
    """Suggest niche fields from a title, description and tags"""
    analysis = classify(f"{title}\n{description}", list(tags))

    if as_json:
        click.echo(json.dumps(asdict(analysis), indent=2, ensure_ascii=False))
        return

    console.print(f"Niche: [cyan]{analysis.niche}[/cyan]")
    console.print(f"Subniche: {analysis.subniche or '—'}")
    console.print(f"Microniche: {analysis.microniche or '—'}")
    console.print(f"Nanoniche: {analysis.nanoniche or '—'}")
    console.print(f"Qualified: {'Yes' if analysis.qualified else 'No'}")


@click.command()
@click.argument("source", type=click.Path(exists=True))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--output", "-o", type=click.Path(), help="Write the updated topics JSON to this file")
def images_cmd(source: str, as_json: bool, output: Optional[str]):
    """
    Generate one image per topic (Leonardo AI).

    SOURCE is a script file or a topics file written by ``topics --json``.
    In a topics file, edited prompts are used as written and topics that
    already have an image_url are skipped.

    Examples:

        roteiro topics roteiro.txt --json > topicos.json

        roteiro images topicos.json -o topicos.json
    """
    topics = _load_topics(source)
    if not topics:
        console.print("[yellow]No topics found[/yellow]")
        return

    async def run(pipeline: ScriptPipeline):
        return await pipeline.generate_images(topics)

    with console.status(f"Generating {len(topics)} images..."):
        asyncio.run(_with_pipeline(run))

    if output:
        Path(output).write_text(_topics_json(topics), encoding="utf-8")

    if as_json:
        click.echo(_topics_json(topics))
        return

    for topic in topics:
        if topic.artifact_url:
            console.print(f"[green]✓[/green] {topic.title}\n    {topic.artifact_url}")
        else:
            console.print(f"[red]x[/red] {topic.title}: {topic.error or 'not generated'}")
    if output:
        console.print(f"[green]Topics saved to[/green] {output}")


@click.command()
@click.argument("script_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), required=True, help="MP3 output path")
@click.option("--voice", type=click.Choice([v["name"] for v in DEFAULT_VOICES]), default=None,
              help="Voice name (default from settings)")
@click.option("--model", type=click.Choice([m["id"] for m in MODELS]), default=None)
def narrate_cmd(script_file: str, output: str, voice: Optional[str], model: Optional[str]):
    """Narrate a script file with ElevenLabs"""
    text = _read_script(script_file)
    voice_id = next((v["voice_id"] for v in DEFAULT_VOICES if v["name"] == voice), None)

    async def run(pipeline: ScriptPipeline):
        return await pipeline.narrate(text, voice_id=voice_id, model_id=model)

    with console.status("Generating audio..."):
        result = asyncio.run(_with_pipeline(run))

    if not result.success:
        console.print(f"[red]Error ({result.error_kind.value}):[/red] {result.error_message}")
        raise SystemExit(1)

    Path(output).write_bytes(result.audio_data)
    console.print(f"[green]Audio saved to[/green] {output} ({len(result.audio_data)} bytes)")
