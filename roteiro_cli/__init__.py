"""Roteiro Studio CLI"""

import logging

import click
from dotenv import load_dotenv
from rich.logging import RichHandler

from .generate import script_cmd, topics_cmd, classify_cmd, images_cmd, narrate_cmd
from .providers import providers_cmd
from .secrets import secrets_cli

# Load .env file at CLI startup
load_dotenv()


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logs")
def main(verbose: bool):
    """Roteiro Studio - YouTube scripts, images and narration from generative APIs

    \b
    Quick Start:
      roteiro secrets set gemini
      roteiro script -p gemini -t "Seu tópico" -d 5-10 -s Educativo -o roteiro.txt
      roteiro images roteiro.txt
      roteiro narrate roteiro.txt -o roteiro.mp3

    \b
    Commands:
      script     Generate a script with a text provider
      topics     List sections detected in a script
      classify   Suggest niche fields from video metadata
      images     Generate one image per topic
      narrate    Generate narrated audio
      providers  List providers
      secrets    Manage API keys
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_time=False, show_path=False)],
    )


main.add_command(script_cmd, name="script")
main.add_command(topics_cmd, name="topics")
main.add_command(classify_cmd, name="classify")
main.add_command(images_cmd, name="images")
main.add_command(narrate_cmd, name="narrate")

main.add_command(providers_cmd, name="providers")
main.add_command(secrets_cli, name="secrets")


if __name__ == "__main__":
    main()
