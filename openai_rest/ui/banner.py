from rich.text import Text
from rich.align import Align

from .. import __version__


class Banner:
    @staticmethod
    def get_ascii_art():
        return r"""
[bold bright_cyan]  ___  ___ ___ _  _   _   ___ [/][bold bright_green] ___ ___ ___ _____ [/]
[bold bright_cyan] / _ \| _ \ __| \| | /_\ |_ _|[/][bold bright_green]| _ \ __/ __|_   _|[/]
[bold bright_cyan]| (_) |  _/ _|| .` |/ _ \ | | [/][bold bright_green]|   / _|\__ \ | |  [/]
[bold bright_cyan] \___/|_| |___|_|\_/_/ \_\___|[/][bold bright_green]|_|_\___|___/ |_|  [/]
        """

    @staticmethod
    def print_banner(console):
        tagline = Text(f"chat | images | embeddings | audio | v{__version__}", style="bold bright_white")
        subline = Text("Plain REST access to the OpenAI API", style="italic dim green")

        console.print(Align.center(Banner.get_ascii_art()))
        console.print(Align.center(tagline))
        console.print(Align.center(subline))

        console.print(Align.center(Text("━" * 50, style="dim cyan")))
        console.print("")
