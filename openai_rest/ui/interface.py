from typing import Any, Dict, List

import pwinput
from rich.console import Console
from rich.panel import Panel
from rich.markdown import Markdown
from rich.table import Table
from rich.align import Align
from rich.rule import Rule
from rich.markup import escape
from rich.status import Status
from prompt_toolkit import PromptSession
from prompt_toolkit.styles import Style
from prompt_toolkit.history import FileHistory

from ..config import Config
from ..core.api import OpenAIError
from .banner import Banner


class UI:
    """Terminal User Interface using Rich"""

    def __init__(self, console: Console = None, history_file: str = ".openai_rest_history"):
        self.console = console or Console()
        self.pt_style = Style.from_dict({
            'prompt': 'ansiyellow bold',
        })
        self.session = PromptSession(history=FileHistory(history_file))

    def clear(self):
        from ..utils.system import clear_screen
        clear_screen()

    def banner(self):
        self.clear()
        Banner.print_banner(self.console)

    def main_menu(self):
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column("Icon", style="bold yellow", justify="right")
        table.add_column("Option", style="bold bright_white")

        table.add_row("[1]", "Chat [dim](Conversation with history)[/]")
        table.add_row("[2]", "Image [dim](Generate from a prompt)[/]")
        table.add_row("[3]", "Embedding [dim](Vectorize text)[/]")
        table.add_row("[4]", "Transcribe [dim](Audio file to text)[/]")
        table.add_row("[5]", "Speech [dim](Text to audio file)[/]")
        table.add_row("[6]", "API Key [dim](Configure credential)[/]")
        table.add_row("[7]", "Exit")

        panel = Panel(
            Align.center(table),
            title="[bold cyan]OPENAI REST[/bold cyan]",
            border_style="bright_blue",
            padding=(1, 5),
            subtitle="[dim]Select an option to proceed[/]"
        )
        self.console.print(panel)

    def show_msg(self, title: str, content: str, color: str = "white"):
        self.console.print(Panel(content, title=f"[bold]{title}[/]", border_style=color, padding=(1, 2)))

    def show_error(self, err: OpenAIError):
        self.show_msg(type(err).__name__, escape(str(err)), "red")

    def get_input(self, label: str = "COMMAND") -> str:
        try:
            self.console.print(f"[bold bright_yellow]◆ {label}[/]")
            return self.session.prompt(
                [('class:prompt', ' ╰─> ')],
                style=self.pt_style,
            )
        except KeyboardInterrupt:
            raise
        except EOFError:
            return "/exit"

    def get_secret(self, label: str = "API KEY") -> str:
        """Read a secret without echoing it."""
        return pwinput.pwinput(prompt=f"◆ {label} ╰─> ", mask="*").strip()

    def working(self, text: str = "Contacting OpenAI...") -> Status:
        return self.console.status(text, spinner="dots", spinner_style="bright_cyan")

    def show_reply(self, title: str, content: str):
        self.console.print(Rule(f"[bold bright_cyan]{title}[/bold bright_cyan]", style="bright_blue"))
        self.console.print(Markdown(content or "_(empty reply)_", code_theme=Config.CODE_THEME))
        self.console.print(Rule(style="dim bright_blue"))

    def show_images(self, response: Dict[str, Any]) -> List[str]:
        """Render an images/generations response. Returns the image URLs."""
        table = Table(show_header=True, header_style="bold magenta", border_style="dim white", expand=True)
        table.add_column("#", style="cyan", justify="center", width=4)
        table.add_column("URL", style="green", overflow="fold")
        table.add_column("Revised Prompt", style="dim white")

        urls = []
        for idx, item in enumerate(response.get("data") or [], 1):
            url = item.get("url") or ("<base64 payload>" if item.get("b64_json") else "")
            if item.get("url"):
                urls.append(item["url"])
            table.add_row(str(idx), escape(url), escape(item.get("revised_prompt") or ""))

        self.console.print(table)
        return urls

    def show_embedding(self, response: Dict[str, Any], preview: int = 8):
        data = response.get("data") or []
        if not data:
            self.show_msg("Embedding", "No embedding returned.", "yellow")
            return

        vector = data[0].get("embedding") or []
        head = ", ".join(f"{x:.4f}" for x in vector[:preview])
        usage = response.get("usage") or {}
        body = (
            f"[bold]Model:[/] {escape(str(response.get('model', '?')))}\n"
            f"[bold]Dimensions:[/] {len(vector)}\n"
            f"[bold]Tokens:[/] {usage.get('total_tokens', '?')}\n"
            f"[bold]Vector:[/] [{head}{', ...' if len(vector) > preview else ''}]"
        )
        self.show_msg("Embedding", body, "green")
