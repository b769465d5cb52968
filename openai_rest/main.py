import logging
import sys
from datetime import datetime

import colorama
from rich.logging import RichHandler
from rich.markup import escape

from .config import Config
from .core.api import Client, OpenAIError
from .core.session import ChatSession
from .ui.interface import UI
from .utils.system import copy_to_clipboard

logger = logging.getLogger(__name__)


def setup_logging(level: str = None):
    logging.basicConfig(
        level=level or Config.LOG_LEVEL,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


class App:
    """Interactive menu driving the REST client"""

    def __init__(self, ui: UI = None):
        self.ui = ui or UI()
        self.client = None
        self.chat_session = None

    def setup_key(self, force: bool = False) -> bool:
        api_key = None if force else Config.get_api_key()
        if not api_key:
            api_key = self.ui.get_secret("OPENAI API KEY")
            if not api_key:
                self.ui.show_msg("API Key", "No key entered.", "yellow")
                return False
            answer = self.ui.get_input("Save key to .env? [y/N]").strip().lower()
            if answer in ("y", "yes"):
                path = Config.save_api_key(api_key)
                self.ui.show_msg("API Key", f"Key saved to {path}", "green")

        self.client = Client(api_key)
        self.chat_session = ChatSession(self.client, model=Config.CHAT_MODEL, system_prompt=Config.SYSTEM_PROMPT)
        return True

    def run_chat(self):
        self.ui.show_msg(
            "Chat",
            "Type [bold]/exit[/] to return, [bold]/new[/] to reset, [bold]/model <name>[/] to switch model.",
            "cyan",
        )
        while True:
            user_input = self.ui.get_input("YOU").strip()
            if not user_input:
                continue
            if user_input == "/exit":
                return
            if user_input == "/new":
                self.chat_session.reset()
                self.ui.show_msg("Chat", "Conversation cleared.", "yellow")
                continue
            if user_input.startswith("/model "):
                self.chat_session.set_model(user_input.split(" ", 1)[1].strip())
                self.ui.show_msg("Chat", f"Model set to {escape(self.chat_session.model)}", "yellow")
                continue

            try:
                with self.ui.working():
                    reply = self.chat_session.send(user_input)
            except OpenAIError as e:
                self.ui.show_error(e)
                continue
            self.ui.show_reply(self.chat_session.model or "ASSISTANT", reply)

    def run_image(self):
        prompt = self.ui.get_input("IMAGE PROMPT").strip()
        if not prompt:
            return
        with self.ui.working("Generating image..."):
            response = self.client.generate_image(prompt)
        urls = self.ui.show_images(response)
        if urls and copy_to_clipboard(urls[0]):
            self.ui.console.print("[bold green]✓ First image URL copied to clipboard[/]")

    def run_embedding(self):
        text = self.ui.get_input("TEXT").strip()
        if not text:
            return
        with self.ui.working("Creating embedding..."):
            response = self.client.create_embedding(text)
        self.ui.show_embedding(response)

    def run_transcription(self):
        path = self.ui.get_input("AUDIO FILE PATH").strip().strip('"')
        if not path:
            return
        with self.ui.working("Transcribing..."):
            response = self.client.transcribe_audio(path)
        text = response.get("text", response.get("raw", ""))
        self.ui.show_msg("Transcription", escape(text) or "[dim](no speech detected)[/]", "green")

    def run_speech(self):
        text = self.ui.get_input("TEXT TO SPEAK").strip()
        if not text:
            return
        voice = self.ui.get_input("VOICE [alloy]").strip() or "alloy"
        with self.ui.working("Synthesizing speech..."):
            audio = self.client.create_speech(text, voice=voice)
        try:
            out_path = Config.output_path(f"speech_{datetime.now().strftime('%Y%m%d_%H%M%S')}.mp3")
            out_path.write_bytes(audio)
        except OSError as e:
            logger.warning("Could not save synthesized audio: %s", e)
            self.ui.show_msg("Speech", f"Could not save audio: {escape(str(e))}", "red")
            return
        self.ui.show_msg("Speech", f"Saved {len(audio)} bytes to {out_path}", "green")

    def run(self):
        self.ui.banner()
        if not self.setup_key():
            return

        actions = {
            "1": self.run_chat,
            "2": self.run_image,
            "3": self.run_embedding,
            "4": self.run_transcription,
            "5": self.run_speech,
            "6": lambda: self.setup_key(force=True),
        }

        while True:
            self.ui.main_menu()
            choice = self.ui.get_input("SELECT").strip()
            if choice in ("7", "/exit"):
                return
            action = actions.get(choice)
            if action is None:
                self.ui.show_msg("Menu", "Unknown option.", "yellow")
                continue
            try:
                action()
            except OpenAIError as e:
                logger.debug("Menu action %s failed", choice, exc_info=True)
                self.ui.show_error(e)


def main():
    colorama.just_fix_windows_console()
    setup_logging()
    try:
        App().run()
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
