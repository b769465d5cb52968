import contextlib

import pytest

from openai_rest.config import Config
from openai_rest.core.api import Client
from openai_rest.core.session import ChatSession
from openai_rest.main import App


class FakeConsole:
    def __init__(self):
        self.printed = []

    def print(self, *args, **kwargs):
        self.printed.extend(str(a) for a in args)


class FakeUI:
    """Scripted stand-in for the terminal UI."""

    def __init__(self, inputs=(), secret=""):
        self.inputs = list(inputs)
        self.secret = secret
        self.console = FakeConsole()
        self.messages = []
        self.errors = []
        self.replies = []
        self.images = []
        self.embeddings = []

    def banner(self):
        pass

    def main_menu(self):
        pass

    def get_input(self, label="COMMAND"):
        return self.inputs.pop(0) if self.inputs else "/exit"

    def get_secret(self, label="API KEY"):
        return self.secret

    def working(self, text=""):
        return contextlib.nullcontext()

    def show_msg(self, title, content, color="white"):
        self.messages.append((title, content))

    def show_error(self, err):
        self.errors.append(err)

    def show_reply(self, title, content):
        self.replies.append(content)

    def show_images(self, response):
        self.images.append(response)
        return [item["url"] for item in response.get("data", []) if item.get("url")]

    def show_embedding(self, response):
        self.embeddings.append(response)


@pytest.fixture
def app():
    ui = FakeUI()
    app = App(ui=ui)
    app.client = Client("sk-test")
    app.chat_session = ChatSession(app.client)
    return app


def test_setup_key_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    app = App(ui=FakeUI())

    assert app.setup_key() is True
    assert app.client.api_key == "sk-env"
    assert app.chat_session.client is app.client


def test_setup_key_prompts_and_saves(monkeypatch, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.setattr(Config, "ENV_FILE", str(tmp_path / ".env"))
    app = App(ui=FakeUI(inputs=["y"], secret="sk-typed"))

    assert app.setup_key() is True
    assert app.client.api_key == "sk-typed"
    assert "sk-typed" in (tmp_path / ".env").read_text()


def test_setup_key_without_input(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "")
    app = App(ui=FakeUI(secret=""))

    assert app.setup_key() is False
    assert app.client is None


def test_chat_loop(app, transport):
    transport.reply(200, {"choices": [{"message": {"content": "Hello back"}}]})
    app.ui.inputs = ["Hello!", "/exit"]

    app.run_chat()

    assert app.ui.replies == ["Hello back"]
    assert len(app.chat_session.history) == 2


def test_chat_loop_shows_errors_and_continues(app, transport):
    transport.reply(401, {"error": {"message": "Incorrect API key provided"}})
    app.ui.inputs = ["Hello!", "/exit"]

    app.run_chat()

    assert [e.status_code for e in app.ui.errors] == [401]
    assert app.chat_session.history == []


def test_image_copies_first_url(app, transport, monkeypatch):
    copied = []
    monkeypatch.setattr("openai_rest.main.copy_to_clipboard", lambda text: copied.append(text) or True)
    transport.reply(200, {"data": [{"url": "https://img/1.png"}, {"url": "https://img/2.png"}]})
    app.ui.inputs = ["a cat"]

    app.run_image()

    assert copied == ["https://img/1.png"]
    assert transport.last_json()["prompt"] == "a cat"


def test_embedding(app, transport):
    transport.reply(200, {"data": [{"embedding": [0.1, 0.2]}], "model": "text-embedding-3-small"})
    app.ui.inputs = ["hello"]

    app.run_embedding()

    assert app.ui.embeddings[0]["data"][0]["embedding"] == [0.1, 0.2]


def test_transcription(app, transport, tmp_path):
    audio = tmp_path / "note.wav"
    audio.write_bytes(b"RIFF")
    transport.reply(200, {"text": "remember the milk"})
    app.ui.inputs = [str(audio)]

    app.run_transcription()

    assert app.ui.messages[-1] == ("Transcription", "remember the milk")


def test_speech_writes_file(app, transport, monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "OUTPUT_DIR", str(tmp_path))
    transport.reply(200, content=b"\xff\xfbaudio")
    app.ui.inputs = ["Good morning", ""]

    app.run_speech()

    files = list(tmp_path.glob("speech_*.mp3"))
    assert len(files) == 1
    assert files[0].read_bytes() == b"\xff\xfbaudio"
    assert transport.last_json()["voice"] == "alloy"


def test_menu_reports_client_errors(monkeypatch, transport, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    ui = FakeUI(inputs=["4", str(tmp_path / "missing.wav"), "9", "7"])
    App(ui=ui).run()

    assert type(ui.errors[0]).__name__ == "NotFoundError"
    assert ui.messages[-1] == ("Menu", "Unknown option.")
    assert transport.calls == []


def test_transcription_of_directory_keeps_menu_running(monkeypatch, transport, tmp_path):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    ui = FakeUI(inputs=["4", str(tmp_path), "9", "7"])
    App(ui=ui).run()

    assert type(ui.errors[0]).__name__ == "NotFoundError"
    assert ui.messages[-1] == ("Menu", "Unknown option.")
    assert transport.calls == []


def test_speech_write_failure_keeps_menu_running(monkeypatch, transport, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    monkeypatch.setattr(Config, "OUTPUT_DIR", str(blocker))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    transport.reply(200, content=b"audio")
    ui = FakeUI(inputs=["5", "hello", "", "9", "7"])

    App(ui=ui).run()

    title, content = ui.messages[-2]
    assert title == "Speech"
    assert content.startswith("Could not save audio")
    assert ui.messages[-1] == ("Menu", "Unknown option.")
