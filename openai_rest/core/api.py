"""
api.py - Thin REST client for the OpenAI HTTP API

Exposes chat completions, image generation, embeddings, audio transcription
and speech synthesis as plain methods. Every call is a single blocking POST;
there is no streaming, no retry and no connection management beyond what
`requests` does on its own.

Usage:
    from openai_rest import Client

    client = Client(api_key="sk-...")
    response = client.chat({"messages": [{"role": "user", "content": "Hello!"}]})
    print(response["choices"][0]["message"]["content"])

    audio = client.create_speech("Hello there", voice="nova")  # raw mp3 bytes
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Union

import requests

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openai.com/v1/"
REQUEST_TIMEOUT = 60

CHAT_ENDPOINT = "chat/completions"
IMAGES_ENDPOINT = "images/generations"
EMBEDDINGS_ENDPOINT = "embeddings"
TRANSCRIPTIONS_ENDPOINT = "audio/transcriptions"
SPEECH_ENDPOINT = "audio/speech"

DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
UNKNOWN_ERROR_MESSAGE = "An unknown API error occurred."


# =============================================================================
# Exceptions
# =============================================================================

class OpenAIError(Exception):
    """Base exception for everything raised by the client."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(OpenAIError):
    """Raised when the client is built without an API key."""
    pass


class NotFoundError(OpenAIError):
    """Raised when a local input file does not exist."""
    pass


class TransportError(OpenAIError):
    """Raised when the request never got a response."""
    pass


class TransportTimeoutError(TransportError):
    """Raised on timeout."""
    pass


class APIError(OpenAIError):
    """Raised when the service answers with an error status or error payload."""
    def __init__(self, message: str, status_code: int = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self):
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


# =============================================================================
# Client
# =============================================================================

class Client:
    """
    REST client for the OpenAI API.

    Usage:
        client = Client(api_key="sk-...")

        # Chat
        client.chat({"model": "gpt-4", "messages": [{"role": "user", "content": "Hi"}]})

        # Images
        client.generate_image("A cat", n=2)

        # Embeddings
        client.create_embedding("Hello")

        # Audio
        client.transcribe_audio("meeting.mp3")
        client.create_speech("Good morning", voice="echo")
    """

    def __init__(self, api_key: str = None):
        if not api_key:
            raise ConfigurationError("OpenAI API key is required.")
        self._api_key = api_key
        self._base_url = BASE_URL

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def base_url(self) -> str:
        return self._base_url

    def _send_request(
        self,
        endpoint: str,
        data: Dict[str, Any],
        method: str = "POST",
        is_multipart: bool = False,
    ) -> Union[Dict[str, Any], bytes]:
        """Send one request and interpret the response.

        Returns the decoded JSON mapping, or the raw body for a successful
        speech request.
        """
        url = f"{self._base_url}{endpoint}"
        headers = {"Authorization": f"Bearer {self._api_key}"}

        if is_multipart:
            # requests builds the multipart body and its boundary header
            fields = {k: v for k, v in data.items() if not hasattr(v, "read")}
            files = {k: v for k, v in data.items() if hasattr(v, "read")}
            request_kwargs = {"data": fields, "files": files}
        else:
            headers["Content-Type"] = "application/json"
            request_kwargs = {"data": json.dumps(data)}

        logger.debug(
            "%s %s (%s)", method, url, "multipart" if is_multipart else "json"
        )

        try:
            response = requests.request(
                method,
                url,
                headers=headers,
                timeout=REQUEST_TIMEOUT,
                **request_kwargs,
            )
        except requests.exceptions.Timeout as e:
            logger.warning("Request to %s timed out", url)
            raise TransportTimeoutError(
                f"Request timed out after {REQUEST_TIMEOUT}s: {e}"
            ) from e
        except requests.exceptions.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise TransportError(f"Connection error: {e}") from e

        status_code = response.status_code
        logger.debug("%s %s -> HTTP %s", method, url, status_code)

        if status_code == 200 and endpoint == SPEECH_ENDPOINT:
            return response.content

        decoded = _decode_body(response.text)

        if status_code >= 400 or (isinstance(decoded, dict) and "error" in decoded):
            message = _error_message(decoded)
            logger.warning("API error from %s: %s (HTTP %s)", endpoint, message, status_code)
            raise APIError(message, status_code=status_code, body=response.text)

        return decoded

    def chat(self, params: Dict[str, Any]) -> Dict[str, Any]:
        """Create a chat completion.

        Args:
            params: Request body, e.g.
                {"model": "gpt-4",
                 "messages": [{"role": "user", "content": "Hello!"}],
                 "max_tokens": 150}
                `model` falls back to gpt-3.5-turbo when missing.
        """
        body = dict(params)
        if "model" not in body:
            body["model"] = DEFAULT_CHAT_MODEL
        return self._send_request(CHAT_ENDPOINT, body)

    def generate_image(
        self,
        prompt: str,
        n: int = 1,
        size: str = "1024x1024",
        model: str = "dall-e-3",
        **kwargs,
    ) -> Dict[str, Any]:
        """Generate images from a text prompt."""
        body = {
            "model": model,
            "prompt": prompt,
            "n": n,
            "size": size,
        }
        body.update(kwargs)
        return self._send_request(IMAGES_ENDPOINT, body)

    def create_embedding(
        self,
        input: str,
        model: str = "text-embedding-3-small",
        **kwargs,
    ) -> Dict[str, Any]:
        """Create an embedding vector for the input text."""
        body = {
            "input": input,
            "model": model,
        }
        body.update(kwargs)
        return self._send_request(EMBEDDINGS_ENDPOINT, body)

    def transcribe_audio(
        self,
        file_path: str,
        model: str = "whisper-1",
        **kwargs,
    ) -> Dict[str, Any]:
        """Transcribe an audio file to text.

        Extra keyword arguments (language, prompt, response_format,
        temperature, ...) are sent as additional form fields.
        """
        if not os.path.isfile(file_path):
            raise NotFoundError(f"Audio file not found at path: {file_path}")

        with open(file_path, "rb") as audio_file:
            data = {"model": model}
            data.update(kwargs)
            data["file"] = audio_file
            return self._send_request(
                TRANSCRIPTIONS_ENDPOINT, data, "POST", is_multipart=True
            )

    def create_speech(
        self,
        input: str,
        voice: str = "alloy",
        model: str = "tts-1",
        **kwargs,
    ) -> bytes:
        """Synthesize speech and return the raw audio bytes (mp3 by default).

        Voices: alloy, echo, fable, onyx, nova, shimmer.
        Models: tts-1, tts-1-hd.
        """
        body = {
            "model": model,
            "input": input,
            "voice": voice,
        }
        body.update(kwargs)
        return self._send_request(SPEECH_ENDPOINT, body)

    def __repr__(self):
        return f"Client(base_url={self._base_url!r}, api_key='***')"

    def close(self):
        """Close the client (nothing is held open between calls)."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


# =============================================================================
# Response helpers
# =============================================================================

def _decode_body(text: str) -> Dict[str, Any]:
    if not text:
        return {}
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError:
        return {"raw": text}
    if not isinstance(decoded, dict):
        return {"raw": text}
    return decoded


def _error_message(decoded: Any) -> str:
    if isinstance(decoded, dict):
        error = decoded.get("error")
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return UNKNOWN_ERROR_MESSAGE


__all__ = [
    "Client",
    "OpenAIError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "TransportTimeoutError",
    "APIError",
    "BASE_URL",
    "REQUEST_TIMEOUT",
    "DEFAULT_CHAT_MODEL",
]
