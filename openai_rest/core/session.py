from typing import Any, Dict, List, Optional

from .api import Client


class ChatSession:
    """Keeps a running conversation on top of Client.chat"""

    def __init__(self, client: Client, model: Optional[str] = None, system_prompt: Optional[str] = None):
        self.client = client
        self.model = model
        self.system_prompt = system_prompt
        self.history: List[Dict[str, Any]] = []
        self.reset()

    def set_model(self, model_name: str):
        """Update the model being used"""
        self.model = model_name
        # Only a fresh conversation is restarted on a model switch
        if len(self.history) <= 1:
            self.reset()

    def reset(self):
        if self.system_prompt:
            self.history = [{"role": "system", "content": self.system_prompt}]
        else:
            self.history = []

    def send(self, user_input: str, **params) -> str:
        self.history.append({"role": "user", "content": user_input})

        request = dict(params)
        request["messages"] = list(self.history)
        if self.model and "model" not in request:
            request["model"] = self.model

        try:
            response = self.client.chat(request)
        except Exception:
            self.history.pop()
            raise

        content = ""
        choices = response.get("choices") or []
        if choices:
            content = (choices[0].get("message") or {}).get("content") or ""

        self.history.append({"role": "assistant", "content": content})
        return content
