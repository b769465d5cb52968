import os

import pyperclip


def clear_screen():
    os.system("cls" if os.name == "nt" else "clear")


def copy_to_clipboard(text: str) -> bool:
    """Copy text to the system clipboard. Returns False when no clipboard is available."""
    try:
        pyperclip.copy(text)
        return True
    except pyperclip.PyperclipException:
        return False
