"""Prompt helpers for interactive input."""

from getpass import getpass

from prompt_toolkit import prompt as pt_prompt


def prompt_secret(prompt_text: str, prompt_suffix: str = ": ") -> str:
    """Prompt for sensitive input, masking characters when possible.

    Falls back to getpass (no echo) when no interactive terminal is attached.
    """
    full_prompt = f"{prompt_text}{prompt_suffix}"
    try:
        return pt_prompt(full_prompt, is_password=True)
    except (OSError, RuntimeError, EOFError):
        return getpass(full_prompt)
