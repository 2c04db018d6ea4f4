"""Model Playground - chat with several LLM providers using your own API keys."""

__version__ = "0.1.0"
