"""
Model Playground - multi-provider LLM chat

Talk to OpenAI, Anthropic, Perplexity, Google, xAI, DeepSeek, Mistral and
Cohere models from one interface, using API keys stored locally.

Quick Start:
    pip install -e .
    model-playground key set openai
    model-playground chat -p "your prompt here"
"""

from model_playground.cli.cli import main

if __name__ == "__main__":
    main()
