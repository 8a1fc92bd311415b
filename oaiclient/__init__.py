"""Client for the models, moderation, speech, thread, run and vector store endpoints of an OpenAI-compatible API, with event-stream, rate-limit and reasoning-model helpers."""

__version__ = "0.1.0"