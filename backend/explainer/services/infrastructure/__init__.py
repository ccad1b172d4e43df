"""Infrastructure services - LLM access, storage, job orchestration, parsing."""
