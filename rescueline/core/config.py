"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Document / report storage (SQLite file, relative to the working directory)
DB_PATH: str = os.getenv("RESCUELINE_DB_PATH", "data/rescueline.db").strip() or "data/rescueline.db"
DB_TIMEOUT: float = 5.0

# Context stuffing: no relevance ranking, so cap how many documents go into a prompt
CONTEXT_DOC_LIMIT: int = 5

# Uploads
MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
ALLOWED_EXTENSIONS: frozenset[str] = frozenset({".txt", ".md", ".csv", ".pdf", ".xlsx"})

# API timeouts (seconds)
LLM_API_TIMEOUT: float = 30.0

# Answer length for the information line (spoken back to callers, keep it short)
ANSWER_MAX_TOKENS: int = 400

# OpenAI (answer model). When set, answers come from OpenAI instead of Hugging Face.
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_LLM_MODEL: str = (
    os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
)

# Hugging Face router chat (used when OPENAI_API_KEY is not set)
HF_API_KEY: str = os.getenv("HF_API_KEY", "").strip()
HF_CHAT_URL: str = "https://router.huggingface.co/v1/chat/completions"
HF_LLM_MODEL: str = (
    os.getenv("HF_LLM_MODEL", "meta-llama/Llama-3.2-3B-Instruct").strip()
    or "meta-llama/Llama-3.2-3B-Instruct"
)

# Dashboard -> backend
API_BASE: str = os.getenv("API_BASE", "http://localhost:8000").strip() or "http://localhost:8000"
