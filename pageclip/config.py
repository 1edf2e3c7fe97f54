"""Centralised settings for the pageclip chunking engine.

All default size windows are resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Plain text chunking
    # ------------------------------------------------------------------
    text_min_chars: int = field(
        default_factory=lambda: int(os.environ.get("CHUNK_MIN_CHARS", "100"))
    )
    text_max_chars: int = field(
        default_factory=lambda: int(os.environ.get("CHUNK_MAX_CHARS", "1000"))
    )

    # ------------------------------------------------------------------
    # Transcript chunking
    # ------------------------------------------------------------------
    transcript_min_chars: int = field(
        default_factory=lambda: int(os.environ.get("TRANSCRIPT_MIN_CHARS", "100"))
    )
    transcript_max_chars: int = field(
        default_factory=lambda: int(os.environ.get("TRANSCRIPT_MAX_CHARS", "800"))
    )
    transcript_max_chunks: int = field(
        default_factory=lambda: int(os.environ.get("TRANSCRIPT_MAX_CHUNKS", "50"))
    )

    # ------------------------------------------------------------------
    # HTML chunking (reader-mode tidy editor)
    # ------------------------------------------------------------------
    html_min_chars: int = field(
        default_factory=lambda: int(os.environ.get("HTML_MIN_CHARS", "3000"))
    )
    html_max_chars: int = field(
        default_factory=lambda: int(os.environ.get("HTML_MAX_CHARS", "5000"))
    )

    # ------------------------------------------------------------------
    # Truncation guard
    # ------------------------------------------------------------------
    max_input_chars: int = field(
        default_factory=lambda: int(os.environ.get("MAX_INPUT_CHARS", "100000"))
    )


# Module-level singleton, import this everywhere:
#   from pageclip.config import settings
settings = Settings()
