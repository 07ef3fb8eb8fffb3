"""Environment driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_STATE_FILE = Path.home() / ".osari_catalog" / "state.json"


@dataclass(slots=True)
class Settings:
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_token: Optional[str] = None
    emailjs_service_id: str = ""
    emailjs_template_id: str = ""
    emailjs_public_key: str = ""
    state_file: Path = DEFAULT_STATE_FILE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        state_file = env.get("OSARI_STATE_FILE")
        return cls(
            supabase_url=env.get("SUPABASE_URL", ""),
            supabase_key=env.get("SUPABASE_KEY", ""),
            supabase_token=env.get("SUPABASE_ACCESS_TOKEN") or None,
            emailjs_service_id=env.get("EMAILJS_SERVICE_ID", ""),
            emailjs_template_id=env.get("EMAILJS_TEMPLATE_ID", ""),
            emailjs_public_key=env.get("EMAILJS_PUBLIC_KEY", ""),
            state_file=Path(state_file) if state_file else DEFAULT_STATE_FILE,
        )

    @property
    def has_remote(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)
