import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from drawguard.adapters.sqlite.integrity import SQLiteIntegrityVerifier
from drawguard.components.drawing import DrawingSanitizer, create_drawing_sanitizer
from drawguard.rules.loader import load_rules
from drawguard.rules.models import Rules
from drawguard.rules.provider import StaticRulesProvider


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("DRAWGUARD_DATA_DIR", "./data"))
        self.upload_dir = self.data_dir / "uploads"
        self.rules_path = Path(
            os.environ.get("DRAWGUARD_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def load_configured_rules(rules_path: Path) -> Rules:
    return load_rules(rules_path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return load_configured_rules(settings.rules_path)


# --- Services ---
def get_drawing_sanitizer(rules: Rules = Depends(get_rules)) -> DrawingSanitizer:
    return create_drawing_sanitizer(StaticRulesProvider(rules))


@lru_cache
def get_integrity_verifier() -> SQLiteIntegrityVerifier:
    return SQLiteIntegrityVerifier()
