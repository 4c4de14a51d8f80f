from __future__ import annotations
import os

CARGO = os.environ.get("CARGOCI_CARGO", "cargo")
PROJECT_ROOT = os.environ.get("CARGOCI_PROJECT_ROOT", ".")
DEBUG = os.environ.get("CARGOCI_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
