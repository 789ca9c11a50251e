# classroom/core/utils.py

"""
Repository for program-wide utilities.
"""

import time
import uuid


def generate_id(prefix: str) -> str:
    """
    Builds a synthetic record id of the form `<prefix>_<epoch-ms>_<suffix>`.

    The random suffix keeps ids unique when several records are created within the same millisecond.
    """
    return f"{prefix}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"


def normalize(text: str) -> str:
    return text.strip().lower()
