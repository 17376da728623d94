"""Configuration helpers for loading environment variables.

This module ensures that variables defined in a project-level ``.env`` file
are loaded before attempting to access them.  Consumers should rely on the
``get_env`` helpers instead of using :func:`os.getenv` directly so that the
configuration is loaded in a single, well-defined place.

Recognised settings:

``GRAPHLAB_HAMILTONIAN_MAX_VERTICES``
    Largest graph the Hamiltonian backtracking search will attempt
    (default ``15``).
``GRAPHLAB_MERGE_POLICY``
    Weight kept when directed edges are merged into one undirected edge:
    ``first`` (default), ``min`` or ``max``.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

HAMILTONIAN_MAX_VERTICES_KEY = "GRAPHLAB_HAMILTONIAN_MAX_VERTICES"
DEFAULT_HAMILTONIAN_MAX_VERTICES = 15

MERGE_POLICY_KEY = "GRAPHLAB_MERGE_POLICY"
DEFAULT_MERGE_POLICY = "first"


@lru_cache(maxsize=1)
def _load_environment() -> None:
    """Populate ``os.environ`` from ``.env`` once per process.

    The repository root is tried first; otherwise python-dotenv searches for
    a file on its own. Values already set in the process are never replaced.
    Call ``_load_environment.cache_clear()`` to force a reload.
    """

    project_root = Path(__file__).resolve().parents[1]
    env_path = project_root / ".env"

    if env_path.exists():
        load_dotenv(env_path, override=False)
    else:
        load_dotenv(override=False)


def get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Return the value for ``key`` from the environment.

    Parameters
    ----------
    key:
        The name of the environment variable to look up.
    default:
        The value to return when ``key`` is not present.
    """

    _load_environment()
    return os.environ.get(key, default)


def get_int_env(key: str, default: int) -> int:
    """Return ``key`` parsed as an integer, or ``default`` if unset or invalid."""

    raw = get_env(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        LOGGER.warning("Ignoring non-integer value %r for %s", raw, key)
        return default


def hamiltonian_max_vertices() -> int:
    return get_int_env(HAMILTONIAN_MAX_VERTICES_KEY, DEFAULT_HAMILTONIAN_MAX_VERTICES)


def merge_policy_name() -> str:
    return (get_env(MERGE_POLICY_KEY, DEFAULT_MERGE_POLICY) or DEFAULT_MERGE_POLICY).strip().lower()


__all__ = ["get_env", "get_int_env", "hamiltonian_max_vertices", "merge_policy_name"]
