#!/usr/bin/env python3
"""
ArpSweep - Path Resolution Helpers

This module centralizes path resolution for scenarios where ArpSweep runs under sudo.
When executed as root via sudo, `~` and `$HOME` typically point to /root, but user-facing
state (config, logs) should be stored under the invoking user whenever possible.
It also resolves where the vendor registry (oui.txt) is read from.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Tuple

try:
    import pwd  # Unix-only
except ImportError:  # pragma: no cover
    pwd = None

from arpsweep.utils.constants import ENV_OUI_PATH, OUI_FILENAME

logger = logging.getLogger(__name__)


def _is_root() -> bool:
    try:
        return hasattr(os, "geteuid") and os.geteuid() == 0
    except Exception:
        return False


def is_privileged() -> bool:
    """True when running as root (POSIX). On Windows this cannot be told cheaply; assume False."""
    return _is_root()


def _resolve_home_dir_for_user(username: str) -> Optional[str]:
    if not username or not isinstance(username, str):
        return None

    if pwd is not None:
        try:
            return pwd.getpwnam(username).pw_dir
        except KeyError:
            pass

    expanded = os.path.expanduser(f"~{username}")
    if expanded and not expanded.startswith("~"):
        return expanded
    return None


def get_invoking_user() -> Optional[str]:
    """
    Return the invoking user when running under sudo, otherwise None.

    When executed as root without sudo, returns None.
    """

    if not _is_root():
        return None
    sudo_user = os.environ.get("SUDO_USER")
    if sudo_user and sudo_user.strip() and sudo_user.strip() != "root":
        return sudo_user.strip()
    return None


def get_invoking_home_dir() -> str:
    """
    Resolve the home directory for the user that invoked sudo, if available.

    Falls back to the current user's home directory.
    """

    invoking_user = get_invoking_user()
    if invoking_user:
        home_dir = _resolve_home_dir_for_user(invoking_user)
        if home_dir:
            return home_dir
    return os.path.expanduser("~")


def expand_user_path(path: str) -> str:
    """
    Expand a user path, resolving `~` to the invoking user's home under sudo.
    """

    if not isinstance(path, str):
        return str(path)
    raw = path.strip()
    if not raw:
        return raw

    invoking_user = get_invoking_user()
    if invoking_user and (raw == "~" or raw.startswith("~/")):
        home_dir = get_invoking_home_dir()
        if raw == "~":
            return home_dir
        return os.path.join(home_dir, raw[2:])

    return os.path.expanduser(raw)


def resolve_invoking_user_owner() -> Optional[Tuple[int, int]]:
    """
    Resolve the uid/gid for the invoking user under sudo.
    """

    if not _is_root():
        return None

    sudo_uid = os.environ.get("SUDO_UID")
    sudo_gid = os.environ.get("SUDO_GID")
    if sudo_uid and sudo_gid and sudo_uid.isdigit() and sudo_gid.isdigit():
        return int(sudo_uid), int(sudo_gid)

    invoking_user = get_invoking_user()
    if invoking_user and pwd is not None:
        try:
            pw = pwd.getpwnam(invoking_user)
            return pw.pw_uid, pw.pw_gid
        except KeyError:
            return None

    return None


def maybe_chown_to_invoking_user(path: str) -> None:
    """
    Best-effort: chown a path to the invoking user (sudo) to avoid root-owned files.
    """

    owner = resolve_invoking_user_owner()
    if not owner:
        return
    if not hasattr(os, "chown"):
        return

    uid, gid = owner
    try:
        os.chown(path, uid, gid)
    except OSError:
        logger.debug("Failed to chown path to invoking user: %s", path, exc_info=True)


def get_script_dir() -> str:
    """Directory of the running entry script (where a bundled oui.txt sits)."""
    script = sys.argv[0] if sys.argv and sys.argv[0] else ""
    return os.path.dirname(os.path.abspath(script)) if script else os.getcwd()


def resolve_oui_path(explicit: Optional[str] = None, configured: Optional[str] = None) -> str:
    """
    Resolve the vendor registry path.

    Priority:
    1) Explicit path (CLI --oui)
    2) ARPSWEEP_OUI_PATH environment variable
    3) Persisted config value
    4) oui.txt in the working directory
    5) oui.txt next to the running script

    Returns:
        The first existing candidate, or the working-directory default when none exists
    """
    for candidate in (explicit, os.environ.get(ENV_OUI_PATH), configured):
        if candidate and candidate.strip():
            return expand_user_path(candidate)

    cwd_default = os.path.join(os.getcwd(), OUI_FILENAME)
    if os.path.isfile(cwd_default):
        return cwd_default

    beside_script = os.path.join(get_script_dir(), OUI_FILENAME)
    if os.path.isfile(beside_script):
        return beside_script

    return cwd_default
