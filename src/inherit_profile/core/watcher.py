"""Re-run inheritance when the active profile changes.

The watcher polls the global store from one background thread. It only
calls back when the resolved active profile *name* differs from the one it
saw last; content changes alone (including the pipeline's own writes to
settings.json) never trigger a run. Callbacks run on the watcher thread one
at a time, so two runs never write the same file concurrently.
"""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Callable, Optional, Tuple

from inherit_profile.core.profiles import get_current_profile_name, get_global_storage_path, read_global_storage

logger = logging.getLogger(__name__)

ProfileChangeCallback = Callable[[str, str], None]


class ProfileWatcher:
    """Cancellable background task comparing old vs. new active profile."""

    def __init__(
        self,
        user_dir: Path,
        on_change: ProfileChangeCallback,
        *,
        interval_seconds: float = 1.0,
        initial_profile: Optional[str] = None,
    ) -> None:
        self.user_dir = Path(user_dir)
        self.storage_path = get_global_storage_path(self.user_dir)
        self.on_change = on_change
        self.interval_seconds = max(0.01, float(interval_seconds))
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._signature = self._storage_signature()
        self.current_profile = (
            initial_profile
            if initial_profile is not None
            else get_current_profile_name(read_global_storage(self.user_dir))
        )

    def _storage_signature(self) -> Optional[Tuple[int, int]]:
        try:
            st = self.storage_path.stat()
        except OSError:
            return None
        return (st.st_mtime_ns, st.st_size)

    def poll_once(self) -> bool:
        """Check the store once; return True when the callback was invoked."""
        signature = self._storage_signature()
        if signature == self._signature:
            return False
        self._signature = signature

        new_profile = get_current_profile_name(read_global_storage(self.user_dir))
        if new_profile == self.current_profile:
            return False

        previous, self.current_profile = self.current_profile, new_profile
        logger.info("Current profile has changed (%s -> %s), updating inherited settings...", previous, new_profile)
        self.on_change(previous, new_profile)
        return True

    def _run(self) -> None:
        while not self._stop.wait(timeout=self.interval_seconds):
            try:
                self.poll_once()
            except Exception:
                # Keep watching: one failed run must not end the session.
                logger.exception("Failed to update inherited settings after a profile change.")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="inherit-profile-watcher", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until stopped (or ``timeout``); returns True once stopped."""
        return self._stop.wait(timeout=timeout)

    def __enter__(self) -> "ProfileWatcher":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


__all__ = ["ProfileWatcher", "ProfileChangeCallback"]
