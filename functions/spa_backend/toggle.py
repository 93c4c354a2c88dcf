"""
Process-wide "appointments enabled" flag.
"""

from __future__ import annotations


class AppointmentToggle:
    """
    A single boolean that starts disabled and is flipped on demand.

    The state lives only as long as the process: every function instance
    holds its own copy and a restart resets it. Flips are not serialized,
    so concurrent toggles may race.
    """

    def __init__(self, enabled: bool = False):
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def toggle(self) -> bool:
        self._enabled = not self._enabled
        return self._enabled
