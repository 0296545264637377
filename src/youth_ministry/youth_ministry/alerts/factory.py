from __future__ import annotations

from dataclasses import dataclass

from .policies.base import PresencePolicy
from .policies.lenient_policy import LenientPresencePolicy
from .policies.strict_policy import StrictPresencePolicy


@dataclass
class PresencePolicyFactory:
    """Factory Pattern: choose the presence policy from configuration."""

    def for_config(self, *, late_counts_as_present: bool) -> PresencePolicy:
        if late_counts_as_present:
            return LenientPresencePolicy()
        return StrictPresencePolicy()
