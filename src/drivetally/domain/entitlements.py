"""Feature entitlements.

Every premium check goes through ``Entitlements`` so that the calculation and
storage code never sees the premium flag directly.
"""

from dataclasses import dataclass

from drivetally.domain.errors import FeatureLockedError, feature_locked

FREE_RECORD_LIMIT = 15


@dataclass(frozen=True)
class Entitlements:
    """Capabilities unlocked for the current user."""

    is_premium: bool = False

    @property
    def unlimited_records(self) -> bool:
        return self.is_premium

    @property
    def advanced_costs(self) -> bool:
        return self.is_premium

    @property
    def reports(self) -> bool:
        return self.is_premium

    @property
    def ai_analysis(self) -> bool:
        return self.is_premium

    def require(self, capability: str, feature: str) -> None:
        """Raise FeatureLockedError unless ``capability`` is unlocked."""
        if not getattr(self, capability):
            raise FeatureLockedError(feature_locked(feature))
