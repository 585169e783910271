"""Settings and entitlement domain services."""

from decimal import Decimal
from typing import Optional

import structlog

from drivetally.database.base import Database
from drivetally.database import mappers
from drivetally.domain.calculator import require_number
from drivetally.domain.cost_model import ModeInputs, derive_cost_per_km
from drivetally.domain.entities import AdvancedCosts, AppSettings, CostMode
from drivetally.domain.entitlements import Entitlements
from drivetally.domain.errors import InvalidInputError, must_not_be_negative
from drivetally.utils.amount_parser import Number

SETTINGS_KEY = "settings"
PREMIUM_KEY = "is_premium"

logger = structlog.get_logger(__name__)


class EntitlementService:
    """Service for reading and changing the premium flag."""

    def __init__(self, db: Database):
        """Initialize entitlement service.

        Args:
            db: Database instance
        """
        self.db = db

    def get_entitlements(self) -> Entitlements:
        """Get the current entitlements (free tier if never set)."""
        is_premium = self.db.load(PREMIUM_KEY, False, mappers.flag_from_payload)
        return Entitlements(is_premium=is_premium)

    def set_premium(self, is_premium: bool) -> Entitlements:
        """Turn the premium tier on or off."""
        self.db.save(PREMIUM_KEY, bool(is_premium))
        logger.info("premium_changed", is_premium=bool(is_premium))
        return Entitlements(is_premium=bool(is_premium))


class SettingsService:
    """Service for the cost per km setting and its calculator."""

    def __init__(self, db: Database):
        """Initialize settings service.

        Args:
            db: Database instance
        """
        self.db = db
        self.entitlement_service = EntitlementService(db)

    def get_settings(self) -> AppSettings:
        """Get settings, using defaults on first use."""
        return self.db.load(SETTINGS_KEY, AppSettings(), mappers.settings_from_payload)

    def save_cost_per_km(self, cost_per_km: Number) -> AppSettings:
        """Save a new cost per km.

        Raises:
            InvalidInputError: If the value is not a number or is negative
        """
        cost = require_number(cost_per_km, "Cost per km")
        if cost < 0:
            raise InvalidInputError(must_not_be_negative("Cost per km"))

        settings = AppSettings(cost_per_km=cost)
        self.db.save(SETTINGS_KEY, settings, mappers.settings_to_payload)
        logger.info("settings_saved", cost_per_km=str(cost))
        return settings

    def derive_cost_per_km(
        self,
        mode: CostMode,
        inputs: Optional[ModeInputs],
        advanced: Optional[AdvancedCosts] = None,
    ) -> Decimal:
        """Derive a cost per km from the calculator sections.

        The result is not saved; pass it to ``save_cost_per_km`` to keep it.

        Raises:
            FeatureLockedError: If advanced costs are given without premium
            MissingDenominatorError: If advanced costs lack monthly km
            NoInputProvidedError: If no section produced a cost
        """
        if advanced is not None and (advanced.has_costs() or advanced.monthly_km > 0):
            self.entitlement_service.get_entitlements().require(
                "advanced_costs", "The advanced cost calculator"
            )
        return derive_cost_per_km(mode, inputs, advanced)
