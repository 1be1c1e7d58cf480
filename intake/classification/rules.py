"""Ordered rule tables for vendor classification and masking."""

from collections.abc import Callable
from dataclasses import dataclass

from intake.classification.models import SensitivityLevel
from intake.config.settings import Settings


@dataclass(frozen=True)
class SensitivityRule:
    level: SensitivityLevel
    keywords: tuple[str, ...]

    def matches(self, folded_name: str) -> bool:
        return any(keyword in folded_name for keyword in self.keywords)


@dataclass(frozen=True)
class MaskingLabelRule:
    """Replaces a whole vendor name with a stable category label.

    When ``hashed`` is set the label gets a one-character digest suffix so
    different vendors of one category stay distinguishable.
    """

    level: SensitivityLevel
    keywords: tuple[str, ...]
    label: str
    hashed: bool = False

    def matches(self, folded_name: str) -> bool:
        return any(keyword in folded_name for keyword in self.keywords)


MASKING_LABEL_RULES: tuple[MaskingLabelRule, ...] = (
    MaskingLabelRule(
        SensitivityLevel.HIGH,
        ("mossad", "shin bet", "security", "defense", "defence", "military", "government"),
        "Security-Vendor-",
        hashed=True,
    ),
    MaskingLabelRule(
        SensitivityLevel.HIGH, ("bank", "finance", "crypto"), "Finance-Vendor-", hashed=True
    ),
    MaskingLabelRule(
        SensitivityLevel.HIGH, ("health", "medical", "hospital"), "Health-Vendor-", hashed=True
    ),
    MaskingLabelRule(SensitivityLevel.MEDIUM, ("aws", "amazon"), "Cloud-Provider-A"),
    MaskingLabelRule(SensitivityLevel.MEDIUM, ("gcp", "google"), "Cloud-Provider-G"),
    MaskingLabelRule(SensitivityLevel.MEDIUM, ("azure", "microsoft"), "Cloud-Provider-M"),
)


@dataclass(frozen=True)
class ClassificationRules:
    sensitivity_rules: tuple[SensitivityRule, ...]
    label_rules: tuple[MaskingLabelRule, ...] = MASKING_LABEL_RULES

    @classmethod
    def from_settings(
        cls, settings: Settings, fold: Callable[[str], str] = str.lower
    ) -> "ClassificationRules":
        """Build keyword rules from *settings*, passing each keyword through *fold*
        so keywords and vendor names are compared in the same form."""
        return cls(
            sensitivity_rules=(
                SensitivityRule(
                    SensitivityLevel.HIGH, _keywords(settings.high_sensitivity_keywords, fold)
                ),
                SensitivityRule(
                    SensitivityLevel.MEDIUM, _keywords(settings.medium_sensitivity_keywords, fold)
                ),
            )
        )


def _keywords(values: list[str], fold: Callable[[str], str]) -> tuple[str, ...]:
    folded = (fold(v.strip()) for v in values if v.strip())
    return tuple(keyword for keyword in folded if keyword)
