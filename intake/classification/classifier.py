"""Vendor sensitivity classification.

Vendor names arrive in several scripts and with diacritics, so matching runs
on a folded form produced by ICU (``Any-Latin; Latin-ASCII; Lower``): ``Bänk
Leumi`` and ``BANK LEUMI`` both hit the ``bank`` keyword. Masking always starts
from the original name.
"""

import unicodedata
from typing import ClassVar

import icu  # type: ignore[import-untyped]

from intake.classification.masking import mask_name
from intake.classification.models import ClassifiedVendor, SensitivityLevel
from intake.classification.rules import ClassificationRules
from intake.config.settings import Settings
from intake.logging.logger import Log


class SensitivityClassifier:
    """Pure, total classifier: first matching rule wins, default LOW."""

    _ICU_TRANSFORM: ClassVar[str] = "Any-Latin; Latin-ASCII; Lower"

    def __init__(self, rules: ClassificationRules) -> None:
        self._rules = rules

    @classmethod
    def from_settings(cls, settings: Settings) -> "SensitivityClassifier":
        return cls(ClassificationRules.from_settings(settings, fold=cls.fold))

    def classify(self, vendor_name: str) -> ClassifiedVendor:
        name = vendor_name or ""
        folded = self.fold(name)
        level = self._level_for(folded)
        masked = mask_name(name, folded, level, self._rules.label_rules)
        Log.debug(f"Classified vendor as {level.value} (masked as '{masked}')")
        return ClassifiedVendor(original_name=name, level=level, masked_name=masked)

    @classmethod
    def fold(cls, name: str) -> str:
        """Fold *name* to lower-case ASCII; applied to vendor names and keywords alike."""
        if not name:
            return ""
        normalized = unicodedata.normalize("NFC", name)
        # ICU transliterators are not thread-safe; build one per call
        transliterator = icu.Transliterator.createInstance(cls._ICU_TRANSFORM)
        return " ".join(transliterator.transliterate(normalized).split())

    def _level_for(self, folded_name: str) -> SensitivityLevel:
        if not folded_name:
            return SensitivityLevel.LOW
        for rule in self._rules.sensitivity_rules:
            if rule.matches(folded_name):
                return rule.level
        return SensitivityLevel.LOW
