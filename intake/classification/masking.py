import hashlib

from intake.classification.models import SensitivityLevel
from intake.classification.rules import MaskingLabelRule

FULL_MASK = "***"


def mask_high(name: str) -> str:
    """Keep the first two and last character; names of 3 or fewer become ``***``."""
    if len(name) <= 3:
        return FULL_MASK
    return f"{name[:2]}{'*' * (len(name) - 3)}{name[-1]}"


def mask_medium(name: str) -> str:
    """Keep the first and last three characters; names of 5 or fewer stay readable."""
    if len(name) <= 5:
        return name
    return f"{name[:3]}{'*' * (len(name) - 6)}{name[-3:]}"


def digest_suffix(name: str) -> str:
    return hashlib.md5(name.encode("utf-8"), usedforsecurity=False).hexdigest()[0]


def mask_name(
    name: str,
    folded_name: str,
    level: SensitivityLevel,
    label_rules: tuple[MaskingLabelRule, ...],
) -> str:
    """Mask *name* for display at *level*.

    Label rules for the level win over character masking; LOW is never masked.
    """
    if level is SensitivityLevel.LOW:
        return name
    for rule in label_rules:
        if rule.level is level and rule.matches(folded_name):
            return f"{rule.label}{digest_suffix(name)}" if rule.hashed else rule.label
    if level is SensitivityLevel.HIGH:
        return mask_high(name)
    return mask_medium(name)
