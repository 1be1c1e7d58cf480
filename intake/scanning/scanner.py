"""Heuristic first-pass threat scanner for uploaded documents.

The scanner runs five independent checks over the raw bytes and accumulates
threat tags:

1. Executable signatures in the header window or anywhere in the buffer.
2. Macro/script markers (PDFs, or any buffer mentioning ``macro``/``script``).
3. Living-off-the-land command patterns, escalating to ``HIGH_RISK`` on 3+.
4. Per-type size ceilings.
5. Byte entropy of large images (possible hidden payload).

It is not an antivirus engine. On any internal failure it fails closed.
"""

from __future__ import annotations

import math
import time
from collections import Counter
from dataclasses import dataclass, field

from intake.config.settings import Settings
from intake.logging.logger import Log
from intake.processor.exceptions import InternalScanError
from intake.scanning.models import ScanResult, ThreatCategory
from intake.scanning.rules import (
    HIGH_RISK_MIN_PATTERNS,
    MACRO_RULES,
    MACRO_TRIGGERS,
    SIGNATURE_RULES,
    SUSPICIOUS_RULES,
    SignatureRule,
    ThreatRule,
    macro_tag,
    signature_tag,
    suspicious_tag,
)

SCAN_ERROR_TAG = ThreatCategory.SCAN_ERROR.tag("Unable to complete security scan")


def shannon_entropy(data: bytes) -> float:
    """Shannon entropy of the byte histogram, in bits per byte (0.0 to 8.0)."""
    if not data:
        return 0.0
    total = len(data)
    entropy = 0.0
    for count in Counter(data).values():
        p = count / total
        entropy -= p * math.log2(p)
    return entropy


@dataclass(frozen=True)
class ScanLimits:
    size_ceilings: dict[str, int] = field(default_factory=dict)
    entropy_min_bytes: int = 10 * 1024 * 1024
    entropy_threshold: float = 7.5

    @classmethod
    def from_settings(cls, settings: Settings) -> ScanLimits:
        return cls(
            size_ceilings={
                "image/png": settings.scan_png_max_bytes,
                "image/jpeg": settings.scan_jpeg_max_bytes,
            },
            entropy_min_bytes=settings.scan_entropy_min_bytes,
            entropy_threshold=settings.scan_entropy_threshold,
        )


class SecurityScanner:
    """Stateless scanner; one instance may serve concurrent documents."""

    def __init__(
        self,
        limits: ScanLimits | None = None,
        signature_rules: tuple[SignatureRule, ...] = SIGNATURE_RULES,
        macro_rules: tuple[ThreatRule, ...] = MACRO_RULES,
        suspicious_rules: tuple[ThreatRule, ...] = SUSPICIOUS_RULES,
    ) -> None:
        self._limits = limits or ScanLimits()
        self._signature_rules = signature_rules
        self._macro_rules = macro_rules
        self._suspicious_rules = suspicious_rules

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def scan(self, data: bytes, filename: str, media_type: str) -> ScanResult:
        """Scan *data* and return the accumulated threat tags.

        Never raises: an internal failure yields ``clean=False`` with a single
        ``SCAN_ERROR`` tag.
        """
        started = time.perf_counter()
        Log.info(f"Starting security scan for {filename}")
        try:
            threats = self._run(data, media_type.lower())
        except Exception as exc:
            Log.error(f"Security scan failed for {filename}: {exc}")
            Log.security("Scan failed closed", document=filename)
            return ScanResult(
                clean=False,
                threats=[SCAN_ERROR_TAG],
                duration_ms=_elapsed_ms(started),
            )

        result = ScanResult(
            clean=not threats,
            threats=threats,
            duration_ms=_elapsed_ms(started),
        )
        Log.info(
            f"Security scan completed for {filename}: "
            f"{'CLEAN' if result.clean else 'THREATS DETECTED'} ({result.duration_ms:.1f}ms)"
        )
        if not result.clean:
            Log.security(f"Threats detected in {filename}", threats=len(threats))
        return result

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _run(self, data: bytes, media_type: str) -> list[str]:
        if not isinstance(data, (bytes, bytearray)):
            raise InternalScanError(f"Expected a byte buffer, got {type(data).__name__}")
        data = bytes(data)
        content = data.decode("utf-8", errors="replace").lower()

        threats: list[str] = []
        threats.extend(self._check_signatures(data))
        if self._is_potential_macro_document(data, media_type):
            threats.extend(self._check_macros(content))
        threats.extend(self._check_suspicious_patterns(content))
        threats.extend(self._check_size(data, media_type))
        return threats

    def _check_signatures(self, data: bytes) -> list[str]:
        return [signature_tag(rule) for rule in self._signature_rules if rule.matches(data)]

    def _is_potential_macro_document(self, data: bytes, media_type: str) -> bool:
        if media_type == "application/pdf":
            return True
        lowered = data.lower()
        return any(trigger in lowered for trigger in MACRO_TRIGGERS)

    def _check_macros(self, content: str) -> list[str]:
        return [macro_tag(rule) for rule in self._macro_rules if rule.matches(content)]

    def _check_suspicious_patterns(self, content: str) -> list[str]:
        matched = [rule for rule in self._suspicious_rules if rule.matches(content)]
        threats = [suspicious_tag(rule) for rule in matched]
        if len({rule.name for rule in matched}) >= HIGH_RISK_MIN_PATTERNS:
            threats.append(
                ThreatCategory.HIGH_RISK.tag("Multiple suspicious patterns detected")
            )
        return threats

    def _check_size(self, data: bytes, media_type: str) -> list[str]:
        threats: list[str] = []
        size = len(data)
        ceiling = self._limits.size_ceilings.get(media_type)
        if ceiling is not None and size > ceiling:
            threats.append(
                ThreatCategory.SIZE_ANOMALY.tag("Image file unusually large for type")
            )
        if media_type.startswith("image/") and size > self._limits.entropy_min_bytes:
            entropy = shannon_entropy(data)
            Log.debug(f"Image entropy {entropy:.3f} bits/byte over {size} bytes")
            if entropy > self._limits.entropy_threshold:
                threats.append(
                    ThreatCategory.STEGANOGRAPHY_RISK.tag(
                        "Image has high entropy, may contain hidden data"
                    )
                )
        return threats


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
