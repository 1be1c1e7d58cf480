"""Threat rule tables used by the security scanner.

Each table is an ordered tuple of rules; the scanner evaluates every rule and
emits one tag per hit, so adding a rule never touches scanner control flow.
"""

import re
from dataclasses import dataclass

from intake.scanning.models import ThreatCategory

HEADER_WINDOW_BYTES = 16


@dataclass(frozen=True)
class SignatureRule:
    """Executable magic bytes, searched in the header window or the whole buffer."""

    name: str
    marker: bytes
    header_only: bool = True

    def matches(self, data: bytes) -> bool:
        haystack = data[:HEADER_WINDOW_BYTES] if self.header_only else data
        return self.marker in haystack


@dataclass(frozen=True)
class ThreatRule:
    """A regex searched in the lower-cased decoded content."""

    name: str
    pattern: re.Pattern[str]

    def matches(self, content: str) -> bool:
        return self.pattern.search(content) is not None


SIGNATURE_RULES: tuple[SignatureRule, ...] = (
    SignatureRule("PE executable header", b"MZ"),
    SignatureRule("ELF executable header", b"\x7fELF"),
    SignatureRule("Java class file", b"\xca\xfe\xba\xbe"),
    SignatureRule("PE executable header", b"MZ\x90\x00\x03\x00", header_only=False),
    SignatureRule("DOS stub", b"This program cannot be run in DOS mode", header_only=False),
)

MACRO_TRIGGERS: tuple[bytes, ...] = (b"macro", b"script")

MACRO_RULES: tuple[ThreatRule, ...] = (
    ThreatRule("/javascript", re.compile(r"/javascript")),
    ThreatRule("/js", re.compile(r"/js[^a-z]")),
    ThreatRule("activexobject", re.compile(r"activexobject")),
    ThreatRule("shell.application", re.compile(r"shell\.application")),
    ThreatRule("wscript.shell", re.compile(r"wscript\.shell")),
    ThreatRule("eval(", re.compile(r"eval\s*\(")),
    ThreatRule("document.write", re.compile(r"document\.write")),
    ThreatRule("fromcharcode", re.compile(r"fromcharcode")),
    ThreatRule("vbscript", re.compile(r"vbscript")),
    ThreatRule("macro assignment", re.compile(r"macro[a-z]*\s*=")),
)

SUSPICIOUS_RULES: tuple[ThreatRule, ...] = (
    ThreatRule("powershell", re.compile(r"powershell")),
    ThreatRule("cmd.exe", re.compile(r"cmd\.exe")),
    ThreatRule("rundll32", re.compile(r"rundll32")),
    ThreatRule("regsvr32", re.compile(r"regsvr32")),
    ThreatRule("certutil", re.compile(r"certutil")),
    ThreatRule("bitsadmin", re.compile(r"bitsadmin")),
    ThreatRule("mshta", re.compile(r"mshta")),
    ThreatRule("cscript", re.compile(r"cscript")),
    ThreatRule("wscript", re.compile(r"wscript")),
    ThreatRule("net.webclient", re.compile(r"net\.webclient")),
    ThreatRule("system.diagnostics.process", re.compile(r"system\.diagnostics\.process")),
    ThreatRule("base64", re.compile(r"base64")),
    ThreatRule("frombase64string", re.compile(r"frombase64string")),
)

HIGH_RISK_MIN_PATTERNS = 3


def signature_tag(rule: SignatureRule) -> str:
    return ThreatCategory.EXECUTABLE_EMBEDDED.tag(
        f"Document contains executable code ({rule.name})"
    )


def macro_tag(rule: ThreatRule) -> str:
    return ThreatCategory.MACRO_DETECTED.tag(
        f"Suspicious macro or script detected ({rule.name})"
    )


def suspicious_tag(rule: ThreatRule) -> str:
    return ThreatCategory.SUSPICIOUS_PATTERN.tag(
        f"Potentially malicious pattern detected ({rule.name})"
    )
