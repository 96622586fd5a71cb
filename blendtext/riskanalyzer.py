"""
Heuristic risk classification of embedded Python text.

Three rule tables are evaluated against the whole text. Each rule fires at
most once per evaluation, however many times its pattern occurs.
"""

import dataclasses
import re
from typing import Iterable

from .blendtext import RiskAssessment, RiskLevel, SAFE_ASSESSMENT

OBFUSCATION_PREFIX = "Obfuscation: "

@dataclasses.dataclass(frozen=True, slots=True)
class Rule:
    pattern: re.Pattern
    reason: str
    severity: RiskLevel = RiskLevel.safe

    def matches(self, content: str) -> bool:
        return self.pattern.search(content) is not None

def _rule(pattern: str, reason: str, severity: RiskLevel = RiskLevel.safe) -> Rule:
    return Rule(re.compile(pattern, re.IGNORECASE | re.ASCII), reason, severity)

STARTUP_RULES: tuple[Rule, ...] = (
    _rule(r"if\s+__name__\s*==\s*[\"']__main__[\"']", "Main execution block present"),
    _rule(r"bpy\.app\.handlers\.\w+\.append", "Event handler registration"),
    _rule(r"register\(\)", "Register function call"),
    _rule(r"def\s+register\s*\(", "Register function definition"),
    _rule(r"@persistent", "Persistent decorator usage"),
    _rule(r"bpy\.utils\.register_class", "Class registration"),
    _rule(r"addon_info\s*=", "Addon metadata structure"),
    _rule(r"bl_info\s*=", "Blender addon metadata"),
    _rule(r"bpy\.ops\.\w+\.\w+\(\)", "Direct operator execution"),
)

SECURITY_RULES: tuple[Rule, ...] = (
    _rule(r"\beval\s*\(", "Dynamic code execution (eval)", RiskLevel.high),
    _rule(r"\bexec\s*\(", "Dynamic code execution (exec)", RiskLevel.high),
    _rule(r"os\.system\s*\(", "System command execution", RiskLevel.high),
    _rule(r"subprocess\.\w+", "Process execution capabilities", RiskLevel.medium),
    _rule(r"import\s+subprocess", "Subprocess module imported", RiskLevel.medium),
    _rule(r"__import__\s*\(", "Dynamic module import", RiskLevel.medium),
    _rule(r"base64\.decode|base64\.b64decode", "Base64 data decoding", RiskLevel.medium),
    _rule(r"urllib\.|requests\.|http\.|fetch", "Network communication", RiskLevel.medium),
    _rule(r"open\s*\([^)]*[\"'][wa][\"']", "File system writes", RiskLevel.low),
    _rule(r"\.decode\s*\(", "Data decoding operations", RiskLevel.low),
    _rule(r"chr\s*\(|ord\s*\(", "Character encoding operations", RiskLevel.low),
)

# Any obfuscation hit lifts the level to at least medium.
OBFUSCATION_RULES: tuple[Rule, ...] = (
    _rule(r"[\"'].{20,}[\"'].*\.decode", "Encoded strings with decode", RiskLevel.medium),
    _rule(r"[\"'][A-Za-z0-9+/]{20,}={0,2}[\"']", "Base64-like strings", RiskLevel.medium),
    _rule(r"\\x[0-9a-fA-F]{2}", "Hex encoded strings", RiskLevel.medium),
    _rule(r"join\s*\(\s*.*split", "String splitting/joining obfuscation", RiskLevel.medium),
    _rule(r"chr\s*\(\s*\d+\s*\)", "Character code obfuscation", RiskLevel.medium),
)


def evaluate_rules(rules: Iterable[Rule], content: str) -> list[Rule]:
    """Rules from ``rules`` that match ``content``, in table order."""
    return [rule for rule in rules if rule.matches(content)]

def raise_level(current: RiskLevel, severity: RiskLevel) -> RiskLevel:
    return severity if severity > current else current


def analyze_script(content: str | None) -> RiskAssessment:
    """
    Classify a script by startup behaviour and security risk.

    Pure function of ``content``: the same text always gives an equal result.
    """
    if not content:
        return SAFE_ASSESSMENT

    startup_reasons = tuple(rule.reason for rule in evaluate_rules(STARTUP_RULES, content))

    warnings: list[str] = []
    risk_level = RiskLevel.safe
    for rule in evaluate_rules(SECURITY_RULES, content):
        warnings.append(rule.reason)
        risk_level = raise_level(risk_level, rule.severity)

    for rule in evaluate_rules(OBFUSCATION_RULES, content):
        warnings.append(OBFUSCATION_PREFIX + rule.reason)
        risk_level = raise_level(risk_level, rule.severity)

    return RiskAssessment(
        is_startup=bool(startup_reasons),
        startup_reasons=startup_reasons,
        risk_level=risk_level,
        warnings=tuple(warnings),
    )
