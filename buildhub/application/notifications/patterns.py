"""Weighted regular expressions used to classify notification text.

Rules are evaluated in registration order, which is the order of
``DEFAULT_PATTERN_RULES`` below. A later rule only replaces the current best
match when its weight is strictly greater, so among equal weights the rule
listed first wins.
"""
import re
from dataclasses import dataclass
from typing import AbstractSet, Iterable, Tuple

from ...exceptions import UnknownContextLabel


@dataclass(frozen=True)
class PatternRule:
    label: str
    regex: re.Pattern
    weight: int

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


# (label, pattern, weight)
DEFAULT_PATTERN_RULES: Tuple[Tuple[str, str, int], ...] = (
    # project lifecycle
    ("created", r"new\s+project|project\s+created|started\s+a\s+project", 10),
    ("updated", r"updated|modified|changed|revised|edited", 8),
    ("completed", r"completed|finished|done|concluded|accomplished", 10),
    ("milestone", r"milestone|achievement|checkpoint|phase\s+complete", 10),
    ("delay", r"delay|postponed|late|behind\s+schedule|setback", 10),
    ("issue", r"issue|problem|error|fault|defect|concern", 10),
    ("risk", r"risk|hazard|danger|warning|threat|vulnerability", 10),
    # team
    ("joined", r"joined|added\s+to\s+team|new\s+member|team\s+joined", 10),
    ("left", r"left|departed|exited|resigned|quit", 10),
    ("added", r"\badded\b|\bincluded\b|assigned", 9),
    ("removed", r"removed|excluded|deleted|taken\s+off", 10),
    # orders
    ("placed", r"placed|ordered|requested|purchased", 10),
    ("shipped", r"shipped|dispatched|sent|on\s+the\s+way", 10),
    ("delivered", r"delivered|received|arrived|reached", 10),
    ("cancelled", r"cancelled|canceled|terminated|revoked|nullified", 10),
    # payments
    ("payment_failed", r"payment\s+failed|transaction\s+declined|charge\s+declined", 10),
    ("due", r"\bdue\b|\bowing\b|to\s+be\s+paid", 10),
    ("overdue", r"overdue|past\s+due|late\s+payment|missed\s+payment", 10),
    ("refunded", r"refunded|money\s+back|reimbursed|returned\s+funds", 10),
    # urgency
    ("urgent", r"urgent|immediate|critical|asap|emergency", 11),
    # status changes
    ("approved", r"approved|accepted|confirmed|verified|validated", 9),
    ("rejected", r"rejected|declined|denied|refused|disapproved", 10),
    ("expired", r"expired|lapsed|ran\s+out|no\s+longer\s+valid", 9),
    # system
    ("security", r"security|breach|vulnerability|unauthorized|hacked|compromised", 11),
    ("maintenance", r"maintenance|upgrade|update|downtime|server|system", 8),
    ("connected", r"connected|linked|associated|joined", 7),
    # budget
    ("budget_exceeded", r"budget\s+exceeded|over\s+budget|cost\s+overrun", 10),
    ("budget_update", r"budget\s+update|cost\s+adjustment|financial\s+update", 8),
    # generic
    ("new", r"\bnew\b|\brecent\b|\bjust\b|\blatest\b", 6),
)


def compile_rules(
    entries: Iterable[Tuple[str, str, int]],
    known_labels: AbstractSet[str],
) -> Tuple[PatternRule, ...]:
    """Compile ``(label, pattern, weight)`` triples into an ordered rule tuple.

    Raises UnknownContextLabel if a rule names a label that no table knows.
    """
    rules = []
    for label, pattern, weight in entries:
        if label not in known_labels:
            raise UnknownContextLabel(label)
        rules.append(PatternRule(label=label, regex=re.compile(pattern, re.IGNORECASE), weight=int(weight)))
    return tuple(rules)
