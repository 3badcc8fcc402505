# core/password_utils.py
from __future__ import annotations
import math, random, re, secrets
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Protocol

from loguru import logger

# --------- Character classes ---------
class CharacterClass(str, Enum):
    LOWERCASE = "lowercase"
    UPPERCASE = "uppercase"
    DIGIT = "digit"
    SYMBOL = "symbol"

# Iteration order is the canonical order
ALPHABETS: Mapping[CharacterClass, str] = MappingProxyType({
    CharacterClass.LOWERCASE: "abcdefghijklmnopqrstuvwxyz",
    CharacterClass.UPPERCASE: "ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    CharacterClass.DIGIT:     "0123456789",
    CharacterClass.SYMBOL:    "!@#$%^&*()-_=+[]{}|;:,.<>/?",
})

LETTER_CLASSES: FrozenSet[CharacterClass] = frozenset({CharacterClass.LOWERCASE, CharacterClass.UPPERCASE})

# Characters often confused visually
LOOKALIKES: FrozenSet[str] = frozenset("Il1|O0")

# --------- Random sources ---------
class RandomSource(Protocol):
    def next_uniform(self, n: int) -> int:
        """Return an integer uniformly distributed in [0, n)."""
        ...

class SecureRandomSource:
    """OS CSPRNG via secrets.randbelow (rejection sampled, no modulo bias)."""

    def next_uniform(self, n: int) -> int:
        return secrets.randbelow(n)

class PseudoRandomSource:
    """
    Mersenne Twister source. Weaker than the OS source: its output is predictable
    once enough of it has been observed. Only used when no OS source exists,
    or with an explicit seed for reproducible runs.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def next_uniform(self, n: int) -> int:
        return self._rng.randrange(n)

def default_random_source() -> RandomSource:
    try:
        secrets.randbelow(2)
    except NotImplementedError:
        logger.warning("No OS randomness source available, falling back to pseudo-random generator")
        return PseudoRandomSource()
    return SecureRandomSource()

# --------- Data model ---------
@dataclass(frozen=True)
class GenerationConfig:
    length: int = 16
    enabled_classes: FrozenSet[CharacterClass] = frozenset(CharacterClass)
    avoid_similar: bool = False
    anchor_first_to_letter: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "enabled_classes", frozenset(self.enabled_classes))

    @classmethod
    def from_flags(
        cls,
        length: int,
        use_lower: bool = True,
        use_upper: bool = True,
        use_digits: bool = True,
        use_symbols: bool = True,
        avoid_similar: bool = False,
        anchor_first_to_letter: bool = False,
    ) -> "GenerationConfig":
        flags = {
            CharacterClass.LOWERCASE: use_lower,
            CharacterClass.UPPERCASE: use_upper,
            CharacterClass.DIGIT: use_digits,
            CharacterClass.SYMBOL: use_symbols,
        }
        return cls(
            length=int(length),
            enabled_classes=frozenset(c for c, on in flags.items() if on),
            avoid_similar=avoid_similar,
            anchor_first_to_letter=anchor_first_to_letter,
        )

@dataclass(frozen=True)
class GenerationResult:
    password: str
    pool_size: int

    @property
    def ok(self) -> bool:
        return True

class FailureReason(str, Enum):
    NO_USABLE_CHARACTER_POOL = "no_usable_character_pool"
    INVALID_LENGTH = "invalid_length"

@dataclass(frozen=True)
class GenerationFailure:
    reason: FailureReason
    message: str

    @property
    def ok(self) -> bool:
        return False

class StrengthLabel(str, Enum):
    WEAK = "Weak"
    BALANCED = "Balanced"
    STRONG = "Strong"

    @property
    def tone(self) -> str:
        return {"Weak": "error", "Balanced": "warning", "Strong": "success"}[self.value]

@dataclass(frozen=True)
class StrengthAssessment:
    label: StrengthLabel
    entropy_bits: int
    score: int

# --------- Helpers ---------
def _pick(alphabet: str, rng: RandomSource) -> str:
    return alphabet[rng.next_uniform(len(alphabet))]

def _shuffle(chars: List[str], rng: RandomSource) -> None:
    # Fisher-Yates
    for i in range(len(chars) - 1, 0, -1):
        j = rng.next_uniform(i + 1)
        chars[i], chars[j] = chars[j], chars[i]

# --------- Generation ---------
def build_alphabets(
    config: GenerationConfig,
    base_alphabets: Mapping[CharacterClass, str] = ALPHABETS,
) -> Dict[CharacterClass, str]:
    """
    Returns the enabled alphabets in canonical order, lookalikes stripped when
    avoid_similar is set. Classes left empty by the filter are dropped.
    """
    alphabets: Dict[CharacterClass, str] = {}
    for cls in CharacterClass:
        if cls not in config.enabled_classes:
            continue
        chars = base_alphabets.get(cls, "")
        if config.avoid_similar:
            chars = "".join(c for c in chars if c not in LOOKALIKES)
        if chars:
            alphabets[cls] = chars
    return alphabets

def generate(
    config: GenerationConfig,
    rng: Optional[RandomSource] = None,
    base_alphabets: Mapping[CharacterClass, str] = ALPHABETS,
) -> GenerationResult | GenerationFailure:
    """
    Generate a password of config.length characters with at least one character
    from each usable class.

    When length is smaller than the number of usable classes only the first
    `length` classes (canonical order) are represented. The start-with-letter
    overwrite happens after the shuffle, so position 0 is drawn from the letter
    alphabets only and is not uniform over the whole pool.
    """
    if config.length < 1:
        logger.info("Rejected generation request with length {}", config.length)
        return GenerationFailure(
            FailureReason.INVALID_LENGTH,
            f"Password length must be at least 1 (got {config.length}).",
        )

    alphabets = build_alphabets(config, base_alphabets)
    bank = "".join(alphabets.values())
    if not bank:
        logger.info("No usable character pool for classes {}", sorted(c.value for c in config.enabled_classes))
        return GenerationFailure(
            FailureReason.NO_USABLE_CHARACTER_POOL,
            "Select at least one character set.",
        )

    if rng is None:
        rng = default_random_source()
    required = [_pick(a, rng) for a in list(alphabets.values())[: config.length]]
    chars = required + [_pick(bank, rng) for _ in range(config.length - len(required))]
    _shuffle(chars, rng)
    chars = chars[: config.length]

    letters = "".join(a for cls, a in alphabets.items() if cls in LETTER_CLASSES)
    if config.anchor_first_to_letter and letters:
        chars[0] = _pick(letters, rng)

    logger.debug(
        "Generated password: length={} classes={} pool={}",
        config.length, len(alphabets), len(bank),
    )
    return GenerationResult(password="".join(chars), pool_size=len(bank))

def generate_many(
    config: GenerationConfig,
    count: int,
    rng: Optional[RandomSource] = None,
) -> List[GenerationResult] | GenerationFailure:
    if count < 1:
        raise ValueError(f"count must be at least 1 (got {count})")
    if rng is None:
        rng = default_random_source()
    results: List[GenerationResult] = []
    for _ in range(count):
        res = generate(config, rng)
        if isinstance(res, GenerationFailure):
            return res
        results.append(res)
    return results

# --------- Scoring ---------
def estimate_entropy_bits(password: str, pool_size: int) -> int:
    """
    length * log2(pool_size), rounded. Treats every character as an independent
    uniform draw, so it overstates what the start-with-letter and
    guaranteed-class rules actually deliver. An approximation, not a bound.
    """
    if pool_size <= 1:
        return 0
    return round(len(password) * math.log2(pool_size))

_RUN_OF_THREE = re.compile(r"(.)\1\1", re.DOTALL)

def _has_any(password: str, pattern: str) -> bool:
    return re.search(pattern, password) is not None

def assess_strength(password: str, pool_size: int, config: GenerationConfig) -> StrengthAssessment:
    """
    Heuristic point score for UI feedback only. Not checked against any entropy
    model or password-cracking benchmark.
    """
    n = len(password)
    score = 2 if n >= 16 else 1 if n >= 12 else 0
    checks: Iterable[str] = (r"[a-z]", r"[A-Z]", r"[0-9]", r"[^a-zA-Z0-9]")
    score += sum(_has_any(password, p) for p in checks)
    if pool_size > 40:
        score += 1
    if _RUN_OF_THREE.search(password):
        score -= 1
    if config.avoid_similar:
        score += 1

    if score >= 5:
        label = StrengthLabel.STRONG
    elif score >= 3:
        label = StrengthLabel.BALANCED
    else:
        label = StrengthLabel.WEAK
    return StrengthAssessment(label=label, entropy_bits=estimate_entropy_bits(password, pool_size), score=score)
