"""Mini README: File name to canonical asset key resolution.

Structure:
    * MatchRule / SuffixKind - enumerations reported for diagnostics.
    * NormalizedIdentifier - immutable outcome of one resolution.
    * model_suffix_stripper / panorama_suffix_stripper - suffix removal rules.
    * strict_identifier_matcher / relaxed_identifier_matcher - key patterns.
    * IdentifierNormalizer - runs the ordered cascade.
    * normalize_identifier - convenience wrapper using the default rules.

Cascade, first success wins:
    1. strip a model suffix (``.glb``) if present,
    2. otherwise strip a panorama suffix (``_360.jpg`` and friends),
    3. take the hexadecimal guid ending the remainder, optionally followed
       by a hyphenated hexadecimal element id (text in front is ignored),
    4. otherwise take an identifier with the same group layout in
       alphanumerics,
    5. otherwise, when a suffix was stripped, accept the remainder as is,
    6. otherwise report failure.

Every rule is a plain function so new naming conventions can be slotted in
without touching the cascade. Keys are always lowercase.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..errors import NoIdentifierMatch
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

SuffixStripper = Callable[[str], Optional[str]]
IdentifierMatcher = Callable[[str], Optional[str]]

_HEX_GROUPS = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}(?:-[0-9a-f]+)?"
_ALNUM_GROUPS = r"[0-9a-z]{8}-[0-9a-z]{4}-[0-9a-z]{4}-[0-9a-z]{4}-[0-9a-z]{12}(?:-[0-9a-z]+)?"

# end-anchored only: text in front of the guid is dropped
STRICT_IDENTIFIER_PATTERN = re.compile(_HEX_GROUPS + r"$", re.IGNORECASE)
RELAXED_IDENTIFIER_PATTERN = re.compile(_ALNUM_GROUPS + r"$", re.IGNORECASE)


class MatchRule(str, Enum):
    """Cascade rule that produced a key."""

    STRICT = "strict"
    RELAXED = "relaxed"
    STRIPPED_FALLBACK = "stripped_fallback"


class SuffixKind(str, Enum):
    """Kind of file suffix removed before matching."""

    MODEL = "model"
    PANORAMA = "panorama"


@dataclass(frozen=True, slots=True)
class NormalizedIdentifier:
    """Outcome of resolving one file name.

    ``rule_index`` is the 1-based position of the matching rule in the
    cascade (strict, relaxed, stripped fallback) and ``None`` on failure.
    """

    filename: str
    key: Optional[str]
    rule: Optional[MatchRule]
    suffix: Optional[SuffixKind]
    rule_index: Optional[int] = None

    @property
    def matched(self) -> bool:
        return self.key is not None


def _extension_group(extensions: Iterable[str]) -> str:
    cleaned = [re.escape(extension.lstrip(".")) for extension in extensions if extension.lstrip(".")]
    if not cleaned:
        raise ValueError("At least one file extension is required")
    return "(?:" + "|".join(cleaned) + ")"


def model_suffix_stripper(extensions: Sequence[str] = ("glb",)) -> SuffixStripper:
    """Build a rule removing a model file extension such as ``.glb``."""

    pattern = re.compile(r"\." + _extension_group(extensions) + r"$", re.IGNORECASE)

    def strip(filename: str) -> Optional[str]:
        if pattern.search(filename):
            return pattern.sub("", filename)
        return None

    return strip


def panorama_suffix_stripper(
    marker: str = "_360", extensions: Sequence[str] = ("jpg", "jpeg", "png")
) -> SuffixStripper:
    """Build a rule removing a panorama suffix such as ``_360.jpg``."""

    if not marker:
        raise ValueError("Panorama marker must not be empty")
    pattern = re.compile(
        re.escape(marker) + r"\." + _extension_group(extensions) + r"$", re.IGNORECASE
    )

    def strip(filename: str) -> Optional[str]:
        if pattern.search(filename):
            return pattern.sub("", filename)
        return None

    return strip


def strict_identifier_matcher(candidate: str) -> Optional[str]:
    """Return the hexadecimal guid (with optional element id) ending ``candidate``."""

    match = STRICT_IDENTIFIER_PATTERN.search(candidate)
    if match:
        return match.group(0).lower()
    return None


def relaxed_identifier_matcher(candidate: str) -> Optional[str]:
    """Return a guid-shaped identifier of any alphanumerics ending ``candidate``."""

    match = RELAXED_IDENTIFIER_PATTERN.search(candidate)
    if match:
        return match.group(0).lower()
    return None


DEFAULT_SUFFIX_STRIPPERS: Tuple[Tuple[SuffixKind, SuffixStripper], ...] = (
    (SuffixKind.MODEL, model_suffix_stripper()),
    (SuffixKind.PANORAMA, panorama_suffix_stripper()),
)
DEFAULT_MATCHERS: Tuple[Tuple[MatchRule, IdentifierMatcher], ...] = (
    (MatchRule.STRICT, strict_identifier_matcher),
    (MatchRule.RELAXED, relaxed_identifier_matcher),
)


class IdentifierNormalizer:
    """Resolve file names to canonical keys through an ordered rule cascade.

    Instances hold only immutable rule tuples, so one normalizer can be shared
    between threads and batch scans.
    """

    def __init__(
        self,
        *,
        suffix_strippers: Optional[Sequence[Tuple[SuffixKind, SuffixStripper]]] = None,
        matchers: Optional[Sequence[Tuple[MatchRule, IdentifierMatcher]]] = None,
    ) -> None:
        self.suffix_strippers = tuple(
            DEFAULT_SUFFIX_STRIPPERS if suffix_strippers is None else suffix_strippers
        )
        self.matchers = tuple(DEFAULT_MATCHERS if matchers is None else matchers)

    @classmethod
    def from_settings(cls, settings) -> "IdentifierNormalizer":
        """Create a normalizer honouring the configured naming conventions."""

        return cls(
            suffix_strippers=(
                (SuffixKind.MODEL, model_suffix_stripper(settings.model_extensions)),
                (
                    SuffixKind.PANORAMA,
                    panorama_suffix_stripper(
                        settings.panorama_marker, settings.panorama_extensions
                    ),
                ),
            )
        )

    def strip_suffix(self, filename: str) -> Tuple[str, Optional[SuffixKind]]:
        """Remove the first recognised suffix, reporting which kind it was."""

        for kind, stripper in self.suffix_strippers:
            remainder = stripper(filename)
            if remainder is not None:
                return remainder, kind
        return filename, None

    def normalize(self, filename: str) -> NormalizedIdentifier:
        """Run the cascade; failure is reported through ``key=None``."""

        candidate = filename.strip()
        remainder, suffix = self.strip_suffix(candidate)

        for index, (rule, matcher) in enumerate(self.matchers, start=1):
            key = matcher(remainder)
            if key is not None:
                LOGGER.debug("Resolved %r to %s via %s rule", filename, key, rule.value)
                return NormalizedIdentifier(filename, key, rule, suffix, index)

        if suffix is not None and remainder:
            key = remainder.lower()
            LOGGER.debug("Resolved %r to %s via stripped suffix fallback", filename, key)
            return NormalizedIdentifier(
                filename, key, MatchRule.STRIPPED_FALLBACK, suffix, len(self.matchers) + 1
            )

        LOGGER.debug("No identifier rule matched %r", filename)
        return NormalizedIdentifier(filename, None, None, suffix, None)

    def require(self, filename: str) -> str:
        """Return the key for ``filename`` or raise ``NoIdentifierMatch``."""

        result = self.normalize(filename)
        if result.key is None:
            raise NoIdentifierMatch(filename)
        return result.key

    __call__ = normalize


DEFAULT_NORMALIZER = IdentifierNormalizer()


def normalize_identifier(filename: str) -> NormalizedIdentifier:
    """Resolve ``filename`` with the default naming conventions."""

    return DEFAULT_NORMALIZER.normalize(filename)
