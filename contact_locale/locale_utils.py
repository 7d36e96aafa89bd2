"""
Locale-aware Contact Index and Name Lookup Module

This module assigns display names and phone numbers to the buckets of a locale-appropriate
alphabetical index (the fast-scroll bar of a contact list) and generates the normalized search
keys used for typeahead lookup of a person's name.

## Overview

The core functionality is provided by the `ContactLocaleUtils` class, which combines:

1. **Locale Profiles**: One immutable bucket table per locale family (Latin, Japanese,
   Simplified Chinese, Traditional Chinese, Korean, Arabic)
2. **Collation**: Script-aware primary keys used to place a character between bucket boundaries
3. **Bucket Labeling**: Phone-number detection, significant-character extraction, bisection
4. **Name Lookup Keys**: Style-specific key generation (Western suffixes and initials, Chinese
   pinyin cross-products, Japanese kana folding, Korean leading consonants)

## Architecture

### Clean Service Separation
- **UnicodeCollator**: Primary collation keys built on `unicodedata` and the reading table
- **ReadingTable**: Han → pinyin readings backed by `pypinyin`, with surname heteronyms from data
- **LocaleProfileRegistry**: Locale parsing, family selection, profile cache, active profile
- **BucketLabeler**: Pure classification of one string against one profile
- **NameKeyGenerator**: Pure key generation for one name under one name style

### Immutable Profiles
Profiles are built once per locale family and never mutated. Switching locale swaps a single
reference under a writer lock, so every query observes exactly one consistent profile.

## Usage Examples

```python
from contact_locale.locale_utils import ContactLocaleUtils, NameStyle

utils = ContactLocaleUtils()
utils.set_locale("en_US")
utils.label_for("John Smith")
# Returns: "J"

utils.label_for("+1 (650) 555-1212")
# Returns: "#"

utils.lookup_keys("John Smith", NameStyle.WESTERN)
# Returns: {"John Smith", "Smith", "JS", "S"}

utils.set_locale("zh_TW")
utils.label_for("杜鵑")
# Returns: "7劃"

utils.lookup_keys("杜鵑", NameStyle.CHINESE)
# Returns: {"鵑", "杜鵑", "JUAN", "DUJUAN", "J", "DJ"}
```

## Error Handling

- Malformed locale identifiers and unknown name styles raise `ValueError`
- Out-of-range bucket indexes raise `IndexError`
- Missing readings, missing stroke data and unsupported locales degrade silently (logged)
- `lookup_keys` returns `None` when it declines to answer (UNDEFINED style, CJK under Japanese)

## Thread Safety

Queries are pure functions of (profile, input). The active profile and the profile cache are the
only shared state; both are guarded by a lock on the write path and read lock-free.
"""

from __future__ import annotations
import bisect
import itertools
import logging
import re
import threading
import unicodedata
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from functools import cache
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Sequence, Set, Tuple, Union

import pypinyin
from contact_locale.locale_utils_data import (
    ARABIC_FOLDING,
    ARABIC_LABELS,
    EMPTY_LABEL,
    HANGUL_COMPAT_CONSONANTS,
    HANGUL_CONSONANT_LABELS,
    HANGUL_SYLLABLE_BASE,
    HANGUL_SYLLABLE_LAST,
    HANGUL_SYLLABLES_PER_LEAD,
    JAPANESE_MISC_LABEL,
    KANA_ROW_LABELS,
    KANA_VOICING_MARKS,
    KATAKANA_FOLD_RANGE,
    KATAKANA_TO_HIRAGANA_OFFSET,
    LATIN_LABELS,
    NAME_HETERONYMS,
    NUMBER_LABEL,
    PHONE_SEPARATORS,
    SMALL_KANA_FOLDING,
    STROKE_BOUNDARIES,
    STROKE_COUNTS,
    STROKE_LABEL_SUFFIX,
)


# ════════════════════════════════════════════════════════════════════════════════
# COMPILED REGEX PATTERNS
# ════════════════════════════════════════════════════════════════════════════════

_HAN_PATTERN = r"[\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\U00020000-\U0003134f]"
_KANA_PATTERN = r"[\u3041-\u309f\u30a0-\u30ff\u31f0-\u31ff]"
_HANGUL_PATTERN = r"[\u1100-\u11ff\u3130-\u318f\ua960-\ua97f\uac00-\ud7af\ud7b0-\ud7ff]"
_ARABIC_PATTERN = r"[\u0600-\u06ff\u0750-\u077f\u08a0-\u08ff\ufb50-\ufdff\ufe70-\ufeff]"

# language, then any number of script/region/variant subtags
_LOCALE_PATTERN = r"^[A-Za-z]{2,8}(?:[-_][A-Za-z0-9]{1,8})*$"

# Script ranks: primary ordering between scripts
_RANK_COMMON = 0
_RANK_LATIN = 1
_RANK_OTHER = 2
_RANK_ARABIC = 3
_RANK_HANGUL = 4
_RANK_KANA = 5
_RANK_HAN = 6
_RANK_UNSORTED = 7

_LATIN_NAME_MODIFIERS = frozenset({"SMALL", "CAPITAL", "DOTLESS", "TURNED", "REVERSED", "SCRIPT"})

_TRADITIONAL_REGIONS = frozenset({"TW", "HK", "MO"})


# ════════════════════════════════════════════════════════════════════════════════
# ENUMS AND DATA TYPES
# ════════════════════════════════════════════════════════════════════════════════


class LocaleFamily(Enum):
    """Locale families with a distinct index layout."""

    DEFAULT = "default"
    JAPANESE = "ja"
    SIMPLIFIED_CHINESE = "zh_Hans"
    TRADITIONAL_CHINESE = "zh_Hant"
    KOREAN = "ko"
    ARABIC = "ar"

    @property
    def language(self) -> str:
        return "en" if self is LocaleFamily.DEFAULT else self.value.split("_")[0]


class BucketKind(Enum):
    LEADING = "leading"
    TRAILING = "trailing"
    NUMBER = "number"
    MISC = "misc"
    SCRIPT = "script"
    LATIN = "latin"


class NameStyle(IntEnum):
    """Full-name style tags as stored by the contacts provider."""

    UNDEFINED = 0
    WESTERN = 1
    CJK = 2
    CHINESE = 3
    JAPANESE = 4
    KOREAN = 5


@dataclass(frozen=True)
class LocaleId:
    """Parsed locale identifier: language plus optional script and region."""

    language: str
    script: Optional[str] = None
    region: Optional[str] = None

    @classmethod
    def parse(cls, identifier: str, pattern: re.Pattern[str]) -> "LocaleId":
        """Parse `en`, `en_US`, `zh-Hant-TW` or `en_US.UTF-8` style identifiers."""
        if not isinstance(identifier, str):
            raise ValueError(f"locale identifier must be a string, got {type(identifier).__name__}")
        # POSIX locale names may carry an encoding or modifier suffix
        stripped = identifier.strip().split(".", 1)[0].split("@", 1)[0]
        if not pattern.match(stripped):
            raise ValueError(f"malformed locale identifier: {identifier!r}")

        language, *subtags = re.split(r"[-_]", stripped)
        script = None
        region = None
        for subtag in subtags:
            if script is None and region is None and len(subtag) == 4 and subtag.isalpha():
                script = subtag.title()
            elif region is None and (
                (len(subtag) == 2 and subtag.isalpha()) or (len(subtag) == 3 and subtag.isdigit())
            ):
                region = subtag.upper()
        return cls(language=language.lower(), script=script, region=region)

    def __str__(self) -> str:
        return "_".join(part for part in (self.language, self.script, self.region) if part)


@dataclass(frozen=True)
class Bucket:
    """One slot of the index: display label, membership kind and boundary key."""

    label: str
    kind: BucketKind
    boundary: Optional[str] = None
    key: Optional[tuple] = None


@dataclass(frozen=True)
class LocaleProfile:
    """Immutable bucket table for one locale family plus its lookup indexes."""

    family: LocaleFamily
    buckets: Tuple[Bucket, ...]
    script_pattern: Optional[re.Pattern[str]]
    misc_pattern: Optional[re.Pattern[str]]

    # Derived positions
    number_index: int
    trailing_index: int
    leading_index: Optional[int]
    latin_leading_index: int
    misc_index: Optional[int]
    latin_indexes: Tuple[int, ...]
    latin_keys: Tuple[tuple, ...]
    script_indexes: Tuple[int, ...]
    script_keys: Tuple[tuple, ...]

    @classmethod
    def from_buckets(
        cls,
        family: LocaleFamily,
        buckets: Sequence[Bucket],
        script_pattern: Optional[re.Pattern[str]] = None,
        misc_pattern: Optional[re.Pattern[str]] = None,
    ) -> "LocaleProfile":
        """Derive the lookup indexes from an ordered bucket sequence."""
        buckets = tuple(buckets)
        kinds = [bucket.kind for bucket in buckets]
        if kinds.count(BucketKind.NUMBER) != 1:
            raise ValueError(f"{family.value}: exactly one number bucket required")
        if BucketKind.TRAILING not in kinds:
            raise ValueError(f"{family.value}: trailing catch-all bucket required")

        latin_indexes = tuple(i for i, kind in enumerate(kinds) if kind is BucketKind.LATIN)
        script_indexes = tuple(i for i, kind in enumerate(kinds) if kind is BucketKind.SCRIPT)
        leading_index = 0 if kinds[0] is BucketKind.LEADING else None

        first_latin = latin_indexes[0]
        if first_latin > 0 and kinds[first_latin - 1] is BucketKind.LEADING:
            latin_leading_index = first_latin - 1
        elif leading_index is not None:
            latin_leading_index = leading_index
        else:
            latin_leading_index = first_latin

        misc_indexes = [i for i, kind in enumerate(kinds) if kind is BucketKind.MISC]

        return cls(
            family=family,
            buckets=buckets,
            script_pattern=script_pattern,
            misc_pattern=misc_pattern,
            number_index=kinds.index(BucketKind.NUMBER),
            trailing_index=len(kinds) - 1 - kinds[::-1].index(BucketKind.TRAILING),
            leading_index=leading_index,
            latin_leading_index=latin_leading_index,
            misc_index=misc_indexes[0] if misc_indexes else None,
            latin_indexes=latin_indexes,
            latin_keys=tuple(buckets[i].key for i in latin_indexes),
            script_indexes=script_indexes,
            script_keys=tuple(buckets[i].key for i in script_indexes),
        )

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(bucket.label for bucket in self.buckets)

    def __len__(self) -> int:
        return len(self.buckets)


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ContactLocaleConfig:
    """Immutable engine configuration."""

    default_locale: str

    # Upper bound on enumerated romanizations of one Han name
    max_romanizations: int

    number_label: str
    phone_separators: FrozenSet[str]

    # Precompiled regex patterns (immutable)
    han_pattern: re.Pattern[str]
    kana_pattern: re.Pattern[str]
    hangul_pattern: re.Pattern[str]
    arabic_pattern: re.Pattern[str]
    locale_pattern: re.Pattern[str]

    @classmethod
    def create_default(cls) -> "ContactLocaleConfig":
        """Factory method to create the default configuration."""
        return cls(
            default_locale="en",
            max_romanizations=64,
            number_label=NUMBER_LABEL,
            phone_separators=PHONE_SEPARATORS,
            han_pattern=re.compile(_HAN_PATTERN),
            kana_pattern=re.compile(_KANA_PATTERN),
            hangul_pattern=re.compile(_HANGUL_PATTERN),
            arabic_pattern=re.compile(_ARABIC_PATTERN),
            locale_pattern=re.compile(_LOCALE_PATTERN),
        )

    def with_default_locale(self, locale: str) -> "ContactLocaleConfig":
        """Immutable update method."""
        return replace(self, default_locale=locale)

    def with_max_romanizations(self, limit: int) -> "ContactLocaleConfig":
        """Immutable update method for the romanization cap."""
        if limit < 1:
            raise ValueError(f"max_romanizations must be positive, got {limit}")
        return replace(self, max_romanizations=limit)


# ════════════════════════════════════════════════════════════════════════════════
# READING TABLE SERVICE
# ════════════════════════════════════════════════════════════════════════════════


@cache  # one entry per unique Han character
def _pinyin_reading(char: str) -> Optional[str]:
    """The single reading pypinyin picks for `char`; rarer readings are not name readings."""
    try:
        candidates = pypinyin.pinyin(char, style=pypinyin.Style.NORMAL, heteronym=False, errors="ignore")
    except (AttributeError, ValueError, TypeError) as e:
        logging.warning(f"Pypinyin failed for '{char}': {e}")
        return None

    for group in candidates:
        for reading in group:
            reading = reading.upper()
            if reading.isalpha():
                return reading
    return None


def _clean_readings(readings: Sequence[str]) -> Tuple[str, ...]:
    cleaned: List[str] = []
    for reading in readings:
        reading = reading.strip().upper()
        if reading and reading not in cleaned:
            cleaned.append(reading)
    return tuple(cleaned)


class ReadingTable:
    """
    Han character → candidate romanized readings, name reading first.

    Characters in NAME_HETERONYMS (or in `overrides`) yield every listed reading;
    any other character yields the one reading pypinyin picks for it.
    """

    def __init__(self, overrides: Optional[Mapping[str, Sequence[str]]] = None):
        self._overrides = MappingProxyType(
            {char: _clean_readings(readings) for char, readings in (overrides or {}).items()}
        )

    def readings(self, char: str) -> Tuple[str, ...]:
        if char in self._overrides:
            return self._overrides[char]
        if char in NAME_HETERONYMS:
            return NAME_HETERONYMS[char]
        reading = _pinyin_reading(char)
        if reading is None:
            logging.debug(f"No reading for '{char}' (U+{ord(char):04X})")
            return ()
        return (reading,)

    def primary_reading(self, char: str) -> Optional[str]:
        readings = self.readings(char)
        return readings[0] if readings else None


# ════════════════════════════════════════════════════════════════════════════════
# COLLATION SERVICE
# ════════════════════════════════════════════════════════════════════════════════


def _latin_base(char: str) -> Optional[str]:
    """Base letters of a Latin character, accents stripped and casefolded."""
    try:
        name = unicodedata.name(char)
    except ValueError:
        return None
    if not name.startswith("LATIN"):
        return None

    stripped = "".join(c for c in unicodedata.normalize("NFKD", char) if not unicodedata.combining(c)).casefold()
    if stripped[:1].isascii() and stripped[:1].isalpha():
        return stripped

    # Letters without a decomposition (ø, ł, æ) are named after their base letter
    words = name.split(" LETTER ", 1)[-1].split(" WITH ", 1)[0].split()
    while len(words) > 1 and words[0] in _LATIN_NAME_MODIFIERS:
        words = words[1:]
    candidate = words[0] if words else ""
    if candidate.isascii() and candidate.isalpha() and len(candidate) <= 2:
        return candidate.lower()
    return None


def _fold_kana(char: str) -> str:
    decomposed = "".join(c for c in unicodedata.normalize("NFKD", char) if c not in KANA_VOICING_MARKS)
    base = decomposed[:1] or char
    if KATAKANA_FOLD_RANGE[0] <= ord(base) <= KATAKANA_FOLD_RANGE[1]:
        base = chr(ord(base) - KATAKANA_TO_HIRAGANA_OFFSET)
    return SMALL_KANA_FOLDING.get(base, base)


class UnicodeCollator:
    """
    Primary-strength collation keys per locale family.

    Keys are tuples whose first element ranks the script; characters of the same
    script compare by folded letter, kana row order, leading consonant, Arabic letter
    or stroke count. Simplified Chinese places Han characters among Latin letters by
    their pinyin reading.
    """

    _SUPPORTED_LANGUAGES = frozenset({"ar", "en", "ja", "ko", "zh"})

    def __init__(self, reading_table: ReadingTable, config: Optional[ContactLocaleConfig] = None):
        self._readings = reading_table
        self._config = config or ContactLocaleConfig.create_default()

    def supported_languages(self) -> FrozenSet[str]:
        return self._SUPPORTED_LANGUAGES

    def char_key(self, char: str, family: LocaleFamily) -> Optional[tuple]:
        """Primary key of one character, or None if `family` has no ordering for it."""
        folded = unicodedata.normalize("NFKC", char)[:1] or char
        config = self._config

        if config.han_pattern.match(folded):
            return self._han_key(folded, family)
        if config.kana_pattern.match(folded):
            return (_RANK_KANA, ord(_fold_kana(folded)))
        if config.hangul_pattern.match(folded):
            return (_RANK_HANGUL, ord(unicodedata.normalize("NFKD", folded)[0]))
        if config.arabic_pattern.match(folded):
            base = unicodedata.normalize("NFKD", folded)[0]
            return (_RANK_ARABIC, ord(ARABIC_FOLDING.get(base, base)))

        latin = _latin_base(folded)
        if latin is not None:
            return (_RANK_LATIN, latin)
        if folded.isalpha():
            return (_RANK_OTHER, ord(folded))
        return (_RANK_COMMON, ord(folded))

    def sort_key(self, text: str, family: LocaleFamily) -> tuple:
        """Whole-string key: primary keys with a code point tiebreak per character."""
        key = []
        for char in text:
            primary = self.char_key(char, family)
            key.append((primary if primary is not None else (_RANK_UNSORTED,)) + (ord(char),))
        return tuple(key)

    def compare(self, left: str, right: str, family: LocaleFamily) -> int:
        left_key = self.sort_key(left, family)
        right_key = self.sort_key(right, family)
        return (left_key > right_key) - (left_key < right_key)

    def _han_key(self, char: str, family: LocaleFamily) -> Optional[tuple]:
        if family is LocaleFamily.SIMPLIFIED_CHINESE:
            reading = self._readings.primary_reading(char)
            if reading:
                return (_RANK_LATIN, reading.lower())
            return (_RANK_HAN, ord(char))
        if family is LocaleFamily.TRADITIONAL_CHINESE:
            strokes = STROKE_COUNTS.get(char)
            return (_RANK_HAN, strokes) if strokes else None
        return (_RANK_HAN, ord(char))


# ════════════════════════════════════════════════════════════════════════════════
# LOCALE PROFILE REGISTRY
# ════════════════════════════════════════════════════════════════════════════════


def build_profile(family: LocaleFamily, collator: UnicodeCollator, config: ContactLocaleConfig) -> LocaleProfile:
    """Build the ordered bucket table of one locale family."""
    buckets: List[Bucket] = []

    def add(label: str, kind: BucketKind, boundary: Optional[str] = None) -> None:
        key = collator.char_key(boundary, family) if boundary is not None else None
        buckets.append(Bucket(label=label, kind=kind, boundary=boundary, key=key))

    def add_default_block(with_leading: bool = True) -> None:
        if with_leading:
            add(EMPTY_LABEL, BucketKind.LEADING)
        for letter in LATIN_LABELS:
            add(letter, BucketKind.LATIN, letter)
        add(config.number_label, BucketKind.NUMBER)
        add(EMPTY_LABEL, BucketKind.TRAILING)

    script_pattern = None
    misc_pattern = None

    if family is LocaleFamily.JAPANESE:
        add(EMPTY_LABEL, BucketKind.LEADING)
        for row in KANA_ROW_LABELS:
            add(row, BucketKind.SCRIPT, row)
        add(JAPANESE_MISC_LABEL, BucketKind.MISC)
        add_default_block()
        script_pattern = config.kana_pattern
        misc_pattern = config.han_pattern
    elif family is LocaleFamily.TRADITIONAL_CHINESE:
        add(EMPTY_LABEL, BucketKind.LEADING)
        for strokes, boundary in enumerate(STROKE_BOUNDARIES, start=1):
            add(f"{strokes}{STROKE_LABEL_SUFFIX}", BucketKind.SCRIPT, boundary)
        add_default_block()
        script_pattern = config.han_pattern
    elif family is LocaleFamily.KOREAN:
        # Hangul consonants run straight into A-Z, with a single leading catch-all
        add(EMPTY_LABEL, BucketKind.LEADING)
        for consonant in HANGUL_CONSONANT_LABELS:
            add(consonant, BucketKind.SCRIPT, consonant)
        add_default_block(with_leading=False)
        script_pattern = config.hangul_pattern
    elif family is LocaleFamily.ARABIC:
        add(EMPTY_LABEL, BucketKind.LEADING)
        for letter in ARABIC_LABELS:
            add(letter, BucketKind.SCRIPT, letter)
        add_default_block()
        script_pattern = config.arabic_pattern
    else:
        # DEFAULT and SIMPLIFIED_CHINESE: pinyin collation already yields Latin order
        add_default_block()

    profile = LocaleProfile.from_buckets(family, buckets, script_pattern, misc_pattern)
    logging.debug(f"Built {family.value} locale profile with {len(profile)} buckets")
    return profile


@dataclass(frozen=True)
class ActiveLocale:
    """The selected locale and the profile it resolved to, swapped as one unit."""

    locale: LocaleId
    profile: LocaleProfile


class LocaleProfileRegistry:
    """Locale selection and the cache of immutable per-family profiles."""

    def __init__(self, collator: UnicodeCollator, config: ContactLocaleConfig):
        self._collator = collator
        self._config = config
        self._lock = threading.Lock()
        self._profiles: Dict[LocaleFamily, LocaleProfile] = {}
        with self._lock:
            self._active = ActiveLocale(
                locale=LocaleId(language=LocaleFamily.DEFAULT.language),
                profile=self._profile_for(LocaleFamily.DEFAULT),
            )

    @property
    def active_locale(self) -> LocaleId:
        return self._active.locale

    def active_profile(self) -> LocaleProfile:
        return self._active.profile

    def active_state(self) -> ActiveLocale:
        """Locale and profile read together, never out of step with each other."""
        return self._active

    def resolve_family(self, locale_id: LocaleId) -> LocaleFamily:
        """Closest supported family by language subtag; unknown languages get DEFAULT."""
        language = locale_id.language
        if language == "ja":
            family = LocaleFamily.JAPANESE
        elif language == "zh":
            if locale_id.script == "Hant" or (locale_id.script is None and locale_id.region in _TRADITIONAL_REGIONS):
                family = LocaleFamily.TRADITIONAL_CHINESE
            else:
                family = LocaleFamily.SIMPLIFIED_CHINESE
        elif language == "ko":
            family = LocaleFamily.KOREAN
        elif language == "ar":
            family = LocaleFamily.ARABIC
        else:
            logging.debug(f"No dedicated index for '{locale_id}', using default profile")
            return LocaleFamily.DEFAULT

        if family.language not in self._collator.supported_languages():
            logging.info(f"Collator does not support '{family.language}', using default profile for '{locale_id}'")
            return LocaleFamily.DEFAULT
        return family

    def set_locale(self, locale: Union[str, LocaleId]) -> LocaleProfile:
        """Replace the active profile; returns the newly active profile."""
        locale_id = locale if isinstance(locale, LocaleId) else LocaleId.parse(locale, self._config.locale_pattern)
        family = self.resolve_family(locale_id)
        with self._lock:
            profile = self._profile_for(family)
            self._active = ActiveLocale(locale=locale_id, profile=profile)
        return profile

    def profile(self, family: LocaleFamily) -> LocaleProfile:
        with self._lock:
            return self._profile_for(family)

    def _profile_for(self, family: LocaleFamily) -> LocaleProfile:
        # caller holds self._lock
        profile = self._profiles.get(family)
        if profile is None:
            profile = build_profile(family, self._collator, self._config)
            self._profiles[family] = profile
        return profile


# ════════════════════════════════════════════════════════════════════════════════
# BUCKET LABELER
# ════════════════════════════════════════════════════════════════════════════════


class BucketLabeler:
    """Classifies strings into the buckets of a given profile."""

    def __init__(self, collator: UnicodeCollator, config: ContactLocaleConfig):
        self._collator = collator
        self._config = config

    def bucket_index(self, text: str, profile: LocaleProfile) -> int:
        if not isinstance(text, str):
            raise TypeError(f"text must be a string, got {type(text).__name__}")

        char = self._significant_char(text)
        if char is None:
            return profile.number_index

        if profile.misc_index is not None and profile.misc_pattern is not None and profile.misc_pattern.match(char):
            return profile.misc_index
        if profile.script_pattern is not None and profile.script_pattern.match(char):
            return self._script_bucket(char, profile)
        return self._latin_bucket(char, profile)

    def bucket_label(self, index: int, profile: LocaleProfile) -> str:
        if not 0 <= index < len(profile.buckets):
            raise IndexError(
                f"bucket index {index} out of range for {profile.family.value} profile (0..{len(profile.buckets) - 1})"
            )
        return profile.buckets[index].label

    def all_labels(self, profile: LocaleProfile) -> List[str]:
        return list(profile.labels)

    def bucket_count(self, profile: LocaleProfile) -> int:
        return len(profile.buckets)

    def _significant_char(self, text: str) -> Optional[str]:
        """First alphabetic character, or None for numbers, phone numbers and symbol-only text."""
        separators = self._config.phone_separators
        start = 0
        for start, char in enumerate(text):
            if char.isdigit():
                return None
            if not (char.isspace() or char in separators):
                break
        else:
            return None

        for char in text[start:]:
            if char.isalpha():
                return unicodedata.normalize("NFKC", char)[0]
        return None

    def _script_bucket(self, char: str, profile: LocaleProfile) -> int:
        fallback = profile.misc_index if profile.misc_index is not None else profile.leading_index
        if fallback is None:
            fallback = profile.trailing_index

        key = self._collator.char_key(char, profile.family)
        if key is None:
            return fallback
        position = bisect.bisect_right(profile.script_keys, key) - 1
        if position < 0:
            return fallback
        return profile.script_indexes[position]

    def _latin_bucket(self, char: str, profile: LocaleProfile) -> int:
        key = self._collator.char_key(char, profile.family)
        if key is None or key[0] > _RANK_LATIN:
            return profile.trailing_index
        if key < profile.latin_keys[0]:
            return profile.latin_leading_index
        position = bisect.bisect_right(profile.latin_keys, key) - 1
        return profile.latin_indexes[position]


# ════════════════════════════════════════════════════════════════════════════════
# NAME KEY GENERATOR
# ════════════════════════════════════════════════════════════════════════════════

_KATAKANA_TO_HIRAGANA = {
    code: code - KATAKANA_TO_HIRAGANA_OFFSET for code in range(KATAKANA_FOLD_RANGE[0], KATAKANA_FOLD_RANGE[1] + 1)
}


def _initials(tokens: Sequence[str]) -> str:
    return "".join(token[0].upper() for token in tokens if token)


def _hangul_consonants(text: str) -> str:
    """Leading consonants as compatibility jamo; empty unless every char is a syllable."""
    consonants = []
    for char in text:
        code = ord(char)
        if not HANGUL_SYLLABLE_BASE <= code <= HANGUL_SYLLABLE_LAST:
            return ""
        consonants.append(HANGUL_COMPAT_CONSONANTS[(code - HANGUL_SYLLABLE_BASE) // HANGUL_SYLLABLES_PER_LEAD])
    return "".join(consonants)


class NameKeyGenerator:
    """Produces the lookup key set of one name under one name style."""

    def __init__(self, reading_table: ReadingTable, config: ContactLocaleConfig):
        self._readings = reading_table
        self._config = config
        self._handlers: Dict[NameStyle, Callable[[str], Set[str]]] = {
            NameStyle.WESTERN: self.western_keys,
            NameStyle.CJK: self.chinese_keys,
            NameStyle.CHINESE: self.chinese_keys,
            NameStyle.JAPANESE: self.japanese_keys,
            NameStyle.KOREAN: self.korean_keys,
        }

    def lookup_keys(self, name: str, style: Union[NameStyle, int], profile: LocaleProfile) -> Optional[Set[str]]:
        """
        Lookup keys of `name`, or None when the engine declines.

        UNDEFINED always declines; CJK declines under the Japanese profile, where Han
        text is read as kanji rather than Mandarin.
        """
        style = NameStyle(style)
        if not isinstance(name, str):
            raise TypeError(f"name must be a string, got {type(name).__name__}")

        if style is NameStyle.UNDEFINED:
            return None
        if style is NameStyle.CJK and profile.family is LocaleFamily.JAPANESE:
            return None

        name = name.strip()
        if not name:
            return set()
        return self._handlers[style](name)

    def western_keys(self, name: str) -> Set[str]:
        tokens = name.split()
        keys = {name, _initials(tokens)}
        for count in range(1, len(tokens)):
            suffix = tokens[-count:]
            keys.add(" ".join(suffix))
            keys.add(_initials(suffix))
        return keys

    def chinese_keys(self, name: str) -> Set[str]:
        han_pattern = self._config.han_pattern
        match = han_pattern.search(name)
        if match is None:
            return self.western_keys(name)

        # the Han run may contain spaces; anything after it is a further given-name unit
        end = match.end()
        while end < len(name) and (name[end].isspace() or han_pattern.match(name[end])):
            end += 1

        prefix = name[: match.start()].strip()
        han_text = "".join(name[match.start() : end].split())
        suffix = name[end:].strip()
        per_char = [self._readings.readings(char) for char in han_text]

        keys = {han_text, han_text[-1]}
        for reading in per_char[-1]:
            keys.add(reading)
            keys.add(reading[0])

        prefix_initials = _initials(prefix.split())
        if prefix:
            keys.add(f"{prefix} {han_text}")

        for combination in self._romanizations(per_char):
            romanization = "".join(combination)
            initials = "".join(reading[0] for reading in combination)
            keys.add(romanization)
            keys.add(initials)
            if prefix:
                keys.add(f"{prefix} {romanization}")
                keys.add(prefix_initials + initials)

        if suffix:
            keys.add(name)
            keys |= self.western_keys(suffix)
        return keys

    def japanese_keys(self, name: str) -> Set[str]:
        tokens = name.split()
        keys = {name, "".join(tokens)}
        for count in range(1, len(tokens)):
            keys.add(" ".join(tokens[-count:]))
        return keys | {key.translate(_KATAKANA_TO_HIRAGANA) for key in keys}

    def korean_keys(self, name: str) -> Set[str]:
        tokens = name.split()
        compact = "".join(tokens)
        keys = {name, compact}
        for count in range(1, len(tokens)):
            keys.add(" ".join(tokens[-count:]))

        if len(tokens) > 1:
            given = tokens[-1]
        elif 2 <= len(compact) <= 4:
            # one-syllable family name followed by the given name
            given = compact[1:]
        else:
            given = ""

        for part in (compact, given):
            consonants = _hangul_consonants(part)
            if consonants:
                keys.add(part)
                keys.add(consonants)
        return keys

    def _romanizations(self, per_char: Sequence[Tuple[str, ...]]) -> List[Tuple[str, ...]]:
        """Cross-product of per-character readings, capped at max_romanizations."""
        if not all(per_char):
            return []
        limit = self._config.max_romanizations
        combinations = list(itertools.islice(itertools.product(*per_char), limit + 1))
        if len(combinations) > limit:
            logging.warning(f"Romanizations of {len(per_char)} characters exceed {limit}; keeping the first {limit}")
            combinations = combinations[:limit]
        return combinations


# ════════════════════════════════════════════════════════════════════════════════
# CONTACT LOCALE UTILS (FACADE)
# ════════════════════════════════════════════════════════════════════════════════


class ContactLocaleUtils:
    """Locale-aware index bucketing and name lookup keys behind one active locale."""

    def __init__(
        self,
        config: Optional[ContactLocaleConfig] = None,
        collator: Optional[UnicodeCollator] = None,
        reading_table: Optional[ReadingTable] = None,
    ):
        self._config = config or ContactLocaleConfig.create_default()
        self._readings = reading_table or ReadingTable()
        self._collator = collator or UnicodeCollator(self._readings, self._config)
        self._registry = LocaleProfileRegistry(self._collator, self._config)
        self._labeler = BucketLabeler(self._collator, self._config)
        self._key_generator = NameKeyGenerator(self._readings, self._config)
        self._registry.set_locale(self._config.default_locale)

    # Public API methods
    def set_locale(self, locale: Union[str, LocaleId]) -> LocaleProfile:
        return self._registry.set_locale(locale)

    def active_profile(self) -> LocaleProfile:
        return self._registry.active_profile()

    @property
    def active_locale(self) -> LocaleId:
        return self._registry.active_locale

    def bucket_index(self, text: str) -> int:
        return self._labeler.bucket_index(text, self._registry.active_profile())

    def bucket_label(self, index: int) -> str:
        return self._labeler.bucket_label(index, self._registry.active_profile())

    def label_for(self, text: str) -> str:
        """Bucket label of `text`, index and label resolved against one profile."""
        profile = self._registry.active_profile()
        return self._labeler.bucket_label(self._labeler.bucket_index(text, profile), profile)

    def all_labels(self) -> List[str]:
        return self._labeler.all_labels(self._registry.active_profile())

    def bucket_count(self) -> int:
        return self._labeler.bucket_count(self._registry.active_profile())

    def lookup_keys(self, name: str, style: Union[NameStyle, int]) -> Optional[Set[str]]:
        return self._key_generator.lookup_keys(name, style, self._registry.active_profile())


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global instance for module-level functions
_global_utils: Optional[ContactLocaleUtils] = None
_global_lock = threading.Lock()


def _get_global_utils() -> ContactLocaleUtils:
    """Get or create the global utils instance."""
    global _global_utils
    if _global_utils is None:
        with _global_lock:
            if _global_utils is None:
                _global_utils = ContactLocaleUtils()
    return _global_utils


def set_locale(locale: Union[str, LocaleId]) -> LocaleProfile:
    """Change the process-wide active locale."""
    return _get_global_utils().set_locale(locale)


def active_profile() -> LocaleProfile:
    return _get_global_utils().active_profile()


def bucket_index(text: str) -> int:
    return _get_global_utils().bucket_index(text)


def bucket_label(index: int) -> str:
    return _get_global_utils().bucket_label(index)


def all_labels() -> List[str]:
    return _get_global_utils().all_labels()


def lookup_keys(name: str, style: Union[NameStyle, int]) -> Optional[Set[str]]:
    """
    Module-level convenience function for name lookup keys.

    Args:
        name: Display name
        style: Caller-supplied name style

    Returns:
        Set of lookup keys, or None when the caller should use its own fallback
    """
    return _get_global_utils().lookup_keys(name, style)
