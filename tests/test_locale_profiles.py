"""Locale parsing, profile selection, bucket invariants and the collation service."""

import dataclasses
import logging
import sys
import threading
from pathlib import Path
import pytest

# Add the parent directory to path to import contact_locale
sys.path.insert(0, str(Path(__file__).parent.parent))

import contact_locale
from contact_locale.locale_utils import (
    BucketKind,
    ContactLocaleConfig,
    ContactLocaleUtils,
    LocaleFamily,
    LocaleId,
    LocaleProfileRegistry,
    ReadingTable,
    UnicodeCollator,
)
from contact_locale.locale_utils_data import MAX_STROKE_LABEL, STROKE_BOUNDARIES, STROKE_COUNTS

LOCALE_PATTERN = ContactLocaleConfig.create_default().locale_pattern

# (identifier, language, script, region)
PARSE_CASES = [
    ("en", "en", None, None),
    ("en_US", "en", None, "US"),
    ("EN-us", "en", None, "US"),
    ("zh-Hant-TW", "zh", "Hant", "TW"),
    ("zh_hans_cn", "zh", "Hans", "CN"),
    ("en_US.UTF-8", "en", None, "US"),
    ("de_DE@euro", "de", None, "DE"),
    ("es-419", "es", None, "419"),
    ("sr_Latn_RS", "sr", "Latn", "RS"),
]

MALFORMED_LOCALES = ["", "   ", "e", "en US", "12", "en__US", "zh-Hant-", "日本語"]

# (identifier, expected family)
FAMILY_CASES = [
    ("en", LocaleFamily.DEFAULT),
    ("fr_CA", LocaleFamily.DEFAULT),
    ("ru", LocaleFamily.DEFAULT),
    ("ja_JP", LocaleFamily.JAPANESE),
    ("zh", LocaleFamily.SIMPLIFIED_CHINESE),
    ("zh_CN", LocaleFamily.SIMPLIFIED_CHINESE),
    ("zh_SG", LocaleFamily.SIMPLIFIED_CHINESE),
    ("zh_TW", LocaleFamily.TRADITIONAL_CHINESE),
    ("zh_HK", LocaleFamily.TRADITIONAL_CHINESE),
    ("zh_MO", LocaleFamily.TRADITIONAL_CHINESE),
    ("zh-Hant", LocaleFamily.TRADITIONAL_CHINESE),
    ("zh-Hans-HK", LocaleFamily.SIMPLIFIED_CHINESE),
    ("ko", LocaleFamily.KOREAN),
    ("ar_EG", LocaleFamily.ARABIC),
]

# (locale, text, expected label)
LABEL_CASES = [
    ("en", "Émile Zola", "E"),
    ("en", "Øystein", "O"),
    ("en", "Łukasz", "L"),
    ("en", "zoe", "Z"),
    ("en", "!Bob", "B"),
    ("en", "", "#"),
    ("en", "***", "#"),
    ("en", "Ωmega", ""),
    ("ja", "さくら", "さ"),
    ("ja", "ガッツ", "か"),
    ("ja", "パンダ", "は"),
    ("ja", "ヤマダ", "や"),
    ("ja", "ｻｸﾗ", "さ"),
    ("ja", "ん", "わ"),
    ("ja", "山田", "他"),
    ("zh_CN", "王小明", "W"),
    ("zh_CN", "张伟", "Z"),
    ("zh_TW", "王小明", "4劃"),
    ("zh_TW", "林", "8劃"),
    ("zh_TW", "鵑", "18劃"),
    ("zh_TW", "陳大文", "11劃"),
    ("zh_TW", "龘", ""),
    ("zh_CN", "曾小明", "Z"),
    ("zh_CN", "沈", "S"),
    ("ko", "김민수", "ᄀ"),
    ("ar", "بسام", "ا"),
]

SAMPLE_TEXTS = [
    "John Smith",
    "+1 (650) 555-1212",
    "杜鵑",
    "D杜鵑",
    "日",
    "さくら",
    "홍길동",
    "نور",
    "Ωmega",
    "Ñandú",
    "   ",
    "Øystein",
    "😀 smile",
]

# Most common Taiwanese surnames and their stroke counts in the Taiwan standard forms
TAIWAN_SURNAME_STROKES = [
    ("陳", 11), ("林", 8), ("黃", 12), ("張", 11), ("李", 7), ("王", 4), ("吳", 7), ("劉", 15), ("蔡", 15),
    ("楊", 13), ("許", 11), ("鄭", 15), ("謝", 17), ("郭", 11), ("洪", 9), ("曾", 12), ("邱", 8), ("廖", 14),
    ("賴", 16), ("周", 8), ("徐", 10), ("蘇", 20), ("葉", 13), ("莊", 11), ("呂", 7), ("江", 6), ("何", 7),
    ("蕭", 17), ("羅", 19), ("高", 10), ("簡", 18), ("朱", 6), ("鍾", 17), ("施", 9), ("游", 12), ("詹", 13),
    ("沈", 7), ("彭", 12), ("胡", 9), ("余", 7), ("盧", 16), ("潘", 15), ("顏", 18), ("梁", 11), ("趙", 14),
    ("柯", 9), ("翁", 10), ("魏", 18), ("方", 4), ("孫", 10), ("戴", 17), ("范", 9), ("宋", 7), ("鄧", 15),
]  # fmt: skip

ALL_LOCALES = ["en", "ja", "zh_CN", "zh_TW", "ko", "ar", "fr"]


@pytest.fixture
def utils():
    return ContactLocaleUtils()


@pytest.fixture(scope="session")
def collator():
    return UnicodeCollator(ReadingTable())


class EnglishOnlyCollator(UnicodeCollator):
    _SUPPORTED_LANGUAGES = frozenset({"en"})


def test_locale_id_parsing():
    for identifier, language, script, region in PARSE_CASES:
        assert LocaleId.parse(identifier, LOCALE_PATTERN) == LocaleId(language, script, region), identifier


def test_locale_id_str():
    assert str(LocaleId("zh", "Hant", "TW")) == "zh_Hant_TW"
    assert str(LocaleId("en")) == "en"


def test_malformed_locales_raise():
    for identifier in MALFORMED_LOCALES:
        with pytest.raises(ValueError):
            LocaleId.parse(identifier, LOCALE_PATTERN)
    with pytest.raises(ValueError):
        LocaleId.parse(None, LOCALE_PATTERN)


def test_malformed_locale_leaves_profile_unchanged(utils):
    before = utils.set_locale("ja")
    with pytest.raises(ValueError):
        utils.set_locale("not a locale")
    assert utils.active_profile() is before
    assert utils.active_locale == LocaleId("ja")


def test_family_resolution(utils):
    for identifier, family in FAMILY_CASES:
        assert utils.set_locale(identifier).family is family, identifier


def test_default_locale_is_english():
    utils = ContactLocaleUtils()
    assert utils.active_profile().family is LocaleFamily.DEFAULT
    assert utils.active_locale == LocaleId("en")


def test_configured_default_locale():
    utils = ContactLocaleUtils(config=ContactLocaleConfig.create_default().with_default_locale("ko_KR"))
    assert utils.active_profile().family is LocaleFamily.KOREAN


def test_unsupported_collator_language_falls_back(caplog):
    utils = ContactLocaleUtils(collator=EnglishOnlyCollator(ReadingTable()))
    with caplog.at_level(logging.INFO):
        profile = utils.set_locale("ja_JP")
    assert profile.family is LocaleFamily.DEFAULT
    assert utils.label_for("John Smith") == "J"
    assert "using default profile" in caplog.text


def test_profiles_are_cached_and_immutable(utils):
    first = utils.set_locale("ja")
    utils.set_locale("en")
    assert utils.set_locale("ja_JP") is first

    assert isinstance(first.buckets, tuple)
    with pytest.raises(dataclasses.FrozenInstanceError):
        first.family = LocaleFamily.KOREAN


def test_set_locale_is_idempotent(utils):
    utils.set_locale("ko")
    labels = utils.all_labels()
    indexes = [utils.bucket_index(text) for text in SAMPLE_TEXTS]
    utils.set_locale("ko")
    assert utils.all_labels() == labels
    assert [utils.bucket_index(text) for text in SAMPLE_TEXTS] == indexes


def test_locale_round_trip(utils):
    utils.set_locale("en")
    before = [utils.label_for(text) for text in SAMPLE_TEXTS]
    utils.set_locale("ja")
    utils.set_locale("en")
    assert [utils.label_for(text) for text in SAMPLE_TEXTS] == before


def test_labels_for_scripts(utils):
    failures = []
    for locale, text, expected in LABEL_CASES:
        utils.set_locale(locale)
        result = utils.label_for(text)
        if result != expected:
            failures.append(f"'{text}' under {locale}: expected '{expected}', got '{result}'")

    assert not failures, "\n".join(failures)


def test_every_index_is_in_range(utils):
    for locale in ALL_LOCALES:
        utils.set_locale(locale)
        labels = utils.all_labels()
        for text in SAMPLE_TEXTS:
            index = utils.bucket_index(text)
            assert 0 <= index < utils.bucket_count(), f"'{text}' under {locale}"
            assert utils.bucket_label(index) in labels


def test_profile_structure(utils):
    for locale in ALL_LOCALES:
        profile = utils.set_locale(locale)
        kinds = [bucket.kind for bucket in profile.buckets]
        assert kinds.count(BucketKind.NUMBER) == 1, locale
        assert kinds[-1] is BucketKind.TRAILING, locale
        assert kinds.count(BucketKind.LATIN) == 26, locale
        assert list(profile.latin_keys) == sorted(profile.latin_keys), locale
        assert list(profile.script_keys) == sorted(profile.script_keys), locale


def test_bucket_label_out_of_range(utils):
    utils.set_locale("en")
    with pytest.raises(IndexError):
        utils.bucket_label(-1)
    with pytest.raises(IndexError):
        utils.bucket_label(utils.bucket_count())


def test_bucket_index_rejects_non_strings(utils):
    with pytest.raises(TypeError):
        utils.bucket_index(None)


def test_collator_orders_scripts(collator):
    assert collator.compare("apple", "Banana", LocaleFamily.DEFAULT) == -1
    assert collator.compare("Zoe", "杜", LocaleFamily.DEFAULT) == -1
    assert collator.compare("杜", "张", LocaleFamily.SIMPLIFIED_CHINESE) == -1
    assert collator.compare("王", "杜", LocaleFamily.TRADITIONAL_CHINESE) == -1
    assert collator.compare("éclair", "eclair", LocaleFamily.DEFAULT) == 1
    assert collator.compare("same", "same", LocaleFamily.DEFAULT) == 0


def test_collator_stroke_keys(collator):
    assert collator.char_key("龘", LocaleFamily.TRADITIONAL_CHINESE) is None
    traditional = LocaleFamily.TRADITIONAL_CHINESE
    assert collator.char_key("陳", traditional) == collator.char_key("郭", traditional)
    assert collator.char_key("杜", LocaleFamily.TRADITIONAL_CHINESE) is not None


def test_stroke_table():
    assert len(STROKE_BOUNDARIES) == MAX_STROKE_LABEL
    for strokes, boundary in enumerate(STROKE_BOUNDARIES, start=1):
        assert STROKE_COUNTS[boundary] == strokes
    assert STROKE_COUNTS["杜"] == 7
    assert STROKE_COUNTS["鵑"] == 18


def test_common_surnames_get_stroke_labels(utils):
    utils.set_locale("zh_TW")
    failures = []
    for surname, strokes in TAIWAN_SURNAME_STROKES:
        result = utils.label_for(surname + "小明")
        if result != f"{strokes}劃":
            failures.append(f"'{surname}': expected '{strokes}劃', got '{result}'")

    assert not failures, "\n".join(failures)


def test_active_locale_and_profile_switch_together():
    registry = LocaleProfileRegistry(UnicodeCollator(ReadingTable()), ContactLocaleConfig.create_default())
    mismatches = []
    stop = threading.Event()

    def switch_locales():
        while not stop.is_set():
            for locale in ALL_LOCALES:
                registry.set_locale(locale)

    writer = threading.Thread(target=switch_locales)
    writer.start()
    try:
        for _ in range(2000):
            state = registry.active_state()
            if registry.resolve_family(state.locale) is not state.profile.family:
                mismatches.append((str(state.locale), state.profile.family))
    finally:
        stop.set()
        writer.join()

    assert not mismatches


def test_concurrent_queries_during_locale_switches(utils):
    errors = []
    stop = threading.Event()

    def switch_locales():
        while not stop.is_set():
            for locale in ALL_LOCALES:
                utils.set_locale(locale)

    def query():
        try:
            for _ in range(300):
                assert utils.label_for("John Smith") == "J"
                assert utils.label_for("+1 (650) 555-1212") == "#"
                assert utils.lookup_keys("John Smith", 1) == {"John Smith", "Smith", "JS", "S"}
        except AssertionError as e:
            errors.append(e)

    writer = threading.Thread(target=switch_locales)
    readers = [threading.Thread(target=query) for _ in range(4)]
    writer.start()
    for reader in readers:
        reader.start()
    for reader in readers:
        reader.join()
    stop.set()
    writer.join()

    assert not errors


def test_module_level_functions():
    try:
        contact_locale.set_locale("zh_TW")
        assert contact_locale.active_profile().family is LocaleFamily.TRADITIONAL_CHINESE
        assert contact_locale.bucket_label(contact_locale.bucket_index("杜鵑")) == "7劃"
        assert len(contact_locale.all_labels()) == 55
        assert contact_locale.lookup_keys("杜鵑", 2) == {"鵑", "杜鵑", "JUAN", "DUJUAN", "J", "DJ"}
    finally:
        contact_locale.set_locale("en")
    assert contact_locale.bucket_index("John Smith") == 10
