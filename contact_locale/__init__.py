from contact_locale.locale_utils import (
    ActiveLocale,
    Bucket,
    BucketKind,
    BucketLabeler,
    ContactLocaleConfig,
    ContactLocaleUtils,
    LocaleFamily,
    LocaleId,
    LocaleProfile,
    LocaleProfileRegistry,
    NameKeyGenerator,
    NameStyle,
    ReadingTable,
    UnicodeCollator,
    active_profile,
    all_labels,
    bucket_index,
    bucket_label,
    lookup_keys,
    set_locale,
)

__all__ = [
    "ActiveLocale",
    "Bucket",
    "BucketKind",
    "BucketLabeler",
    "ContactLocaleConfig",
    "ContactLocaleUtils",
    "LocaleFamily",
    "LocaleId",
    "LocaleProfile",
    "LocaleProfileRegistry",
    "NameKeyGenerator",
    "NameStyle",
    "ReadingTable",
    "UnicodeCollator",
    "active_profile",
    "all_labels",
    "bucket_index",
    "bucket_label",
    "lookup_keys",
    "set_locale",
]
