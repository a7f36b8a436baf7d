"""Localization package: per-request resolution and message-file loading.

Submodules:
    types      - PEP 695 type aliases (MessageId, CountryCode, TemplateData)
    loading    - Unmarshal registry, message-file parsing, MessageLoader
                 protocol and PathMessageLoader
    localizer  - Localizer and LocalizeConfig

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from i18nbundle.localization.loading import (
    MessageFile,
    MessageLoader,
    PathMessageLoader,
    UnmarshalFunc,
    parse_message_file_bytes,
)
from i18nbundle.localization.localizer import LocalizeConfig, Localizer
from i18nbundle.localization.types import CountryCode, MessageId, TemplateData

__all__ = [
    # Resolution
    "Localizer",
    "LocalizeConfig",
    # Loading
    "MessageFile",
    "MessageLoader",
    "PathMessageLoader",
    "UnmarshalFunc",
    "parse_message_file_bytes",
    # Type aliases for user code type annotations
    "CountryCode",
    "MessageId",
    "TemplateData",
]
