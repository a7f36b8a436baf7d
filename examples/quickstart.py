"""Quickstart example for i18nbundle.

This example demonstrates the setup/serve split: a Bundle is populated once
at startup, then cheap Localizers resolve messages per request.

Note: Examples ignore the 'errors' return value where it is empty by
construction. In production, always check errors and log/report
translation issues.
"""

import tempfile
from pathlib import Path

from i18nbundle import Bundle, Localizer, LocalizeConfig, Message
from i18nbundle.localization import PathMessageLoader

# Example 1: Simple message
print("=" * 50)
print("Example 1: Simple Message")
print("=" * 50)

bundle = Bundle("en")
bundle.add_messages(
    "gb",
    "en",
    Message(id="HelloPerson", other="Hello {{Name}}"),
    Message(id="Colour", other="Colour"),
)

localizer = Localizer(bundle, "en-GB", country_code="gb")
result, _ = localizer.localize(LocalizeConfig("HelloPerson", template_data={"Name": "Bob"}))
print(result)
# Output: Hello Bob

# Example 2: Plurals
print("\n" + "=" * 50)
print("Example 2: Plural Forms")
print("=" * 50)

bundle.add_messages(
    "gb",
    "en",
    Message(id="Emails", one="You have one email.", other="You have {{Count}} emails."),
)

for count in (0, 1, 5):
    print(localizer.must_localize(LocalizeConfig("Emails", plural_count=count)))
# Output:
# You have 0 emails.
# You have one email.
# You have 5 emails.

# Example 3: Message files per country
print("\n" + "=" * 50)
print("Example 3: Message Files")
print("=" * 50)

with tempfile.TemporaryDirectory() as tmp:
    country_dir = Path(tmp) / "tr"
    country_dir.mkdir()
    (country_dir / "active.tr.toml").write_text(
        '[HelloPerson]\nother = "Merhaba {{Name}}"\n', encoding="utf-8"
    )
    (country_dir / "active.en.json").write_text(
        '{"HelloPerson": "Hello {{Name}}"}', encoding="utf-8"
    )

    tr_bundle = Bundle("tr")
    loader = PathMessageLoader(str(Path(tmp) / "{country}"))
    tr_bundle.load_message_files(loader, "tr", ["active.tr.toml", "active.en.json"])

for header in ("tr-TR, en;q=0.5", "en-US", "ja"):
    localizer = Localizer(tr_bundle, header, country_code="tr")
    text, tag, _ = localizer.localize_with_tag(
        LocalizeConfig("HelloPerson", template_data={"Name": "Ada"})
    )
    print(f"{header!r:22} -> [{tag}] {text}")
# Output:
# 'tr-TR, en;q=0.5'      -> [tr] Merhaba Ada
# 'en-US'                -> [en] Hello Ada
# 'ja'                   -> [tr] Merhaba Ada

# Example 4: Errors and defaults
print("\n" + "=" * 50)
print("Example 4: Errors and Default Messages")
print("=" * 50)

result, errors = localizer.localize(LocalizeConfig("Missing"))
print(result)
print(errors[0].diagnostic.format_error() if errors[0].diagnostic else errors[0])
# Output:
# {Missing}
# error[MESSAGE_NOT_FOUND]: Message 'Missing' not found for 'tr' in country 'tr'
#   --> Missing
#   = help: Add the message to a loaded message file or pass a default message

result, _ = localizer.localize(
    LocalizeConfig(default_message=Message(id="Missing", other="Fallback text"))
)
print(result)
# Output: Fallback text
