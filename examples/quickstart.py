"""Quickstart example for plurimark.

This example walks through the main conversions: authoring markup to
structured messages, markdown placeholders, plural rule compilation,
runtime formatting and translation validation.

Note: Examples print results directly for brevity. In production, check
ValidationResult.is_valid and report errors before shipping a catalog.
"""

from plurimark import (
    MarkupSyntaxError,
    apply_placeholders,
    emit_condition,
    format_message,
    parse_rule,
    pseudo_localize,
    simplify,
    to_structured_message,
    to_structured_message_with_markdown,
    validate_translation,
)
from plurimark.plural import plural_categories, plural_rules_for_locale

# Example 1: Variables and plurals
print("=" * 50)
print("Example 1: Markup to Structured Message")
print("=" * 50)

print(to_structured_message("Hello, $name$!"))
# Output: Hello, {name}!

message = to_structured_message("You have $#n=0#no files|#n# file|#n# files$ in $dir$")
print(message)
# Output: You have {n, plural, =0 {no files} one {# file} other {# files}} in {dir}

# Example 2: Markup errors
print("\n" + "=" * 50)
print("Example 2: Markup Errors")
print("=" * 50)

try:
    to_structured_message("Broken $name", source_location="views.py:12")
except MarkupSyntaxError as error:
    if error.diagnostic is not None:
        print(error.diagnostic.format_error())
# Output:
# error[MARKUP_UNMATCHED_DELIMITER]: Unmatched '$' at position 7.
#   --> views.py:12 (line 1, column 8)
#   = help: Close the block with '$' or write '$$' for a literal dollar sign

# Example 3: Markdown placeholders
print("\n" + "=" * 50)
print("Example 3: Markdown Placeholders")
print("=" * 50)

result = to_structured_message_with_markdown("Read the **$doc$** [guide](https://example.com)")
print(result.text)
# Output: Read the <0>{doc}</0> <1>guide</1>

translated = "Lisez le <1>guide</1> <0>{doc}</0>"
print(apply_placeholders(translated, result.mappings))
# Output: Lisez le <a href="https://example.com">guide</a> <strong>{doc}</strong>

# Example 4: Plural rules
print("\n" + "=" * 50)
print("Example 4: Plural Rule Compilation")
print("=" * 50)

print(emit_condition(simplify(parse_rule("v = 0 and i % 10 = 1 and i % 100 != 11"))))
# Output: n % 10 == 1 && n % 100 != 11

print(plural_categories("pl"))
print(plural_rules_for_locale("pl").dispatch())

# Example 5: Formatting
print("\n" + "=" * 50)
print("Example 5: Formatting for a Locale")
print("=" * 50)

for count in (0, 1, 1200):
    print(format_message(message, {"n": count, "dir": "docs"}))
# Output:
# You have no files in docs
# You have 1 file in docs
# You have 1,200 files in docs

print(pseudo_localize(message))

# Example 6: Validation
print("\n" + "=" * 50)
print("Example 6: Translation Validation")
print("=" * 50)

translation = "{n, plural, one {# plik} other {# pliki}} w {katalog}"
print(validate_translation(message, translation, locale="pl").format())
