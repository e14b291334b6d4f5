# authselect

A library for generating authentication configuration files (PAM stacks,
`nsswitch.conf`, dconf settings) from templates whose content depends on a
set of enabled features, together with the text and file helpers needed to
write such files safely.

## Installation

```
pip install .
```

Tests need the `test` extra:

```
pip install .[test]
pytest
```

## Templates

`authselect.template` turns a template into output. Templates are plain
text with directives in braces. Each directive takes a boolean expression
over feature names; names are written in double quotes and combined with
`and`, `or`, `not` and parentheses.

| Directive | Effect |
|---|---|
| `{if EXPR:yes}` / `{if EXPR:yes\|no}` | replaced with `yes` if the expression holds, otherwise with `no` or nothing |
| `{include if EXPR}` | the line is kept only if the expression holds |
| `{exclude if EXPR}` | the line is removed if the expression holds |
| `{stop if EXPR}` | the rest of the text is dropped if the expression holds; otherwise the directive's line is removed |
| `{continue if EXPR}` | the rest of the text is dropped unless the expression holds; otherwise the directive's line is removed |
| `{imply "g" if EXPR}` | enables feature `g` for the rest of the template if the expression holds; the line is removed |

Trailing whitespace is trimmed from every line of the output.

```python
from authselect import template

text = (
    'line {if "a":yes|no}\n'
    'kept {include if "a"}\n'
    'dropped {exclude if "a"}\n'
)
print(template.generate(text, ["a"]))   # "line yes\nkept\n"
print(template.list_features(text))     # ['a']
```

- `generate(template, features)` returns the output; `None` as the template
  gives `""`. A malformed directive expression raises `TemplateError`.
- `list_features(template)` lists every feature named in the directives, in
  order of first appearance, without duplicates.
  `list_features_from_expression(expression)` does the same for a single
  expression.
- `write(path, content, mode)` writes `PREAMBLE` (the "Generated by
  authselect" header) followed by the content and sets the file mode.
- `write_temporary(path, content, mode)` does the same into a new file
  `path.XXXXXX` next to `path` and returns its name, ready to be renamed
  over the target.
- `validate_written_content(file_content, expected)` tells whether a file
  still matches what was generated, ignoring comments, empty lines and
  surrounding whitespace.

## Expressions

`authselect.evaluator.evaluate(expression, features)` evaluates one
expression against an iterable of enabled feature names and returns a
bool:

```python
from authselect.evaluator import evaluate

evaluate('"w1" and not "w3"', ["w1", "w2"])   # True
evaluate('("w1" or "w5") and "w2"', ["w1", "w2"])  # True
```

A malformed expression (empty, unbalanced parentheses, a dangling operator,
an unterminated name) raises `EvaluationError`, a subclass of `ValueError`.
`Tokenizer(expression).next_token()` yields the tokens one by one and
returns `""` at the end.

## Profile identifiers

`authselect.profileid` handles the `custom/` prefix of custom profile
identifiers: `custom_id("mine")` gives `"custom/mine"`,
`parse_custom("custom/mine")` gives `"mine"` (and `None` for any other
identifier), and `is_custom` tells the two kinds apart.

## Helpers

- `authselect.textutil`: `trim`, `trim_left`, `trim_right`, `trim_noempty`,
  `is_empty`, `explode(text, delimiter, flags)` with `ExplodeFlags`
  (`TRIM_LEFT`, `TRIM_RIGHT`, `SKIP_EMPTY`, `SKIP_COMMENT`, `ALL`),
  `implode`, and `levenshtein` edit distance.
- `authselect.strarray`: lists of strings used as ordered sets —
  `copy_values`, `has_value`, `add_value`, `del_value`, `concat`, and
  `find_similar(value, items, max_distance)` for "did you mean" suggestions.
- `authselect.textfile`: `read_text(path, limit_kib)` and
  `read_text_in(directory, filename, limit_kib)` read a file and raise
  `OSError` with `errno.ERANGE` if it is larger than the limit;
  `write_text(path, content, mode)` writes a file with the given mode and
  removes it again if writing fails.
- `authselect.fileutil`: attribute checks (`is_regular`, `links_to`,
  `does_not_link_to`, `check_access`, `exists`), path helpers
  (`get_basename`, `get_parent_directory`, `make_path`), and temporary files
  and copies that keep owner and permissions (`mktmp_for`, `mktmp_copy`,
  `copy_file`).

## What this package does not do

It has no command-line tool. It does not locate, list, read or activate
profiles, does not know where the system's generated files and symbolic
links live, and does not update the dconf database; it provides the
template processing and file handling such tasks are built from.