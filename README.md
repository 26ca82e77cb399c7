# dbtui

Building blocks for a keyboard-driven terminal database browser, and helpers
that turn natural-language requests into PostgreSQL queries.

The widgets are plain Python objects: you feed them key names such as `"j"`,
`"down"`, `"enter"`, `"esc"` or `"ctrl+p"` through `handle_key`, and their
`view()` methods return strings with ANSI colour codes, ready to print.

## SQL generation (`dbtui.ai`)

- `dbtui.ai.provider` — the data types: `SQLRequest`, `SQLResponse`,
  `TokenUsage`, `SchemaContext`, `TableDef`, `ColumnDef`, `FKDef`, the
  abstract `Provider` (with `generate_sql(request)` and `name()`) and
  `ProviderError`.
- `dbtui.ai.prompt` — `build_system_prompt(schema)` condenses a schema into a
  compact prompt. `abbreviate_type` shortens type names (`integer` becomes
  `int4`, `character varying(255)` becomes `varchar(255)`), and
  `format_table_def` renders a table on one line, marking keys as `PK` and
  `FK->table.column`. Enum types are listed after the tables.
- `dbtui.ai.claudecode` — `ClaudeCodeProvider` runs
  `claude -p - --output-format text` with the prompt on standard input; its
  token counts are estimates (`usage.estimated` is true).
  `validate_claude_code()` raises `ProviderError` when `claude` is not on
  `PATH`. `extract_sql(raw)` pulls the query out of a reply: a fenced code
  block wins; otherwise the text from the first line starting with a SQL
  keyword up to the first line ending in `;` (the semicolon dropped). Text
  without a recognisable statement is returned trimmed but otherwise unchanged.
- `dbtui.ai.ollama` — `OllamaProvider(url, model)` posts to `<url>/api/generate`
  without streaming. `validate_ollama(url)` checks that a server answers.
- `dbtui.ai.openrouter` — `OpenRouterProvider(api_key, model)` sends a system
  and a user message to a chat-completions endpoint (`base_url` can be
  overridden). `validate_openrouter(api_key)` requires a non-empty key.
- `dbtui.ai.config` — `AIConfig`, `OpenRouterConfig`, `OllamaConfig`,
  `load_config(path)`, `save_config(path, config)`, `default_config_path()`
  and `new_provider(config)`.

Transport and HTTP failures raise `ProviderError`. A reply that holds no SQL
is not an exception: it comes back as an `SQLResponse` whose `error` field
says why.

```python
from dbtui.ai.config import default_config_path, load_config, new_provider
from dbtui.ai.provider import ColumnDef, SchemaContext, SQLRequest, TableDef

path = default_config_path()          # None if the home directory is unknown
config = load_config(path)            # a missing file gives an empty AIConfig
provider = new_provider(config)       # None when no known provider is named

if provider is not None:
    schema = SchemaContext(tables=[
        TableDef(name="orders", columns=[ColumnDef(name="total", data_type="numeric")]),
    ])
    response = provider.generate_sql(SQLRequest(prompt="orders over 100", schema=schema))
    print(response.sql or response.error)
```

The configuration file is `~/.config/dbtui/ai.yml`:

```yaml
provider: openrouter        # or: ollama, claude-code
openrouter:
  api_key: placeholder
  model: some/model-name
ollama:
  url: http://localhost:11434
  model: llama3
```

`save_config` creates the directory if needed and writes the file readable
only by its owner; sections left at their defaults are not written.

## Widgets (`dbtui.ui`)

- `dbtui.ui.table` — `Table` and `TableConfig`: a grid of string cells with
  column widths fitted to the content (between `min_cell_width` and
  `max_cell_width`), cursor movement (`move_down`, `page_down`,
  `move_to_last_col`, `move_to_next_fk_col`, …), horizontal and vertical
  scrolling, row marks (`toggle_mark`) and a visual range (`start_visual`,
  `stop_visual`). `selected_rows()` is the sorted union of both.
  `set_filter_indicators` adds ▲/▼ and ◈ to the headers of ordered and
  filtered columns; `expanded_cell_view()` shows the cursor cell in a box,
  pretty-printing JSON.
- `dbtui.ui.filter` — `parse_filter_input(column, text)` returns a
  `FilterClause`; `FilterInput` is the prompt to type one in, and
  `FilterList` an overlay of active filters whose `handle_key` returns the
  column removed with `d`, `CLEAR_ALL` after `D`, or None.
- `dbtui.ui.table_list` — `TableList`, the sidebar of table names with
  fuzzy filtering; `selected` holds the table picked with Enter. Views and
  materialized views get a `(v)` / `(m)` suffix.
- `dbtui.ui.palette` — `Palette` of `PaletteAction`s; `handle_key("enter")`
  returns the chosen `action_id`.
- `dbtui.ui.record_view` — `RecordView`, one row as column/value lines.
- `dbtui.ui.help` — `HelpOverlay`, the scrollable list of key bindings.
- `dbtui.ui.which_key` — `KeyNode` trees for leader-key sequences and the
  `WhichKey` popup listing a node's children by group.
- `dbtui.ui.row_form` — `RowForm` for adding a row (`show_add`) or
  duplicating one (`show_duplicate`) from `ColumnSpec`s. Primary keys with a
  default are skipped as auto-generated; `confirm` turns true on Enter in the
  last editable field, and `collect_values()` returns the columns and values.
- Supporting modules: `dbtui.ui.textinput.TextInput` (single-line editing),
  `dbtui.ui.fuzzy.find` (case-insensitive fuzzy matching, best first) and
  `dbtui.ui.style` (`box`, `place`, `join_horizontal`, `pad_right`,
  `truncate`, `visible_width`).

### Filters

| Input         | Clause               |
|---------------|----------------------|
| `active`      | `= active`           |
| `%alice%`     | `LIKE %alice%`       |
| `>100`, `<=5` | comparison           |
| `!=pending`   | not equal            |
| `null`        | `IS NULL`            |
| `!null`, `not null` | `IS NOT NULL`  |

```python
from dbtui.ui.filter import parse_filter_input

clause = parse_filter_input("total", ">=100")
print(clause.operator, clause.value)   # >= 100
print(clause)                          # total>=100
```

### The data table

```python
from dbtui.ui.table import Table, TableConfig

table = Table(TableConfig())
table.set_data(["id", "name"], [["1", "Alice"], ["2", "Bob"]])
table.set_size(40, 10)
table.move_down()
print(table.cursor_cell_value())   # 2
print(table.view())
```

## What this package does not do

There is no application here: no command to start, no main screen or event
loop tying the widgets together, and no database connection. Nothing in the
package queries PostgreSQL, reads the schema or runs the SQL that the
providers generate; the widgets only hold and render the data you give them.

## Running the tests

Install the `test` extra and run `pytest` from the project root.