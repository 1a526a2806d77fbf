# lxstd

Small building blocks for scripted agent workflows. It is a library only: it has no command-line program.

## Modules

- `lxstd.values`: the value model (`Err`, `Tagged`, `type_name`) and conversion to and from JSON data (`to_json`, `from_json`). `to_json` raises `EncodeError` for integers outside the 64-bit range, NaN/infinity and values it cannot represent.
- `lxstd.jsonio`: `parse`, `encode` (compact) and `encode_pretty` (indented).
- `lxstd.ctx`: record helpers that return new dicts (`empty`, `get`, `with_key`, `without_key`, `keys`, `merge`) and `load`/`save` to JSON files.
- `lxstd.numeric`: `absolute`, `ceil`, `floor`, `round_half_away`, `power`, `sqrt`, `minimum`, `maximum`, and the constants `PI`, `E`, `INF`.
- `lxstd.envinfo`: `get`, `variables`, `args`, `cwd`, `home`.
- `lxstd.patterns`: `match` (returns a `RegexMatch` with UTF-8 byte offsets), `find_all`, `replace`, `replace_all`, `split`, `is_match`. Patterns may be strings or compiled patterns; replacement templates use `$1`, `$name`, `${name}` and `$$`.
- `lxstd.files`: `read`, `write`, `append`, `exists`, `remove` (files or whole directories), `mkdir` (with parents), `ls` (sorted names) and `stat` (a `FileStat`). Failures raise `OSError`.
- `lxstd.mdparse`: `parse` Markdown into a flat list of node dicts (heading, para, code, list, ordered, blockquote, hr), and `sections`, `code_blocks`, `headings`, `links`, `to_text`, `node`.
- `lxstd.mdbuild`: node constructors (`h1`, `h2`, `h3`, `para`, `code`, `bullet_list`, `ordered`, `table`, `link`, `blockquote`, `hr`, `raw`, `doc`) and `render` back to Markdown text.
- `lxstd.saga`: `run` dependency-ordered steps with retries, an optional timeout in seconds and an `on_compensate` callback; `define` and `execute` for stored sagas. When a step fails, completed steps are undone in reverse and `SagaFailed` is raised; malformed or cyclic steps raise `SagaError`.
- `lxstd.knowledge`: `KnowledgeBase`, a keyed store of `KnowledgeEntry` items written to a JSON file after every change, with `store`, `get`, `query`, `keys`, `remove`, `merge` and `expire`.
- `lxstd.memory`: `MemoryStore`, tiered memory with keyword `recall`, `promote`, `demote`, `forget`, `consolidate` (returns a `ConsolidationReport`), `tier` and `entries`, written to a JSON file.
- `lxstd.tasks`: `TaskStore` with a review workflow (`start`, `submit`, `audit`, `approve`, `fail`, `revise`, `complete`, plus `update`), queries (`get`, `children`, `all`), `save`, and `load` from a JSON file. Bad moves raise `TransitionError`; unknown ids raise `TaskNotFound`.
- `lxstd.mcp_stdio`: `StdioTransport`, line-delimited JSON-RPC over a child process's standard streams; failures raise `McpError`.
- `lxstd.mcp_client`: `McpClient` (`request`, `notify`, `close`), `parse_stdio_config` and `connect`, which starts the server and performs the initialize handshake.
- `lxstd.mcp`: `list_tools`, `call`, `list_resources`, `read_resource`, `list_prompts`, `get_prompt`, `extract_text`; a failed tool call raises `ToolError`.

## Install

```
pip install .
```

Run the tests with:

```
pip install ".[test]"
pytest
```

## Examples

Markdown round trip:

```python
from lxstd import mdbuild, mdparse

nodes = mdparse.parse("# Title\n\nSome text.")
print(mdbuild.render(nodes))
print(mdbuild.render([mdbuild.h2("Steps"), mdbuild.ordered(["one", "two"])]))
```

A saga in which each step that has already run is undone if a later one fails:

```python
from lxstd import saga

steps = [
    {"id": "reserve", "do": lambda prev: "seat-1", "undo": lambda result: None},
    {"id": "charge", "depends": ["reserve"],
     "do": lambda prev: f"paid for {prev['reserve']}", "undo": lambda result: None},
]
try:
    results = saga.run(steps, max_retries=1)
except saga.SagaFailed as failure:
    print(failure.failed_step, failure.compensated)
```

Knowledge and memory stores:

```python
from lxstd.knowledge import KnowledgeBase
from lxstd.memory import MemoryStore

kb = KnowledgeBase("kb.json")
kb.store("greeting", "hello", {"source": "docs"})
print(kb.get("greeting"))

mem = MemoryStore("memory.json")
entry_id = mem.store("The build uses hatchling", tags=["build"])
mem.promote(entry_id)
print(mem.recall("build hatchling"))
```

Talking to an MCP server over stdio:

```python
from lxstd import mcp
from lxstd.mcp_client import connect

with connect("stdio://my-mcp-server --flag") as client:
    print(mcp.list_tools(client))
    print(mcp.call(client, "echo", {"text": "hi"}))
```

## What it does not do

- There is no date and time formatting or parsing, and no step planner with replan or skip actions; `lxstd.saga` is the only step runner.
- MCP servers are reached only by starting a local process over stdio; there is no HTTP transport, and no typed tool-call validation.
- There is no HTTP client module and no command-line interpreter or program.