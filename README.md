# tomlcli

Describe your program's settings in one TOML file, and `tomlcli` turns it into
a command-line parser. For each setting you write down its type, its default
value, the environment variable that can supply it, and its help text. The
list of options then lives in one plain file instead of in your code.

Only the standard library is used (`tomllib`, `argparse`, `dataclasses`).

## Describing settings

Each top-level key is one setting. It is a table with some of these keys:

| key        | meaning                                                        |
|------------|----------------------------------------------------------------|
| `type`     | value type (default `String`, see below)                       |
| `default`  | default value, always written as a string                      |
| `doc`      | help text shown in `--help`                                    |
| `env`      | environment variable that can supply the value                 |
| `optional` | `true` if the setting may be left out                          |
| `long`     | name of the long flag (default: the setting's dotted id)       |
| `short`    | one-character short flag                                       |

```toml
port = { type = "u16", default = "8080", doc = "Server port number", env = "PORT" }
ip = { default = "localhost", doc = "connection URL", env = "URL" }

[redis]
doc = "Redis settings"
url = { default = "redis://localhost:6379", env = "REDIS_URL" }
pool_size = { type = "u32", default = "10" }
```

Supported value types are the integer types `u8`, `u16`, `u32`, `u64`,
`u128`, `usize`, `i8`, `i16`, `i32`, `i64`, `i128`, `isize` (range-checked),
the floating-point types `f32` and `f64`, `bool` (written `true` or `false`),
`String`, `char` (exactly one character) and `PathBuf` (a `pathlib.Path`).

A table that holds other tables is a group of settings. Its members get
dotted ids (`redis.url`, `redis.pool_size`), which are also their default
long flags: `--redis.url`. Members of a group are ordered by name. If a group
gives no `type`, its type name is made from its key by upper-casing the first
letter: `redis` becomes `RedisConfig`.

A `short` value must be exactly one character; any other value is ignored.
Top-level keys that are not tables are skipped, with a warning sent to the
`tomlcli.spec` logger.

A `bool` setting becomes a flag that takes no value: giving it sets the
setting to `True`.

## Where values come from

For each setting the value is taken from, in order:

1. the command-line flag,
2. the environment variable named by `env`,
3. the `default`.

A required setting with none of these is an error. An optional setting with
none of these is `None`; a `bool` setting with none of these is `False`.

## Using it from Python

```python
from tomlcli.spec import ConfigSpec
from tomlcli.args import parse_args

spec = ConfigSpec.from_file("config.toml")
settings = parse_args(spec, ["--port", "9000"], {"URL": "0.0.0.0"}, "myapp")
# {'port': 9000, 'ip': '0.0.0.0', 'redis': {'pool_size': 10, 'url': 'redis://localhost:6379'}}
```

`parse_args(spec, argv, environ, prog)` reads `sys.argv[1:]` and `os.environ`
when `argv` or `environ` is left out, and returns nested dictionaries keyed by
setting name.

`ConfigSpec.from_toml` reads a spec from a string and `ConfigSpec.from_mapping`
from an already loaded mapping. `ConfigSpec.from_file` accepts only files
ending in `.toml`; anything else, an unreadable file, or invalid TOML raises
`SpecError`. `ConfigSpec.get_field(name)` and `FieldSpec.get_field(name)`
look up a field by name.

Bad command-line or environment values, missing required settings, and
unknown types raise `ArgumentError`. `build_parser(spec, prog)` gives you the
underlying `argparse` parser if you want to show help or extend it, and
`convert(type_name, text)` turns a single string into a value of the named
type. The helpers `table_to_field_spec`, `get_field_type` and
`to_pascal_case` are also available from `tomlcli.spec`.

### Configuration classes

To get a dataclass whose instances hold the parsed settings, use
`make_config_class(spec, name)`, or load a TOML file directly with
`config(path, name)` (`path` defaults to `config.toml`). Groups become nested
dataclasses named by their type.

```python
from tomlcli.args import config

Config = config("config.toml", "Config")
cfg = Config.parse(["--redis.pool_size", "20"])
print(cfg.port, cfg.redis.pool_size)

blank = Config.new()   # every field at its type's zero value, optional fields None
```

`Config.parse(argv, environ, prog)` takes the same arguments as `parse_args`.

## Command line

The `tomlcli` command parses the command line and environment against a spec
file and prints the resulting configuration: first `Config: ...` with the
whole object, then one `name = value` line per top-level setting.

If the first argument does not start with `-`, it names the spec file;
otherwise `config.toml` in the current directory is used:

```
tomlcli --port 9000
tomlcli second_config.toml --port 9000
tomlcli --help
```

On a bad value or a missing required setting it prints `error: ...` to
standard error and exits with status 2.

## Limits

- Spec files must be TOML; no other format is read.
- There are no subcommands or positional arguments: every setting is an
  option flag.
- A `short` flag of `h` clashes with `-h` for help and is rejected with
  `ArgumentError`.

## Running the tests

```
pip install -e ".[test]"
pytest
```