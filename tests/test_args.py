from pathlib import Path

import pytest

from tomlcli.args import (
    ArgumentError,
    build_parser,
    config,
    convert,
    make_config_class,
    parse_args,
)
from tomlcli.spec import ConfigSpec, SpecError

CONFIG = """
port = { type = "u16", default = "8080", doc = "Server port number", env = "PORT" }
ip = { default = "localhost", doc = "connection URL", env = "IP" }
"""
SECOND = """
port = { type = "u16", default = "9080" }
id = { type = "u32", default = "2" }
"""
OPTION = """
port = { type = "u16", default = "9080" }
op_with_default = { type = "u32", default = "2", optional = true }
op_without_default = { type = "u32", optional = true }
"""
MULTI = """
small_int = { type = "u8", default = "80" }
int = { type = "u32", default = "8000" }
float = { type = "f64", default = "90.8" }
boolean = { type = "bool", default = "true" }
string = { default = "string_value" }
path = { type = "PathBuf", default = "." }
"""
INNER = """
port = { type = "u16", default = "8080" }
url = { default = "localhost" }
[redis]
url = { default = "redis://localhost:6379" }
pool_size = { type = "u32", default = "10" }
"""
NOT_PROVIDED = """
url = { env = "URL" }
"""


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_basic_file(tmp_path):
    cls = config(write(tmp_path, "config.toml", CONFIG), "MyConfig")
    cfg = cls.parse([], {})
    assert cfg.port == 8080
    assert cfg.ip == "localhost"


def test_basic_file_with_env(tmp_path):
    cls = config(write(tmp_path, "config.toml", CONFIG), "MyConfig")
    cfg = cls.parse([], {"PORT": "5432", "IP": "127.0.0.1"})
    assert cfg.port == 5432
    assert cfg.ip == "127.0.0.1"


def test_second_file(tmp_path):
    first = config(write(tmp_path, "config.toml", CONFIG))
    second = config(write(tmp_path, "second_config.toml", SECOND))
    cfg = first.parse([], {})
    assert cfg.port == 8080
    assert cfg.ip == "localhost"
    cfg2 = second.parse([], {})
    assert cfg2.port == 9080
    assert cfg2.id == 2


def test_option(tmp_path):
    cfg = config(write(tmp_path, "option.toml", OPTION)).parse([], {})
    assert cfg.port == 9080
    assert cfg.op_with_default == 2
    assert cfg.op_without_default is None


def test_multi_types(tmp_path):
    cfg = config(write(tmp_path, "multi_types.toml", MULTI)).parse([], {})
    assert cfg.small_int == 80
    assert cfg.int == 8000
    assert cfg.float == 90.8
    assert cfg.boolean is True
    assert cfg.string == "string_value"
    assert cfg.path == Path(".")


def test_inner_types(tmp_path):
    cfg = config(write(tmp_path, "config_with_inner.toml", INNER)).parse([], {})
    assert cfg.port == 8080
    assert cfg.url == "localhost"
    assert cfg.redis.url == "redis://localhost:6379"
    assert cfg.redis.pool_size == 10
    assert type(cfg.redis).__name__ == "RedisConfig"


def test_url_not_provided(tmp_path):
    cls = config(write(tmp_path, "config_not_provided.toml", NOT_PROVIDED))
    with pytest.raises(ArgumentError, match="--url"):
        cls.parse([], {})
    assert cls.parse([], {"URL": "0.0.0.0"}).url == "0.0.0.0"


def test_command_line_beats_env_and_default():
    spec = ConfigSpec.from_toml(CONFIG)
    values = parse_args(spec, ["--port", "1234"], {"PORT": "5432"})
    assert values == {"port": 1234, "ip": "localhost"}


def test_nested_long_uses_id():
    spec = ConfigSpec.from_toml(INNER)
    values = parse_args(spec, ["--redis.pool_size", "3"], {})
    assert values["redis"] == {"pool_size": 3, "url": "redis://localhost:6379"}


def test_custom_long_and_short():
    spec = ConfigSpec.from_toml('name = { long = "who", short = "n" }')
    assert parse_args(spec, ["-n", "x"], {}) == {"name": "x"}
    assert parse_args(spec, ["--who", "y"], {}) == {"name": "y"}
    with pytest.raises(ArgumentError):
        parse_args(spec, ["--name", "z"], {})


def test_bool_flag_without_default():
    spec = ConfigSpec.from_toml('verbose = { type = "bool" }')
    assert parse_args(spec, [], {}) == {"verbose": False}
    assert parse_args(spec, ["--verbose"], {}) == {"verbose": True}


def test_invalid_value_from_env():
    spec = ConfigSpec.from_toml(CONFIG)
    with pytest.raises(ArgumentError, match="--port"):
        parse_args(spec, [], {"PORT": "70000"})


def test_unknown_argument():
    spec = ConfigSpec.from_toml(CONFIG)
    with pytest.raises(ArgumentError):
        parse_args(spec, ["--nope", "1"], {})


def test_help_mentions_doc_env_and_default():
    text = build_parser(ConfigSpec.from_toml(CONFIG), "example").format_help()
    assert "Server port number" in text
    assert "[env: PORT]" in text
    assert "[default: 8080]" in text
    assert "--ip" in text


def test_short_h_conflicts_with_help():
    spec = ConfigSpec.from_toml('host = { short = "h" }')
    with pytest.raises(ArgumentError):
        build_parser(spec)


def test_instances_compare_equal():
    cls = make_config_class(ConfigSpec.from_toml(CONFIG))
    assert cls.parse([], {}) == cls.parse(["--port", "8080"], {})


def test_unknown_type_rejected():
    with pytest.raises(ArgumentError, match="unsupported type"):
        make_config_class(ConfigSpec.from_toml('x = { type = "Vec<u8>" }'))


def test_missing_spec_file(tmp_path):
    with pytest.raises(SpecError):
        config(tmp_path / "absent.toml")


@pytest.mark.parametrize(
    ("type_name", "text", "expected"),
    [
        ("u8", "255", 255),
        ("u16", "+7", 7),
        ("i32", "-5", -5),
        ("i8", "-128", -128),
        ("f64", "90.8", 90.8),
        ("f32", "1e3", 1000.0),
        ("bool", "true", True),
        ("bool", "false", False),
        ("String", "text", "text"),
        ("PathBuf", ".", Path(".")),
        ("char", "c", "c"),
    ],
)
def test_convert(type_name, text, expected):
    assert convert(type_name, text) == expected


@pytest.mark.parametrize(
    ("type_name", "text"),
    [
        ("u8", "256"),
        ("u16", "-1"),
        ("i8", "128"),
        ("u32", " 1"),
        ("u32", "1_000"),
        ("f64", "abc"),
        ("bool", "yes"),
        ("char", "ab"),
        ("Custom", "x"),
    ],
)
def test_convert_rejects(type_name, text):
    with pytest.raises(ArgumentError):
        convert(type_name, text)