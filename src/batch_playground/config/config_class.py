"""
Base class for configuration dataclasses.

Each field of a subclass becomes a ``--field-name`` command line option. Values are resolved with the precedence
command line > environment variable (``metadata=dict(env_var=...)``) > TOML config file section > field default.
"""

import abc
import argparse
import dataclasses
import os
import sys
import typing
from typing import Any, Dict, List, Mapping, Optional

if sys.version_info >= (3, 11):
    import tomllib
    from typing import Self
else:
    import tomli as tomllib
    from typing_extensions import Self


class ConfigType(metaclass=abc.ABCMeta):
    """Composite option value written on the command line or in TOML as a single string."""

    @classmethod
    @abc.abstractmethod
    def from_string(cls, value: str) -> Self:
        raise NotImplementedError()

    @abc.abstractmethod
    def __str__(self) -> str:
        raise NotImplementedError()


def _unwrap_optional(field_type: Any) -> Any:
    if typing.get_origin(field_type) is typing.Union:
        args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return field_type


def _is_sequence(field_type: Any) -> bool:
    return typing.get_origin(_unwrap_optional(field_type)) in (tuple, list)


def convert_value(field_type: Any, value: Any) -> Any:
    """Convert a raw value from the command line, the environment or a TOML file to the field's type."""
    field_type = _unwrap_optional(field_type)
    origin = typing.get_origin(field_type)

    if origin in (tuple, list):
        if isinstance(value, str):
            value = [item.strip() for item in value.split(",") if item.strip()]

        item_type = typing.get_args(field_type)[0] if typing.get_args(field_type) else str
        items = [convert_value(item_type, item) for item in value]
        return tuple(items) if origin is tuple else items

    if isinstance(field_type, type) and issubclass(field_type, ConfigType):
        if isinstance(value, field_type):
            return value
        return field_type.from_string(str(value))

    if field_type in (int, float, str):
        return field_type(value)

    return value


def load_config_file(config_file: str, section: str) -> Dict[str, Any]:
    """Read one ``[section]`` table of a TOML file, with ``-`` in keys normalized to ``_``."""
    with open(config_file, "rb") as f:
        document = tomllib.load(f)

    table = document.get(section, {})
    if not isinstance(table, dict):
        raise ValueError(f"section [{section}] in {config_file} must be a table")

    return {key.replace("-", "_"): value for key, value in table.items()}


@dataclasses.dataclass
class ConfigClass:
    @classmethod
    def parse(
        cls,
        program_name: str,
        section: str,
        argv: Optional[List[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        if environ is None:
            environ = os.environ

        parser = cls.argument_parser(program_name)
        args = parser.parse_args(argv)

        file_values: Dict[str, Any] = {}
        if args.config is not None:
            file_values = load_config_file(args.config, section)

        field_names = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(file_values) - field_names)
        if unknown:
            raise ValueError(f"unknown keys in [{section}] of {args.config}: {', '.join(unknown)}")

        hints = typing.get_type_hints(cls)
        kwargs = {}
        for field in dataclasses.fields(cls):
            value = getattr(args, field.name)

            env_var = field.metadata.get("env_var")
            if value is None and env_var is not None and environ.get(env_var):
                value = environ[env_var]

            if value is None:
                value = file_values.get(field.name)

            if value is None:
                continue

            kwargs[field.name] = convert_value(hints[field.name], value)

        return cls(**kwargs)

    @classmethod
    def argument_parser(cls, program_name: str) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(prog=program_name)
        parser.add_argument("--config", "-c", default=None, help="path to a TOML config file")

        hints = typing.get_type_hints(cls)
        for field in dataclasses.fields(cls):
            help_text = field.metadata.get("help", "")
            if field.metadata.get("env_var") is not None:
                help_text = f"{help_text} (env: {field.metadata['env_var']})"

            names = [f"--{field.name.replace('_', '-')}"]
            if "short" in field.metadata:
                names.append(field.metadata["short"])

            kwargs: Dict[str, Any] = dict(dest=field.name, default=None, help=help_text)
            if _is_sequence(hints[field.name]):
                kwargs["nargs"] = "+"

            parser.add_argument(*names, **kwargs)

        return parser
