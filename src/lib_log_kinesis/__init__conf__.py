"""Static package metadata surfaced by the CLI ``info`` command.

Values mirror ``pyproject.toml``; keep both in sync when releasing.
"""

from __future__ import annotations

from collections.abc import Callable

name = "lib_log_kinesis"
title = "Forward Python log records to AWS Kinesis Data Streams or Firehose"
version = "0.1.0"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_kinesis"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line through ``writer`` (default: ``print``)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    for line in lines:
        if writer is None:
            print(line, end="")
        else:
            writer(line)


__all__ = [
    "author",
    "author_email",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
