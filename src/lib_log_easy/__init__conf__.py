"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

import sys
from collections.abc import Callable

name = "lib_log_easy"
title = "Event-driven logging facades with moment timing"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_easy"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_easy"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Emit the metadata banner line by line through ``writer`` (stdout by default)."""

    if writer is None:
        writer = sys.stdout.write

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    writer(f"Info for {name}:\n\n")
    for label, value in fields:
        writer(f"    {label:<{pad}} = {value}\n")
