"""Metrics – Prometheus text exposition encoder (format version 0.0.4).

One block per metric family::

    # HELP <name> <help>
    # TYPE <name> <kind>
    <name><suffix>{<label>="<value>",...} <value>

Blocks are concatenated in the order they are given; nothing is reordered or
merged.
"""
from __future__ import annotations

import math
from collections.abc import Iterable

from mp_metrics.metrics.snapshot import MetricKind, MetricSnapshot

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"


def format_value(value: float) -> str:
    """Render *value* so that ``float()`` parses it back to the same double."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if value == math.inf:
        return "+Inf"
    if value == -math.inf:
        return "-Inf"
    return repr(value)


def escape_label_value(value: str) -> str:
    return value.replace("\\", r"\\").replace("\n", r"\n").replace('"', r"\"")


def escape_help(text: str) -> str:
    return text.replace("\\", r"\\").replace("\n", r"\n")


def _unescape_help(text: str) -> str:
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, "")
        out.append("\n" if nxt == "n" else nxt or "\\")
    return "".join(out)


def _format_labels(labels: Iterable[tuple[str, str]]) -> str:
    rendered = ",".join(f'{key}="{escape_label_value(value)}"' for key, value in labels)
    return f"{{{rendered}}}" if rendered else ""


def encode(snapshot: MetricSnapshot) -> str:
    """Encode a single metric family as exposition text (newline-terminated)."""
    name = snapshot.info.name
    lines = [
        f"# HELP {name} {escape_help(snapshot.info.help)}",
        f"# TYPE {name} {snapshot.kind.value}",
    ]
    static = snapshot.info.static_labels
    for sample in snapshot.samples:
        labels = _format_labels(static + sample.labels)
        lines.append(f"{name}{sample.suffix}{labels} {format_value(sample.value)}")
    return "\n".join(lines) + "\n"


def encode_all(snapshots: Iterable[MetricSnapshot]) -> bytes:
    """Concatenate the encoded *snapshots* into UTF-8 exposition bytes."""
    return "".join(encode(s) for s in snapshots).encode("utf-8")


def parse_header(text: str | bytes) -> list[tuple[str, str, MetricKind]]:
    """Read back ``(name, help, kind)`` for each family in *text*.

    Only the ``# HELP`` / ``# TYPE`` comment lines are interpreted; sample
    lines are skipped.
    """
    if isinstance(text, bytes):
        text = text.decode("utf-8")
    helps: dict[str, str] = {}
    families: list[tuple[str, str, MetricKind]] = []
    for line in text.splitlines():
        if line.startswith("# HELP "):
            name, _, help_text = line[len("# HELP "):].partition(" ")
            helps[name] = _unescape_help(help_text)
        elif line.startswith("# TYPE "):
            name, _, kind = line[len("# TYPE "):].partition(" ")
            families.append((name, helps.get(name, ""), MetricKind(kind.strip())))
    return families


__all__ = [
    "CONTENT_TYPE_LATEST",
    "encode",
    "encode_all",
    "escape_help",
    "escape_label_value",
    "format_value",
    "parse_header",
]
