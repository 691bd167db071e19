"""Log record model and its single-line JSON encoding."""

from __future__ import annotations

import logging
import os
import socket
from datetime import datetime
from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, JsonValue
from pydantic_core import to_json

LOGGER = logging.getLogger(__name__)

SCHEMA_VERSION = 1

Fields = Mapping[str, JsonValue]


class Record(BaseModel):
    """One log event. Field order is the wire order."""

    model_config = ConfigDict(ser_json_inf_nan="null")

    time: datetime
    hostname: str
    pid: int
    level: int
    fields: Any = None
    v: Literal[1] = SCHEMA_VERSION
    name: str
    msg: Any = None


def placeholder(value: object) -> str:
    """Stand-in written for values that have no JSON representation."""

    return f"<unserializable {type(value).__name__}>"


def build_record(
    name: str,
    level: int,
    fields: Fields | None,
    message: JsonValue,
    now: datetime | None = None,
) -> Record:
    """Capture time, host and pid for an event that passed the threshold."""

    # Values come straight from the caller and are checked at serialization time.
    return Record.model_construct(
        time=now or datetime.now().astimezone(),
        hostname=socket.gethostname(),
        pid=os.getpid(),
        level=level,
        fields=fields,
        v=SCHEMA_VERSION,
        name=name,
        msg=message,
    )


def _escaped(text: object) -> str:
    return str(text).encode("ascii", "backslashreplace").decode("ascii")


def _encodable(value: Any) -> Any:
    try:
        to_json(value, fallback=placeholder)
    except (ValueError, RecursionError):
        return _escaped(value) if isinstance(value, str) else placeholder(value)
    return value


def serialize(record: Record) -> bytes:
    """Encode a record as compact JSON without a trailing newline.

    Unknown values are replaced one by one with :func:`placeholder`. When a
    whole part cannot be encoded (circular references, unsupported mapping
    keys, strings holding lone surrogates) that part alone is replaced, and
    strings are escaped instead. As a last resort only escaped strings and
    placeholders are written, so every record produces a line.
    """

    try:
        return record.model_dump_json(fallback=placeholder).encode()
    except (ValueError, RecursionError) as error:
        LOGGER.debug("Record serialization degraded", extra={"logger_name": _escaped(record.name), "error": str(error)})
    degraded = record.model_copy(
        update={
            "hostname": _encodable(record.hostname),
            "name": _encodable(record.name),
            "fields": _encodable(record.fields),
            "msg": _encodable(record.msg),
        },
    )
    try:
        return degraded.model_dump_json(fallback=placeholder).encode()
    except (ValueError, RecursionError):
        bare = record.model_copy(
            update={
                "hostname": _escaped(record.hostname),
                "name": _escaped(record.name),
                "fields": None if record.fields is None else placeholder(record.fields),
                "msg": placeholder(record.msg),
            },
        )
        return bare.model_dump_json().encode()
