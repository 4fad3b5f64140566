"""SQL script loading and execution.

Scripts are split into single statements before execution because asyncpg
prepares each statement and refuses multi-statement strings.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

logger = logging.getLogger(__name__)

_DOLLAR_TAG = re.compile(r"\$[A-Za-z_][A-Za-z0-9_]*\$|\$\$")


def split_sql_script(script: str) -> list[str]:
    """Split a script into statements on semicolons outside quotes and comments.

    ``--`` and ``/* */`` comments are dropped. Single-quoted, double-quoted
    and dollar-quoted text is kept verbatim, including ``''`` escapes.
    """
    statements: list[str] = []
    current: list[str] = []
    i = 0
    length = len(script)

    def flush() -> None:
        statement = "".join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    while i < length:
        char = script[i]
        pair = script[i : i + 2]

        if pair == "--":
            end = script.find("\n", i)
            i = length if end == -1 else end
            continue
        if pair == "/*":
            end = script.find("*/", i + 2)
            i = length if end == -1 else end + 2
            current.append(" ")
            continue
        if char in ("'", '"'):
            j = i + 1
            while j < length:
                if script[j] == char:
                    if script[j + 1 : j + 2] == char:
                        j += 2
                        continue
                    break
                j += 1
            current.append(script[i : j + 1])
            i = j + 1
            continue
        if char == "$":
            match = _DOLLAR_TAG.match(script, i)
            if match:
                tag = match.group(0)
                end = script.find(tag, match.end())
                stop = length if end == -1 else end + len(tag)
                current.append(script[i:stop])
                i = stop
                continue
        if char == ";":
            flush()
            i += 1
            continue

        current.append(char)
        i += 1

    flush()
    return statements


def load_sql_script(path: str | Path) -> list[str]:
    """Read a UTF-8 script file and split it into statements."""
    return split_sql_script(Path(path).read_text(encoding="utf-8"))


async def run_sql_script(connection: AsyncConnection, path: str | Path) -> int:
    """Execute every statement of a script file, in order.

    Returns:
        Number of statements executed.
    """
    statements = load_sql_script(path)
    for statement in statements:
        logger.debug("Executing script statement: %s", statement)
        await connection.execute(text(statement))
    logger.info("Applied %s (%d statements)", path, len(statements))
    return len(statements)
