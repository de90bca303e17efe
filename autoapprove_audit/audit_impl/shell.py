"""Shell parsing helpers for auto-approve pattern analysis."""

import shlex

_SEPARATORS = {";", "\n", "`", ")"}


def _split_shell_commands(command: str) -> list[str]:
    """Split a command line on `&&`, `||`, `|`, `&`, `;`, newlines and closers.

    Quoted text is kept intact. Backticks and `)` also end a segment so that
    `$(rm -rf x)` and `` `rm -rf x` `` yield the inner command on its own.
    """
    parts: list[str] = []
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    def flush() -> None:
        part = "".join(buf).strip()
        if part:
            parts.append(part)
        buf.clear()

    i = 0
    while i < len(command):
        ch = command[i]

        if escape:
            buf.append(ch)
            escape = False
            i += 1
            continue

        if ch == "\\" and not in_single:
            buf.append(ch)
            escape = True
            i += 1
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            i += 1
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            i += 1
            continue

        if not in_single and not in_double:
            if command.startswith("&&", i) or command.startswith("||", i):
                flush()
                i += 2
                continue
            if command.startswith("|&", i):
                flush()
                i += 2
                continue
            if ch == "|":
                flush()
                i += 1
                continue
            if ch == "&":
                prev = command[i - 1] if i > 0 else ""
                nxt = command[i + 1] if i + 1 < len(command) else ""
                if prev in {">", "<"} or nxt == ">":
                    buf.append(ch)
                    i += 1
                    continue
                flush()
                i += 1
                continue
            if ch in _SEPARATORS:
                flush()
                i += 1
                continue

        buf.append(ch)
        i += 1

    flush()
    return parts


def _shlex_split(segment: str) -> list[str] | None:
    try:
        return shlex.split(segment, posix=True)
    except ValueError:
        return None


def _tokenize(segment: str) -> list[str]:
    """Tokenize a segment, falling back to whitespace splitting on bad quoting."""
    tokens = _shlex_split(segment)
    if tokens is None:
        return segment.split()
    return tokens


def _short_opts(tokens: list[str]) -> set[str]:
    """Extract individual short option characters from tokens.

    Stops at `--` end-of-options marker to avoid treating positional
    arguments (e.g., filenames starting with `-`) as options.

    Also stops parsing a token at the first non-alpha character to avoid
    false positives from attached option values (e.g., `-C/path` should
    only contribute `C`, not `C`, `/`, `p`, `a`, `t`, `h`).
    """
    opts: set[str] = set()
    for tok in tokens:
        if tok == "--":
            break
        if tok.startswith("--") or not tok.startswith("-") or tok == "-":
            continue
        for ch in tok[1:]:
            if not ch.isalpha():
                break
            opts.add(ch)
    return opts
