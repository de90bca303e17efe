"""Recursive-force delete analysis.

`rm -rf` shows up in ordinary build cleanup, so it is not in the danger
taxonomy. Instead every `rm` invocation in a pattern is parsed: recursive
force deletes are tolerated only when each target is a known build artifact.
"""

import posixpath
import re

from .shell import _short_opts, _split_shell_commands, _tokenize

SAFE_RM_TARGETS = frozenset(
    {
        "node_modules",
        "build",
        "dist",
        ".next",
        "out",
        ".cache",
        ".tmp",
        "temp",
        "tmp",
    }
)

# `rm` as a word of its own: `/bin/rm`, `:task:rm`, `:task-rm`, `$(rm` all
# qualify and `perform` does not.
_RM_INVOCATION = re.compile(r"(?<![A-Za-z0-9_])rm\s")
_DRIVE_PATH = re.compile(r"^[A-Za-z]:[\\/]")
_HOME_REFS = ("~", "$HOME", "${HOME}")


def _rm_has_recursive_force(tokens: list[str]) -> bool:
    """Return True if the rm invocation is effectively `rm -rf`."""

    if not tokens:
        return False

    opts: list[str] = []
    for tok in tokens[1:]:
        if tok == "--":
            break
        opts.append(tok)

    opts_lower = [t.lower() for t in opts]
    short = _short_opts(opts)
    recursive = "--recursive" in opts_lower or "r" in short or "R" in short
    force = "--force" in opts_lower or "f" in short
    return recursive and force


def _rm_targets(tokens: list[str]) -> list[str]:
    """Return the positional (non-option) arguments of an rm invocation."""
    targets: list[str] = []
    options_done = False
    for tok in tokens[1:]:
        if not options_done:
            if tok == "--":
                options_done = True
                continue
            if tok.startswith("-") and tok != "-":
                continue
        targets.append(tok)
    return targets


def _is_always_dangerous_target(target: str) -> bool:
    if "*" in target or "?" in target:
        return True
    if ".." in target:
        return True
    if target.startswith("/") or target.startswith("\\") or _DRIVE_PATH.match(target):
        return True
    return target.startswith(_HOME_REFS)


def _is_safe_target(target: str) -> bool:
    normalized = target
    while normalized.startswith("./"):
        normalized = normalized[2:]
    normalized = normalized.rstrip("/")
    if not normalized:
        return False
    if normalized in SAFE_RM_TARGETS:
        return True
    return posixpath.basename(normalized) in SAFE_RM_TARGETS


def _rm_invocations(pattern: str) -> list[list[str]]:
    """Return the tokens of every `rm ...` command embedded in a pattern."""
    invocations: list[list[str]] = []
    for match in _RM_INVOCATION.finditer(pattern):
        segments = _split_shell_commands(pattern[match.start():])
        if not segments:
            continue
        tokens = _tokenize(segments[0])
        if tokens and tokens[0] == "rm":
            invocations.append(tokens)
    return invocations


def _analyze_rm(tokens: list[str]) -> bool:
    """Return True when one rm invocation deletes something it should not."""
    if not _rm_has_recursive_force(tokens):
        return False

    targets = _rm_targets(tokens)
    if not targets:
        return True

    if any(_is_always_dangerous_target(t) for t in targets):
        return True

    return not all(_is_safe_target(t) for t in targets)


def is_dangerous_removal(pattern: str) -> bool:
    """Return True if the pattern contains a recursive force delete that is unsafe.

    Wildcards, `..`, absolute and home-relative targets are dangerous no matter
    what. Otherwise the delete is tolerated only if every target names a known
    build artifact directory such as `node_modules` or `dist`.
    """
    return any(_analyze_rm(tokens) for tokens in _rm_invocations(pattern))
