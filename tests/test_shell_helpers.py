"""Unit tests for the shell tokenizing helpers."""

from unittest import TestCase

from autoapprove_audit.audit_impl.shell import (
    _shlex_split,
    _short_opts,
    _split_shell_commands,
    _tokenize,
)


class ShellHelpersTests(TestCase):
    def test_short_opts_stops_at_double_dash(self) -> None:
        # given: tokens with -Ap after -- (a filename, not options)
        # when: extracting short options
        # then: A and p should NOT be in the result
        self.assertEqual(_short_opts(["git", "add", "--", "-Ap"]), set())
        self.assertEqual(_short_opts(["rm", "-r", "--", "-f"]), {"r"})

    def test_short_opts_bundled_and_attached_values(self) -> None:
        self.assertEqual(_short_opts(["rm", "-rf", "-C/path"]), {"r", "f", "C"})

    def test_split_on_operators(self) -> None:
        self.assertEqual(
            _split_shell_commands("a && b || c | d; e & f"),
            ["a", "b", "c", "d", "e", "f"],
        )

    def test_split_keeps_quoted_operators(self) -> None:
        self.assertEqual(_split_shell_commands("echo 'a && b'; c"), ["echo 'a && b'", "c"])

    def test_split_keeps_redirect_ampersand(self) -> None:
        self.assertEqual(_split_shell_commands("make 2>&1"), ["make 2>&1"])

    def test_split_on_substitution_closers(self) -> None:
        self.assertEqual(_split_shell_commands("rm -rf x) y"), ["rm -rf x", "y"])
        self.assertEqual(_split_shell_commands("rm -rf x` y"), ["rm -rf x", "y"])

    def test_shlex_split_bad_quoting_returns_none(self) -> None:
        self.assertIsNone(_shlex_split("echo 'x"))

    def test_tokenize_falls_back_to_whitespace(self) -> None:
        self.assertEqual(_tokenize("echo 'x y"), ["echo", "'x", "y"])
        self.assertEqual(_tokenize("echo 'x y'"), ["echo", "x y"])
