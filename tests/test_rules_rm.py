"""Tests for recursive force delete handling."""

from unittest import TestCase

from autoapprove_audit.audit_impl.rules_rm import (
    SAFE_RM_TARGETS,
    _rm_has_recursive_force,
    _rm_invocations,
    _rm_targets,
    is_dangerous_removal,
)


class DangerousRemovalTests(TestCase):
    # always dangerous
    def test_rm_rf_root(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf /"))

    def test_rm_rf_absolute_path(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf /tmp/build"))

    def test_rm_rf_absolute_path_named_like_artifact(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf /node_modules"))

    def test_rm_rf_home(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf ~"))
        self.assertTrue(is_dangerous_removal("rm -rf ~/projects"))
        self.assertTrue(is_dangerous_removal("rm -rf $HOME/dist"))

    def test_rm_rf_wildcard(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf *"))
        self.assertTrue(is_dangerous_removal("rm -rf dist/*"))

    def test_rm_rf_parent_directory(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf ../build"))

    def test_rm_rf_drive_path(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf C:/Windows"))

    def test_rm_rf_unknown_directory(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf src"))

    def test_rm_rf_without_target(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf"))

    def test_rm_rf_mixed_safe_and_unsafe_targets(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf dist src"))

    def test_option_spellings_recognized(self) -> None:
        for pattern in (
            "rm -fr src",
            "rm -r -f src",
            "rm -Rf src",
            "rm --recursive --force src",
        ):
            with self.subTest(pattern=pattern):
                self.assertTrue(is_dangerous_removal(pattern))

    def test_embedded_in_task_pattern(self) -> None:
        self.assertTrue(is_dangerous_removal(":bad:rm -rf /"))
        self.assertTrue(is_dangerous_removal(":bad:rm -rf *"))

    def test_after_hyphenated_prefix(self) -> None:
        self.assertTrue(is_dangerous_removal(":task-rm -rf /opt"))
        self.assertTrue(is_dangerous_removal(":clean-rm -rf src"))
        self.assertFalse(is_dangerous_removal(":clean-rm -rf dist"))

    def test_chained_after_safe_delete(self) -> None:
        self.assertTrue(is_dangerous_removal("rm -rf node_modules && rm -rf /"))

    def test_command_substitution(self) -> None:
        self.assertTrue(is_dangerous_removal("echo $(rm -rf /)"))

    def test_bin_path_rm(self) -> None:
        self.assertTrue(is_dangerous_removal("/bin/rm -rf src"))

    # tolerated build cleanup
    def test_safe_targets_allowed(self) -> None:
        for target in sorted(SAFE_RM_TARGETS):
            with self.subTest(target=target):
                self.assertFalse(is_dangerous_removal(f"rm -rf {target}"))

    def test_safe_target_with_dot_slash_and_trailing_slash(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -rf ./dist/"))

    def test_several_safe_targets(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -rf node_modules dist .next"))

    def test_nested_safe_target(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -rf packages/app/node_modules"))

    def test_quoted_safe_target(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -rf 'node_modules'"))

    def test_fr_on_safe_target(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -fr build"))

    # not a recursive force delete at all
    def test_no_rm(self) -> None:
        self.assertFalse(is_dangerous_removal("npm run build"))

    def test_rm_without_force(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -r src"))

    def test_rm_without_recursive(self) -> None:
        self.assertFalse(is_dangerous_removal("rm -f /tmp/lock"))

    def test_rm_inside_word_ignored(self) -> None:
        self.assertFalse(is_dangerous_removal("perform -rf /"))
        self.assertFalse(is_dangerous_removal("npm -rf /"))


class RmParsingHelpersTests(TestCase):
    def test_rm_has_recursive_force_empty_tokens_false(self) -> None:
        self.assertFalse(_rm_has_recursive_force([]))

    def test_rm_has_recursive_force_stops_at_double_dash(self) -> None:
        # -f after `--` is a positional arg, not an option.
        self.assertFalse(_rm_has_recursive_force(["rm", "-r", "--", "-f"]))

    def test_rm_targets_skip_options(self) -> None:
        self.assertEqual(_rm_targets(["rm", "-rf", "-v", "a", "b"]), ["a", "b"])

    def test_rm_targets_after_double_dash(self) -> None:
        self.assertEqual(_rm_targets(["rm", "-rf", "--", "-x"]), ["-x"])

    def test_rm_invocations_split_on_operators(self) -> None:
        self.assertEqual(
            _rm_invocations("rm -rf dist; rm -rf out"),
            [["rm", "-rf", "dist"], ["rm", "-rf", "out"]],
        )

    def test_rm_invocations_bad_quoting_falls_back(self) -> None:
        self.assertEqual(_rm_invocations("rm -rf 'dist"), [["rm", "-rf", "'dist"]])
