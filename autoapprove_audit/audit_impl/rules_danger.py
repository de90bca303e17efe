"""Danger taxonomy: command shapes that must never be auto-approved.

Each entry pairs a human label with a regular expression. Order only matters
for diagnostics; a single match anywhere in the table makes a pattern risky.
"""

import re
from dataclasses import dataclass

CATEGORY_FILESYSTEM = "filesystem"
CATEGORY_PRIVILEGE = "privilege"
CATEGORY_SYSTEM = "system"
CATEGORY_NETWORK = "network"
CATEGORY_CODE_EXEC = "code-execution"
CATEGORY_SENSITIVE_PATH = "sensitive-path"
CATEGORY_DATABASE = "database"
CATEGORY_PACKAGE = "package-manager"
CATEGORY_GIT = "git"
CATEGORY_SHELL = "shell-construct"
CATEGORY_ENVIRONMENT = "environment"


@dataclass(frozen=True)
class DangerRule:
    """One entry of the danger taxonomy."""

    label: str
    category: str
    regex: re.Pattern[str]

    def matches(self, pattern: str) -> bool:
        return self.regex.search(pattern) is not None


def _rule(label: str, category: str, expr: str) -> DangerRule:
    return DangerRule(label=label, category=category, regex=re.compile(expr))


DANGER_RULES: tuple[DangerRule, ...] = (
    _rule("double glob", CATEGORY_FILESYSTEM, r"\*\*"),
    _rule("parent directory traversal", CATEGORY_FILESYSTEM, r"\.\."),
    _rule("absolute path", CATEGORY_FILESYSTEM, r"^/"),
    _rule("home directory path", CATEGORY_FILESYSTEM, r"^~/"),
    _rule("embedded parent directory", CATEGORY_FILESYSTEM, r"/\.\."),
    _rule("multiple slashes", CATEGORY_FILESYSTEM, r"//+"),
    _rule("sudo", CATEGORY_PRIVILEGE, r"sudo"),
    _rule("switch user", CATEGORY_PRIVILEGE, r"su\s"),
    _rule("chmod 777", CATEGORY_PRIVILEGE, r"chmod\s+777"),
    _rule("chown root", CATEGORY_PRIVILEGE, r"chown\s+root"),
    _rule("chown uid 0", CATEGORY_PRIVILEGE, r"chown\s+0"),
    _rule("dd disk write", CATEGORY_SYSTEM, r"dd\s+if="),
    _rule("mkfs", CATEGORY_SYSTEM, r"mkfs"),
    _rule("fdisk", CATEGORY_SYSTEM, r"fdisk"),
    _rule("format", CATEGORY_SYSTEM, r"format"),
    _rule("shutdown", CATEGORY_SYSTEM, r"shutdown"),
    _rule("reboot", CATEGORY_SYSTEM, r"reboot"),
    _rule("halt", CATEGORY_SYSTEM, r"halt"),
    _rule("poweroff", CATEGORY_SYSTEM, r"poweroff"),
    _rule("killall", CATEGORY_SYSTEM, r"killall"),
    _rule("pkill -9", CATEGORY_SYSTEM, r"pkill\s+-9"),
    _rule("curl piped to shell", CATEGORY_NETWORK, r"curl.*\|\s*(sh|bash|zsh)"),
    _rule("wget piped to shell", CATEGORY_NETWORK, r"wget.*\|\s*(sh|bash|zsh)"),
    _rule("ssh", CATEGORY_NETWORK, r"ssh\s"),
    _rule("scp", CATEGORY_NETWORK, r"scp\s"),
    _rule("rsync", CATEGORY_NETWORK, r"rsync"),
    _rule("eval", CATEGORY_CODE_EXEC, r"eval"),
    _rule("exec", CATEGORY_CODE_EXEC, r"exec"),
    _rule("system call", CATEGORY_CODE_EXEC, r"system"),
    _rule("popen", CATEGORY_CODE_EXEC, r"popen"),
    _rule("subprocess", CATEGORY_CODE_EXEC, r"subprocess"),
    _rule("spawn", CATEGORY_CODE_EXEC, r"spawn"),
    _rule("node -e", CATEGORY_CODE_EXEC, r"node\s+-e"),
    _rule("python -c", CATEGORY_CODE_EXEC, r"python[0-9.]*\s+-c"),
    _rule("perl -e", CATEGORY_CODE_EXEC, r"perl\s+-e"),
    _rule("ruby -e", CATEGORY_CODE_EXEC, r"ruby\s+-e"),
    _rule("ssh keys", CATEGORY_SENSITIVE_PATH, r"~/\.ssh"),
    _rule("/etc/passwd", CATEGORY_SENSITIVE_PATH, r"/etc/passwd"),
    _rule("/etc/shadow", CATEGORY_SENSITIVE_PATH, r"/etc/shadow"),
    _rule("/etc/sudoers", CATEGORY_SENSITIVE_PATH, r"/etc/sudoers"),
    _rule("/root", CATEGORY_SENSITIVE_PATH, r"/root"),
    _rule("/home", CATEGORY_SENSITIVE_PATH, r"/home"),
    _rule("/var/log", CATEGORY_SENSITIVE_PATH, r"/var/log"),
    _rule("/proc", CATEGORY_SENSITIVE_PATH, r"/proc"),
    _rule("/sys", CATEGORY_SENSITIVE_PATH, r"/sys"),
    _rule("mysql", CATEGORY_DATABASE, r"mysql\s+"),
    _rule("psql", CATEGORY_DATABASE, r"psql\s+"),
    _rule("mongo", CATEGORY_DATABASE, r"mongo\s+"),
    _rule("redis-cli", CATEGORY_DATABASE, r"redis-cli"),
    _rule("npm global install", CATEGORY_PACKAGE, r"npm\s+install\s+.*-g"),
    _rule("pip user install", CATEGORY_PACKAGE, r"pip\s+install\s+.*--user"),
    _rule("apt-get install", CATEGORY_PACKAGE, r"apt-get\s+install"),
    _rule("yum install", CATEGORY_PACKAGE, r"yum\s+install"),
    _rule("brew install", CATEGORY_PACKAGE, r"brew\s+install"),
    _rule("git force push", CATEGORY_GIT, r"git\s+push\s+.*(--force|-f\b)"),
    _rule("git reset --hard", CATEGORY_GIT, r"git\s+reset\s+--hard"),
    _rule("git clean -fd", CATEGORY_GIT, r"git\s+clean\s+-fd"),
    _rule("backticks", CATEGORY_SHELL, r"`.*`"),
    _rule("command substitution", CATEGORY_SHELL, r"\$\(.*\)"),
    _rule("output to /dev/null", CATEGORY_SHELL, r">\s*/dev/null"),
    _rule("trailing background operator", CATEGORY_SHELL, r"&\s*$"),
    _rule("trailing semicolon", CATEGORY_SHELL, r";\s*$"),
    _rule("trailing pipe", CATEGORY_SHELL, r"\|\s*$"),
    _rule("trailing &&", CATEGORY_SHELL, r"&&\s*$"),
    _rule("trailing ||", CATEGORY_SHELL, r"\|\|\s*$"),
    _rule("PATH override", CATEGORY_ENVIRONMENT, r"PATH="),
    _rule("LD_LIBRARY_PATH override", CATEGORY_ENVIRONMENT, r"LD_LIBRARY_PATH="),
    _rule("LD_PRELOAD override", CATEGORY_ENVIRONMENT, r"LD_PRELOAD="),
)


def matched_danger_rules(pattern: str) -> list[DangerRule]:
    return [rule for rule in DANGER_RULES if rule.matches(pattern)]


def matched_danger_labels(pattern: str) -> list[str]:
    """Return the label of every taxonomy entry the pattern matches."""
    return [rule.label for rule in matched_danger_rules(pattern)]


def matches_danger_taxonomy(pattern: str) -> bool:
    """Return True if any taxonomy entry matches the pattern."""
    return any(rule.matches(pattern) for rule in DANGER_RULES)
