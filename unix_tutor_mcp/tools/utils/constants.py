# Constants for the shell commands

# Node names that can never be removed, whatever flags are given
PROTECTED_NAMES = frozenset({
    "/", "home", "users", "user", "bin", "usr", "etc", "lib",
})

# Real commands this terminal deliberately does not emulate
UNSUPPORTED_COMMANDS = frozenset({
    "ifconfig", "ip", "less", "ping", "vim", "nano", "pico",
    "df", "tar", "traceroute", "man",
})
PACKAGE_MANAGER_COMMANDS = frozenset({"apt", "dpkg", "yum"})

UNSUPPORTED_MESSAGE = "Command not supported. Please use an actual Unix terminal"
PACKAGE_MANAGER_MESSAGE = (
    "Package manager commands are not supported. Please use an actual Unix terminal"
)

# Valid Unix options that are recognised but not implemented
MKDIR_UNSUPPORTED_OPTIONS = frozenset({"-t", "-m", "-v"})
RM_UNSUPPORTED_OPTIONS = frozenset({"-i", "-I", "-f", "--force", "-v"})

# Redirection tokens understood by cat
APPEND_TOKEN = ">>"
OVERWRITE_TOKEN = ">"
PIPE_TOKEN = "|"
