"""Argument builders for the git subcommands used by the client.

Each function returns the argument list passed after "git". They are kept
free of I/O so the exact wire contract can be tested on its own.
"""


def clone_args(url: str, clone_path: str) -> list[str]:
    return ["clone", url, clone_path]


def checkout_args(branch: str, *, create: bool) -> list[str]:
    """Switch to branch, creating it when the repository has no branches yet."""
    if create:
        return ["checkout", "-b", branch]
    return ["checkout", branch]


def add_args(files: list[str]) -> list[str]:
    # "--" keeps paths that start with "-" from being read as options
    return ["add", "--", *files]


def staged_diff_check_args() -> list[str]:
    """Exit status 0 means the index matches HEAD."""
    return ["diff", "--cached", "--quiet"]


def config_args(key: str, value: str) -> list[str]:
    return ["config", key, value]


def commit_args(message: str, *, user: str, email: str) -> list[str]:
    return ["commit", "-m", message, f"--author={user} <{email}>"]


def push_args() -> list[str]:
    return ["push"]
