import os

from .utils import prompt_yes_no

HOOK_NAME = "pre-push"

HOOK_SCRIPT = """#!/bin/sh
# Raise the open file limit and run the test suite before pushing.
if command -v prepush-gate >/dev/null 2>&1; then
    exec prepush-gate run
fi
exec python3 -m prepush_gate run
"""


def hooks_dir(repo_root: str) -> str:
    git_dir = os.path.join(repo_root, ".git")
    if not os.path.isdir(git_dir):
        raise FileNotFoundError(f"{repo_root} is not a git work tree")
    return os.path.join(git_dir, "hooks")


def install_hook(repo_root: str = ".", force: bool = False) -> str:
    """Write the pre-push hook into ``repo_root``'s ``.git/hooks``.

    An existing hook with different contents is only replaced after
    confirmation, or when ``force`` is set.
    """
    target_dir = hooks_dir(repo_root)
    os.makedirs(target_dir, exist_ok=True)
    path = os.path.join(target_dir, HOOK_NAME)

    if os.path.isfile(path):
        with open(path, encoding="utf-8") as f:
            existing = f.read()
        if existing == HOOK_SCRIPT:
            print(f"{HOOK_NAME} hook already installed.")
            return path
        if not force and not prompt_yes_no(
            f"{path} already exists. Overwrite it?", default=False
        ):
            raise FileExistsError(path)

    with open(path, "w", encoding="utf-8") as f:
        f.write(HOOK_SCRIPT)
    os.chmod(path, 0o755)
    print(f"Installed {HOOK_NAME} hook at {path}.")
    return path
