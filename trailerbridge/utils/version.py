from pathlib import Path

import tomlkit

ROOT_DIR = Path(__file__).resolve().parent.parent.parent


def get_pyproject_version() -> str:
    """Get TrailerBridge's version from the pyproject.toml file

    Returns:
        str: TrailerBridge's version
    """
    toml_file = ROOT_DIR / "pyproject.toml"

    if not toml_file.is_file():
        return "unknown"

    with toml_file.open(encoding="utf-8") as f:
        toml_data = tomlkit.load(f)
    if "project" in toml_data and "version" in toml_data["project"]:
        return str(toml_data["project"]["version"])

    return "unknown"


def get_git_hash() -> str:
    """Get the git commit hash of the TrailerBridge checkout

    Returns:
        str: TrailerBridge's current commit hash
    """
    git_dir_path = ROOT_DIR / ".git"
    try:
        head = (git_dir_path / "HEAD").read_text().strip()
        if not head.startswith("ref: refs/heads/"):
            return head or "unknown"

        ref_path = git_dir_path / head.removeprefix("ref: ")
        if not ref_path.is_file():
            return "unknown"
        return ref_path.read_text().strip()
    except OSError:
        return "unknown"


def get_docker_status() -> bool:
    """Check if TrailerBridge is running inside a Docker container"

    Returns:
        bool: True if running inside a Docker container, False otherwise
    """
    return Path("/.dockerenv").is_file()
