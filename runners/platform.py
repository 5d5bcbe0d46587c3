# runners/platform.py
def is_wsl(version_path: str = "/proc/version") -> bool:
    """True under Windows Subsystem for Linux."""
    try:
        with open(version_path, "r") as f:
            return "microsoft" in f.read().lower()
    except OSError:
        return False
