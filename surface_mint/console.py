def say(emoji: str, tag: str, message: str) -> None:
    """Print a status line, falling back to an ASCII tag on consoles without emoji."""
    try:
        print(f"{emoji} {message}")
    except UnicodeEncodeError:
        print(f"[{tag}] {message}")
